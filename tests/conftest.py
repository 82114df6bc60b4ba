import os
import random
from collections import deque

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from twistylittlepassages import trace
from twistylittlepassages.maze import Direction, Maze, Position


@pytest.fixture(autouse=True)
def quiet_trace():
    trace.setEnabled(False)
    yield
    trace.setEnabled(False)


@pytest.fixture
def blank_maze():
    """A 2x2 maze with every wall still closed, corners at (0,0) and (1,1)."""
    return Maze(2, 2, random.Random(1), oppositeStart=True)


def reachable(maze, origin):
    """BFS over open walls. Returns {position: distance}."""
    dist = {origin: 0}
    q = deque([origin])
    while q:
        cur = q.popleft()
        for d in Direction:
            np, ok = maze.neighbor(cur, d)
            if ok and maze.isOpen(cur, d) and np not in dist:
                dist[np] = dist[cur] + 1
                q.append(np)
    return dist


def all_positions(maze):
    return [Position(x, y) for y in range(maze.height) for x in range(maze.width)]
