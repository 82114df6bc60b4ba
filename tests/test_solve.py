import pytest

from conftest import reachable
from twistylittlepassages import trace
from twistylittlepassages.errors import NoSolutionError
from twistylittlepassages.maze import Direction, Position, newMaze


def _step_direction(a, b):
    for d in Direction:
        if a.move(d) == b:
            return d
    return None


@pytest.mark.parametrize("height, width, seed, oppositeStart", [
    (2, 2, 1, False),
    (3, 3, 42, True),
    (10, 10, 7, False),
    (30, 45, 2024, True),
    (100, 3, 99, False),
])
def test_path_walks_open_walls(height, width, seed, oppositeStart):
    maze = newMaze(height, width, seed, oppositeStart)
    path = maze.solve()

    assert path[0] == maze.start
    assert path[-1] == maze.finish
    assert len(set(path)) == len(path)
    for a, b in zip(path, path[1:]):
        d = _step_direction(a, b)
        assert d is not None, f"{a} -> {b} is not a single step"
        assert maze.isOpen(a, d)


@pytest.mark.parametrize("seed", range(1, 21))
def test_path_is_the_only_path(seed):
    maze = newMaze(20, 20, seed)
    path = maze.solve()
    # In a tree the DFS path and the BFS shortest path are the same path.
    assert len(path) - 1 == reachable(maze, maze.start)[maze.finish]


def test_backtracks_out_of_dead_ends(blank_maze):
    blank_maze.carve(Position(0, 0), Direction.South)
    blank_maze.carve(Position(0, 0), Direction.East)
    blank_maze.carve(Position(1, 0), Direction.South)
    # South is tried before East and leads to a dead end at (0, 1).
    assert blank_maze.solve() == [Position(0, 0), Position(1, 0), Position(1, 1)]


def test_closed_walls_are_not_passable(blank_maze):
    blank_maze.carve(Position(0, 0), Direction.East)
    blank_maze.carve(Position(0, 0), Direction.South)
    with pytest.raises(NoSolutionError):
        blank_maze.solve()


def test_no_solution_is_an_invariant_error(blank_maze):
    with pytest.raises(RuntimeError, match="no solution"):
        blank_maze.solve()


def test_solve_prints_timing(capsys):
    trace.setEnabled(True)
    newMaze(4, 4, 3).solve()
    out = capsys.readouterr().out
    assert "generating maze: " in out
    assert "solving maze: " in out
    assert out.strip().splitlines()[-1].endswith("ms")
