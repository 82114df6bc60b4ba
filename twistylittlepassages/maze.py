import random
import time
from enum import Enum
from itertools import permutations

from .errors import (
    InvalidCallError,
    InvalidDimensionsError,
    InvalidSeedError,
    NoSolutionError,
    StackUnderflowError,
)
from .trace import timed

# ==========================================
# 1. ENUMS & CONSTANTS
# ==========================================

MAX_DIMENSION = 200  # Maximum number of cells in height and/or width

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


class Direction(Enum):
    North = 0
    South = 1
    East = 2
    West = 3

    @property
    def delta(self):
        return _DELTAS[self]

    @property
    def bit(self) -> int:
        return 1 << self.value


_DELTAS = {
    Direction.North: (0, -1),
    Direction.South: (0, 1),
    Direction.East: (1, 0),
    Direction.West: (-1, 0),
}

# Scan order for the solver. Any fixed order finds the same path in a
# perfect maze.
SOLVE_ORDER = (Direction.North, Direction.South, Direction.East, Direction.West)

# All 24 digging orders, so the generator picks one instead of shuffling
# on every step.
PERMUTATIONS = tuple(permutations(SOLVE_ORDER))


def reverseDir(d: Direction):
    if d == Direction.North: return Direction.South
    if d == Direction.South: return Direction.North
    if d == Direction.East: return Direction.West
    if d == Direction.West: return Direction.East
    raise ValueError(f"not a direction: {d!r}")

# ==========================================
# 2. HELPER CLASSES
# ==========================================

class Position:
    __slots__ = ("x", "y")

    def __init__(self, x=0, y=0):
        self.x = x
        self.y = y
    def __eq__(self, other):
        if not isinstance(other, Position): return NotImplemented
        return self.x == other.x and self.y == other.y
    def __hash__(self): return hash((self.x, self.y))
    def __iter__(self): return iter((self.x, self.y))
    def move(self, d: Direction):
        dx, dy = d.delta
        return Position(self.x + dx, self.y + dy)
    def __repr__(self): return f"({self.x}, {self.y})"


def peek(stack):
    if not stack:
        raise StackUnderflowError()
    return stack[-1]


def checkDimensions(height, width):
    if height < 2 or width < 2 or height > MAX_DIMENSION or width > MAX_DIMENSION:
        raise InvalidDimensionsError(height, width, MAX_DIMENSION)


def checkSeed(seed):
    if not INT64_MIN <= seed <= INT64_MAX:
        raise InvalidSeedError(seed)


def resolveSeed(seed: int) -> int:
    """Seed 0 means "surprise me": swap it for the current time in nanoseconds."""
    checkSeed(seed)
    if seed == 0:
        seed = time.time_ns()
    return seed

# ==========================================
# 3. MAZE
# ==========================================

class Maze:
    """
    A height x width grid of cells. Each cell is a bit mask of open sides
    (see Direction.bit), stored row-major in a flat list.

    The entrance is always on the top row and the exit on the bottom row.
    """
    def __init__(self, height: int, width: int, rng: random.Random, oppositeStart: bool = False):
        checkDimensions(height, width)
        if rng is None:
            raise InvalidCallError("invalid call to Maze: a random source is required")

        self.height = height
        self.width = width
        self.rng = rng
        self.cells = [0] * (height * width)
        self.seed = None  # set by newMaze

        start = Position(rng.randrange(width), 0)
        finish = Position(rng.randrange(width), height - 1)
        if oppositeStart:
            start = Position(0, 0)
            finish = Position(width - 1, height - 1)
        self.start = start
        self.finish = finish

    def _cellIndex(self, pos: Position) -> int: return pos.y * self.width + pos.x
    def getCell(self, pos: Position) -> int: return self.cells[self._cellIndex(pos)]
    def setCell(self, pos: Position, value: int):
        self.cells[self._cellIndex(pos)] = value
    at = getCell

    def isOpen(self, pos: Position, d: Direction) -> bool:
        return (self.getCell(pos) & d.bit) != 0

    def inBounds(self, pos: Position) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def neighbor(self, pos: Position, d: Direction):
        np = pos.move(d)
        if self.inBounds(np):
            return np, True
        return pos, False

    def carve(self, pos: Position, d: Direction):
        self.setCell(pos, self.getCell(pos) | d.bit)
        np, ok = self.neighbor(pos, d)
        if ok:
            rd = reverseDir(d)
            self.setCell(np, self.getCell(np) | rd.bit)

    def carvedEdges(self) -> int:
        # Interior openings only; the entrance/exit gaps lie on the boundary.
        count = 0
        for y in range(self.height):
            for x in range(self.width):
                val = self.cells[y * self.width + x]
                if x < self.width - 1 and val & Direction.East.bit: count += 1
                if y < self.height - 1 and val & Direction.South.bit: count += 1
        return count

    # --- Generation ---

    def generate(self):
        with timed("generating maze"):
            stack = [self.start]
            visited = {self.start}
            while stack:
                pos = peek(stack)
                for d in self.rng.choice(PERMUTATIONS):
                    np, ok = self.neighbor(pos, d)
                    if ok and np not in visited:
                        self.carve(pos, d)
                        visited.add(np)
                        stack.append(np)
                        break
                else:
                    stack.pop()  # dead end, backtrack

            # Gaps in the outer wall marking the way in and out.
            self.carve(self.start, Direction.North)
            self.carve(self.finish, Direction.South)
        return self

    # --- Solving ---

    def solve(self):
        """Walk the open passages from start to finish, depth first.

        Returns the positions from start to finish inclusive. Raises
        NoSolutionError if the finish is unreachable, which only happens if
        the maze is not a spanning tree.
        """
        with timed("solving maze"):
            stack = [self.start]
            visited = {self.start}
            while stack:
                if self.finish in visited:
                    return list(stack)

                pos = peek(stack)
                for d in SOLVE_ORDER:
                    np, ok = self.neighbor(pos, d)
                    if ok and np not in visited and self.isOpen(pos, d):
                        visited.add(np)
                        stack.append(np)
                        break
                else:
                    stack.pop()

        raise NoSolutionError()


def newMaze(height: int, width: int, seed: int, oppositeStart: bool = False) -> Maze:
    """Build and carve a maze. Seed 0 picks a time-derived seed."""
    checkDimensions(height, width)
    seed = resolveSeed(seed)
    maze = Maze(height, width, random.Random(seed), oppositeStart)
    maze.seed = seed
    return maze.generate()
