from .errors import (
    InvalidDimensionsError,
    InvalidRequestError,
    InvalidSeedError,
    InvariantError,
    MazeError,
    NoSolutionError,
)
from .maze import MAX_DIMENSION, Direction, Maze, Position, newMaze
from .render import Renderer

__version__ = "0.1.0"
