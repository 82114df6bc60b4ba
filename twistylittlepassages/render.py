import pygame

from .errors import RenderError
from .maze import Direction, Maze, Position
from .trace import timed

# ==========================================
# 1. GEOMETRY & COLORS
# ==========================================

BORDER = 40                                    # Border (in pixels) around the maze
CELL_WIDTH = 12                                # Width/height (in pixels) of a single cell
HALF_CELL_WIDTH = CELL_WIDTH // 2              # Used to find the midpoint of a cell
MIN_IMAGE_WIDTH = CELL_WIDTH * 4 + BORDER * 2  # Keeps narrow mazes readable

COLOR_BG = (255, 255, 255, 255)
COLOR_WALL = (0, 0, 0, 255)
COLOR_PATH = (255, 0, 0, 255)

# ==========================================
# 2. RENDERER
# ==========================================

def hLine(surface, x1, y, x2, color):
    surface.fill(color, pygame.Rect(x1, y, x2 - x1 + 1, 1))


def vLine(surface, x, y1, y2, color):
    surface.fill(color, pygame.Rect(x, y1, 1, y2 - y1 + 1))


def cellCenter(pos: Position):
    return (pos.x * CELL_WIDTH + BORDER + HALF_CELL_WIDTH,
            pos.y * CELL_WIDTH + BORDER + HALF_CELL_WIDTH)


class Renderer:
    """
    Draws mazes into an RGBA frame buffer.

    The buffer belongs to the renderer and is reused between draws; it is
    only reallocated when the picture size changes.
    """
    def __init__(self):
        self.frameBuffer = None
        self.allocations = 0

    @staticmethod
    def imageSize(maze: Maze):
        width = max(maze.width * CELL_WIDTH + BORDER * 2, MIN_IMAGE_WIDTH)
        height = maze.height * CELL_WIDTH + BORDER * 2
        return width, height

    def _buffer(self, size):
        if self.frameBuffer is None or self.frameBuffer.get_size() != size:
            self.frameBuffer = pygame.Surface(size, pygame.SRCALPHA, 32)
            self.allocations += 1
        return self.frameBuffer

    def draw(self, maze: Maze) -> pygame.Surface:
        with timed("drawing maze"):
            surface = self._buffer(self.imageSize(maze))
            with timed("clearing image"):
                surface.fill(COLOR_BG)
            for y in range(maze.height):
                for x in range(maze.width):
                    self.drawCell(surface, x, y, maze.cells[y * maze.width + x])
        return surface

    def drawCell(self, surface, x, y, val):
        x0 = x * CELL_WIDTH + BORDER
        y0 = y * CELL_WIDTH + BORDER
        if not val & Direction.North.bit:
            hLine(surface, x0, y0, x0 + CELL_WIDTH, COLOR_WALL)
        if not val & Direction.South.bit:
            hLine(surface, x0, y0 + CELL_WIDTH, x0 + CELL_WIDTH, COLOR_WALL)
        if not val & Direction.West.bit:
            vLine(surface, x0, y0, y0 + CELL_WIDTH, COLOR_WALL)
        if not val & Direction.East.bit:
            vLine(surface, x0 + CELL_WIDTH, y0, y0 + CELL_WIDTH, COLOR_WALL)

    def drawPath(self, surface, path):
        if len(path) < 2:
            return
        with timed("drawing solution"):
            prev = path[0]
            for pos in path[1:]:
                first, last = prev, pos
                if (first.x, first.y) > (last.x, last.y):
                    first, last = last, first
                fx, fy = cellCenter(first)
                lx, ly = cellCenter(last)
                if first.x == last.x:
                    vLine(surface, fx, fy, ly, COLOR_PATH)
                elif first.y == last.y:
                    hLine(surface, fx, fy, lx, COLOR_PATH)
                else:
                    raise ValueError(f"path step {prev!r} -> {pos!r} is not axis-aligned")
                prev = pos

    def pixels(self):
        """Return (height, width, data) for the current buffer, RGBA row-major."""
        if self.frameBuffer is None:
            raise RenderError("nothing has been drawn yet")
        width, height = self.frameBuffer.get_size()
        return height, width, pygame.image.tobytes(self.frameBuffer, "RGBA")
