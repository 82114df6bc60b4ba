import argparse
from dataclasses import dataclass, replace
from typing import List, Optional

import pygame

from . import trace
from .errors import InvalidRequestError
from .maze import Maze, Position, checkDimensions, checkSeed, newMaze
from .render import BORDER, Renderer

# ==========================================
# 1. CONFIG
# ==========================================

DEFAULT_HEIGHT = 20
DEFAULT_WIDTH = 20
DEFAULT_EXPORT = "maze.png"
FPS = 30

LABEL_FONT = "serif"
LABEL_SIZE = 13
LABEL_BASELINE = 39
COLOR_LABEL = (0, 0, 0)

# ==========================================
# 2. REQUEST PIPELINE
# ==========================================

@dataclass
class Request:
    height: int = DEFAULT_HEIGHT
    width: int = DEFAULT_WIDTH
    seed: int = 0
    solution: bool = False
    label: bool = False
    oppositeStart: bool = False


@dataclass
class Frame:
    maze: Maze
    surface: pygame.Surface  # the renderer's buffer, overwritten by the next request
    seed: int
    label: str = ""
    path: Optional[List[Position]] = None


def validateRequest(request: Request):
    checkDimensions(request.height, request.width)
    checkSeed(request.seed)


def generateCallback(request: Request, renderer: Renderer) -> Frame:
    """Run one generate -> solve -> draw pass.

    Raises InvalidRequestError before touching the renderer if the request
    is out of range.
    """
    with trace.timed("total time"):
        validateRequest(request)

        maze = newMaze(request.height, request.width, request.seed, request.oppositeStart)
        surface = renderer.draw(maze)

        path = None
        if request.solution:
            path = maze.solve()
            renderer.drawPath(surface, path)

        labelText = ""
        if request.label:
            labelText = "%dx%d %x" % (maze.height, maze.width, maze.seed)

    return Frame(maze=maze, surface=surface, seed=maze.seed, label=labelText, path=path)

# ==========================================
# 3. DISPLAY & EXPORT
# ==========================================

def labelFont():
    # Not cached: fonts are freed by pygame.quit() even if pygame is started again.
    if not pygame.font.get_init():
        pygame.font.init()
    return pygame.font.SysFont(LABEL_FONT, LABEL_SIZE)


def composeFrame(frame: Frame) -> pygame.Surface:
    """Copy of the frame buffer with the label on top, as shown on screen."""
    picture = frame.surface.copy()
    if frame.label:
        font = labelFont()
        text = font.render(frame.label, True, COLOR_LABEL)
        picture.blit(text, (BORDER, LABEL_BASELINE - font.get_ascent()))
    return picture


def exportFrame(frame: Frame, filename: str):
    with trace.timed("exporting frame buffer"):
        pygame.image.save(composeFrame(frame), filename)
    print(f"exported maze to {filename}")


class MazeWindow:
    def __init__(self, request: Request, renderer: Renderer = None, exportPath: str = DEFAULT_EXPORT):
        self.request = request
        self.renderer = renderer or Renderer()
        self.exportPath = exportPath
        self.frame = None
        self.screen = None

    def regenerate(self, request: Request = None) -> bool:
        try:
            frame = generateCallback(request or self.request, self.renderer)
        except InvalidRequestError as e:
            print(f"Error: {e}")
            return False
        self.frame = frame
        self.present()
        return True

    def toggle(self, field: str):
        self.request = replace(self.request, **{field: not getattr(self.request, field)})
        if self.frame is None:
            self.regenerate()
            return
        # Redraw the maze on screen, even if it came from a time seed.
        self.regenerate(replace(self.request, seed=self.frame.seed))

    def present(self):
        picture = composeFrame(self.frame)
        if self.screen is None or self.screen.get_size() != picture.get_size():
            print("resizing window")
            self.screen = pygame.display.set_mode(picture.get_size())
        self.screen.blit(picture, (0, 0))
        maze = self.frame.maze
        pygame.display.set_caption(f"Twisty Little Passages - {maze.height}x{maze.width} [{self.frame.seed:x}]")
        pygame.display.flip()

    def handle_event(self, event) -> bool:
        if event.type == pygame.QUIT:
            return False
        if event.type != pygame.KEYDOWN:
            return True

        if event.key == pygame.K_ESCAPE:
            return False
        elif event.key in (pygame.K_g, pygame.K_SPACE):
            self.regenerate()
        elif event.key == pygame.K_s:
            self.toggle("solution")
        elif event.key == pygame.K_l:
            self.toggle("label")
        elif event.key == pygame.K_o:
            self.toggle("oppositeStart")
        elif event.key == pygame.K_e and self.frame is not None:
            exportFrame(self.frame, self.exportPath)
        return True

    def run(self) -> int:
        pygame.init()
        try:
            if not self.regenerate():
                return 2

            clock = pygame.time.Clock()
            running = True
            while running:
                for event in pygame.event.get():
                    if not self.handle_event(event):
                        running = False
                        break
                clock.tick(FPS)
        finally:
            pygame.quit()
        return 0

# ==========================================
# 4. COMMAND LINE
# ==========================================

def buildParser():
    parser = argparse.ArgumentParser(description="Generate (and optionally solve) a perfect maze")
    parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT, help="Maze height in cells")
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH, help="Maze width in cells")
    parser.add_argument("--seed", type=int, default=0, help="Random seed, 0 for a time-based seed")
    parser.add_argument("--solution", action="store_true", help="Draw the solution")
    parser.add_argument("--label", action="store_true", help="Label the maze with its size and seed")
    parser.add_argument("--opposite-start", action="store_true", help="Put start and finish in opposite corners")
    parser.add_argument("--export", metavar="PATH", help="PNG file to write (E in the window)")
    parser.add_argument("--no-window", action="store_true", help="Only export, do not open a window")
    parser.add_argument("--quiet", action="store_true", help="Do not print timings")
    return parser


def requestFromArgs(args) -> Request:
    return Request(
        height=args.height,
        width=args.width,
        seed=args.seed,
        solution=args.solution,
        label=args.label,
        oppositeStart=args.opposite_start,
    )


def main(argv=None) -> int:
    parser = buildParser()
    args = parser.parse_args(argv)
    if args.no_window and not args.export:
        parser.error("--no-window needs --export")
    if args.quiet:
        trace.setEnabled(False)

    request = requestFromArgs(args)

    if args.no_window:
        try:
            frame = generateCallback(request, Renderer())
        except InvalidRequestError as e:
            print(f"Error: {e}")
            return 2
        exportFrame(frame, args.export)
        return 0

    window = MazeWindow(request, exportPath=args.export or DEFAULT_EXPORT)
    return window.run()

