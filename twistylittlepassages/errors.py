class MazeError(Exception):
    pass


# Raised for bad requests. Nothing has been allocated or drawn when these
# come out of the pipeline.
class InvalidRequestError(MazeError, ValueError):
    pass


class InvalidDimensionsError(InvalidRequestError):
    def __init__(self, height, width, limit):
        super().__init__(f"maze must be between 2x2 and {limit}x{limit} cells, got {height}x{width}")
        self.height = height
        self.width = width


class InvalidSeedError(InvalidRequestError):
    def __init__(self, seed):
        super().__init__(f"seed {seed} does not fit in a signed 64-bit integer")
        self.seed = seed


# Broken spanning-tree guarantee. Never caught by the library.
class InvariantError(MazeError, RuntimeError):
    pass


class NoSolutionError(InvariantError):
    def __init__(self):
        super().__init__("maze has no solution")


class InvalidCallError(InvariantError):
    pass


class StackUnderflowError(InvariantError):
    def __init__(self):
        super().__init__("stack underflow")


class RenderError(MazeError):
    pass
