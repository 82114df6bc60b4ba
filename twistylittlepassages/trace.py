import time
from contextlib import contextmanager

_enabled = True


def setEnabled(enabled: bool):
    global _enabled
    _enabled = enabled


@contextmanager
def timed(message: str):
    """Print how long the wrapped block took, e.g. ``solving maze: 0.412ms``."""
    start = time.perf_counter()
    try:
        yield
    finally:
        if _enabled:
            elapsed = (time.perf_counter() - start) * 1000.0
            print(f"{message}: {elapsed:.3f}ms")
