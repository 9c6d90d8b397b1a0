"""Exceptions raised by the grid, the search engine and the session."""


class PathfinderError(ValueError):
    """Base class for recoverable pathfinding errors."""


class OutOfBounds(PathfinderError):
    """Coordinate or index outside the grid."""

    def __init__(self, x: int, y: int, width: int, height: int):
        super().__init__(f"Coordinate ({x}, {y}) is outside the {width}x{height} grid")
        self.coord = (x, y)


class InvalidTransition(PathfinderError):
    """Illegal state-machine move or edit while a search is in progress."""


class MissingStartOrEnd(PathfinderError):
    """Search requested without exactly one start and one end cell."""


class NotRunning(PathfinderError):
    """Engine stepped outside the running status."""


class NoPathAvailable(PathfinderError):
    """Path reconstruction requested before a path was found."""


class CycleDetected(PathfinderError):
    """Parent links loop without reaching the start cell."""
