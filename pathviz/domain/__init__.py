"""Framework-agnostic grid, search engine and path reconstruction."""

from .engine import SearchEngine, find_path
from .errors import (
    CycleDetected, InvalidTransition, MissingStartOrEnd, NoPathAvailable,
    NotRunning, OutOfBounds, PathfinderError,
)
from .grid import Grid
from .path import path_coords, path_cost, reconstruct, validate_path
from .types import (
    Cell, CellIndex, CellRole, Coord, SearchConfig, SearchResult,
    SearchStatus, StepResult,
)
