"""Path reconstruction and path utilities."""

import logging
from typing import List

from .errors import CycleDetected, NoPathAvailable
from .neighbors import movement_cost, neighbor_offsets
from .types import CellIndex, CellRole, Connectivity, Coord, SearchStatus

logger = logging.getLogger(__name__)


def reconstruct(engine) -> List[CellIndex]:
    """
    Walk parent links from the end cell back to the start cell.

    Returns the path ordered from start to end and paints every cell on it,
    except the start and end themselves, with the PATH role.

    Raises:
        NoPathAvailable: the engine has not found a path
        CycleDetected: parent links loop (or break off) before reaching the start
    """
    if engine.status is not SearchStatus.FOUND:
        raise NoPathAvailable(f"No path to reconstruct (search status: {engine.status.value})")

    grid = engine.grid
    path = [engine.end]
    current = engine.end
    hops = 0

    # A valid chain never revisits a cell, so it is at most width * height long
    while current != engine.start:
        if hops >= grid.size:
            raise CycleDetected(f"Parent links did not reach the start within {grid.size} hops")
        parent = grid.cell(current).parent
        if parent is None:
            raise CycleDetected(f"Parent chain broken at {grid.coord(current)}")
        path.append(parent)
        current = parent
        hops += 1

    path.reverse()
    for index in path[1:-1]:
        grid.mark(index, CellRole.PATH)

    logger.debug("Reconstructed path of %d cells", len(path))
    return path


def path_coords(grid, path: List[CellIndex]) -> List[Coord]:
    """Convert a path of flat indices to (x, y) coordinates."""
    return [grid.coord(index) for index in path]


def path_cost(grid, path: List[CellIndex]) -> float:
    """Sum of edge costs along a path (1 orthogonal, sqrt(2) diagonal)."""
    if len(path) < 2:
        return 0.0

    coords = path_coords(grid, path)
    return sum(movement_cost(a, b) for a, b in zip(coords, coords[1:]))


def validate_path(grid, path: List[CellIndex], connectivity: Connectivity = 4) -> bool:
    """
    Validate that a path runs from start to end over passable, adjacent cells.
    Returns True if path is valid.
    """
    if not path or path[0] != grid.start or path[-1] != grid.end:
        return False

    for index in path:
        if not grid.cell(index).is_passable:
            return False

    allowed = set(neighbor_offsets(connectivity))
    coords = path_coords(grid, path)
    for (x0, y0), (x1, y1) in zip(coords, coords[1:]):
        if (x1 - x0, y1 - y0) not in allowed:
            return False

    return True
