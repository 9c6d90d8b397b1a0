"""Heuristic functions for grid search."""

import math
from typing import Callable, Optional

from .types import Connectivity, Coord, HeuristicId

Heuristic = Callable[[Coord, Coord], float]


def manhattan_distance(start: Coord, target: Coord) -> float:
    """
    Manhattan (L1) distance heuristic.
    Exact on an open grid with 4-directional movement.
    """
    return abs(start[0] - target[0]) + abs(start[1] - target[1])


def euclidean_distance(start: Coord, target: Coord) -> float:
    """
    Euclidean (L2) distance heuristic.
    Admissible for any movement but underestimates on a grid.
    """
    dx = start[0] - target[0]
    dy = start[1] - target[1]
    return math.sqrt(dx * dx + dy * dy)


def diagonal_distance(start: Coord, target: Coord) -> float:
    """Chebyshev (L-infinity) distance; assumes diagonal moves cost 1."""
    return max(abs(start[0] - target[0]), abs(start[1] - target[1]))


def octile_distance(start: Coord, target: Coord) -> float:
    """
    Octile distance for 8-directional movement.
    Diagonal moves cost sqrt(2), orthogonal moves cost 1.
    """
    dx = abs(start[0] - target[0])
    dy = abs(start[1] - target[1])

    # min(dx, dy) diagonal moves + |dx - dy| straight moves
    return min(dx, dy) * math.sqrt(2) + abs(dx - dy)


def zero_heuristic(start: Coord, target: Coord) -> float:
    """Always 0; turns A* into Dijkstra's algorithm."""
    return 0.0


HEURISTICS: dict[HeuristicId, Heuristic] = {
    "manhattan": manhattan_distance,
    "euclidean": euclidean_distance,
    "diagonal": diagonal_distance,
    "octile": octile_distance,
    "zero": zero_heuristic,
}


def get_heuristic(heuristic_id: HeuristicId) -> Heuristic:
    """Get heuristic function by ID."""
    try:
        return HEURISTICS[heuristic_id]
    except KeyError:
        raise ValueError(f"Unknown heuristic: {heuristic_id}") from None


def default_heuristic(connectivity: Connectivity) -> HeuristicId:
    """Manhattan for 4-connectivity, octile for 8-connectivity."""
    return "octile" if connectivity == 8 else "manhattan"


def resolve_heuristic(heuristic_id: Optional[HeuristicId], connectivity: Connectivity) -> Heuristic:
    """Look up a heuristic, falling back to the connectivity default."""
    return get_heuristic(heuristic_id or default_heuristic(connectivity))


def is_admissible(heuristic_id: HeuristicId, connectivity: Connectivity) -> bool:
    """
    Check whether a heuristic never overestimates under the given movement.
    Informational only; the engine accepts any heuristic.
    """
    if connectivity == 8:
        # manhattan overestimates once diagonal moves are allowed
        return heuristic_id in ("octile", "diagonal", "euclidean", "zero")
    return heuristic_id in ("manhattan", "octile", "diagonal", "euclidean", "zero")
