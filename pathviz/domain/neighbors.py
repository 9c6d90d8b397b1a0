"""Neighbor offsets and movement costs for grid search."""

import math
from typing import List, Tuple

from .types import Connectivity, Coord

SQRT2 = math.sqrt(2)

# Orthogonal moves first, then diagonals; the order is part of the
# engine's reproducibility.
ORTHOGONAL_OFFSETS: List[Tuple[int, int]] = [(1, 0), (0, 1), (-1, 0), (0, -1)]
DIAGONAL_OFFSETS: List[Tuple[int, int]] = [(1, 1), (-1, 1), (-1, -1), (1, -1)]


def neighbor_offsets(connectivity: Connectivity) -> List[Tuple[int, int]]:
    """Offsets considered adjacent under 4- or 8-connectivity."""
    if connectivity == 8:
        return ORTHOGONAL_OFFSETS + DIAGONAL_OFFSETS
    if connectivity == 4:
        return list(ORTHOGONAL_OFFSETS)
    raise ValueError(f"Connectivity must be 4 or 8, got {connectivity}")


def is_diagonal(from_coord: Coord, to_coord: Coord) -> bool:
    return from_coord[0] != to_coord[0] and from_coord[1] != to_coord[1]


def movement_cost(from_coord: Coord, to_coord: Coord) -> float:
    """
    Cost of moving between two adjacent coordinates.
    1 for orthogonal moves, sqrt(2) for diagonal moves.
    """
    dx = abs(to_coord[0] - from_coord[0])
    dy = abs(to_coord[1] - from_coord[1])

    if dx + dy == 1:
        return 1.0
    if dx == 1 and dy == 1:
        return SQRT2
    raise ValueError(f"Invalid movement from {from_coord} to {to_coord}")


def is_corner_blocked(grid, coord: Coord, direction: Tuple[int, int]) -> bool:
    """
    Check whether a diagonal move squeezes between two blocked cells.
    Out-of-bounds cells count as blocked.
    """
    x, y = coord
    dx, dy = direction
    return not grid.is_open(x + dx, y) and not grid.is_open(x, y + dy)
