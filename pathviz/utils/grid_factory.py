"""Grid factory for creating, randomizing and converting grids."""

from typing import Dict, List, Optional, Tuple

import numpy as np

from ..domain.grid import Grid
from ..domain.types import CellRole, Coord
from .rng import SeededRNG

# Integer codes used by array snapshots of a grid
ROLE_CODES: Dict[CellRole, int] = {
    CellRole.EMPTY: 0,
    CellRole.WALL: 1,
    CellRole.START: 2,
    CellRole.END: 3,
    CellRole.VISITED: 4,
    CellRole.FRONTIER: 5,
    CellRole.PATH: 6,
}
CODE_ROLES: Dict[int, CellRole] = {code: role for role, code in ROLE_CODES.items()}

ASCII_SYMBOLS: Dict[CellRole, str] = {
    CellRole.EMPTY: ".",
    CellRole.WALL: "#",
    CellRole.START: "S",
    CellRole.END: "E",
    CellRole.VISITED: "o",
    CellRole.FRONTIER: "+",
    CellRole.PATH: "*",
}


def create_grid(width: int, height: int, start: Optional[Coord] = None,
                end: Optional[Coord] = None, walls: Optional[List[Coord]] = None) -> Grid:
    """
    Create a grid with optional walls, start and end.

    Args:
        width: Grid width (must be > 0)
        height: Grid height (must be > 0)
        start: Start coordinate
        end: End coordinate
        walls: Wall coordinates

    Raises:
        ValueError: If width or height <= 0
        OutOfBounds: If a coordinate lies outside the grid
    """
    grid = Grid(width, height)
    for x, y in walls or []:
        grid.set_role(x, y, CellRole.WALL)
    if start is not None:
        grid.set_role(*start, CellRole.START)
    if end is not None:
        grid.set_role(*end, CellRole.END)
    return grid


def add_random_walls(grid: Grid, density: float, rng: SeededRNG) -> int:
    """
    Turn a fraction of the empty cells into walls.

    Args:
        grid: Grid to modify
        density: Wall density (0.0 to 1.0) relative to the whole grid
        rng: Random number generator to use

    Returns:
        Number of walls placed
    """
    if not (0.0 <= density <= 1.0):
        raise ValueError(f"Density must be between 0.0 and 1.0, got {density}")

    empty_coords = grid.coords_with_role(CellRole.EMPTY)
    num_walls = min(int(grid.size * density), len(empty_coords))

    for x, y in rng.sample(empty_coords, num_walls):
        grid.set_role(x, y, CellRole.WALL)
    return num_walls


def place_start_and_end(grid: Grid, rng: SeededRNG, start: Optional[Coord] = None,
                        end: Optional[Coord] = None) -> Tuple[Coord, Coord]:
    """
    Place start and end on empty cells, choosing at random where not given.

    Returns:
        Tuple of (start_coord, end_coord)

    Raises:
        ValueError: If fewer than two empty cells are available
    """
    # Choose both cells before touching the grid
    empty_coords = grid.coords_with_role(CellRole.EMPTY)
    if start is None:
        candidates = [coord for coord in empty_coords if coord != end]
        if not candidates:
            raise ValueError("No empty cell left for the start")
        start = rng.choice(candidates)

    if end is None:
        candidates = [coord for coord in empty_coords if coord != start]
        if not candidates:
            raise ValueError("No empty cell left for the end")
        end = rng.choice(candidates)

    if start == end:
        raise ValueError(f"Start and end must be different cells, got {start}")
    grid.set_role(*start, CellRole.START)
    grid.set_role(*end, CellRole.END)

    return start, end


def generate_random_grid(width: int, height: int, density: float,
                         seed: Optional[int] = None) -> Grid:
    """Random walls at the given density plus random start and end."""
    rng = SeededRNG(seed)
    grid = Grid(width, height)
    add_random_walls(grid, density, rng)
    place_start_and_end(grid, rng)
    return grid


def generate_maze(width: int, height: int, seed: Optional[int] = None) -> Grid:
    """
    Generate a perfect maze with recursive backtracking.

    Passages sit on odd coordinates; every other cell starts as a wall.
    Start and end are placed in opposite corners of the carved area.

    Raises:
        ValueError: If width or height is less than 5
    """
    if width < 5 or height < 5:
        raise ValueError(f"Maze dimensions must be at least 5x5, got {width}x{height}")

    rng = SeededRNG(seed)
    grid = Grid(width, height)
    for y in range(height):
        for x in range(width):
            grid.set_role(x, y, CellRole.WALL)

    _carve_passages(grid, rng)

    # Last odd coordinates inside the border
    far_x = width - 2 if width % 2 == 1 else width - 3
    far_y = height - 2 if height % 2 == 1 else height - 3
    grid.set_role(1, 1, CellRole.START)
    grid.set_role(far_x, far_y, CellRole.END)
    return grid


def _carve_passages(grid: Grid, rng: SeededRNG) -> None:
    """Depth-first carving from (1, 1) with an explicit stack."""
    start = (1, 1)
    grid.set_role(*start, CellRole.EMPTY)

    stack = [start]
    visited = {start}
    directions = [(0, 2), (2, 0), (0, -2), (-2, 0)]  # Move by 2 to keep walls between passages

    while stack:
        cx, cy = stack[-1]

        candidates = []
        for dx, dy in directions:
            nx, ny = cx + dx, cy + dy
            if 0 < nx < grid.width - 1 and 0 < ny < grid.height - 1 and (nx, ny) not in visited:
                candidates.append(((nx, ny), (cx + dx // 2, cy + dy // 2)))

        if candidates:
            next_cell, wall_between = rng.choice(candidates)
            grid.set_role(*next_cell, CellRole.EMPTY)
            grid.set_role(*wall_between, CellRole.EMPTY)
            visited.add(next_cell)
            stack.append(next_cell)
        else:
            stack.pop()


def grid_to_array(grid: Grid) -> np.ndarray:
    """Snapshot of all roles as a (height, width) array of ROLE_CODES."""
    codes = [ROLE_CODES[cell.role] for cell in grid.cells()]
    return np.array(codes, dtype=np.uint8).reshape(grid.height, grid.width)


def grid_from_array(array) -> Grid:
    """
    Build a grid from a (height, width) array of ROLE_CODES.
    Only EMPTY, WALL, START and END codes are meaningful; search marks load as EMPTY.
    """
    array = np.asarray(array)
    if array.ndim != 2:
        raise ValueError(f"Expected a 2D array, got shape {array.shape}")

    height, width = array.shape
    grid = Grid(width, height)
    for (y, x), code in np.ndenumerate(array):
        role = CODE_ROLES.get(int(code))
        if role is None:
            raise ValueError(f"Unknown role code {code} at ({x}, {y})")
        if role.is_marker:
            grid.set_role(x, y, role)
    return grid


def render_ascii(grid: Grid) -> str:
    """Text rendering of the grid, one row per line."""
    rows = []
    for y in range(grid.height):
        rows.append("".join(ASCII_SYMBOLS[grid.get(x, y).role] for x in range(grid.width)))
    return "\n".join(rows)
