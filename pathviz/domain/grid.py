"""Fixed-size grid of cells addressed by (x, y) or by flat index."""

import logging
from typing import Iterator, List, Optional

from .errors import InvalidTransition, OutOfBounds
from .neighbors import is_corner_blocked, neighbor_offsets
from .types import Cell, CellIndex, CellRole, Connectivity, Coord

logger = logging.getLogger(__name__)


class Grid:
    """
    Rectangular array of cells stored as a flat list.

    Cell (x, y) lives at index ``y * width + x``; parent links in the cell
    scratch data use the same indices. At most one START and one END cell
    exist at any time: assigning either role demotes the previous holder to
    EMPTY. While the grid is locked (a search is in progress) the user
    roles cannot be edited.
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self._width = width
        self._height = height
        self._cells: List[Cell] = [Cell() for _ in range(width * height)]
        self._start: Optional[CellIndex] = None
        self._end: Optional[CellIndex] = None
        self._locked = False
        self._scratch_dirty = False

    def __repr__(self) -> str:
        return f"Grid({self._width}x{self._height}, start={self.start_coord}, end={self.end_coord})"

    # Properties

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> int:
        """Total number of cells."""
        return len(self._cells)

    @property
    def start(self) -> Optional[CellIndex]:
        return self._start

    @property
    def end(self) -> Optional[CellIndex]:
        return self._end

    @property
    def start_coord(self) -> Optional[Coord]:
        return self.coord(self._start) if self._start is not None else None

    @property
    def end_coord(self) -> Optional[Coord]:
        return self.coord(self._end) if self._end is not None else None

    @property
    def locked(self) -> bool:
        """Whether a search is in progress on this grid."""
        return self._locked

    def has_start_and_end(self) -> bool:
        return self._start is not None and self._end is not None

    # Addressing

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if coordinate is within grid bounds."""
        return 0 <= x < self._width and 0 <= y < self._height

    def index(self, x: int, y: int) -> CellIndex:
        """Flat index of (x, y)."""
        if not self.in_bounds(x, y):
            raise OutOfBounds(x, y, self._width, self._height)
        return y * self._width + x

    def coord(self, index: CellIndex) -> Coord:
        """(x, y) of a flat index."""
        if not 0 <= index < len(self._cells):
            raise IndexError(f"Cell index {index} out of range for {self._width}x{self._height} grid")
        return (index % self._width, index // self._width)

    def is_open(self, x: int, y: int) -> bool:
        """In bounds and not a wall."""
        return self.in_bounds(x, y) and self._cells[y * self._width + x].is_passable

    # Cell access

    def get(self, x: int, y: int) -> Cell:
        """Get the cell at (x, y)."""
        return self._cells[self.index(x, y)]

    def cell(self, index: CellIndex) -> Cell:
        """Get the cell at a flat index."""
        return self._cells[index]

    def role(self, x: int, y: int) -> CellRole:
        return self.get(x, y).role

    def cells(self) -> Iterator[Cell]:
        """Iterate cells in index order (row by row)."""
        return iter(self._cells)

    def coords_with_role(self, role: CellRole) -> List[Coord]:
        return [self.coord(i) for i, cell in enumerate(self._cells) if cell.role is role]

    def count(self, role: CellRole) -> int:
        return sum(1 for cell in self._cells if cell.role is role)

    # Editing

    def set_role(self, x: int, y: int, role: CellRole):
        """
        Assign a user role (EMPTY, WALL, START or END) to a cell.

        Raises:
            OutOfBounds: coordinate outside the grid
            InvalidTransition: the grid is locked by a running search, or
                the role is one only the search may paint
        """
        index = self.index(x, y)
        if self._locked:
            raise InvalidTransition(f"Cannot set {role.value} at ({x}, {y}) while a search is in progress")
        if role.is_search_mark:
            raise InvalidTransition(f"Role {role.value} is reserved for the search")

        # Any edit invalidates the previous run's markings
        if self._scratch_dirty:
            self.reset_scratch()

        cell = self._cells[index]
        if cell.role is CellRole.START:
            self._start = None
        elif cell.role is CellRole.END:
            self._end = None

        if role is CellRole.START:
            if self._start is not None:
                self._cells[self._start].role = CellRole.EMPTY
                logger.debug("Start moved from %s to (%d, %d)", self.coord(self._start), x, y)
            self._start = index
        elif role is CellRole.END:
            if self._end is not None:
                self._cells[self._end].role = CellRole.EMPTY
                logger.debug("End moved from %s to (%d, %d)", self.coord(self._end), x, y)
            self._end = index

        cell.role = role

    def mark(self, index: CellIndex, role: CellRole) -> bool:
        """
        Paint a search marking (VISITED, FRONTIER or PATH) on a cell.
        WALL, START and END cells keep their role; returns whether the cell changed.
        """
        if not role.is_search_mark:
            raise InvalidTransition(f"Role {role.value} cannot be painted by the search")
        cell = self._cells[index]
        if cell.role.is_marker:
            return False
        cell.role = role
        self._scratch_dirty = True
        return True

    def reset_scratch(self):
        """Clear search markings and scratch data, keeping WALL/START/END."""
        for cell in self._cells:
            if cell.role.is_search_mark:
                cell.role = CellRole.EMPTY
            cell.reset_scratch()
        self._scratch_dirty = False

    def clear(self):
        """Reset every cell to EMPTY, including walls, start and end."""
        if self._locked:
            raise InvalidTransition("Cannot clear the grid while a search is in progress")
        for cell in self._cells:
            cell.role = CellRole.EMPTY
            cell.reset_scratch()
        self._start = None
        self._end = None
        self._scratch_dirty = False

    def lock(self):
        self._locked = True
        self._scratch_dirty = True

    def unlock(self):
        self._locked = False

    # Adjacency

    def neighbors(self, x: int, y: int, connectivity: Connectivity = 4,
                  corner_cutting: bool = True) -> Iterator[CellIndex]:
        """
        Yield the indices of in-bounds, non-wall neighbors of (x, y).

        Orthogonal neighbors come first, then diagonal ones under
        8-connectivity. With ``corner_cutting=False`` a diagonal move
        between two blocked orthogonal cells is skipped. Each call returns
        a fresh generator.
        """
        if not self.in_bounds(x, y):
            raise OutOfBounds(x, y, self._width, self._height)
        offsets = neighbor_offsets(connectivity)
        return self._iter_neighbors(x, y, offsets, corner_cutting)

    def _iter_neighbors(self, x, y, offsets, corner_cutting) -> Iterator[CellIndex]:
        for dx, dy in offsets:
            nx, ny = x + dx, y + dy
            if not self.is_open(nx, ny):
                continue
            if dx and dy and not corner_cutting and is_corner_blocked(self, (x, y), (dx, dy)):
                continue
            yield ny * self._width + nx
