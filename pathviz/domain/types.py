"""Core type definitions for the pathfinding engine."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Optional, Tuple

# Coordinate type for grid positions
Coord = Tuple[int, int]

# Flat offset into the grid's cell array (y * width + x)
CellIndex = int

# Heuristic function identifiers
HeuristicId = Literal["manhattan", "euclidean", "diagonal", "octile", "zero"]

# Search algorithm identifiers
AlgorithmId = Literal["astar", "dijkstra", "bfs"]

# Neighbor offsets considered adjacent
Connectivity = Literal[4, 8]


class CellRole(Enum):
    """Semantic role of a grid cell."""
    EMPTY = "empty"
    WALL = "wall"
    START = "start"
    END = "end"
    VISITED = "visited"
    FRONTIER = "frontier"
    PATH = "path"

    @property
    def is_marker(self) -> bool:
        """Roles placed by the user (survive a scratch reset)."""
        return self in (CellRole.WALL, CellRole.START, CellRole.END)

    @property
    def is_search_mark(self) -> bool:
        """Roles painted by the engine or the path reconstructor."""
        return self in (CellRole.VISITED, CellRole.FRONTIER, CellRole.PATH)


class SearchStatus(Enum):
    """Lifecycle of a single search run."""
    NOT_STARTED = "not_started"
    RUNNING = "running"
    FOUND = "found"
    UNREACHABLE = "unreachable"


class StepResult(Enum):
    """Outcome of a single engine step."""
    ADVANCED = "advanced"
    PATH_FOUND = "path_found"
    EXHAUSTED = "exhausted"


@dataclass
class Cell:
    """A grid cell: its role plus the search scratch data."""
    role: CellRole = CellRole.EMPTY
    g_cost: float = float("inf")
    h_cost: float = 0.0
    f_cost: float = float("inf")
    parent: Optional[CellIndex] = None
    closed: bool = False

    def reset_scratch(self):
        """Reset search bookkeeping, keeping the role."""
        self.g_cost = float("inf")
        self.h_cost = 0.0
        self.f_cost = float("inf")
        self.parent = None
        self.closed = False

    @property
    def is_passable(self) -> bool:
        return self.role is not CellRole.WALL

    @property
    def seen(self) -> bool:
        """Whether the search has assigned this cell a cost."""
        return self.g_cost != float("inf")


@dataclass
class SearchConfig:
    """Configuration for the search engine."""
    connectivity: Connectivity = 4
    heuristic: Optional[HeuristicId] = None  # None picks the connectivity default
    algorithm: AlgorithmId = "astar"
    corner_cutting: bool = True

    def __post_init__(self):
        if self.connectivity not in (4, 8):
            raise ValueError(f"Connectivity must be 4 or 8, got {self.connectivity}")
        if self.algorithm not in ("astar", "dijkstra", "bfs"):
            raise ValueError(f"Unknown algorithm: {self.algorithm}")

    @property
    def allow_diagonal(self) -> bool:
        """Whether diagonal movement is allowed."""
        return self.connectivity == 8


@dataclass
class SearchResult:
    """Summary of a finished (or interrupted) search."""
    status: SearchStatus
    path: list[CellIndex] = field(default_factory=list)
    path_cost: float = 0.0
    nodes_explored: int = 0

    @property
    def success(self) -> bool:
        """Whether a path was found."""
        return self.status is SearchStatus.FOUND and bool(self.path)
