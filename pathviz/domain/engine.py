"""Stepwise grid search engine (A* by default)."""

import logging
from typing import List, Optional

from .errors import MissingStartOrEnd, NotRunning
from .grid import Grid
from .heuristics import Heuristic, resolve_heuristic, zero_heuristic
from .neighbors import movement_cost
from .path import path_cost, reconstruct
from .priority_queue import FrontierQueue
from .types import CellIndex, CellRole, Coord, SearchConfig, SearchResult, SearchStatus, StepResult

logger = logging.getLogger(__name__)


class SearchEngine:
    """
    Incremental best-first search over a Grid.

    The caller drives the search one expansion at a time with step(), or in
    bulk with run_to_completion(). The engine only writes the cells' scratch
    data and the VISITED/FRONTIER markings.

    Algorithms (SearchConfig.algorithm):
        astar: f = g + h with the configured heuristic
        dijkstra: f = g (zero heuristic)
        bfs: zero heuristic and unit cost per move, so cells are expanded
            in breadth-first order
    """

    def __init__(self, config: Optional[SearchConfig] = None, heuristic: Optional[Heuristic] = None):
        self.config = config or SearchConfig()
        self._custom_heuristic = heuristic
        self.reset()

    def reset(self):
        """Drop all run state."""
        self.grid: Optional[Grid] = None
        self.open_set = FrontierQueue()
        self.status = SearchStatus.NOT_STARTED
        self.nodes_explored = 0
        self.steps_taken = 0
        self.current: Optional[CellIndex] = None
        self._visited_order: List[CellIndex] = []
        self._start: Optional[CellIndex] = None
        self._end: Optional[CellIndex] = None
        self._end_coord: Optional[Coord] = None
        self._heuristic: Heuristic = zero_heuristic

    # Properties

    @property
    def start(self) -> Optional[CellIndex]:
        return self._start

    @property
    def end(self) -> Optional[CellIndex]:
        return self._end

    @property
    def visited_order(self) -> List[CellIndex]:
        """Cells in the order they were expanded."""
        return list(self._visited_order)

    @property
    def frontier_size(self) -> int:
        return len(self.open_set)

    @property
    def closed_count(self) -> int:
        return len(self._visited_order)

    def is_running(self) -> bool:
        return self.status is SearchStatus.RUNNING

    def is_finished(self) -> bool:
        return self.status in (SearchStatus.FOUND, SearchStatus.UNREACHABLE)

    # Lifecycle

    def initialize(self, grid: Grid):
        """
        Prepare a fresh run on the grid.

        Clears the grid's previous markings, seeds the frontier with the
        start cell and sets the status to RUNNING.

        Raises:
            MissingStartOrEnd: the grid lacks a start or an end cell
        """
        if grid.start is None or grid.end is None:
            raise MissingStartOrEnd(
                f"Search needs a start and an end cell (start={grid.start_coord}, end={grid.end_coord})"
            )

        self.reset()
        self.grid = grid
        self._start = grid.start
        self._end = grid.end
        self._end_coord = grid.coord(self._end)
        self._heuristic = self._select_heuristic()

        grid.reset_scratch()

        start_cell = grid.cell(self._start)
        start_cell.g_cost = 0.0
        start_cell.h_cost = self._estimate(self._start)
        start_cell.f_cost = start_cell.h_cost
        start_cell.parent = None
        self.open_set.put(self._start, start_cell.f_cost, start_cell.g_cost)

        self.status = SearchStatus.RUNNING
        logger.debug(
            "Search initialized: %s on %dx%d grid, start=%s end=%s",
            self.config.algorithm, grid.width, grid.height, grid.start_coord, self._end_coord,
        )

    def step(self) -> StepResult:
        """
        Expand one cell.

        Returns:
            EXHAUSTED when the frontier ran dry (status UNREACHABLE),
            PATH_FOUND when the end cell was popped (status FOUND),
            ADVANCED otherwise

        Raises:
            NotRunning: the engine is not in the RUNNING status
        """
        if self.status is not SearchStatus.RUNNING:
            raise NotRunning(f"Cannot step a search in status {self.status.value}")

        grid = self.grid
        self.steps_taken += 1

        entry = self.open_set.pop()
        if entry is None:
            self.status = SearchStatus.UNREACHABLE
            self.current = None
            logger.debug("Frontier exhausted after %d expansions", self.nodes_explored)
            return StepResult.EXHAUSTED

        index = entry.index
        self.current = index

        if index == self._end:
            self.status = SearchStatus.FOUND
            logger.debug("End reached after %d expansions, cost %.3f", self.nodes_explored, entry.g_cost)
            return StepResult.PATH_FOUND

        current = grid.cell(index)
        current.closed = True
        grid.mark(index, CellRole.VISITED)
        self._visited_order.append(index)
        self.nodes_explored += 1

        x, y = grid.coord(index)
        for neighbor_index in grid.neighbors(x, y, self.config.connectivity, self.config.corner_cutting):
            neighbor = grid.cell(neighbor_index)
            if neighbor.closed:
                continue

            tentative_g = current.g_cost + self._edge_cost((x, y), grid.coord(neighbor_index))
            if neighbor.seen and tentative_g >= neighbor.g_cost:
                continue

            neighbor.g_cost = tentative_g
            neighbor.h_cost = self._estimate(neighbor_index)
            neighbor.f_cost = tentative_g + neighbor.h_cost
            neighbor.parent = index
            grid.mark(neighbor_index, CellRole.FRONTIER)
            self.open_set.put(neighbor_index, neighbor.f_cost, neighbor.g_cost)

        return StepResult.ADVANCED

    def run_to_completion(self, max_steps: Optional[int] = None) -> SearchStatus:
        """
        Step until the search finishes or max_steps steps were taken.
        Returns the final status (still RUNNING if the budget ran out).
        """
        if self.status is not SearchStatus.RUNNING:
            raise NotRunning(f"Cannot run a search in status {self.status.value}")

        steps = 0
        while self.status is SearchStatus.RUNNING:
            if max_steps is not None and steps >= max_steps:
                logger.debug("Step budget of %d exhausted", max_steps)
                break
            self.step()
            steps += 1
        return self.status

    def result(self) -> SearchResult:
        """Snapshot of the run; the path is filled in by the reconstructor."""
        cost = 0.0
        if self.status is SearchStatus.FOUND:
            cost = self.grid.cell(self._end).g_cost
        return SearchResult(status=self.status, path_cost=cost, nodes_explored=self.nodes_explored)

    def frontier_indices(self) -> List[CellIndex]:
        """Cells currently waiting in the open set."""
        return [index for index, _ in self.open_set.items()]

    # Helpers

    def _select_heuristic(self) -> Heuristic:
        if self.config.algorithm in ("dijkstra", "bfs"):
            return zero_heuristic
        if self._custom_heuristic is not None:
            return self._custom_heuristic
        return resolve_heuristic(self.config.heuristic, self.config.connectivity)

    def _estimate(self, index: CellIndex) -> float:
        return float(self._heuristic(self.grid.coord(index), self._end_coord))

    def _edge_cost(self, from_coord: Coord, to_coord: Coord) -> float:
        if self.config.algorithm == "bfs":
            return 1.0
        return movement_cost(from_coord, to_coord)


def find_path(grid: Grid, config: Optional[SearchConfig] = None,
              max_steps: Optional[int] = None) -> SearchResult:
    """
    Convenience function: run a search to completion and reconstruct the path.

    Args:
        grid: Grid with a start and an end cell
        config: Search configuration (A* with 4-connectivity by default)
        max_steps: Optional step budget

    Returns:
        SearchResult with path and statistics
    """
    engine = SearchEngine(config)
    engine.initialize(grid)
    engine.run_to_completion(max_steps)
    result = engine.result()
    if engine.status is SearchStatus.FOUND:
        result.path = reconstruct(engine)
        result.path_cost = path_cost(grid, result.path)
    return result
