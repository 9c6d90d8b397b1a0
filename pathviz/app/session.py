"""Visualization session: owns the grid and the engine, paces the search."""

import logging
from typing import List, Optional

from ..domain.engine import SearchEngine
from ..domain.errors import InvalidTransition
from ..domain.grid import Grid
from ..domain.path import path_coords, path_cost, reconstruct
from ..domain.types import CellIndex, CellRole, Coord, SearchConfig, SearchResult, SearchStatus
from .config import SessionConfig
from .fsm import VisualizationState, VisualizationStateMachine

logger = logging.getLogger(__name__)


class VisualizationSession:
    """
    Mediates between grid edits and engine stepping.

    The host calls tick() once per frame; while RUNNING each tick advances
    the engine by ``steps_per_tick`` steps (``fast_forward_steps`` when fast
    forward is on). When the engine finishes the session moves to FINISHED
    and, if a path was found, paints it on the grid.
    """

    def __init__(self, config: Optional[SessionConfig] = None, grid: Optional[Grid] = None):
        self.config = config or SessionConfig()
        self._grid = grid or Grid(self.config.width, self.config.height)
        self._engine = SearchEngine(self.config.search)
        self._state_machine = VisualizationStateMachine()
        self._path: List[CellIndex] = []
        self._result: Optional[SearchResult] = None
        self._fast_forward = False

    # Properties

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def engine(self) -> SearchEngine:
        return self._engine

    @property
    def state_machine(self) -> VisualizationStateMachine:
        return self._state_machine

    @property
    def state(self) -> VisualizationState:
        return self._state_machine.current_state

    @property
    def path(self) -> List[CellIndex]:
        """Path of the last successful run (empty otherwise)."""
        return list(self._path)

    @property
    def path_coords(self) -> List[Coord]:
        return path_coords(self._grid, self._path)

    @property
    def result(self) -> Optional[SearchResult]:
        """Summary of the last finished run."""
        return self._result

    @property
    def step_budget(self) -> int:
        """Step limit for bulk runs; each cell is expanded at most once."""
        if self.config.max_steps is not None:
            return self.config.max_steps
        return self._grid.size * 2

    @property
    def fast_forward(self) -> bool:
        return self._fast_forward

    @fast_forward.setter
    def fast_forward(self, enabled: bool):
        self._fast_forward = bool(enabled)

    def toggle_fast_forward(self) -> bool:
        self._fast_forward = not self._fast_forward
        return self._fast_forward

    # Editing

    def set_role(self, x: int, y: int, role: CellRole):
        """Edit a cell; only legal while EDITING."""
        if not self._state_machine.is_editing():
            raise InvalidTransition(f"Grid edits are not allowed while {self.state.value}")
        self._grid.set_role(x, y, role)
        self._path = []
        self._result = None

    def replace_grid(self, grid: Grid):
        """Swap in a new grid (e.g. a generated maze), returning to EDITING."""
        self.reset()
        self._grid = grid

    def configure_search(self, search: SearchConfig):
        """Change algorithm, heuristic or movement rules; only legal while EDITING."""
        if not self._state_machine.is_editing():
            raise InvalidTransition(f"Search options cannot change while {self.state.value}")
        self.config.search = search
        self._engine = SearchEngine(search)

    # Lifecycle

    def start(self):
        """
        EDITING -> RUNNING.

        Raises:
            InvalidTransition: not in EDITING
            MissingStartOrEnd: the grid lacks a start or an end cell
        """
        if not self._state_machine.can_start():
            raise InvalidTransition(f"Cannot start while {self.state.value}")

        self._engine.initialize(self._grid)
        self._grid.lock()
        self._path = []
        self._result = None
        self._state_machine.transition_to(VisualizationState.RUNNING)

    def pause(self):
        self._state_machine.transition_to(VisualizationState.PAUSED)

    def resume(self):
        if not self._state_machine.can_resume():
            raise InvalidTransition(f"Cannot resume while {self.state.value}")
        self._state_machine.transition_to(VisualizationState.RUNNING)

    def tick(self) -> int:
        """
        Advance the search for one frame.
        Returns the number of engine steps performed (0 unless RUNNING).
        """
        if not self._state_machine.is_running():
            return 0

        budget = self.config.fast_forward_steps if self._fast_forward else self.config.steps_per_tick
        steps = 0
        while steps < budget and self._engine.is_running():
            self._engine.step()
            steps += 1

        if self._engine.is_finished():
            self._finish()
        return steps

    def step_once(self):
        """
        Advance exactly one engine step regardless of pacing.
        From EDITING this starts the search and leaves it PAUSED.
        """
        if self._state_machine.is_editing():
            self.start()
            self.pause()
        elif not self._state_machine.is_active():
            raise InvalidTransition(f"Cannot step while {self.state.value}")

        result = self._engine.step()
        if self._engine.is_finished():
            self._finish()
        return result

    def run_to_completion(self) -> SearchStatus:
        """
        Run the search without pacing, for non-interactive use.
        Starts from EDITING if needed; bounded by the configured step budget.
        """
        if self._state_machine.is_editing():
            self.start()
        elif not self._state_machine.is_active():
            raise InvalidTransition(f"Cannot run while {self.state.value}")

        status = self._engine.run_to_completion(self.step_budget)
        if self._engine.is_finished():
            self._finish()
        else:
            logger.warning("Search stopped after a budget of %d steps", self.step_budget)
        return status

    def reset(self):
        """Clear search markings and return to EDITING; walls, start and end stay."""
        self._engine.reset()
        self._grid.unlock()
        self._grid.reset_scratch()
        self._path = []
        self._result = None
        if not self._state_machine.is_editing():
            self._state_machine.transition_to(VisualizationState.EDITING)

    def clear(self):
        """Reset and also remove walls, start and end."""
        self.reset()
        self._grid.clear()

    def _finish(self):
        result = self._engine.result()
        if self._engine.status is SearchStatus.FOUND:
            self._path = reconstruct(self._engine)
            result.path = list(self._path)
            result.path_cost = path_cost(self._grid, self._path)
            logger.info("Path found: %d cells, cost %.3f, %d expansions",
                        len(self._path), result.path_cost, result.nodes_explored)
        else:
            logger.info("No path exists (%d expansions)", result.nodes_explored)
        self._result = result
        self._state_machine.transition_to(VisualizationState.FINISHED, {"result": result})

    # Utility methods

    def get_statistics(self) -> dict:
        """Get current search statistics."""
        return {
            "nodes_explored": self._engine.nodes_explored,
            "open_set_size": self._engine.frontier_size,
            "closed_set_size": self._engine.closed_count,
            "path_length": max(len(self._path) - 1, 0),
            "path_cost": self._result.path_cost if self._result else 0.0,
            "search_status": self._engine.status.value,
            "current_state": self.state.value,
            "state_description": self._state_machine.get_state_description(),
        }
