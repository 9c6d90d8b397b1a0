"""Qt controller connecting the UI to the visualization session."""

import logging
from pathlib import Path
from typing import Optional, Union

from PySide6.QtCore import QObject, QTimer, Signal

from ..domain.grid import Grid
from ..domain.types import CellRole, SearchConfig
from ..utils.grid_factory import add_random_walls, generate_maze, place_start_and_end
from ..utils.layout_io import LayoutData, load_layout, save_layout
from ..utils.rng import SeededRNG
from .config import SessionConfig
from .fsm import VisualizationState
from .session import VisualizationSession

logger = logging.getLogger(__name__)


class PathfinderController(QObject):
    """
    Drives a VisualizationSession from a QTimer and relays its changes as signals.

    Signals:
        state_changed: Emitted when the session state changes
        step_completed: Emitted after each timer tick or manual step
        search_finished: Emitted with the SearchResult when a run ends
        grid_updated: Emitted when the grid needs to be redrawn
        error_occurred: Emitted with a message when an operation is rejected
    """

    # Qt Signals
    state_changed = Signal(object)  # VisualizationState
    step_completed = Signal(int)  # engine steps performed
    search_finished = Signal(object)  # SearchResult
    grid_updated = Signal()
    error_occurred = Signal(str)

    def __init__(self, config: Optional[SessionConfig] = None):
        super().__init__()

        self._session = VisualizationSession(config)

        # Frame clock
        self._timer = QTimer(self)
        self._timer.timeout.connect(self._on_timer_tick)
        self._timer_interval = self._session.config.tick_interval_ms

        self._setup_state_callbacks()

    def _setup_state_callbacks(self):
        """Setup callbacks for state machine transitions."""
        fsm = self._session.state_machine
        fsm.on_state_enter(VisualizationState.RUNNING, self._on_running_entered)
        fsm.on_state_enter(VisualizationState.PAUSED, self._on_paused_entered)
        fsm.on_state_enter(VisualizationState.EDITING, self._on_editing_entered)
        fsm.on_state_enter(VisualizationState.FINISHED, self._on_finished_entered)

    # Properties

    @property
    def session(self) -> VisualizationSession:
        return self._session

    @property
    def grid(self) -> Grid:
        return self._session.grid

    @property
    def config(self) -> SessionConfig:
        return self._session.config

    @property
    def current_state(self) -> VisualizationState:
        return self._session.state

    @property
    def timer_active(self) -> bool:
        return self._timer.isActive()

    @property
    def speed(self) -> int:
        """Get the current speed (timer interval in ms)."""
        return self._timer_interval

    @speed.setter
    def speed(self, interval_ms: int):
        """Set the speed (timer interval in ms)."""
        self._timer_interval = max(10, min(1000, interval_ms))
        if self._timer.isActive():
            self._timer.setInterval(self._timer_interval)

    # Grid management

    def create_new_grid(self, width: int, height: int) -> bool:
        """Replace the grid with an empty one."""
        return self._guard(lambda: self._session.replace_grid(Grid(width, height)), "create grid")

    def generate_maze(self, width: int, height: int, seed: Optional[int] = None) -> bool:
        """Replace the grid with a recursive-backtracker maze."""
        return self._guard(lambda: self._session.replace_grid(generate_maze(width, height, seed)),
                           "generate maze")

    def add_random_walls(self, density: float, seed: Optional[int] = None) -> bool:
        """Sprinkle walls over the current grid and fill in a missing start/end."""
        def action():
            self._session.reset()
            grid = self._session.grid
            rng = SeededRNG(seed)
            if not 0.0 <= density <= 1.0:
                raise ValueError(f"Density must be between 0.0 and 1.0, got {density}")
            # Endpoints first so the walls only take the cells that are left
            if not grid.has_start_and_end():
                place_start_and_end(grid, rng, start=grid.start_coord, end=grid.end_coord)
            add_random_walls(grid, density, rng)

        return self._guard(action, "add walls")

    def set_cell_role(self, x: int, y: int, role: CellRole) -> bool:
        """Edit a cell; a finished run is cleared first so the click takes effect."""
        def action():
            if self._session.state_machine.is_finished():
                self._session.reset()
            self._session.set_role(x, y, role)

        return self._guard(action, "edit cell")

    def save_layout(self, filepath: Union[str, Path], name: str = "") -> bool:
        return self._guard(lambda: save_layout(LayoutData.from_grid(self.grid, name), filepath),
                           "save layout", redraw=False)

    def load_layout(self, filepath: Union[str, Path]) -> bool:
        return self._guard(lambda: self._session.replace_grid(load_layout(filepath).to_grid()),
                           "load layout")

    # Search control

    def can_start(self) -> bool:
        return self._session.state_machine.can_start() and self.grid.has_start_and_end()

    def start_search(self) -> bool:
        return self._guard(self._session.start, "start search")

    def pause_search(self) -> bool:
        return self._guard(self._session.pause, "pause search", redraw=False)

    def resume_search(self) -> bool:
        return self._guard(self._session.resume, "resume search", redraw=False)

    def step_search(self) -> bool:
        """Execute a single step, starting the search (paused) if needed."""
        ok = self._guard(self._session.step_once, "step search")
        if ok:
            self.step_completed.emit(1)
        return ok

    def reset_search(self) -> bool:
        return self._guard(self._session.reset, "reset")

    def clear_grid(self) -> bool:
        return self._guard(self._session.clear, "clear grid")

    def toggle_fast_forward(self) -> bool:
        return self._session.toggle_fast_forward()

    def update_search_config(self, **kwargs) -> bool:
        """Update algorithm, heuristic, connectivity or corner cutting."""
        def action():
            current = self._session.config.search
            values = {
                "connectivity": current.connectivity,
                "heuristic": current.heuristic,
                "algorithm": current.algorithm,
                "corner_cutting": current.corner_cutting,
            }
            values.update(kwargs)
            if self._session.state_machine.is_finished():
                self._session.reset()
            self._session.configure_search(SearchConfig(**values))

        return self._guard(action, "update search options")

    # State machine callbacks

    def _on_running_entered(self, context):
        self._timer.start(self._timer_interval)
        self.state_changed.emit(VisualizationState.RUNNING)

    def _on_paused_entered(self, context):
        self._timer.stop()
        self.state_changed.emit(VisualizationState.PAUSED)

    def _on_editing_entered(self, context):
        self._timer.stop()
        self.state_changed.emit(VisualizationState.EDITING)

    def _on_finished_entered(self, context):
        self._timer.stop()
        result = context.get("result") if context else None
        if result is not None:
            self.search_finished.emit(result)
        self.state_changed.emit(VisualizationState.FINISHED)

    def _on_timer_tick(self):
        """Called on each timer tick during run mode."""
        steps = self._session.tick()
        if steps:
            self.step_completed.emit(steps)
            self.grid_updated.emit()

    # Utility methods

    def get_statistics(self) -> dict:
        return self._session.get_statistics()

    def shutdown(self):
        """Stop the frame clock before the application exits."""
        self._timer.stop()

    def _guard(self, action, description: str, redraw: bool = True) -> bool:
        """Run an action, reporting rejected operations through error_occurred."""
        try:
            action()
        except (ValueError, OSError) as e:
            logger.warning("Cannot %s: %s", description, e)
            self.error_occurred.emit(f"Cannot {description}: {e}")
            return False
        if redraw:
            self.grid_updated.emit()
        return True
