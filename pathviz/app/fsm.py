"""Finite State Machine for the visualization lifecycle."""

import logging
from enum import Enum
from typing import Callable, Optional, Set

from ..domain.errors import InvalidTransition

logger = logging.getLogger(__name__)


class VisualizationState(Enum):
    """Phases of an interactive pathfinding session."""
    EDITING = "editing"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"


class VisualizationStateMachine:
    """
    Finite State Machine for the editing/running/paused/finished lifecycle.

    State Transitions:
    EDITING -> RUNNING (when start is pressed)
    RUNNING -> PAUSED (when pause is pressed)
    RUNNING -> FINISHED (when the search found a path or ran out of cells)
    RUNNING -> EDITING (when reset is pressed mid-run)
    PAUSED -> RUNNING (when resume is pressed)
    PAUSED -> FINISHED (when a manual step finishes the search)
    PAUSED -> EDITING (when reset is pressed)
    FINISHED -> EDITING (when reset is pressed)
    """

    def __init__(self):
        self._current_state = VisualizationState.EDITING
        self._state_callbacks = {}
        self._transition_callbacks = {}
        self._valid_transitions = self._build_transition_map()

    def _build_transition_map(self) -> dict[VisualizationState, Set[VisualizationState]]:
        """Build the valid state transition map."""
        return {
            VisualizationState.EDITING: {VisualizationState.RUNNING},
            VisualizationState.RUNNING: {
                VisualizationState.PAUSED, VisualizationState.FINISHED, VisualizationState.EDITING,
            },
            VisualizationState.PAUSED: {
                VisualizationState.RUNNING, VisualizationState.FINISHED, VisualizationState.EDITING,
            },
            VisualizationState.FINISHED: {VisualizationState.EDITING},
        }

    @property
    def current_state(self) -> VisualizationState:
        """Get the current state."""
        return self._current_state

    def can_transition_to(self, target_state: VisualizationState) -> bool:
        """Check if transition to target state is valid."""
        return target_state in self._valid_transitions.get(self._current_state, set())

    def transition_to(self, target_state: VisualizationState, context: dict = None):
        """
        Move to the target state.

        Args:
            target_state: The state to transition to
            context: Optional context data handed to the callbacks

        Raises:
            InvalidTransition: the move is not in the transition map
        """
        if not self.can_transition_to(target_state):
            raise InvalidTransition(
                f"Cannot go from {self._current_state.value} to {target_state.value}"
            )

        old_state = self._current_state
        self._current_state = target_state
        logger.info("State %s -> %s", old_state.value, target_state.value)

        # Call transition callbacks
        transition_key = (old_state, target_state)
        if transition_key in self._transition_callbacks:
            self._transition_callbacks[transition_key](old_state, target_state, context)

        # Call state entry callbacks
        if target_state in self._state_callbacks:
            self._state_callbacks[target_state](context)

    def on_state_enter(self, state: VisualizationState, callback: Callable[[Optional[dict]], None]):
        """Register a callback for when entering a specific state."""
        self._state_callbacks[state] = callback

    def on_transition(self, from_state: VisualizationState, to_state: VisualizationState,
                      callback: Callable[[VisualizationState, VisualizationState, Optional[dict]], None]):
        """Register a callback for a specific state transition."""
        self._transition_callbacks[(from_state, to_state)] = callback

    # Convenience methods for common operations

    def can_start(self) -> bool:
        return self._current_state == VisualizationState.EDITING

    def can_pause(self) -> bool:
        return self._current_state == VisualizationState.RUNNING

    def can_resume(self) -> bool:
        return self._current_state == VisualizationState.PAUSED

    def is_editing(self) -> bool:
        return self._current_state == VisualizationState.EDITING

    def is_running(self) -> bool:
        return self._current_state == VisualizationState.RUNNING

    def is_paused(self) -> bool:
        return self._current_state == VisualizationState.PAUSED

    def is_finished(self) -> bool:
        return self._current_state == VisualizationState.FINISHED

    def is_active(self) -> bool:
        """Whether a search is in progress (running or paused)."""
        return self._current_state in (VisualizationState.RUNNING, VisualizationState.PAUSED)

    def get_state_description(self) -> str:
        """Get a human-readable description of the current state."""
        descriptions = {
            VisualizationState.EDITING: "Editing grid",
            VisualizationState.RUNNING: "Search running",
            VisualizationState.PAUSED: "Search paused",
            VisualizationState.FINISHED: "Search finished",
        }
        return descriptions.get(self._current_state, "Unknown state")
