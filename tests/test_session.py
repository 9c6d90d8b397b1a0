"""Tests for the visualization state machine and session."""

import pytest

from pathviz.app.config import SessionConfig
from pathviz.app.fsm import VisualizationState, VisualizationStateMachine
from pathviz.app.session import VisualizationSession
from pathviz.domain.errors import InvalidTransition, MissingStartOrEnd
from pathviz.domain.grid import Grid
from pathviz.domain.types import CellRole, SearchConfig, SearchStatus, StepResult

EDITING = VisualizationState.EDITING
RUNNING = VisualizationState.RUNNING
PAUSED = VisualizationState.PAUSED
FINISHED = VisualizationState.FINISHED


def run_ticks(session, limit=1000):
    ticks = 0
    while session.state is RUNNING and ticks < limit:
        session.tick()
        ticks += 1
    return ticks


class TestStateMachine:
    def test_initial_state(self):
        assert VisualizationStateMachine().current_state is EDITING

    @pytest.mark.parametrize("path", [
        [RUNNING, PAUSED, RUNNING, FINISHED, EDITING],
        [RUNNING, EDITING],
        [RUNNING, PAUSED, FINISHED],
        [RUNNING, PAUSED, EDITING],
    ])
    def test_valid_transitions(self, path):
        fsm = VisualizationStateMachine()
        for state in path:
            fsm.transition_to(state)
        assert fsm.current_state is path[-1]

    @pytest.mark.parametrize("path", [
        [PAUSED],
        [FINISHED],
        [RUNNING, RUNNING],
        [RUNNING, FINISHED, PAUSED],
        [RUNNING, FINISHED, RUNNING],
    ])
    def test_invalid_transitions(self, path):
        fsm = VisualizationStateMachine()
        for state in path[:-1]:
            fsm.transition_to(state)
        before = fsm.current_state
        with pytest.raises(InvalidTransition):
            fsm.transition_to(path[-1])
        assert fsm.current_state is before

    def test_callbacks(self):
        fsm = VisualizationStateMachine()
        calls = []
        fsm.on_transition(EDITING, RUNNING, lambda old, new, ctx: calls.append(("transition", old, new)))
        fsm.on_state_enter(RUNNING, lambda ctx: calls.append(("enter", ctx)))

        fsm.transition_to(RUNNING, {"reason": "test"})
        assert calls == [("transition", EDITING, RUNNING), ("enter", {"reason": "test"})]

    def test_queries(self):
        fsm = VisualizationStateMachine()
        assert fsm.can_start() and fsm.is_editing() and not fsm.is_active()
        fsm.transition_to(RUNNING)
        assert fsm.can_pause() and fsm.is_active()
        fsm.transition_to(PAUSED)
        assert fsm.can_resume() and fsm.is_paused()
        assert fsm.get_state_description() == "Search paused"


@pytest.fixture
def session(gap_grid):
    return VisualizationSession(grid=gap_grid)


class TestSession:
    def test_starts_in_editing(self):
        session = VisualizationSession(SessionConfig(width=8, height=6))
        assert session.state is EDITING
        assert (session.grid.width, session.grid.height) == (8, 6)

    def test_start_without_endpoints(self):
        session = VisualizationSession(SessionConfig(width=5, height=5))
        session.set_role(0, 0, CellRole.START)
        with pytest.raises(MissingStartOrEnd):
            session.start()
        assert session.state is EDITING
        assert not session.grid.locked

    def test_start_locks_grid(self, session):
        session.start()
        assert session.state is RUNNING
        assert session.grid.locked
        with pytest.raises(InvalidTransition):
            session.set_role(1, 1, CellRole.WALL)
        with pytest.raises(InvalidTransition):
            session.start()

    def test_tick_advances_one_step(self, session):
        assert session.tick() == 0
        session.start()
        assert session.tick() == 1
        assert session.engine.steps_taken == 1

    def test_paused_session_does_not_advance(self, session):
        session.start()
        session.tick()
        session.pause()

        assert session.tick() == 0
        assert session.tick() == 0
        assert session.engine.steps_taken == 1

        session.resume()
        assert session.tick() == 1

    def test_invalid_pause_and_resume(self, session):
        with pytest.raises(InvalidTransition):
            session.pause()
        with pytest.raises(InvalidTransition):
            session.resume()
        session.start()
        with pytest.raises(InvalidTransition):
            session.resume()

    def test_runs_to_finished(self, session):
        session.start()
        run_ticks(session)

        assert session.state is FINISHED
        assert session.result.status is SearchStatus.FOUND
        assert session.result.path_cost == pytest.approx(8.0)
        assert (4, 2) in session.path_coords
        assert session.grid.count(CellRole.PATH) == len(session.path) - 2
        assert session.tick() == 0

    def test_unreachable_finishes_without_path(self, enclosed_grid):
        session = VisualizationSession(grid=enclosed_grid)
        session.start()
        run_ticks(session)

        assert session.state is FINISHED
        assert session.result.status is SearchStatus.UNREACHABLE
        assert session.path == []

    def test_fast_forward_takes_bigger_steps(self, gap_grid):
        config = SessionConfig(width=5, height=5, fast_forward_steps=4)
        session = VisualizationSession(config, gap_grid)
        session.fast_forward = True
        session.start()

        assert session.tick() == 4
        assert not session.toggle_fast_forward()
        assert session.tick() == 1

    def test_steps_per_tick(self, gap_grid):
        config = SessionConfig(width=5, height=5, steps_per_tick=3)
        session = VisualizationSession(config, gap_grid)
        session.start()
        assert session.tick() == 3

    def test_fewer_steps_on_final_tick(self, gap_grid):
        config = SessionConfig(width=5, height=5, steps_per_tick=1000)
        session = VisualizationSession(config, gap_grid)
        session.start()
        steps = session.tick()
        assert 0 < steps < 1000
        assert session.state is FINISHED

    def test_step_once_from_editing(self, session):
        assert session.step_once() is StepResult.ADVANCED
        assert session.state is PAUSED
        assert session.engine.steps_taken == 1

        session.step_once()
        assert session.state is PAUSED
        assert session.engine.steps_taken == 2

    def test_step_once_until_finished(self, session):
        while session.state is not FINISHED:
            session.step_once()
        assert session.result.success
        with pytest.raises(InvalidTransition):
            session.step_once()

    def test_run_to_completion(self, session):
        assert session.run_to_completion() is SearchStatus.FOUND
        assert session.state is FINISHED

    def test_run_to_completion_respects_budget(self, gap_grid):
        session = VisualizationSession(SessionConfig(max_steps=3), gap_grid)
        assert session.run_to_completion() is SearchStatus.RUNNING
        assert session.state is RUNNING
        assert session.engine.steps_taken == 3

    def test_reset_keeps_layout(self, session):
        session.run_to_completion()
        session.reset()

        grid = session.grid
        assert session.state is EDITING
        assert not grid.locked
        assert session.path == [] and session.result is None
        assert grid.count(CellRole.PATH) == 0
        assert grid.count(CellRole.VISITED) == 0
        assert grid.count(CellRole.WALL) == 4
        assert grid.start_coord == (0, 0) and grid.end_coord == (4, 4)

    def test_reset_is_idempotent(self, session):
        session.run_to_completion()
        first_order, first_path = session.engine.visited_order, session.path

        session.reset()
        session.reset()
        session.run_to_completion()
        assert session.engine.visited_order == first_order
        assert session.path == first_path

    @pytest.mark.parametrize("advance", ["running", "paused"])
    def test_reset_mid_run(self, session, advance):
        session.start()
        session.tick()
        if advance == "paused":
            session.pause()
        session.reset()
        assert session.state is EDITING
        assert session.grid.count(CellRole.FRONTIER) == 0
        session.set_role(2, 0, CellRole.WALL)

    def test_clear(self, session):
        session.run_to_completion()
        session.clear()

        assert session.state is EDITING
        assert session.grid.start is None and session.grid.end is None
        assert session.grid.count(CellRole.EMPTY) == session.grid.size

    def test_finished_session_must_reset_before_editing(self, session):
        session.run_to_completion()
        with pytest.raises(InvalidTransition):
            session.set_role(1, 1, CellRole.WALL)

    def test_configure_search(self, session):
        session.configure_search(SearchConfig(connectivity=8))
        assert session.engine.config.connectivity == 8
        session.start()
        with pytest.raises(InvalidTransition):
            session.configure_search(SearchConfig())

    def test_replace_grid(self, session):
        session.run_to_completion()
        session.replace_grid(Grid(3, 3))
        assert session.state is EDITING
        assert session.grid.size == 9

    def test_statistics(self, session):
        session.run_to_completion()
        stats = session.get_statistics()
        assert stats["path_length"] == 8
        assert stats["path_cost"] == pytest.approx(8.0)
        assert stats["search_status"] == "found"
        assert stats["current_state"] == "finished"
        assert stats["nodes_explored"] == stats["closed_set_size"]


@pytest.mark.parametrize("kwargs", [
    {"width": 0},
    {"cell_size": 0},
    {"tick_interval_ms": 0},
    {"steps_per_tick": 0},
    {"max_steps": 0},
])
def test_invalid_session_config(kwargs):
    with pytest.raises(ValueError):
        SessionConfig(**kwargs)
