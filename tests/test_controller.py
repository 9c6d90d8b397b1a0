"""Tests for the Qt controller (no window, no event loop)."""

import numpy as np
import pytest

pytest.importorskip("PySide6")

from PySide6.QtCore import QCoreApplication  # noqa: E402

from pathviz.app.config import SessionConfig  # noqa: E402
from pathviz.app.controller import PathfinderController  # noqa: E402
from pathviz.app.fsm import VisualizationState  # noqa: E402
from pathviz.domain.types import CellRole, SearchStatus  # noqa: E402
from pathviz.utils.grid_factory import grid_to_array  # noqa: E402


@pytest.fixture(scope="module")
def qapp():
    return QCoreApplication.instance() or QCoreApplication([])


@pytest.fixture
def controller(qapp):
    controller = PathfinderController(SessionConfig(width=5, height=5))
    for x in range(4):
        controller.set_cell_role(x, 2, CellRole.WALL)
    controller.set_cell_role(0, 0, CellRole.START)
    controller.set_cell_role(4, 4, CellRole.END)
    yield controller
    controller.shutdown()


def drive(controller, limit=1000):
    for _ in range(limit):
        if controller.current_state is not VisualizationState.RUNNING:
            break
        controller._on_timer_tick()


def test_start_runs_timer(controller):
    states = []
    controller.state_changed.connect(states.append)

    assert controller.can_start()
    assert controller.start_search()
    assert controller.timer_active
    assert states == [VisualizationState.RUNNING]

    assert controller.pause_search()
    assert not controller.timer_active
    assert controller.resume_search()
    assert controller.timer_active


def test_ticks_until_finished(controller):
    results, steps = [], []
    controller.search_finished.connect(results.append)
    controller.step_completed.connect(steps.append)

    controller.start_search()
    drive(controller)

    assert controller.current_state is VisualizationState.FINISHED
    assert not controller.timer_active
    assert len(results) == 1
    assert results[0].status is SearchStatus.FOUND
    assert sum(steps) == controller.session.engine.steps_taken


def test_rejected_operation_emits_error(qapp):
    controller = PathfinderController(SessionConfig(width=5, height=5))
    errors = []
    controller.error_occurred.connect(errors.append)

    assert not controller.can_start()
    assert not controller.start_search()
    assert controller.current_state is VisualizationState.EDITING
    assert len(errors) == 1 and "start search" in errors[0]

    assert not controller.set_cell_role(9, 9, CellRole.WALL)
    assert len(errors) == 2


def test_edit_after_finish_resets(controller):
    controller.start_search()
    drive(controller)
    assert controller.set_cell_role(2, 0, CellRole.WALL)
    assert controller.current_state is VisualizationState.EDITING
    assert controller.grid.count(CellRole.PATH) == 0


def test_step_search(controller):
    steps = []
    controller.step_completed.connect(steps.append)
    assert controller.step_search()
    assert controller.current_state is VisualizationState.PAUSED
    assert steps == [1]
    assert not controller.timer_active


def test_update_search_config(controller):
    assert controller.update_search_config(connectivity=8, algorithm="dijkstra")
    assert controller.session.engine.config.connectivity == 8
    assert not controller.update_search_config(algorithm="greedy")


def test_speed_is_clamped(controller):
    controller.speed = 1
    assert controller.speed == 10
    controller.speed = 5000
    assert controller.speed == 1000


def test_save_and_load_layout(controller, tmp_path):
    target = tmp_path / "layout.json"
    assert controller.save_layout(target, "test")
    assert controller.clear_grid()
    assert controller.grid.start is None

    assert controller.load_layout(target)
    assert controller.grid.start_coord == (0, 0)
    assert controller.grid.count(CellRole.WALL) == 4


def test_generate_maze(controller):
    assert controller.generate_maze(9, 9, seed=1)
    assert controller.grid.width == 9
    assert controller.can_start()


def test_random_walls_fill_around_new_endpoints(qapp):
    controller = PathfinderController(SessionConfig(width=5, height=5))
    assert controller.add_random_walls(1.0, seed=1)
    assert controller.grid.has_start_and_end()
    assert controller.grid.count(CellRole.WALL) == 23


def test_rejected_random_walls_leave_grid_unchanged(qapp):
    controller = PathfinderController(SessionConfig(width=3, height=3))
    for y in range(3):
        for x in range(3):
            if (x, y) != (1, 1):
                controller.set_cell_role(x, y, CellRole.WALL)
    before = grid_to_array(controller.grid)
    errors = []
    controller.error_occurred.connect(errors.append)

    assert not controller.add_random_walls(0.5, seed=1)
    assert len(errors) == 1 and "add walls" in errors[0]
    assert np.array_equal(grid_to_array(controller.grid), before)
    assert controller.grid.start is None and controller.grid.end is None


def test_random_walls_reject_bad_density(controller):
    before = grid_to_array(controller.grid)
    assert not controller.add_random_walls(1.5)
    assert np.array_equal(grid_to_array(controller.grid), before)
