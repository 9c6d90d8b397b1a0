"""Shared fixtures for the pathviz test suite."""

import pytest

from pathviz.utils.grid_factory import create_grid


@pytest.fixture
def open_grid():
    """5x5 grid, no walls, start top-left, end bottom-right."""
    return create_grid(5, 5, start=(0, 0), end=(4, 4))


@pytest.fixture
def gap_grid():
    """5x5 grid with row 2 walled off except for (4, 2)."""
    return create_grid(5, 5, start=(0, 0), end=(4, 4), walls=[(0, 2), (1, 2), (2, 2), (3, 2)])


@pytest.fixture
def enclosed_grid():
    """5x5 grid whose end cell is boxed in by walls."""
    return create_grid(5, 5, start=(0, 0), end=(4, 4), walls=[(3, 4), (4, 3), (3, 3)])
