"""Tests for the cell tile cost overlay."""

import pytest

pytest.importorskip("PySide6")

from pathviz.app.config import SessionConfig  # noqa: E402
from pathviz.ui.tiles import COST_LABEL_MIN_SIZE  # noqa: E402


def test_default_cell_size_shows_costs():
    assert SessionConfig().cell_size >= COST_LABEL_MIN_SIZE
