"""Tests for the heuristic functions."""

import math

import pytest

from pathviz.domain.heuristics import (
    HEURISTICS,
    default_heuristic,
    diagonal_distance,
    euclidean_distance,
    get_heuristic,
    is_admissible,
    manhattan_distance,
    octile_distance,
    resolve_heuristic,
    zero_heuristic,
)


def test_manhattan():
    assert manhattan_distance((0, 0), (4, 4)) == 8
    assert manhattan_distance((3, 1), (1, 2)) == 3


def test_euclidean():
    assert euclidean_distance((0, 0), (3, 4)) == pytest.approx(5.0)


def test_diagonal():
    assert diagonal_distance((0, 0), (4, 1)) == 4


def test_octile():
    assert octile_distance((0, 0), (4, 4)) == pytest.approx(4 * math.sqrt(2))
    assert octile_distance((0, 0), (5, 2)) == pytest.approx(2 * math.sqrt(2) + 3)


def test_zero():
    assert zero_heuristic((0, 0), (9, 9)) == 0.0


@pytest.mark.parametrize("heuristic", list(HEURISTICS.values()))
def test_zero_at_target(heuristic):
    assert heuristic((3, 3), (3, 3)) == 0


def test_get_heuristic_unknown():
    with pytest.raises(ValueError):
        get_heuristic("chebyshev")


def test_default_depends_on_connectivity():
    assert default_heuristic(4) == "manhattan"
    assert default_heuristic(8) == "octile"
    assert resolve_heuristic(None, 8) is octile_distance
    assert resolve_heuristic("euclidean", 4) is euclidean_distance


def test_admissibility():
    assert is_admissible("manhattan", 4)
    assert not is_admissible("manhattan", 8)
    assert is_admissible("octile", 8)
    assert is_admissible("zero", 8)
