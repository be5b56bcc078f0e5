"""
Route reconstruction tests.
"""

from __future__ import annotations

import pytest

from gridroute.core.route import build_route, route_cost
from gridroute.core.types import BacktrackError, FrontierEntry, Point

from conftest import grid_from_text


def test_build_route_start_to_finish():
    closed = {
        Point(0, 0): FrontierEntry(None, Point(0, 0), 0),
        Point(1, 1): FrontierEntry(Point(0, 0), Point(1, 1), 1),
    }
    end = FrontierEntry(Point(1, 1), Point(2, 2), 1)
    assert build_route(end, closed) == [Point(0, 0), Point(1, 1), Point(2, 2)]


def test_build_route_none_is_empty():
    assert build_route(None, {}) == []


def test_build_route_start_only():
    start = FrontierEntry(None, Point(3, 4), 0)
    assert build_route(start, {}) == [Point(3, 4)]


def test_missing_predecessor_is_a_defect():
    closed = {Point(0, 0): FrontierEntry(None, Point(0, 0), 0)}
    end = FrontierEntry(Point(5, 5), Point(6, 6), 2)
    with pytest.raises(BacktrackError):
        build_route(end, closed)


def test_predecessor_cycle_is_a_defect():
    closed = {
        Point(0, 0): FrontierEntry(Point(1, 0), Point(0, 0), 0),
        Point(1, 0): FrontierEntry(Point(0, 0), Point(1, 0), 1),
    }
    end = FrontierEntry(Point(1, 0), Point(2, 0), 2)
    with pytest.raises(BacktrackError):
        build_route(end, closed)


def test_route_cost_skips_first_cell():
    grid = grid_from_text("S5 2\n# F3\n")
    assert route_cost(grid, [Point(0, 0), Point(1, 0), Point(1, 1)]) == 5
    with pytest.raises(ValueError):
        route_cost(grid, [Point(0, 0), Point(0, 1)])
