"""
Map text parsing tests.
"""

from __future__ import annotations

import pytest

from gridroute.core.mapfile import load_map, parse_map, parse_token
from gridroute.core.types import MAX_COST, Cell, CellKind, MapLoadError, Point


@pytest.mark.parametrize(
    "token, expected",
    [
        ("0", Cell(CellKind.NORMAL, 0)),
        ("17", Cell(CellKind.NORMAL, 17)),
        ("S0", Cell(CellKind.START, 0)),
        ("F12", Cell(CellKind.FINISH, 12)),
        ("007", Cell(CellKind.NORMAL, 7)),
    ],
)
def test_parse_token_valid(token, expected):
    assert parse_token(token) == expected


@pytest.mark.parametrize(
    "token",
    ["#", "S", "F", "x1", "-3", "+3", "3a", "SF1", "s1", str(MAX_COST + 1), "9" * 5000, "F" + "1" * 5000],
)
def test_parse_token_malformed_is_absent(token):
    assert parse_token(token) is None


def test_parse_token_max_cost():
    assert parse_token(str(MAX_COST)) == Cell(CellKind.NORMAL, MAX_COST)
    assert parse_token("S" + "0" * 5000 + str(MAX_COST)) == Cell(CellKind.START, MAX_COST)


def test_parse_map_oversized_cost_is_absent():
    grid = parse_map(["S0 " + "9" * 5000 + " F1"])
    assert (grid.width, grid.height) == (3, 1)
    assert grid.lookup(Point(1, 0)) is None
    assert grid.lookup(Point(2, 0)) == Cell(CellKind.FINISH, 1)


def test_parse_map_ragged_rows_and_blank_lines():
    grid = parse_map(["S0 1", "", "   \t", "1 x 2 F3", "4"])
    assert (grid.width, grid.height) == (4, 3)
    assert grid.lookup(Point(0, 0)) == Cell(CellKind.START, 0)
    assert grid.lookup(Point(2, 0)) is None
    assert grid.lookup(Point(1, 1)) is None
    assert grid.lookup(Point(3, 1)) == Cell(CellKind.FINISH, 3)
    assert grid.lookup(Point(0, 2)) == Cell(CellKind.NORMAL, 4)
    assert grid.lookup(Point(3, 2)) is None


def test_parse_map_empty_input():
    grid = parse_map([])
    assert (grid.width, grid.height) == (0, 0)
    assert grid.find_start() is None


def test_load_map_from_file(tmp_path):
    path = tmp_path / "m.txt"
    path.write_text("S0 2\n\n3 F1\n", encoding="utf-8")
    grid = load_map(path)
    assert (grid.width, grid.height) == (2, 2)
    assert grid.lookup(Point(1, 1)) == Cell(CellKind.FINISH, 1)


def test_load_map_missing_file(tmp_path):
    with pytest.raises(MapLoadError):
        load_map(tmp_path / "nope.txt")


def test_load_map_undecodable_file(tmp_path):
    path = tmp_path / "bin.txt"
    path.write_bytes(b"S0 \xff\xfe 1\n")
    with pytest.raises(MapLoadError):
        load_map(path)


def test_shipped_maps_parse(maps_dir):
    for path in sorted(maps_dir.glob("*.txt")):
        grid = load_map(path)
        assert grid.find_start() is not None, path.name
