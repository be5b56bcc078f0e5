"""
Viewer helper tests; nothing here opens a window.
"""

from __future__ import annotations

import logging

import pytest

pygame = pytest.importorskip("pygame")

from gridroute.app import cli, viewer
from gridroute.core.types import Cell, CellKind

from conftest import grid_from_text


def test_cell_color_range():
    assert viewer.cell_color(None, 9) == viewer.WALL
    assert viewer.cell_color(Cell(CellKind.NORMAL, 0), 9) == viewer.CHEAP
    assert viewer.cell_color(Cell(CellKind.NORMAL, 9), 9) == viewer.DEAR
    # flat maps and costs above the max stay in range
    assert viewer.cell_color(Cell(CellKind.NORMAL, 4), 0) == viewer.CHEAP
    assert viewer.cell_color(Cell(CellKind.NORMAL, 20), 9) == viewer.DEAR


def test_fit_cell_size_respects_panel_and_minimum(diagonal_grid):
    cs = viewer.fit_cell_size(diagonal_grid, viewer.PANEL_W + 2 * viewer.GRID_MARGIN + 300, 332)
    assert cs == 100
    assert viewer.fit_cell_size(grid_from_text("S0 " * 200), 400, 300) == 8


@pytest.mark.parametrize("raw, expected", [(None, 8), ("12", 12), ("0", 1), ("500", 60), ("fast", 8)])
def test_resolve_speed(monkeypatch, raw, expected):
    if raw is None:
        monkeypatch.delenv("GRIDROUTE_STEPS_PER_SEC", raising=False)
    else:
        monkeypatch.setenv("GRIDROUTE_STEPS_PER_SEC", raw)
    assert viewer.resolve_speed() == expected


def test_cli_view_reports_pygame_error(maps_dir, monkeypatch, caplog):
    class NoDisplay:
        def __init__(self, grid):
            raise pygame.error("No available video device")

    monkeypatch.setattr(viewer, "Viewer", NoDisplay)
    with caplog.at_level(logging.ERROR, logger="gridroute"):
        assert cli.main([str(maps_dir / "diagonal.txt"), "--view"]) == 1
    assert "No available video device" in caplog.text


def test_cli_view_without_start_fails_before_window(tmp_path, caplog):
    path = tmp_path / "nostart.txt"
    path.write_text("1 F0\n", encoding="utf-8")
    with caplog.at_level(logging.ERROR, logger="gridroute"):
        assert cli.main([str(path), "--view"]) == 1
    assert "No starting position" in caplog.text
