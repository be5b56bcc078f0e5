from __future__ import annotations

from pathlib import Path

import pytest

from gridroute.core.grid import Grid
from gridroute.core.mapfile import parse_map

MAPS_DIR = Path(__file__).resolve().parents[1] / "maps"


def grid_from_text(text: str) -> Grid:
    return parse_map(text.splitlines())


@pytest.fixture
def maps_dir() -> Path:
    return MAPS_DIR


@pytest.fixture
def diagonal_grid() -> Grid:
    return grid_from_text("S0 1  1\n1  1  1\n1  1  F0\n")
