# gridroute/core/mapfile.py
#!/usr/bin/env python3
"""
Text map format.

One row per non-blank line, whitespace-separated tokens. A token is an optional
`S` (start) or `F` (finish) marker followed by a decimal cost, e.g. `S0 3 F1`.
Anything else becomes an impassable position; it never aborts the parse.
"""

import re
from pathlib import Path
from typing import Iterable, List, Optional, Union

from gridroute.logging_config import get_logger
from gridroute.core.grid import Grid
from gridroute.core.types import MAX_COST, Cell, CellKind, MapLoadError

logger = get_logger(__name__)

_TOKEN = re.compile(r"([SF]?)([0-9]+)")
_MAX_DIGITS = len(str(MAX_COST))
_MARKERS = {"": CellKind.NORMAL, "S": CellKind.START, "F": CellKind.FINISH}


def parse_token(token: str) -> Optional[Cell]:
    m = _TOKEN.fullmatch(token)
    if m is None:
        return None
    digits = m.group(2).lstrip("0") or "0"
    # too long for a cost; also keeps int() clear of the interpreter's digit limit
    if len(digits) > _MAX_DIGITS:
        return None
    cost = int(digits)
    if cost > MAX_COST:
        return None
    return Cell(_MARKERS[m.group(1)], cost)


def parse_map(lines: Iterable[str]) -> Grid:
    rows: List[List[Optional[Cell]]] = []
    bad = 0
    for line in lines:
        tokens = line.split()
        if not tokens:
            continue
        row = [parse_token(t) for t in tokens]
        bad += sum(1 for t, c in zip(tokens, row) if c is None)
        rows.append(row)

    grid = Grid.from_rows(rows)
    if bad:
        logger.info("%d malformed token(s) treated as impassable", bad)
    logger.debug("parsed %dx%d grid", grid.width, grid.height)
    return grid


def load_map(path: Union[str, Path]) -> Grid:
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            return parse_map(f)
    except (OSError, UnicodeDecodeError) as ex:
        raise MapLoadError(f"Failed to load map {path}: {ex}") from ex
