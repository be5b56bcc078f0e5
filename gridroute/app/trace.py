# gridroute/app/trace.py
"""
Plain-text dump of the search state, one block per loop iteration.

Points are written as [row, col]; the start entry's predecessor is [null].
Every item carries a trailing ", " and each list ends with a newline.
"""

from typing import Iterable, Optional, Sequence, TextIO
import sys

from gridroute.core.types import FrontierEntry, Point
from gridroute.core.ucs import UniformCostSearch


def format_entry(entry: FrontierEntry) -> str:
    x, y = entry.location
    if entry.predecessor is None:
        frm = "[null]"
    else:
        fx, fy = entry.predecessor
        frm = f"[{fy}, {fx}]"
    return f"([{y}, {x}], {entry.cost}, {frm}), "


def format_entries(entries: Iterable[FrontierEntry]) -> str:
    return "".join(format_entry(e) for e in entries) + "\n"


def format_state(open_entries: Iterable[FrontierEntry],
                 closed: Iterable[FrontierEntry]) -> str:
    return "Open:\n" + format_entries(open_entries) + "Closed:\n" + format_entries(closed) + "\n"


def format_route(route: Sequence[Point]) -> str:
    return "".join(f"[{y}, {x}], " for x, y in route) + "\n"


def print_state(algo: UniformCostSearch, out: Optional[TextIO] = None) -> None:
    """Write the open and closed sets of a UniformCostSearch."""
    out = out or sys.stdout
    out.write(format_state(algo.open_entries.values(), algo.closed.values()))


def print_route(route: Sequence[Point], out: Optional[TextIO] = None) -> None:
    out = out or sys.stdout
    out.write(format_route(route))
