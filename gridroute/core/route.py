# gridroute/core/route.py
#!/usr/bin/env python3
from typing import List, Mapping, Optional, Sequence

from gridroute.core.grid import Grid
from gridroute.core.types import BacktrackError, FrontierEntry, Point


def build_route(end: Optional[FrontierEntry],
                closed: Mapping[Point, FrontierEntry]) -> List[Point]:
    """Follow predecessor links from end back to the start; returns [start .. end]."""
    if end is None:
        return []
    path: List[Point] = [end.location]
    cur = end
    while cur.predecessor is not None:
        prev = closed.get(cur.predecessor)
        if prev is None:
            raise BacktrackError(f"Failed to backtrack the route at {cur.predecessor}")
        path.append(prev.location)
        if len(path) > len(closed) + 1:
            raise BacktrackError("Predecessor chain does not reach the start")
        cur = prev
    path.reverse()
    return path


def route_cost(grid: Grid, route: Sequence[Point]) -> int:
    """Sum of entry costs along route; the first cell is free."""
    total = 0
    for p in route[1:]:
        c = grid.lookup(p)
        if c is None:
            raise ValueError(f"route passes through impassable position {p}")
        total += c.cost
    return total
