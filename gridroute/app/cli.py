#!/usr/bin/env python3
"""
Command-line entry point.

    gridroute MAP [--no-trace] [--view] [--log-level LEVEL]

Searches MAP for the cheapest route from its Start cell to a Finish cell and
prints the open/closed sets before every expansion, then the route.

Config:
- ENV: GRIDROUTE_TRACE=1|0, GRIDROUTE_LOG_LEVEL=<level>
- CLI flags override the environment.
"""

from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional, Sequence

from gridroute import logging_config
from gridroute.app.trace import print_route, print_state
from gridroute.core.grid import Grid
from gridroute.core.mapfile import load_map
from gridroute.core.route import build_route
from gridroute.core.types import GridRouteError, Point
from gridroute.core.ucs import UniformCostSearch

logger = logging_config.get_logger("gridroute.cli")

_TRUTHY = ("1", "true", "yes", "on")
_FALSY = ("0", "false", "no", "off")


def resolve_trace(flag: Optional[bool] = None) -> bool:
    if flag is not None:
        return flag
    raw = os.getenv("GRIDROUTE_TRACE", "1").strip().lower()
    if raw in _FALSY:
        return False
    if raw not in _TRUTHY:
        logger.warning("ignoring unrecognised GRIDROUTE_TRACE=%r", raw)
    return True


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="gridroute",
        description="Cheapest 8-connected route from the S cell to an F cell of a cost map.",
    )
    p.add_argument("map", help="path to the map file")
    p.add_argument("--trace", dest="trace", action="store_true", default=None,
                   help="print open/closed sets before every expansion (default)")
    p.add_argument("--no-trace", dest="trace", action="store_false",
                   help="only print the route")
    p.add_argument("--view", action="store_true", help="animate the search in a pygame window")
    p.add_argument("--log-level", default=None, help="logging level (default: GRIDROUTE_LOG_LEVEL or WARNING)")
    return p


def solve(grid: Grid, trace: bool = True) -> List[Point]:
    """Run the search, echoing state the way the trace format expects."""
    algo = UniformCostSearch()
    algo.init(grid)
    while True:
        if trace:
            print_state(algo)
        res = algo.step()
        if res.status != "running":
            break
    if trace:
        print_state(algo)

    if algo.found is None:
        logger.info("no route from %s to any finish", algo.start)
        return []
    route = build_route(algo.found, algo.closed)
    logger.info("route of %d cells, cost %d, %d expansions",
                len(route), algo.found.cost, algo.popped_count)
    return route


def view(grid: Grid) -> int:
    """Open the viewer; a missing display or video driver is reported, not raised."""
    import pygame
    from gridroute.app.viewer import Viewer

    try:
        Viewer(grid).run()
    except pygame.error as ex:
        logger.error("Cannot open the viewer: %s", ex)
        return 1
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging_config.configure(args.log_level)

    try:
        grid = load_map(args.map)
        if args.view:
            return view(grid)
        route = solve(grid, trace=resolve_trace(args.trace))
    except GridRouteError as ex:
        logger.error("%s", ex)
        return 1

    if route:
        print_route(route)
    return 0


if __name__ == "__main__":
    sys.exit(main())
