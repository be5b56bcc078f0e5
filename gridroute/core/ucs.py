# gridroute/core/ucs.py
#!/usr/bin/env python3
"""
Uniform-cost search over an 8-connected weighted grid, one expansion per step().

API (same lifecycle the viewer drives):
- init(grid) - reset() - step() -> StepResult
- run() steps to completion and returns the terminal entry (or None)

The finish is not given up front: Finish cells are discovered while relaxing
neighbors, and the search ends when a Finish cell is expanded, so the nearest
of all Finish cells wins.

Tie-breaking in the PQ:
- (cost, seq, point): lower cost, then FIFO by seq. A replaced open entry gets
  a fresh seq, which puts it behind every entry already waiting at that cost.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
import heapq

from gridroute.logging_config import get_logger
from gridroute.core.grid import Grid
from gridroute.core.route import build_route
from gridroute.core.types import (
    CellKind,
    FrontierEntry,
    NoStartError,
    Point,
    StepResult,
)

logger = get_logger(__name__)


@dataclass
class UniformCostSearch:
    name: str = "UCS"

    # Internal state
    grid: Optional[Grid] = None
    open_pq: List[Tuple[int, int, Point]] = field(default_factory=list)   # (cost, seq, point)
    open_entries: Dict[Point, FrontierEntry] = field(default_factory=dict)  # insertion-ordered
    closed: Dict[Point, FrontierEntry] = field(default_factory=dict)       # insertion-ordered
    start: Optional[Point] = None
    target: Optional[Point] = None      # most recently discovered Finish cell
    found: Optional[FrontierEntry] = None
    popped_count: int = 0
    done: bool = False
    no_path: bool = False
    seq: int = 0

    # -------------------- lifecycle --------------------

    def init(self, grid: Grid) -> None:
        self.grid = grid
        self.reset()

    def reset(self) -> None:
        """Clear all state and seed the open set with the start entry."""
        if self.grid is None:
            return
        start = self.grid.find_start()
        if start is None:
            raise NoStartError("No starting position.")

        self.open_pq.clear()
        self.open_entries.clear()
        self.closed.clear()
        self.start = start
        self.target = None
        self.found = None
        self.popped_count = 0
        self.done = False
        self.no_path = False
        self.seq = 0

        self._push(FrontierEntry(None, start, 0))
        logger.debug("start at %s", start)

    # -------------------- helpers --------------------

    def _bump(self) -> int:
        self.seq += 1
        return self.seq

    def _push(self, entry: FrontierEntry) -> FrontierEntry:
        entry = FrontierEntry(entry.predecessor, entry.location, entry.cost, self._bump())
        # drop-then-insert keeps dict order equal to insertion order
        self.open_entries.pop(entry.location, None)
        self.open_entries[entry.location] = entry
        heapq.heappush(self.open_pq, (entry.cost, entry.seq, entry.location))
        return entry

    def _pop_min(self) -> Optional[FrontierEntry]:
        """Cheapest live open entry; superseded heap items are discarded."""
        while self.open_pq:
            _, seq, p = heapq.heappop(self.open_pq)
            entry = self.open_entries.get(p)
            if entry is not None and entry.seq == seq:
                del self.open_entries[p]
                return entry
        return None

    def _is_finish(self, p: Point) -> bool:
        c = self.grid.lookup(p)
        return c is not None and c.kind is CellKind.FINISH

    # -------------------- search --------------------

    def step(self) -> StepResult:
        if self.grid is None:
            return StepResult(status="idle", metrics={"algo": self.name})

        if self.done:
            path = build_route(self.found, self.closed)
            return StepResult(status="done", path=path,
                              metrics=self._metrics(path_len=len(path)))

        if self.no_path:
            return StepResult(status="no_path", metrics=self._metrics())

        entry = self._pop_min()
        if entry is None:
            self.no_path = True
            logger.debug("open set exhausted after %d expansions", self.popped_count)
            return StepResult(status="no_path", metrics=self._metrics())

        self.popped_count += 1
        u = entry.location

        if self._is_finish(u):
            self.done = True
            self.found = entry
            path = build_route(entry, self.closed)
            logger.debug("finish %s reached at cost %d", u, entry.cost)
            return StepResult(status="done", current=u, path=path,
                              metrics=self._metrics(path_len=len(path)))

        closed_now: List[Point] = []
        if u not in self.closed:
            self.closed[u] = entry
            closed_now.append(u)

        opened_now: List[Point] = []
        for v in self.grid.neighbors(u):
            if v in self.closed:
                continue
            c = self.grid.lookup(v)
            if c is None:
                continue
            if c.kind is CellKind.FINISH:
                if self.target != v:
                    logger.debug("finish discovered at %s", v)
                self.target = v

            alt = entry.cost + c.cost
            existing = self.open_entries.get(v)
            if existing is not None:
                if alt < existing.cost:
                    self._push(FrontierEntry(u, v, alt))
            else:
                self._push(FrontierEntry(u, v, alt))
                opened_now.append(v)

        return StepResult(status="running", opened=opened_now, closed=closed_now, current=u,
                          metrics=self._metrics())

    def run(self) -> Optional[FrontierEntry]:
        """Step until the finish is expanded or the open set runs dry."""
        while True:
            res = self.step()
            if res.status != "running":
                break
        return self.found

    def _metrics(self, path_len: int = 0) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "open_size": len(self.open_entries),
            "closed_count": len(self.closed),
            "path_len": path_len,
            "total_cost": self.found.cost if self.found else None,
        }


@dataclass
class SearchResult:
    found: Optional[FrontierEntry]
    route: List[Point]
    closed: Dict[Point, FrontierEntry]
    expanded: int

    @property
    def cost(self) -> Optional[int]:
        return self.found.cost if self.found else None


def search(grid: Grid) -> SearchResult:
    """Run a full search on grid. Raises NoStartError if it has no Start cell."""
    algo = UniformCostSearch()
    algo.init(grid)
    found = algo.run()
    route = build_route(found, algo.closed) if found else []
    return SearchResult(found, route, dict(algo.closed), algo.popped_count)
