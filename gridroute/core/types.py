# gridroute/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Dict, Any, NamedTuple

# Largest entry cost a map cell may carry (unsigned 32-bit).
MAX_COST = 2**32 - 1


class Point(NamedTuple):
    x: int  # column
    y: int  # row


class CellKind(Enum):
    NORMAL = "normal"
    START = "start"
    FINISH = "finish"


@dataclass(frozen=True)
class Cell:
    kind: CellKind
    cost: int                     # charged when a path enters this cell


@dataclass(frozen=True)
class FrontierEntry:
    predecessor: Optional[Point]  # None only for the start entry
    location: Point
    cost: int                     # total entry cost from the start
    seq: int = field(default=0, compare=False)  # insertion order, breaks cost ties


@dataclass
class StepResult:
    status: str                   # "idle" | "running" | "done" | "no_path"
    opened: List[Point] = field(default_factory=list)
    closed: List[Point] = field(default_factory=list)
    current: Optional[Point] = None
    path: Optional[List[Point]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)


class GridRouteError(Exception):
    """Base class for errors reported to the user."""


class MapLoadError(GridRouteError):
    """The map file could not be opened, read or decoded."""


class NoStartError(GridRouteError):
    """The grid has no Start cell, so there is nothing to search from."""


class BacktrackError(GridRouteError):
    """A predecessor link points outside the closed set.

    Only raised when the engine's bookkeeping is broken; it is a defect,
    not a user error.
    """
