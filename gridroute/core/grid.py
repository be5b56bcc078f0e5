# gridroute/core/grid.py
#!/usr/bin/env python3
"""
Immutable weighted grid plus Moore-neighborhood generation.

Coordinates are (col, row). Positions outside [0,width) x [0,height) never
resolve to a cell; inside, a position either holds a Cell or is impassable.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from gridroute.core.types import Cell, CellKind, Point

# NW, N, NE, W, E, SW, S, SE
MOORE_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0),           (1, 0),
    (-1, 1),  (0, 1),  (1, 1),
)


def moore_neighbors(p: Point) -> List[Point]:
    """The eight surrounding points in fixed order, minus any with a negative coordinate."""
    x, y = p
    out: List[Point] = []
    for dx, dy in MOORE_OFFSETS:
        nx, ny = x + dx, y + dy
        if nx >= 0 and ny >= 0:
            out.append(Point(nx, ny))
    return out


@dataclass(frozen=True)
class Grid:
    width: int
    height: int
    cells: Tuple[Optional[Cell], ...]   # row-major, len == width * height

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("grid dimensions must be non-negative")
        if len(self.cells) != self.width * self.height:
            raise ValueError(
                f"cells size mismatch: expected {self.width * self.height}, got {len(self.cells)}"
            )

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Optional[Cell]]]) -> "Grid":
        """Build from ragged rows; short rows are padded with absent cells."""
        width = max((len(r) for r in rows), default=0)
        cells: List[Optional[Cell]] = []
        for r in rows:
            cells.extend(r)
            cells.extend([None] * (width - len(r)))
        return cls(width, len(rows), tuple(cells))

    def in_bounds(self, p: Point) -> bool:
        x, y = p
        return 0 <= x < self.width and 0 <= y < self.height

    def lookup(self, p: Point) -> Optional[Cell]:
        if not self.in_bounds(p):
            return None
        x, y = p
        return self.cells[y * self.width + x]

    def enumerate(self) -> Iterator[Tuple[Point, Optional[Cell]]]:
        """All positions in row-major order."""
        for i, c in enumerate(self.cells):
            yield Point(i % self.width, i // self.width), c

    def find_start(self) -> Optional[Point]:
        for p, c in self.enumerate():
            if c is not None and c.kind is CellKind.START:
                return p
        return None

    def neighbors(self, p: Point) -> List[Point]:
        return [n for n in moore_neighbors(p) if self.in_bounds(n)]
