"""Board and piece models for the filler game."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

# Cell ownership. The opposing side of ``side`` is ``-side``.
EMPTY = 0
MINE = 1
OPPONENT = -1

Coord = Tuple[int, int]


class Grid:
    """Rectangular board of ownership tags, read-only once built."""

    def __init__(self, cells: Iterable[Sequence[int]]) -> None:
        rows = tuple(tuple(row) for row in cells)
        if not rows or not rows[0]:
            raise ValueError("grid must be at least 1x1")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("every grid row must have the same width")
        self.cells: Tuple[Tuple[int, ...], ...] = rows
        self.rows = len(rows)
        self.cols = width
        # Row-major copy for the flood fill, indexed by ``y * cols + x``.
        self.flat: Tuple[int, ...] = tuple(cell for row in rows for cell in row)

    @classmethod
    def empty(cls, rows: int, cols: int) -> "Grid":
        return cls([[EMPTY] * cols for _ in range(rows)])

    def dimensions(self) -> Tuple[int, int]:
        return self.rows, self.cols

    def inside(self, y: int, x: int) -> bool:
        return 0 <= y < self.rows and 0 <= x < self.cols

    def owner_at(self, y: int, x: int) -> int:
        if not self.inside(y, x):
            raise IndexError(f"cell ({y}, {x}) outside {self.rows}x{self.cols} grid")
        return self.cells[y][x]

    def cells_of(self, side: int) -> List[Coord]:
        """Return the coordinates owned by ``side`` in row-major order."""
        return [
            (y, x)
            for y, row in enumerate(self.cells)
            for x, cell in enumerate(row)
            if cell == side
        ]

    def with_cells(self, changes: Iterable[Tuple[int, int, int]]) -> "Grid":
        """Return a copy of the grid with ``(y, x, owner)`` changes applied."""
        rows = [list(row) for row in self.cells]
        for y, x, owner in changes:
            rows[y][x] = owner
        return Grid(rows)

    def swapped(self) -> "Grid":
        """Return the same position seen from the other player's side."""
        return Grid([[-cell for cell in row] for row in self.cells])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.cells == other.cells

    def __hash__(self) -> int:
        return hash(self.cells)

    def __repr__(self) -> str:
        return f"Grid({self.rows}x{self.cols})"


@dataclass(frozen=True)
class Shape:
    """A piece: its bounding box and the filled offsets inside it.

    ``cells`` holds ``(dy, dx)`` offsets relative to the top-left corner. The
    bounding box may be wider than the filled cells.
    """

    width: int
    height: int
    cells: Tuple[Coord, ...]

    def __post_init__(self) -> None:
        if not self.cells:
            raise ValueError("shape must have at least one filled cell")
        for dy, dx in self.cells:
            if not (0 <= dy < self.height and 0 <= dx < self.width):
                raise ValueError(f"offset ({dy}, {dx}) outside {self.width}x{self.height} box")

    @classmethod
    def from_pattern(cls, pattern: Sequence[str], filled: str = "*") -> "Shape":
        """Build a shape from rows of text, e.g. ``[".*", "**"]``."""
        cells = tuple(
            (dy, dx)
            for dy, row in enumerate(pattern)
            for dx, ch in enumerate(row)
            if ch in filled
        )
        width = max((len(row) for row in pattern), default=0)
        return cls(width=width, height=len(pattern), cells=cells)


def grid_from_rows(rows: Sequence[str]) -> Grid:
    """Build a grid from compact rows using ``.`` empty, ``o`` mine, ``x`` opponent."""
    table = {".": EMPTY, "o": MINE, "x": OPPONENT}
    return Grid([[table[ch] for ch in row] for row in rows])
