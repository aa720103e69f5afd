"""Reachable-area estimation by flood fill."""
from __future__ import annotations

from collections import deque
from typing import Iterable, Set

from .board import EMPTY, MINE, Coord, Grid, Shape

DIRECTIONS = ((1, 0), (-1, 0), (0, 1), (0, -1))


def footprint(shape: Shape, top: int, left: int) -> Set[Coord]:
    """Return the board cells covered by ``shape`` anchored at ``(top, left)``."""
    return {(top + dy, left + dx) for dy, dx in shape.cells}


def reachable_empty(grid: Grid, side: int, claimed: Iterable[Coord] = ()) -> int:
    """Count the empty cells ``side`` can reach through its own territory.

    ``claimed`` cells are treated as belonging to the mover (``MINE``) no
    matter what the grid says. The search starts from every cell ``side``
    owns, walks through same-side cells and empty cells, and is blocked by
    the other side. Each empty cell is counted once.
    """
    rows, cols = grid.rows, grid.cols
    owners = list(grid.flat)
    for y, x in claimed:
        if 0 <= y < rows and 0 <= x < cols:
            owners[y * cols + x] = MINE

    # Fresh markers every call.
    visited = bytearray(rows * cols)
    queue: deque = deque()
    for index, cell in enumerate(owners):
        if cell == side:
            visited[index] = 1
            queue.append(index)

    size = rows * cols
    count = 0
    while queue:
        index = queue.popleft()
        x = index % cols
        for neighbour in (
            index - cols,
            index + cols,
            index - 1 if x > 0 else -1,
            index + 1 if x < cols - 1 else -1,
        ):
            if neighbour < 0 or neighbour >= size or visited[neighbour]:
                continue
            cell = owners[neighbour]
            if cell == side:
                visited[neighbour] = 1
                queue.append(neighbour)
            elif cell == EMPTY:
                visited[neighbour] = 1
                count += 1
                queue.append(neighbour)
            # Opposing territory blocks the fill.
    return count


def reachable_empty_for(side: int, grid: Grid, shape: Shape, top: int, left: int) -> int:
    """Reachable empty cells for ``side`` once the mover places ``shape``."""
    return reachable_empty(grid, side, footprint(shape, top, left))
