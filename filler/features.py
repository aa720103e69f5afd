"""Per-turn context and the candidate features scoring policies draw on."""
from __future__ import annotations

from collections import deque
from typing import List, NamedTuple, Optional

from .board import EMPTY, MINE, OPPONENT, Coord, Grid, Shape
from .territory import DIRECTIONS, reachable_empty, reachable_empty_for


class Adjacency(NamedTuple):
    enemy: int  # footprint-to-opponent neighbour pairs
    empty: int  # footprint-to-empty neighbour pairs
    blocking: int  # claimed cells that touch the opponent


class TurnContext:
    """Everything about the position that does not depend on the candidate.

    Built once per decision and shared by every candidate scored during that
    decision. Nothing in here outlives the turn.
    """

    def __init__(self, grid: Grid, shape: Shape) -> None:
        self.grid = grid
        self.shape = shape
        self.mine: List[Coord] = grid.cells_of(MINE)
        self.enemy: List[Coord] = grid.cells_of(OPPONENT)
        self._my_reach: Optional[int] = None
        self._enemy_reach: Optional[int] = None
        self._enemy_distance: Optional[List[List[int]]] = None

    @property
    def my_reach(self) -> int:
        """Reachable empty cells for the mover before placing anything."""
        if self._my_reach is None:
            self._my_reach = reachable_empty(self.grid, MINE)
        return self._my_reach

    @property
    def enemy_reach(self) -> int:
        """Reachable empty cells for the opponent before placing anything."""
        if self._enemy_reach is None:
            self._enemy_reach = reachable_empty(self.grid, OPPONENT)
        return self._enemy_reach

    @property
    def enemy_distance(self) -> List[List[int]]:
        """Manhattan distance from every cell to the nearest opponent cell.

        Cells are ``-1`` everywhere when the opponent owns nothing.
        """
        if self._enemy_distance is None:
            self._enemy_distance = _distance_map(self.grid, self.enemy)
        return self._enemy_distance

    def territory_distance(self) -> int:
        """Smallest Manhattan distance between the two territories, or -1."""
        if not self.mine or not self.enemy:
            return -1
        distance = self.enemy_distance
        return min(distance[y][x] for y, x in self.mine)


def _distance_map(grid: Grid, sources: List[Coord]) -> List[List[int]]:
    rows, cols = grid.rows, grid.cols
    distance = [[-1] * cols for _ in range(rows)]
    queue: deque = deque()
    for y, x in sources:
        distance[y][x] = 0
        queue.append((y, x))
    while queue:
        y, x = queue.popleft()
        for dy, dx in DIRECTIONS:
            ny, nx = y + dy, x + dx
            if 0 <= ny < rows and 0 <= nx < cols and distance[ny][nx] < 0:
                distance[ny][nx] = distance[y][x] + 1
                queue.append((ny, nx))
    return distance


def claimed_cells(ctx: TurnContext, top: int, left: int) -> int:
    """Number of empty cells the candidate turns into mover territory."""
    cells = ctx.grid.cells
    return sum(1 for dy, dx in ctx.shape.cells if cells[top + dy][left + dx] == EMPTY)


def min_distance_sq(ctx: TurnContext, top: int, left: int) -> int:
    """Squared distance from the footprint to the nearest opponent cell.

    Returns 0 when the opponent has no cells.
    """
    if not ctx.enemy:
        return 0
    best: Optional[int] = None
    for dy, dx in ctx.shape.cells:
        y, x = top + dy, left + dx
        for ey, ex in ctx.enemy:
            d = (ey - y) ** 2 + (ex - x) ** 2
            if best is None or d < best:
                best = d
    return best if best is not None else 0


def min_manhattan(ctx: TurnContext, top: int, left: int) -> int:
    """Manhattan distance from the footprint to the nearest opponent cell.

    Returns 0 when the opponent has no cells.
    """
    if not ctx.enemy:
        return 0
    distance = ctx.enemy_distance
    return min(distance[top + dy][left + dx] for dy, dx in ctx.shape.cells)


def adjacency(ctx: TurnContext, top: int, left: int) -> Adjacency:
    """Count orthogonal contacts between the footprint and the board around it."""
    grid = ctx.grid
    cells = grid.cells
    enemy = empty = blocking = 0
    for dy, dx in ctx.shape.cells:
        y, x = top + dy, left + dx
        touching = 0
        for ny, nx in ((y + 1, x), (y - 1, x), (y, x + 1), (y, x - 1)):
            if not grid.inside(ny, nx):
                continue
            cell = cells[ny][nx]
            if cell == OPPONENT:
                touching += 1
            elif cell == EMPTY:
                empty += 1
        enemy += touching
        if touching and cells[y][x] == EMPTY:
            blocking += 1
    return Adjacency(enemy, empty, blocking)


def denied_space(ctx: TurnContext, top: int, left: int) -> int:
    """How much reachable space the candidate takes away from the opponent."""
    after = reachable_empty_for(OPPONENT, ctx.grid, ctx.shape, top, left)
    return ctx.enemy_reach - after


def own_space(ctx: TurnContext, top: int, left: int) -> int:
    """Reachable empty cells left to the mover after the candidate."""
    return reachable_empty_for(MINE, ctx.grid, ctx.shape, top, left)
