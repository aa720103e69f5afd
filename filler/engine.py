"""Placement search: legality, scan window and best-candidate selection."""
from __future__ import annotations

import logging
import time
from typing import Iterator, Optional, Tuple

from .board import MINE, OPPONENT, Grid, Shape
from .features import TurnContext
from .policies import DEFAULT_POLICY, POLICIES, Policy

logger = logging.getLogger(__name__)

# Boards with more cells than this only search around our own territory.
LARGE_BOARD_AREA = 2000
WINDOW_MARGIN = 15
# Seconds one decision may spend scoring candidates.
TIME_BUDGET = 2.0

Window = Tuple[int, int, int, int]


def is_legal(grid: Grid, shape: Shape, top: int, left: int) -> bool:
    """Return ``True`` if ``shape`` may be placed with its origin at ``(top, left)``.

    The piece must lie fully on the board, cover no opponent cell and cover
    exactly one of the mover's cells.
    """
    rows, cols = grid.rows, grid.cols
    cells = grid.cells
    overlap = 0
    for dy, dx in shape.cells:
        y = top + dy
        x = left + dx
        if y < 0 or x < 0 or y >= rows or x >= cols:
            return False
        cell = cells[y][x]
        if cell == OPPONENT:
            return False
        if cell == MINE:
            overlap += 1
            if overlap > 1:
                return False
    return overlap == 1


def search_window(
    ctx: TurnContext,
    large_board_area: int = LARGE_BOARD_AREA,
    window_margin: int = WINDOW_MARGIN,
) -> Window:
    """Return ``(min_y, max_y, min_x, max_x)`` bounds for the anchor scan.

    Small boards, and boards where we own nothing yet, are scanned whole.
    Larger boards are scanned only near our territory, which keeps the turn
    fast at the price of never looking at far-away placements.
    """
    grid, shape = ctx.grid, ctx.shape
    if not ctx.mine or grid.rows * grid.cols <= large_board_area:
        return 0, grid.rows, 0, grid.cols
    margin = max(window_margin, shape.height * 2, shape.width * 2)
    ys = [y for y, _ in ctx.mine]
    xs = [x for _, x in ctx.mine]
    return (
        max(min(ys) - margin, 0),
        min(max(ys) + margin + shape.height, grid.rows),
        max(min(xs) - margin, 0),
        min(max(xs) + margin + shape.width, grid.cols),
    )


def anchors(window: Window, shape: Shape) -> Iterator[Tuple[int, int]]:
    """Yield anchors in row-major order that keep the bounding box inside ``window``."""
    min_y, max_y, min_x, max_x = window
    for top in range(min_y, max_y - shape.height + 1):
        for left in range(min_x, max_x - shape.width + 1):
            yield top, left


def choose_best_placement(
    grid: Grid,
    shape: Shape,
    policy: Optional[Policy] = None,
    *,
    large_board_area: int = LARGE_BOARD_AREA,
    window_margin: int = WINDOW_MARGIN,
    deadline: Optional[float] = None,
) -> Optional[Tuple[int, int]]:
    """Pick the best legal anchor for ``shape`` on ``grid``.

    Candidates are scored by ``policy`` (the default policy when omitted) and
    the highest score wins. Ties go to the candidate found first in row-major
    order, so the answer is stable across runs.

    ``deadline`` is a :func:`time.monotonic` instant checked before each
    candidate is scored. Once it passes, the best anchor scored so far is
    returned; if nothing has been scored yet, the first legal anchor is
    returned unscored so the turn still produces a move.

    Returns ``None`` when the piece does not fit on the board or nothing in
    the scan window is legal. Empty pieces and boards never get here:
    :class:`Shape` and :class:`Grid` refuse to build them.
    """
    if policy is None:
        policy = POLICIES[DEFAULT_POLICY]

    if shape.height > grid.rows or shape.width > grid.cols:
        logger.debug(
            "Piece too large: %dx%d vs board %dx%d", shape.height, shape.width, grid.rows, grid.cols
        )
        return None

    ctx = TurnContext(grid, shape)
    window = search_window(ctx, large_board_area, window_margin)

    best_pos: Optional[Tuple[int, int]] = None
    best_score = 0
    expired = False
    for top, left in anchors(window, shape):
        if not is_legal(grid, shape, top, left):
            continue
        if deadline is not None and time.monotonic() >= deadline:
            expired = True
            if best_pos is None:
                best_pos = (top, left)
            break
        score = policy(ctx, top, left)
        if best_pos is None or score > best_score:
            best_score = score
            best_pos = (top, left)

    if best_pos is None:
        logger.debug("No legal placement in window %s", window)
    elif expired:
        logger.debug("Deadline reached, keeping %s", best_pos)
    else:
        logger.debug("Best placement %s scored %d", best_pos, best_score)
    return best_pos


def deadline_after(budget: Optional[float]) -> Optional[float]:
    """Return the deadline ``budget`` seconds from now; ``None`` or 0 means no limit."""
    if not budget or budget <= 0:
        return None
    return time.monotonic() + budget
