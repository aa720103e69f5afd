"""Parsers for the game engine's text protocol.

The referee announces each player once::

    $$$ exec p1 : [path/to/bot]

and then sends, every turn, a board block followed by a piece block::

    Anfield 20 15:
        01234567890123456789
    000 ....................
    001 ....@...............
    002 ...............$....
    Piece 4 2:
    .**.
    **..

Player 1 owns ``@``/``a`` cells and player 2 owns ``$``/``s`` cells. The
piece header gives width first, then height.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .board import EMPTY, MINE, OPPONENT, Grid, Shape

logger = logging.getLogger(__name__)

HANDSHAKE_PREFIX = "$$$ exec p"
BOARD_HEADER = "Anfield"
PIECE_HEADER = "Piece"

PLAYER_MARKS = {"@": 1, "a": 1, "$": 2, "s": 2}
FILLED_MARKS = "*Oo"


def parse_player_number(line: str) -> Optional[int]:
    """Return 1 or 2 from a ``$$$ exec pN : ...`` line, else ``None``."""
    trimmed = line.strip()
    if not trimmed.startswith(HANDSHAKE_PREFIX):
        return None
    rest = trimmed[len(HANDSHAKE_PREFIX):]
    if ":" not in rest:
        return None
    try:
        number = int(rest.split(":", 1)[0].strip())
    except ValueError:
        return None
    return number if number in (1, 2) else None


def classify(ch: str, player: int) -> int:
    """Map a board character to an ownership tag from ``player``'s viewpoint."""
    owner = PLAYER_MARKS.get(ch)
    if owner is None:
        # '.' and anything unexpected count as free space.
        return EMPTY
    return MINE if owner == player else OPPONENT


def parse_board(lines: Sequence[str], player: int) -> Optional[Grid]:
    """Build a :class:`Grid` from an ``Anfield`` block.

    Lines before the header are ignored, as are the column ruler and the row
    numbers at the start of each row.
    """
    rows: List[List[int]] = []
    seen_header = False
    for line in lines:
        trimmed = line.strip()
        if not trimmed:
            continue
        if trimmed.startswith(BOARD_HEADER):
            seen_header = True
            continue
        if not seen_header:
            continue
        if all(ch.isdigit() or ch.isspace() for ch in trimmed):
            continue
        body = trimmed.lstrip("0123456789 \t")
        row = [classify(ch, player) for ch in body if ch != " "]
        if row:
            rows.append(row)

    if not rows:
        logger.debug("Board block had no rows")
        return None
    if any(len(row) != len(rows[0]) for row in rows):
        logger.debug("Board block has ragged rows: %s", sorted({len(r) for r in rows}))
        return None
    return Grid(rows)


def piece_height(header: str) -> int:
    """Return the declared height from a ``Piece <w> <h>:`` header, or 0."""
    parts = header.split()
    if len(parts) < 3:
        return 0
    try:
        return int(parts[2].rstrip(":"))
    except ValueError:
        return 0


def parse_piece(lines: Sequence[str]) -> Optional[Shape]:
    """Build a :class:`Shape` from a ``Piece`` block.

    The declared width is widened if a pattern row is longer. The height is
    the number of pattern rows actually present.
    """
    header_index = next(
        (i for i, line in enumerate(lines) if line.lstrip().startswith(PIECE_HEADER)), None
    )
    if header_index is None:
        return None
    parts = lines[header_index].split()
    if len(parts) < 3:
        return None
    try:
        width = int(parts[1])
        height = int(parts[2].rstrip(":"))
    except ValueError:
        logger.debug("Bad piece header %r", lines[header_index])
        return None

    pattern: List[str] = []
    for line in lines[header_index + 1:]:
        row = line.rstrip()
        if not row:
            continue
        pattern.append(row)
        if len(pattern) == height:
            break
    if not pattern:
        return None

    cells = tuple(
        (dy, dx)
        for dy, row in enumerate(pattern)
        for dx, ch in enumerate(row)
        if ch in FILLED_MARKS
    )
    if not cells:
        logger.debug("Piece has no filled cells")
        return None
    width = max([width] + [len(row) for row in pattern])
    return Shape(width=width, height=len(pattern), cells=cells)
