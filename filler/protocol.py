"""Turn loop that plays a whole game over a line-oriented stream."""
from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator, List, Optional, TextIO, Tuple

from .board import Grid, Shape
from .engine import (
    LARGE_BOARD_AREA,
    TIME_BUDGET,
    WINDOW_MARGIN,
    choose_best_placement,
    deadline_after,
)
from .parser import (
    BOARD_HEADER,
    PIECE_HEADER,
    parse_board,
    parse_piece,
    parse_player_number,
    piece_height,
)
from .policies import Policy

logger = logging.getLogger(__name__)

Chooser = Callable[[Grid, Shape], Optional[Tuple[int, int]]]

FALLBACK_MOVE = (0, 0)


def make_chooser(
    policy: Optional[Policy] = None,
    time_budget: Optional[float] = TIME_BUDGET,
    large_board_area: int = LARGE_BOARD_AREA,
    window_margin: int = WINDOW_MARGIN,
) -> Chooser:
    """Return a chooser that gives every call its own ``time_budget`` seconds."""

    def choose(grid: Grid, shape: Shape) -> Optional[Tuple[int, int]]:
        return choose_best_placement(
            grid,
            shape,
            policy,
            large_board_area=large_board_area,
            window_margin=window_margin,
            deadline=deadline_after(time_budget),
        )

    return choose


def format_move(move: Optional[Tuple[int, int]]) -> str:
    """Render a move as ``"row col"``; no move becomes ``"0 0"``."""
    row, col = move if move is not None else FALLBACK_MOVE
    return f"{row} {col}"


def read_player(lines: Iterator[str]) -> Optional[int]:
    """Consume lines until the handshake names our player number."""
    for line in lines:
        player = parse_player_number(line)
        if player is not None:
            return player
    return None


def read_board_block(lines: Iterator[str]) -> Optional[Tuple[List[str], str]]:
    """Collect a board block and the piece header that ends it.

    Returns ``None`` at end of input.
    """
    board_lines: List[str] = []
    for line in lines:
        if line.lstrip().startswith(BOARD_HEADER):
            board_lines.append(line)
            break
    else:
        return None

    for line in lines:
        if line.lstrip().startswith(PIECE_HEADER):
            return board_lines, line
        board_lines.append(line)
    return None


def read_piece_block(lines: Iterator[str], header: str) -> Optional[List[str]]:
    """Read the pattern rows announced by ``header``, or ``None`` if input ends."""
    piece_lines = [header]
    for _ in range(piece_height(header)):
        line = next(lines, None)
        if line is None:
            return None
        piece_lines.append(line)
    return piece_lines


def play(lines: Iterable[str], out: TextIO, choose: Optional[Chooser] = None) -> int:
    """Play until the input ends or a block fails to parse.

    Writes one move per turn to ``out`` and flushes after each. Returns the
    number of moves written. ``choose`` defaults to :func:`make_chooser`.
    """
    if choose is None:
        choose = make_chooser()
    stream = (line.rstrip("\r\n") for line in lines)
    player = read_player(stream)
    if player is None:
        logger.debug("Input ended before the handshake")
        return 0
    logger.debug("Playing as p%d", player)

    moves = 0
    while True:
        block = read_board_block(stream)
        if block is None:
            break
        board_lines, piece_header = block
        grid = parse_board(board_lines, player)
        if grid is None:
            logger.warning("Could not parse board on turn %d, stopping", moves + 1)
            break
        piece_lines = read_piece_block(stream, piece_header)
        if piece_lines is None:
            break
        shape = parse_piece(piece_lines)
        if shape is None:
            logger.warning("Could not parse piece on turn %d, stopping", moves + 1)
            break
        move = choose(grid, shape)
        if move is None:
            logger.debug("No legal placement on turn %d", moves + 1)
        out.write(format_move(move) + "\n")
        out.flush()
        moves += 1
    return moves
