#!/usr/bin/env python3
"""Run the filler bot on stdin/stdout as the game engine expects."""
import argparse
import logging
import sys

from filler.engine import LARGE_BOARD_AREA, TIME_BUDGET, WINDOW_MARGIN
from filler.policies import DEFAULT_POLICY, POLICIES, get_policy
from filler.protocol import make_chooser, play


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play filler on stdin/stdout")
    parser.add_argument(
        "--policy", default=DEFAULT_POLICY, choices=sorted(POLICIES), help="Scoring policy"
    )
    parser.add_argument(
        "--large-board-area",
        type=int,
        default=LARGE_BOARD_AREA,
        help="Boards with more cells only search near our territory",
    )
    parser.add_argument(
        "--window-margin",
        type=int,
        default=WINDOW_MARGIN,
        help="Minimum margin around our territory on large boards",
    )
    parser.add_argument(
        "--time-budget",
        type=float,
        default=TIME_BUDGET,
        help="Seconds each move may spend scoring candidates (0 for no limit)",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log the bot's decisions to stderr"
    )
    return parser


def main(argv=None) -> None:
    args = build_parser().parse_args(argv)
    # stdout carries the moves, so logs go to stderr.
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    choose = make_chooser(
        get_policy(args.policy),
        time_budget=args.time_budget,
        large_board_area=args.large_board_area,
        window_margin=args.window_margin,
    )
    play(sys.stdin, sys.stdout, choose)


if __name__ == "__main__":
    main()
