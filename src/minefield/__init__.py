"""Minefield: a Minesweeper board engine with a constraint-propagation solver.

Generates boards, plays open/flag moves following the usual cascade and chording rules,
checks whether a board can be cleared from a starting cell without guessing, and finds
hints (cells that are provably safe or provably mines) for a game in progress.
"""

import argparse
import random
import sys

from minefield.board import Board
from minefield.cell import Cell
from minefield.errors import InvalidDimension, InvalidMineCount, InvalidPosition, MinefieldError
from minefield.solver import Hint, find_solvable_board

__all__ = [
    "Board",
    "Cell",
    "Hint",
    "InvalidDimension",
    "InvalidMineCount",
    "InvalidPosition",
    "MinefieldError",
    "find_solvable_board",
    "main",
]


def main(argv: list[str] | None = None) -> int:
    """Command line entry point: generate a board and report on it."""
    parser = argparse.ArgumentParser(
        prog="minefield", description="Generate a Minesweeper board and check it."
    )
    parser.add_argument("rows", type=int, help="Board height")
    parser.add_argument("cols", type=int, help="Board width")
    parser.add_argument("--mines", type=int, help="Number of mines (default: cells // 5)")
    parser.add_argument("--seed", type=int, help="Seed for the random source")
    parser.add_argument(
        "--start",
        type=int,
        nargs=2,
        metavar=("ROW", "COL"),
        help="Search for a board that can be cleared from this cell without guessing",
    )
    parser.add_argument("--attempts", type=int, help="Number of boards to try with --start")
    parser.add_argument(
        "--hints", action="store_true", help="Open the start cell and list the hints"
    )
    parser.add_argument("--unicode", action="store_true", help="Draw with unicode symbols")
    parser.add_argument("--verbose", action="store_true", help="Report solver progress")
    args = parser.parse_args(argv)

    rng = random.Random(args.seed).random if args.seed is not None else None
    out = sys.stdout if args.verbose else None

    try:
        if args.start is not None:
            start = tuple(args.start)
            board = find_solvable_board(
                args.rows, args.cols, args.mines, start, attempts=args.attempts, rng=rng, out=out
            )
            if board is None:
                print("No solvable board found.")
                return 1
        else:
            board = Board(args.rows, args.cols, args.mines, rng=rng)

        print(f"Board {board.rows}x{board.cols} with {board.mines} mines:")
        board.print(unicode=args.unicode, positions=True, uncover=True)

        if args.start is not None:
            print(f"Solvable from {start}: {board.is_solvable_from(start, out=out)}")

        if args.hints:
            board.open(start if args.start is not None else 0)
            print("Board after the first move:")
            board.print(unicode=args.unicode, positions=True)
            for hint in board.get_hints(accurate=True):
                action = "open" if hint.safe else "flag"
                print(f"Hint: {action} {', '.join(str(cell.pos) for cell in hint)}")
    except MinefieldError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    return 0
