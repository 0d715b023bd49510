"""Checking whether a board can be cleared without guessing."""

from collections.abc import Callable
from pprint import pprint
from typing import TYPE_CHECKING, NamedTuple, TextIO

from bitarray import bitarray

from minefield.cell import Cell
from minefield.grid import Position
from minefield.opening import relocate_mine
from minefield.solver.config import config as solver_config
from minefield.solver.propagation import Propagator
from minefield.util import counted, elapsed, report

if TYPE_CHECKING:
    from minefield.board import Board


class BoardState(NamedTuple):
    """Open/flag state of every cell, used to undo a simulated solve."""

    opened: bitarray
    """Bit `i` is set if cell `i` is open."""

    flagged: bitarray
    """Bit `i` is set if cell `i` is flagged."""


def save_state(cells: list[Cell]) -> BoardState:
    """Capture the open/flag state of the cells."""
    return BoardState(
        bitarray([cell.is_open for cell in cells]),
        bitarray([cell.is_flag for cell in cells]),
    )


def load_state(cells: list[Cell], state: BoardState) -> None:
    """Restore a state captured by `save_state`."""
    for cell, is_open, is_flag in zip(cells, state.opened, state.flagged, strict=True):
        cell.is_open = bool(is_open)
        cell.is_flag = bool(is_flag)


def is_solvable_from(
    board: "Board",
    position: Position | None = None,
    restore: bool | None = None,
    *,
    out: TextIO | None = None,
) -> bool:
    """Check whether a board can be cleared from a starting cell without guessing.

    The start cell must be a non-mine with no adjacent mines, otherwise the answer is False
    right away. The cell is opened and the propagator runs on the board itself until it
    stalls; the board is solvable if every non-mine cell ends up open.

    The propagation rules are local, so some hard but solvable boards are reported as
    unsolvable.

    Args:
        board: The board to check.
        position: The cell to start from. If None, start from the board's current state.
        restore: Whether to put back the open/flag state of the board afterwards.
            Defaults to `config.restore_by_default`.
        out: Optional text stream for progress reports.

    Raises:
        InvalidPosition: If the position is invalid (the board is left untouched).
    """
    if restore is None:
        restore = solver_config.restore_by_default
    start = None if position is None else board.grid.resolve(position)

    cells = board.concatenate()
    state = save_state(cells)
    try:
        if start is not None:
            first = cells[start]
            if first.is_mine or first.mines != 0:
                report(out, f"Start cell {first.pos} is not an empty cell; not solvable.")
                return False
            first.is_open = True

        if out is not None:
            report(out, "Solver config:")
            pprint(solver_config.model_dump(), stream=out, width=120)

        propagator = Propagator(cells, board.grid, apply=True)
        stats = propagator.run(
            max_iterations=solver_config.max_iterations,
            out=out,
            report_interval=solver_config.report_interval,
        )
        solvable = board.is_cleared()

        report(
            out,
            f"{'Solvable' if solvable else 'Not solvable'} after "
            f"{counted(stats.iterations, 'iteration')} ({elapsed(stats.start_time)}).",
        )
        return solvable
    finally:
        if restore:
            load_state(cells, state)


def find_solvable_board(
    rows: int,
    cols: int,
    mines: int | None = None,
    start: Position = (0, 0),
    *,
    attempts: int | None = None,
    rng: Callable[[], float] | None = None,
    out: TextIO | None = None,
) -> "Board | None":
    """Generate boards until one can be cleared from `start` without guessing.

    Args:
        rows: Number of rows.
        cols: Number of columns.
        mines: Number of mines (defaults to the board default).
        start: The cell the player will open first.
        attempts: Number of boards to try. Defaults to `config.search_attempts`.
        rng: Random source for generation.
        out: Optional text stream for progress reports.

    Returns:
        A fresh (all closed) solvable board, or None if no attempt succeeded. If the start
        cell drew a mine, the mine has already been moved as a first click would move it.
    """
    from minefield.board import Board

    if attempts is None:
        attempts = solver_config.search_attempts

    for attempt in range(1, attempts + 1):
        board = Board(rows, cols, mines, rng=rng)
        index = board.grid.resolve(start)
        # Same layout the player gets after a first click on `start`
        if board[index].is_mine:
            relocate_mine(board.concatenate(), board.grid, index)
        if board.is_solvable_from(index, restore=True):
            report(out, f"Found a solvable board after {counted(attempt, 'attempt')}.")
            return board
        if attempt % solver_config.report_interval == 0:
            report(out, f"Tried {counted(attempt, 'board')}...")

    report(out, f"No solvable board found in {counted(attempts, 'attempt')}.")
    return None
