"""Hints: cells that can be deduced safe or unsafe from the current board state."""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from minefield.cell import Cell
from minefield.solver.propagation import Propagator

if TYPE_CHECKING:
    from minefield.board import Board


@dataclass
class Hint:
    """A group of cells that are all safe to open, or all mines to flag."""

    cells: list[Cell]
    """The hinted cells (board cells, not copies)."""

    safe: bool
    """True if the cells should be opened, False if they should be flagged."""

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def __len__(self) -> int:
        return len(self.cells)


def get_hints(board: "Board", accurate: bool = False) -> list[Hint]:
    """Find every deduction available from the current state, without changing the board.

    Args:
        board: The board to inspect.
        accurate: If True, each hint holds only the deduced cells. Otherwise it holds the
            area the deduction comes from: the cause cell and its surroundings.

    Returns:
        Hints in discovery order, without exact duplicates.
    """
    cells = board.concatenate()
    propagator = Propagator(cells, board.grid, apply=False)
    propagator.step(exhaustive=True)

    hints: list[Hint] = []
    seen: set[tuple[tuple[int, ...], bool]] = set()
    for deduction in propagator.deductions:
        indices = deduction.cells if accurate else deduction.context
        key = (tuple(indices), deduction.safe)
        if key in seen:
            continue
        seen.add(key)
        hints.append(Hint([cells[i] for i in indices], deduction.safe))
    return hints
