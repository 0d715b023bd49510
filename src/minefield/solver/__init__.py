"""Constraint propagation solver: solvability checks and hints."""

from minefield.solver.hints import Hint, get_hints
from minefield.solver.solvability import find_solvable_board, is_solvable_from

__all__ = ["Hint", "find_solvable_board", "get_hints", "is_solvable_from"]
