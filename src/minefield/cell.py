"""The Cell record stored in every board position."""

from dataclasses import dataclass


@dataclass(eq=False)
class Cell:
    """A single board position.

    Compared by identity: two cells are the same only if they are the same board position
    object, which is what `Board.concatenate()` and hints hand out.
    """

    row: int = 0
    """Row of the cell on its board."""

    col: int = 0
    """Column of the cell on its board."""

    mines: int = 0
    """Number of mines among the (up to 8) neighboring cells."""

    is_mine: bool = False
    """Whether this cell holds a mine."""

    is_open: bool = False
    """Whether this cell has been revealed."""

    is_flag: bool = False
    """Whether this cell is flagged."""

    @property
    def pos(self) -> tuple[int, int]:
        """The (row, col) pair of the cell."""
        return (self.row, self.col)

    def copy(self) -> "Cell":
        """Return a detached copy of the cell."""
        return Cell(self.row, self.col, self.mines, self.is_mine, self.is_open, self.is_flag)
