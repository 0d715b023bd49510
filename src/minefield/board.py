"""The Minesweeper board: cell storage, game moves and state queries."""

import math
import random
from collections.abc import Iterable, Iterator
from typing import TextIO

import numpy as np

from minefield.cell import Cell
from minefield.errors import InvalidMineCount, InvalidPosition
from minefield.generator import RandomSource, count_adjacent_mines, generate, place_mines_shuffled
from minefield.grid import Grid, Position, parse_int_range
from minefield.opening import open_cell
from minefield.solver.config import config as solver_config
from minefield.solver.hints import Hint, get_hints
from minefield.solver.solvability import is_solvable_from
from minefield.visualize import visualize


class Board:
    """A rows x cols grid of cells, stored as a 1D list in row-major order.

    Positions can be given as a 1D index or as a `(row, col)` pair.
    """

    def __init__(
        self,
        rows: int,
        cols: int,
        mines: int | None = None,
        *,
        mine_positions: Iterable[Position] | None = None,
        rng: RandomSource | None = None,
    ) -> None:
        """Create a board and lay out its mines.

        Args:
            rows: Number of rows (the height). Truncated to an integer, at least 1.
            cols: Number of columns (the width). Truncated to an integer, at least 1.
            mines: Number of mines, shuffled over the board. Defaults to
                `rows * cols // config.mine_density_divisor`.
            mine_positions: Put mines on exactly these positions instead (no shuffling).
            rng: A function returning a random float in [0, 1). Defaults to `random.random`.

        Raises:
            InvalidDimension: If rows or cols is not a number.
            InvalidMineCount: If the mines do not fit on the board.
            InvalidPosition: If a mine position is invalid.
        """
        self._grid = Grid(parse_int_range(rows, 1), parse_int_range(cols, 1))

        self.rng: RandomSource = rng if rng is not None else random.random
        """Random source used by `randomize()` and by mine-count changes."""

        self._cells: list[Cell] = generate(
            self._grid,
            self.rng,
            mines=mines,
            mine_positions=mine_positions,
            density_divisor=solver_config.mine_density_divisor,
        )

    def copy(self) -> "Board":
        """Generate an independent copy of the board (same cells, same state)."""
        board = Board(self.rows, self.cols, mine_positions=(), rng=self.rng)
        board._cells = [cell.copy() for cell in self._cells]
        return board

    def __repr__(self) -> str:
        return f"Board(rows={self.rows}, cols={self.cols}, mines={self.mines})"

    def __str__(self) -> str:
        return visualize(self)

    def print(self, **options: object) -> None:
        """Print the board to the console (see `visualize()` for the options)."""
        print(self.visualize(**options), end="")  # type: ignore[arg-type]

    def visualize(self, **options: object) -> str:
        """Render the board as text. See `minefield.visualize.visualize`."""
        return visualize(self, **options)  # type: ignore[arg-type]

    def __getitem__(self, position: Position) -> Cell:
        """Get a cell by 1D (row-major order) or 2D index."""
        return self._cells[self._grid.resolve(position)]

    def __iter__(self) -> Iterator[Cell]:
        """Iterate over the cells in row-major order."""
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    @property
    def grid(self) -> Grid:
        """The current shape of the board."""
        return self._grid

    # --- Generation -------------------------------------------------------------------------

    def randomize(self, rng: RandomSource | None = None) -> None:
        """Lay out the same number of mines again at random. This also resets the board.

        Args:
            rng: Random source for this layout. Defaults to the board's own.
        """
        self._cells = place_mines_shuffled(
            self._grid, self.mines, rng if rng is not None else self.rng
        )

    def reset(self) -> None:
        """Close every cell and remove every flag."""
        for cell in self._cells:
            cell.is_open = False
            cell.is_flag = False

    def reset_mines(self) -> None:
        """Recompute the number of adjacent mines of every cell."""
        count_adjacent_mines(self._cells, self._grid)

    # --- Views ------------------------------------------------------------------------------

    def as_array(self) -> np.ndarray:
        """Return a rows x cols array with -1 for mines and the adjacent-mine count elsewhere."""
        values = np.fromiter(
            (-1 if cell.is_mine else cell.mines for cell in self._cells),
            dtype=np.int8,
            count=len(self._cells),
        )
        return values.reshape(self.rows, self.cols)

    def simplify(self) -> list[list[int]]:
        """Return the board as nested lists: -1 for a mine, else the adjacent-mine count."""
        return self.as_array().tolist()

    def concatenate(self) -> list[Cell]:
        """Return all cells in row-major order.

        The list is new but the cells are the board's own, so changing them changes the board.
        """
        return list(self._cells)

    def cell_at(self, *position: object) -> Cell:
        """Get a cell from an index, a `(row, col)` pair, or a row and a column.

        Raises:
            InvalidPosition: If the position is invalid.
        """
        if len(position) == 1:
            return self[position[0]]  # type: ignore[index]
        if len(position) == 2:
            return self[(position[0], position[1])]  # type: ignore[index]
        raise InvalidPosition(f"Position is invalid {position!r}", bad_row=True, bad_col=True)

    def nearby_cells(self, position: Position, include_self: bool = False) -> list[Cell]:
        """Return the (up to 8) cells around a position, in row-major order.

        Raises:
            InvalidPosition: If the position is invalid.
        """
        index = self._grid.resolve(position)
        return [self._cells[i] for i in self._grid.neighbors(index, include_self)]

    # --- Moves ------------------------------------------------------------------------------

    def open(
        self,
        position: Position,
        *,
        first_move: bool | None = None,
        nearby_opening: bool = False,
        nearby_flagging: bool = False,
    ) -> list[Cell]:
        """Open a cell, and possibly others following the Minesweeper rules.

        Args:
            position: The cell to open.
            first_move: If the cell is a mine, move the mine to the first free cell (in index
                order) before opening. Defaults to `is_new()`.
            nearby_opening: If the cell is already open and as many neighbors are flagged as
                its number, open its other closed neighbors.
            nearby_flagging: If the cell is already open and as many neighbors are closed as
                its number, flag them.

        Returns:
            The cells that were opened or flagged by this call.

        Raises:
            InvalidPosition: If the position is invalid (the board is left untouched).
        """
        index = self._grid.resolve(position)
        if first_move is None:
            first_move = self.is_new()
        return open_cell(
            self._cells,
            self._grid,
            index,
            first_move=first_move,
            nearby_opening=nearby_opening,
            nearby_flagging=nearby_flagging,
        )

    def flag(self, position: Position) -> bool:
        """Toggle the flag on a closed cell. Open cells are left alone.

        Returns:
            Whether the cell is flagged after the call.

        Raises:
            InvalidPosition: If the position is invalid.
        """
        cell = self[position]
        if not cell.is_open:
            cell.is_flag = not cell.is_flag
        return cell.is_flag

    def is_solvable_from(
        self,
        position: Position | None = None,
        restore: bool | None = None,
        *,
        out: TextIO | None = None,
    ) -> bool:
        """Check if the board can be cleared from a cell without guessing.

        See `minefield.solver.solvability.is_solvable_from`.
        """
        return is_solvable_from(self, position, restore, out=out)

    def get_hints(self, accurate: bool = False) -> list[Hint]:
        """Find cells that can be deduced safe or unsafe. See `minefield.solver.hints`."""
        return get_hints(self, accurate)

    # --- State queries ----------------------------------------------------------------------

    def is_new(self) -> bool:
        """Whether no cell has been opened yet."""
        return not any(cell.is_open for cell in self._cells)

    def is_going_on(self) -> bool:
        """Whether the game has started and is neither won nor lost."""
        found_open = False
        found_closed_empty = False
        for cell in self._cells:
            if cell.is_open:
                if cell.is_mine:
                    return False
                found_open = True
            elif not cell.is_mine:
                found_closed_empty = True
        return found_open and found_closed_empty

    def is_over(self) -> bool:
        """Whether the game is over, either cleared or lost."""
        found_closed_empty = False
        for cell in self._cells:
            if cell.is_open and cell.is_mine:
                return True
            if not cell.is_open and not cell.is_mine:
                found_closed_empty = True
        return not found_closed_empty

    def is_cleared(self) -> bool:
        """Whether every non-mine cell is open and no mine is."""
        return all(cell.is_open != cell.is_mine for cell in self._cells)

    def is_lost(self) -> bool:
        """Whether a mine has been opened."""
        return any(cell.is_open and cell.is_mine for cell in self._cells)

    # --- Dimensions and counters ------------------------------------------------------------

    @property
    def rows(self) -> int:
        """Number of rows of the board."""
        return self._grid.rows

    @rows.setter
    def rows(self, rows: int) -> None:
        """Remove rows from the bottom, or add empty ones, then recount adjacent mines."""
        rows = parse_int_range(rows, 1)
        if rows == self.rows:
            return
        cols = self.cols
        if rows < self.rows:
            del self._cells[rows * cols :]
        else:
            self._cells.extend(Cell(r, c) for r in range(self.rows, rows) for c in range(cols))
        self._grid = Grid(rows, cols)
        self.reset_mines()

    @property
    def cols(self) -> int:
        """Number of columns of the board."""
        return self._grid.cols

    @cols.setter
    def cols(self, cols: int) -> None:
        """Remove columns from the right, or add empty ones, then recount adjacent mines."""
        cols = parse_int_range(cols, 1)
        old_cols = self.cols
        if cols == old_cols:
            return
        self._cells = [
            self._cells[r * old_cols + c] if c < old_cols else Cell(r, c)
            for r in range(self.rows)
            for c in range(cols)
        ]
        self._grid = Grid(self.rows, cols)
        self.reset_mines()

    @property
    def cells(self) -> int:
        """Number of cells of the board."""
        return self._grid.size

    @property
    def mines(self) -> int:
        """Number of mines on the board (counted on every call)."""
        return sum(cell.is_mine for cell in self._cells)

    @mines.setter
    def mines(self, mines: int) -> None:
        """Remove random mines, or add mines on random free cells, then recount adjacent mines.

        The target is clamped to `[0, cells]`.
        """
        mines = parse_int_range(mines, 0, self.cells, error=InvalidMineCount)
        current = self.mines
        if mines == current:
            return
        pool = [cell for cell in self._cells if cell.is_mine == (mines < current)]
        for _ in range(abs(current - mines)):
            j = min(math.floor(self.rng() * len(pool)), len(pool) - 1)
            cell = pool.pop(j)
            cell.is_mine = not cell.is_mine
        self.reset_mines()

    @property
    def flags(self) -> int:
        """Number of flagged cells (counted on every call)."""
        return sum(cell.is_flag for cell in self._cells)
