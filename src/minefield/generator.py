"""Mine placement and adjacency counting."""

import math
from collections.abc import Callable, Iterable
from typing import TypeAlias

from minefield.cell import Cell
from minefield.errors import InvalidMineCount
from minefield.grid import Grid, Position, parse_int_range

RandomSource: TypeAlias = Callable[[], float]
"""A function returning a uniformly distributed float in [0, 1)."""


def empty_cells(grid: Grid) -> list[Cell]:
    """Create closed, mine-free cells for every position of the grid."""
    return [Cell(*grid.to_position(i)) for i in range(grid.size)]


def count_adjacent_mines(cells: list[Cell], grid: Grid) -> None:
    """Recompute `Cell.mines` for every cell in a single pass over the mines."""
    for cell in cells:
        cell.mines = 0
    for index, cell in enumerate(cells):
        if cell.is_mine:
            for neighbor in grid.neighbors(index):
                cells[neighbor].mines += 1


def check_mine_count(mines: object, grid: Grid) -> int:
    """Validate a requested mine count against the grid size.

    Raises:
        InvalidMineCount: If the count is not a number, negative, or larger than the grid.
    """
    count = parse_int_range(mines, error=InvalidMineCount)
    if count < 0:
        raise InvalidMineCount(f"Mine count cannot be negative ({count})")
    if count > grid.size:
        raise InvalidMineCount(
            f"Too many mines ({count}) for a {grid.rows}x{grid.cols} board ({grid.size} cells)"
        )
    return count


def place_mines_at(grid: Grid, positions: Iterable[Position]) -> list[Cell]:
    """Build cells with mines on exactly the given positions (no shuffling).

    Raises:
        InvalidPosition: If a position is malformed or off the grid.
        InvalidMineCount: If a position is listed more than once.
    """
    indices: list[int] = []
    seen: set[int] = set()
    for position in positions:
        index = grid.resolve(position)
        if index in seen:
            raise InvalidMineCount(f"Duplicate mine position {grid.to_position(index)}")
        seen.add(index)
        indices.append(index)

    cells = empty_cells(grid)
    for index in indices:
        cells[index].is_mine = True
    count_adjacent_mines(cells, grid)
    return cells


def place_mines_shuffled(grid: Grid, mines: int, rng: RandomSource) -> list[Cell]:
    """Build cells with `mines` mines spread by a Durstenfeld (Fisher-Yates) shuffle.

    The first `mines` cells in row-major order start as mines; the shuffle then swaps
    cell `i` with cell `floor(rng() * (i + 1))` for `i` from the last index down to 1.
    Positions are re-stamped afterwards.
    """
    cells = empty_cells(grid)
    for cell in cells[:mines]:
        cell.is_mine = True

    if mines > 0:
        for i in range(grid.size - 1, 0, -1):
            j = min(math.floor(rng() * (i + 1)), i)
            cells[i], cells[j] = cells[j], cells[i]

        for index, cell in enumerate(cells):
            cell.row, cell.col = grid.to_position(index)

    count_adjacent_mines(cells, grid)
    return cells


def generate(
    grid: Grid,
    rng: RandomSource,
    *,
    mines: object = None,
    mine_positions: Iterable[Position] | None = None,
    density_divisor: int = 5,
) -> list[Cell]:
    """Generate the cells of a new board.

    Args:
        grid: Shape of the board.
        rng: Random source used when shuffling.
        mines: Number of mines. Defaults to `grid.size // density_divisor`.
        mine_positions: Explicit mine positions; when given, `mines` is ignored and no
            shuffling happens.
        density_divisor: Divisor of the cell count giving the default number of mines.

    Raises:
        InvalidMineCount: If the mines do not fit on the grid.
        InvalidPosition: If an explicit position is invalid.
    """
    if mine_positions is not None:
        return place_mines_at(grid, mine_positions)

    count = grid.size // density_divisor if mines is None else check_mine_count(mines, grid)
    return place_mines_shuffled(grid, count, rng)
