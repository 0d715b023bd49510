"""Open/cascade rules: flood opening, chording and first-move mine relocation."""

from collections import deque
from typing import NamedTuple

from minefield.cell import Cell
from minefield.grid import Grid


class NeighborStats(NamedTuple):
    """Closed/flag statistics of the cells around a given cell."""

    closed: int
    """Number of closed neighbors (flagged or not)."""

    flagged: int
    """Number of closed, flagged neighbors."""

    unflagged: list[int]
    """Indices of closed, unflagged neighbors, in row-major order."""


def neighbor_stats(cells: list[Cell], grid: Grid, index: int) -> NeighborStats:
    """Count the closed and flagged cells around `index`."""
    closed = 0
    flagged = 0
    unflagged: list[int] = []
    for neighbor in grid.neighbors(index):
        cell = cells[neighbor]
        if cell.is_open:
            continue
        closed += 1
        if cell.is_flag:
            flagged += 1
        else:
            unflagged.append(neighbor)
    return NeighborStats(closed, flagged, unflagged)


def empty_zone(cells: list[Cell], grid: Grid, index: int, include_flags: bool = False) -> list[int]:
    """Return the indices reached by flood-filling from `index`.

    Breadth-first: a cell's neighbors are only visited when that cell is a non-mine with no
    adjacent mines, so the zone is the connected zero region plus its numbered border.
    Flagged cells are left out unless `include_flags` is set (the start cell is always in).
    """
    zone = [index]
    visited = {index}
    queue = deque([index])
    while queue:
        current = queue.popleft()
        cell = cells[current]
        if cell.mines != 0 or cell.is_mine:
            continue
        for neighbor in grid.neighbors(current):
            if neighbor in visited:
                continue
            if not include_flags and cells[neighbor].is_flag:
                continue
            visited.add(neighbor)
            zone.append(neighbor)
            queue.append(neighbor)
    return zone


def open_zone(
    cells: list[Cell], grid: Grid, index: int, include_flags: bool = False
) -> list[int]:
    """Open the empty zone around `index` and return the indices that were newly opened."""
    opened: list[int] = []
    for zone_index in empty_zone(cells, grid, index, include_flags):
        cell = cells[zone_index]
        if not cell.is_open:
            cell.is_open = True
            opened.append(zone_index)
    return opened


def relocate_mine(cells: list[Cell], grid: Grid, index: int) -> int | None:
    """Move the mine at `index` to the first non-mine cell in index order.

    Adjacency counts are patched incrementally. Returns the index the mine moved to, or None
    if every other cell is already a mine (then the mine stays where it is).
    """
    target = next(
        (i for i, cell in enumerate(cells) if not cell.is_mine and i != index),
        None,
    )
    if target is None:
        return None

    cells[index].is_mine = False
    for neighbor in grid.neighbors(index):
        cells[neighbor].mines -= 1

    cells[target].is_mine = True
    for neighbor in grid.neighbors(target):
        cells[neighbor].mines += 1
    return target


def open_cell(
    cells: list[Cell],
    grid: Grid,
    index: int,
    *,
    first_move: bool = False,
    nearby_opening: bool = False,
    nearby_flagging: bool = False,
) -> list[Cell]:
    """Apply an open request on an already validated index.

    Args:
        cells: Board cells in row-major order. Modified in-place.
        grid: Shape of the board.
        index: Index of the cell to open.
        first_move: Relocate the mine if the (closed) target is one.
        nearby_opening: On an open numbered cell whose flags match its number, open the
            remaining closed neighbors.
        nearby_flagging: On an open numbered cell whose closed neighbors match its number,
            flag them all.

    Returns:
        The cells whose state changed (newly opened or newly flagged), without duplicates.
    """
    target = cells[index]
    changed: list[int] = []

    if not target.is_open:
        if target.is_mine and first_move:
            relocate_mine(cells, grid, index)
        changed.extend(open_zone(cells, grid, index))

    elif target.mines != 0 and (nearby_opening or nearby_flagging):
        stats = neighbor_stats(cells, grid, index)

        if nearby_opening and target.mines == stats.flagged:
            for neighbor in stats.unflagged:
                changed.extend(open_zone(cells, grid, neighbor))
        elif nearby_flagging and target.mines == stats.closed:
            for neighbor in stats.unflagged:
                cells[neighbor].is_flag = True
                changed.append(neighbor)

    return [cells[i] for i in changed]
