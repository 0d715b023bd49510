import random

import pytest

from minefield import Board


def board_from_layout(layout: str, rng=None) -> Board:
    """Build a board from rows of characters: `*` for a mine, anything else for a free cell."""
    rows = [line.strip() for line in layout.strip().splitlines()]
    mines = [(r, c) for r, line in enumerate(rows) for c, ch in enumerate(line) if ch == "*"]
    return Board(len(rows), len(rows[0]), mine_positions=mines, rng=rng)


def assert_adjacency(board: Board) -> None:
    """Every cell's count matches the mines around it."""
    for cell in board:
        expected = sum(n.is_mine for n in board.nearby_cells(cell.pos))
        assert cell.mines == expected, cell


@pytest.fixture
def make_board():
    return board_from_layout


@pytest.fixture
def check_adjacency():
    return assert_adjacency


@pytest.fixture
def rng():
    return random.Random(1234).random
