import random

import pytest

from minefield import Board
from minefield.errors import InvalidDimension, InvalidMineCount, InvalidPosition


def test_mine_count_matches_request(rng, check_adjacency):
    board = Board(4, 6, 5, rng=rng)
    assert board.mines == 5
    assert board.cells == 24
    check_adjacency(board)


def test_default_mine_count():
    assert Board(5, 5).mines == 5
    assert Board(3, 3).mines == 1
    assert Board(1, 1).mines == 0


def test_every_cell_a_mine(rng):
    board = Board(2, 2, 4, rng=rng)
    assert board.mines == 4
    assert all(cell.mines == 3 for cell in board)


def test_invalid_mine_counts():
    with pytest.raises(InvalidMineCount):
        Board(2, 2, 5)
    with pytest.raises(InvalidMineCount):
        Board(2, 2, -1)
    with pytest.raises(InvalidMineCount):
        Board(2, 2, "lots")


def test_dimensions_are_coerced():
    board = Board(2.9, -3, 0)
    assert (board.rows, board.cols) == (2, 1)
    board = Board("4", "3.5", 0)
    assert (board.rows, board.cols) == (4, 3)
    with pytest.raises(InvalidDimension):
        Board("x", 2)


def test_same_seed_same_board():
    a = Board(8, 8, 10, rng=random.Random(42).random)
    b = Board(8, 8, 10, rng=random.Random(42).random)
    assert a.simplify() == b.simplify()


def test_cells_know_their_position(rng):
    board = Board(4, 5, 6, rng=rng)
    for i, cell in enumerate(board):
        assert cell.pos == board.grid.to_position(i)
        assert board[cell.pos] is cell


def test_explicit_mine_positions(make_board, check_adjacency):
    board = make_board(
        """
        *..
        ...
        """
    )
    assert board.mines == 1
    assert board[(0, 0)].is_mine
    assert board.simplify() == [[-1, 1, 0], [1, 1, 0]]
    check_adjacency(board)


def test_explicit_positions_are_validated():
    with pytest.raises(InvalidMineCount):
        Board(2, 2, mine_positions=[(0, 0), 0])
    with pytest.raises(InvalidPosition):
        Board(2, 2, mine_positions=[(2, 0)])


def test_randomize_keeps_count_and_resets(rng, check_adjacency):
    board = Board(5, 5, 6, rng=rng)
    board.open((0, 0))
    board.randomize(random.Random(9).random)
    assert board.mines == 6
    assert board.is_new()
    assert board.flags == 0
    check_adjacency(board)
