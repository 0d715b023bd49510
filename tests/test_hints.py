import random

from minefield import find_solvable_board

HIDDEN_MIDDLE = """
    .*.
    ...
    ...
"""


def positions(hint):
    return [cell.pos for cell in hint]


def test_no_hints_on_new_board(make_board):
    board = make_board(HIDDEN_MIDDLE)
    assert board.get_hints() == []


def test_hints_from_combined_constraints(make_board):
    board = make_board(HIDDEN_MIDDLE)
    board.open((2, 1))

    hints = board.get_hints(accurate=True)

    assert all(hint.safe for hint in hints)
    assert {pos for hint in hints for pos in positions(hint)} == {(0, 0), (0, 2)}


def test_hints_do_not_change_the_board(make_board):
    board = make_board(HIDDEN_MIDDLE)
    board.open((2, 1))
    before = [(cell.is_open, cell.is_flag) for cell in board]

    board.get_hints()
    board.get_hints(accurate=True)

    assert [(cell.is_open, cell.is_flag) for cell in board] == before


def test_unsafe_hint(make_board):
    board = make_board(
        """
        *..
        ...
        """
    )
    board.open((0, 2))
    board.open((1, 0))

    hints = board.get_hints(accurate=True)

    assert len(hints) == 1
    assert not hints[0].safe
    assert positions(hints[0]) == [(0, 0)]
    assert hints[0].cells[0] is board[(0, 0)]


def test_all_mines_flagged_marks_the_rest_safe(make_board):
    board = make_board(HIDDEN_MIDDLE)
    board.open((2, 1))
    board.flag((0, 1))
    assert board.flags == board.mines

    for accurate in (True, False):
        hints = board.get_hints(accurate)
        assert any(hint.safe and positions(hint) == [(0, 0), (0, 2)] for hint in hints)
        assert all(hint.safe for hint in hints)


def test_inaccurate_hints_include_surroundings(make_board):
    board = make_board(HIDDEN_MIDDLE)
    board.open((2, 1))

    accurate = board.get_hints(accurate=True)
    loose = board.get_hints()

    assert len(loose) >= 1
    hinted = {pos for hint in accurate for pos in positions(hint)}
    covered = {pos for hint in loose for pos in positions(hint)}
    assert hinted <= covered
    assert any(len(hint) > 1 for hint in loose)


def test_hints_are_not_duplicated(make_board):
    board = make_board(HIDDEN_MIDDLE)
    board.open((2, 1))
    board.flag((0, 1))

    hints = board.get_hints(accurate=True)
    keys = [(tuple(positions(hint)), hint.safe) for hint in hints]
    assert len(keys) == len(set(keys))


def test_replaying_accurate_hints_never_opens_a_mine():
    for seed in range(5):
        board = find_solvable_board(
            8, 8, 8, (0, 0), attempts=500, rng=random.Random(seed).random
        )
        assert board is not None
        board.open((0, 0))

        for _ in range(board.cells):
            hints = board.get_hints(accurate=True)
            if not hints:
                break
            for hint in hints:
                for cell in hint:
                    if hint.safe:
                        board.open(cell.pos)
                    elif not cell.is_flag:
                        board.flag(cell.pos)
            assert not board.is_lost()

        assert not board.is_lost()


def test_zero_cell_hints_its_closed_neighbors(make_board):
    board = make_board(
        """
        ...
        ...
        ..*
        """
    )
    # The flag keeps (0, 0) shut while the zero region opens around it
    board.flag((0, 0))
    board.open((0, 2))
    board.flag((0, 0))

    hints = board.get_hints(accurate=True)

    assert [(positions(hint), hint.safe) for hint in hints] == [
        ([(0, 0)], True),
        ([(2, 2)], False),
    ]
    assert not board[(0, 0)].is_open
    assert not board[(2, 2)].is_flag

    loose = board.get_hints()
    assert positions(loose[0]) == [(0, 0), (0, 2), (1, 0), (1, 1), (1, 2), (0, 1)]
