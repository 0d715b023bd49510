import pytest

from minefield.errors import InvalidDimension, InvalidMineCount, InvalidPosition
from minefield.grid import Grid, neighbor_indices, parse_int_range


def test_parse_int_range_truncates_and_clamps():
    assert parse_int_range(3.7) == 3
    assert parse_int_range("3.7") == 3
    assert parse_int_range(" 12 ") == 12
    assert parse_int_range(-2, 1) == 1
    assert parse_int_range(10, 0, 5) == 5
    assert parse_int_range(4, 0, 5) == 4


def test_parse_int_range_rejects_non_numbers():
    with pytest.raises(InvalidDimension):
        parse_int_range("abc")
    with pytest.raises(InvalidDimension):
        parse_int_range(None)
    with pytest.raises(InvalidMineCount):
        parse_int_range("many", error=InvalidMineCount)


def test_neighbors_in_row_major_order():
    assert neighbor_indices(3, 3, 4) == (0, 1, 2, 3, 5, 6, 7, 8)
    assert neighbor_indices(3, 3, 4, True) == (0, 1, 2, 3, 4, 5, 6, 7, 8)


def test_neighbors_clipped_at_edges():
    assert neighbor_indices(3, 3, 0) == (1, 3, 4)
    assert neighbor_indices(3, 3, 8) == (4, 5, 7)
    assert neighbor_indices(1, 1, 0) == ()
    assert neighbor_indices(1, 4, 1) == (0, 2)


def test_index_position_conversion():
    grid = Grid(3, 4)
    assert grid.size == 12
    assert grid.to_index(1, 2) == 6
    assert grid.to_position(6) == (1, 2)
    for i in range(grid.size):
        assert grid.to_index(*grid.to_position(i)) == i


def test_resolve_accepts_indices_and_pairs():
    grid = Grid(3, 4)
    assert grid.resolve(7) == 7
    assert grid.resolve((2, 3)) == 11
    assert grid.resolve([1, 0]) == 4


def test_resolve_coerces_coordinates():
    grid = Grid(3, 4)
    # Truncated absolute values
    assert grid.resolve((1.9, -2)) == 6
    assert grid.resolve(("2", "0")) == 8


def test_resolve_reports_which_coordinate_is_out_of_range():
    grid = Grid(3, 4)

    with pytest.raises(InvalidPosition, match="^Row position") as exc:
        grid.resolve((5, 0))
    assert exc.value.bad_row and not exc.value.bad_col
    assert exc.value.row == 5

    with pytest.raises(InvalidPosition, match="^Column position") as exc:
        grid.resolve((0, 4))
    assert exc.value.bad_col and not exc.value.bad_row

    with pytest.raises(InvalidPosition, match="^Row and column") as exc:
        grid.resolve((3, 4))
    assert exc.value.bad_row and exc.value.bad_col


@pytest.mark.parametrize("position", [12, -1, "ab", (1,), (1, 2, 3), ("x", 1), None])
def test_resolve_rejects_malformed_positions(position):
    with pytest.raises(InvalidPosition):
        Grid(3, 4).resolve(position)
