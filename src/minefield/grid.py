"""Grid topology: index/position conversion, neighbors and input coercion."""

import math
from collections.abc import Sequence
from functools import lru_cache
from numbers import Integral, Real
from typing import NamedTuple, TypeAlias

from minefield.errors import InvalidDimension, InvalidPosition, MinefieldError

Position: TypeAlias = int | tuple[int, int] | Sequence[int]
"""Either a linear (row-major) index, or a `(row, col)` pair."""


def parse_int_range(
    value: object,
    minimum: int | None = None,
    maximum: int | None = None,
    *,
    error: type[MinefieldError] = InvalidDimension,
) -> int:
    """Coerce a value to an integer (truncating) and clamp it to `[minimum, maximum]`.

    Args:
        value: A number, or a string holding a number.
        minimum: Optional lower bound; smaller values are raised to it.
        maximum: Optional upper bound; larger values are lowered to it.
        error: The exception type raised when `value` is not a number.

    Raises:
        MinefieldError: (of type `error`) if `value` cannot be read as a number.
    """
    try:
        if isinstance(value, Real):
            number = int(value)
        else:
            number = int(float(str(value).strip()))
    except (TypeError, ValueError, OverflowError):
        raise error(f"Parameter is not an integer: {value!r}") from None

    if minimum is not None and number < minimum:
        return minimum
    if maximum is not None and number > maximum:
        return maximum
    return number


def _coerce_coordinate(value: object) -> int | None:
    """Return `trunc(abs(value))`, or None if the value is not a finite number."""
    try:
        number = abs(float(value))  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return int(number)


@lru_cache(maxsize=4096)
def neighbor_indices(rows: int, cols: int, index: int, include_self: bool = False) -> tuple[int, ...]:
    """Return the indices around `index` in row-major order, clipped at the grid edges.

    Cached, since this is called for every frontier cell on every solver pass.
    """
    row, col = divmod(index, cols)
    found: list[int] = []
    for r in range(max(0, row - 1), min(rows, row + 2)):
        for c in range(max(0, col - 1), min(cols, col + 2)):
            if include_self or r != row or c != col:
                found.append(r * cols + c)
    return tuple(found)


class Grid(NamedTuple):
    """Shape of a rows x cols grid stored in row-major order."""

    rows: int
    cols: int

    @property
    def size(self) -> int:
        """Total number of cells."""
        return self.rows * self.cols

    def to_index(self, row: int, col: int) -> int:
        """Convert a (row, col) pair to a 1D index."""
        return row * self.cols + col

    def to_position(self, index: int) -> tuple[int, int]:
        """Convert a 1D index to a (row, col) pair."""
        return divmod(index, self.cols)

    def neighbors(self, index: int, include_self: bool = False) -> tuple[int, ...]:
        """Indices of the (up to 8) cells around `index`, optionally including `index`."""
        return neighbor_indices(self.rows, self.cols, index, include_self)

    def validate(self, row: object, col: object) -> tuple[int, int]:
        """Coerce a row and column to non-negative integers and check they are on the grid.

        Raises:
            InvalidPosition: If either value is not a number, or is out of range.
        """
        r = _coerce_coordinate(row)
        c = _coerce_coordinate(col)
        if r is None or c is None:
            raise InvalidPosition(
                f"Position is invalid ({row!r}, {col!r})",
                row=row if r is None else r,
                col=col if c is None else c,
                bad_row=r is None,
                bad_col=c is None,
            )

        bad_row = r > self.rows - 1
        bad_col = c > self.cols - 1
        if bad_row and bad_col:
            raise InvalidPosition(
                f"Row and column positions are out of range ({r}, {c})",
                row=r,
                col=c,
                bad_row=True,
                bad_col=True,
            )
        if bad_row:
            raise InvalidPosition(f"Row position is out of range ({r})", row=r, col=c, bad_row=True)
        if bad_col:
            raise InvalidPosition(
                f"Column position is out of range ({c})", row=r, col=c, bad_col=True
            )
        return r, c

    def resolve(self, position: Position) -> int:
        """Resolve a position (1D index or (row, col) pair) to a validated 1D index.

        Raises:
            InvalidPosition: If the position is malformed or off the grid.
        """
        if isinstance(position, Integral) and not isinstance(position, bool):
            index = int(position)
            if not 0 <= index < self.size:
                raise InvalidPosition(
                    f"Index is out of range ({index})",
                    row=index // self.cols,
                    col=index % self.cols,
                    bad_row=True,
                )
            return index

        if isinstance(position, (str, bytes)) or not isinstance(position, Sequence):
            raise InvalidPosition(
                f"Position is invalid ({position!r})", bad_row=True, bad_col=True
            )
        if len(position) != 2:
            raise InvalidPosition(
                f"Position must be a (row, col) pair, got {position!r}",
                bad_row=True,
                bad_col=True,
            )
        row, col = self.validate(position[0], position[1])
        return self.to_index(row, col)
