"""Exceptions raised by the minefield engine."""


class MinefieldError(ValueError):
    """Base class for all minefield errors."""


class InvalidPosition(MinefieldError):
    """A position could not be parsed or lies outside the board."""

    def __init__(
        self,
        message: str,
        *,
        row: object = None,
        col: object = None,
        bad_row: bool = False,
        bad_col: bool = False,
    ) -> None:
        super().__init__(message)

        self.row = row
        """The (coerced, if possible) row that was requested."""

        self.col = col
        """The (coerced, if possible) column that was requested."""

        self.bad_row = bad_row
        """Whether the row is out of range or unparsable."""

        self.bad_col = bad_col
        """Whether the column is out of range or unparsable."""


class InvalidMineCount(MinefieldError):
    """The requested mines do not fit on the board."""


class InvalidDimension(MinefieldError):
    """A row or column count could not be parsed as an integer."""
