"""Text rendering of a board, for debugging and the command line.

Legend:

- `?`: closed cell (neither open nor flagged)
- `F`: flagged cell (an open cell is shown as open even if flagged)
- `X`: open mine
- `0`-`8`: open cell with its number of adjacent mines
"""

from collections.abc import Iterable
from typing import TYPE_CHECKING, NamedTuple

from minefield.grid import Position

if TYPE_CHECKING:
    from minefield.board import Board


class Glyphs(NamedTuple):
    """Characters used to draw a board."""

    empty: str
    closed: str
    flag: str
    mine: str
    corner: str
    vertical: str
    horizontal: str
    intersection: str


ASCII_GLYPHS = Glyphs("0", "?", "F", "X", "x", "|", "-", "|")
UNICODE_GLYPHS = Glyphs("·", "■", "►", "*", "×", "│", "─", "┼")

RESET = "\x1b[0m"
HIGHLIGHT = "\x1b[7m"

ROW_BACKGROUNDS = ("\x1b[40m", "\x1b[1m")
"""Alternating row styles (black background, bright)."""

COL_FOREGROUNDS = (
    "\x1b[31m",  # red
    "\x1b[32m",  # green
    "\x1b[33m",  # yellow
    "\x1b[34m",  # blue
    "\x1b[35m",  # magenta
    "\x1b[36m",  # cyan
)
"""Cycling column foreground colors."""


def _paint(text: str, row: int, col: int, *, color: bool, highlight: bool) -> str:
    codes = ""
    if color:
        codes += ROW_BACKGROUNDS[row % len(ROW_BACKGROUNDS)] + COL_FOREGROUNDS[col % len(COL_FOREGROUNDS)]
    if highlight:
        codes += HIGHLIGHT
    return f"{codes}{text}{RESET}" if codes else text


def visualize(
    board: "Board",
    *,
    unicode: bool = False,
    positions: bool = False,
    color: bool = False,
    highlight: Iterable[Position] = (),
    uncover: bool = False,
) -> str:
    """Render the board as text, one line per row.

    Args:
        board: The board to draw.
        unicode: Use unicode symbols instead of plain ASCII.
        positions: Add row and column numbers.
        color: Add ANSI colors (alternating row styles, cycling column colors).
        highlight: Positions of cells to draw in reverse video.
        uncover: Draw every cell as if it were open.

    Raises:
        InvalidPosition: If a highlighted position is invalid.
    """
    glyphs = UNICODE_GLYPHS if unicode else ASCII_GLYPHS
    grid = board.grid
    highlighted = {grid.resolve(position) for position in highlight}

    row_width = len(str(grid.rows - 1)) if positions else 0
    col_width = len(str(grid.cols - 1)) if positions else 1

    lines: list[str] = []
    if positions:
        labels = " ".join(
            _paint(str(j).rjust(col_width), 0, j, color=color, highlight=False)
            for j in range(grid.cols)
        )
        lines.append(f"{glyphs.corner.rjust(row_width)} {glyphs.vertical} {labels}")
        lines.append(
            glyphs.horizontal * (row_width + 1)
            + glyphs.intersection
            + glyphs.horizontal * (grid.cols * (col_width + 1) + 1)
        )

    cells = board.concatenate()
    for i in range(grid.rows):
        chars: list[str] = []
        for j in range(grid.cols):
            index = grid.to_index(i, j)
            cell = cells[index]
            if not cell.is_open and not uncover:
                char = glyphs.flag if cell.is_flag else glyphs.closed
            elif cell.is_mine:
                char = glyphs.mine
            elif cell.mines == 0:
                char = glyphs.empty
            else:
                char = str(cell.mines)
            chars.append(
                _paint(char.rjust(col_width), i, j, color=color, highlight=index in highlighted)
            )

        prefix = f"{str(i).rjust(row_width)} {glyphs.vertical} " if positions else ""
        lines.append(prefix + " ".join(chars))

    return "\n".join(lines) + "\n"
