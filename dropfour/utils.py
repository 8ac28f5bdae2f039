"""
utils.py - Constants, enumerations and rendering helpers for dropfour

Board coordinates are 1-based everywhere outside this module: column 1 is the
leftmost column and row 1 is the bottom row. The grids handled here are numpy
arrays indexed ``grid[row - 1, col - 1]``, so index 0 is the bottom row.
"""

from enum import Enum, IntEnum, auto
from typing import Dict, Tuple

import numpy as np

# Game constants
CONNECT_N = 4  # tokens in a line needed to win
MIN_SIZE = CONNECT_N
DEFAULT_WIDTH = 7
DEFAULT_HEIGHT = 6
DEFAULT_SEARCH_DEPTH = 4


class Token(IntEnum):
    """Cell contents. EMPTY marks a free cell; every other member is a player token."""
    EMPTY = 0
    RED = 1
    YELLOW = 2
    GREEN = 3
    BLUE = 4

    @property
    def glyph(self) -> str:
        return TOKEN_GLYPHS[self]

    def __str__(self):
        return self.glyph


TOKEN_GLYPHS: Dict[Token, str] = {
    Token.EMPTY: " ",
    Token.RED: "R",
    Token.YELLOW: "Y",
    Token.GREEN: "G",
    Token.BLUE: "B",
}


class Direction(Enum):
    """Orientation of a window, in the order windows are scanned."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_UP = auto()  # bottom-left to top-right
    DIAGONAL_DOWN = auto()  # top-left to bottom-right


# (column step, row step) for each direction
DIRECTION_VECTORS: Dict[Direction, Tuple[int, int]] = {
    Direction.HORIZONTAL: (1, 0),
    Direction.VERTICAL: (0, 1),
    Direction.DIAGONAL_UP: (1, 1),
    Direction.DIAGONAL_DOWN: (1, -1),
}


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render a board grid as text.

    Rows are printed top to bottom with a border around every cell, followed
    by a rule and the 1-based column numbers.

    Args:
        grid: Board cells, shape (height, width), bottom row first

    Returns:
        Multi-line string, no trailing newline
    """
    height, width = grid.shape
    lines = []
    for row in range(height - 1, -1, -1):
        glyphs = (Token(int(value)).glyph for value in grid[row])
        lines.append("|" + "|".join(glyphs) + "|")
    lines.append("+" + "-+" * width)
    lines.append(" " + " ".join(str(col % 10) for col in range(1, width + 1)))
    return "\n".join(lines)
