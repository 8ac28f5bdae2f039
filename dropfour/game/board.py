"""
board.py - Board representation and drop mechanics

This module implements the Board class: a fixed-size grid of cells addressed
by 1-based (column, row) pairs, with row 1 at the bottom. Tokens are dropped
into a column and land on the lowest empty row, so a cell above an empty cell
is always empty.
"""

from functools import lru_cache
from typing import Iterator, NamedTuple, Optional, Tuple

import numpy as np

from dropfour.debug import debug
from dropfour.errors import ColumnFull, InvalidDimensions, OutOfBounds
from dropfour.utils import (CONNECT_N, DEFAULT_HEIGHT, DEFAULT_WIDTH, DIRECTION_VECTORS, MIN_SIZE,
                            Direction, Token, render_board_ascii)


class Window(NamedTuple):
    """A run of CONNECT_N consecutive cells."""
    direction: Direction
    positions: Tuple[Tuple[int, int], ...]  # (column, row), 1-based
    values: Tuple[int, ...]


@lru_cache(maxsize=None)
def window_layout(width: int, height: int) -> Tuple[Tuple[Direction, Tuple[Tuple[int, int], ...]], ...]:
    """
    Positions of every window on a width x height board, in scan order.

    Horizontal runs are listed row by row from the bottom; the other
    directions column by column from the left.
    """
    span = CONNECT_N - 1
    layout = []
    for direction in (Direction.HORIZONTAL, Direction.VERTICAL,
                      Direction.DIAGONAL_UP, Direction.DIAGONAL_DOWN):
        dc, dr = DIRECTION_VECTORS[direction]
        rows = range(1 + max(0, -dr * span), height - max(0, dr * span) + 1)
        cols = range(1, width - dc * span + 1)
        if direction == Direction.HORIZONTAL:
            starts = [(c, r) for r in rows for c in cols]
        else:
            starts = [(c, r) for c in cols for r in rows]
        for col, row in starts:
            positions = tuple((col + i * dc, row + i * dr) for i in range(CONNECT_N))
            layout.append((direction, positions))
    return tuple(layout)


class Board:
    """
    A width x height grid of tokens.

    The board enforces bounds on every access but does not know about players
    or turns; that is the job of GameState.
    """

    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT):
        """
        Create an empty board.

        Args:
            width: Number of columns, at least 4
            height: Number of rows, at least 4

        Raises:
            InvalidDimensions: If either side is shorter than 4
        """
        if width < MIN_SIZE or height < MIN_SIZE:
            raise InvalidDimensions(
                f"width and height must be at least {MIN_SIZE}, got {width}x{height}")
        self.width = width
        self.height = height
        self._grid = np.full((height, width), Token.EMPTY.value, dtype=np.int8)
        debug.trace(f"Created {width}x{height} board", "board")

    def copy(self) -> 'Board':
        """Return an independent copy; the two boards never share cell storage."""
        new_board = Board.__new__(Board)
        new_board.width = self.width
        new_board.height = self.height
        new_board._grid = self._grid.copy()
        return new_board

    def _check_bounds(self, col: int, row: int):
        if not 1 <= col <= self.width:
            raise OutOfBounds(f"column {col} must be between 1 and {self.width}")
        if not 1 <= row <= self.height:
            raise OutOfBounds(f"row {row} must be between 1 and {self.height}")

    def get(self, col: int, row: int) -> Token:
        self._check_bounds(col, row)
        return Token(int(self._grid[row - 1, col - 1]))

    def set(self, col: int, row: int, token: Token):
        """Write a cell directly. Gravity is not checked; use drop() for play."""
        self._check_bounds(col, row)
        self._grid[row - 1, col - 1] = Token(token).value

    def lowest_empty_row(self, col: int) -> Optional[int]:
        """
        Find where a token dropped into a column would land.

        Returns:
            The lowest empty row, or None when the column is full
        """
        self._check_bounds(col, 1)
        for row in range(1, self.height + 1):
            if self._grid[row - 1, col - 1] == Token.EMPTY.value:
                return row
        return None

    def can_drop(self, col: int) -> bool:
        return self.lowest_empty_row(col) is not None

    def drop(self, col: int, token: Token) -> int:
        """
        Drop a token into a column.

        Returns:
            The row the token landed on

        Raises:
            OutOfBounds: If the column does not exist
            ColumnFull: If the column has no empty row
        """
        row = self.lowest_empty_row(col)
        if row is None:
            raise ColumnFull(f"column {col} is full")
        self._grid[row - 1, col - 1] = Token(token).value
        return row

    def is_full(self) -> bool:
        return bool(np.all(self._grid[self.height - 1] != Token.EMPTY.value))

    @property
    def grid(self) -> np.ndarray:
        """Copy of the cells, shape (height, width), bottom row first."""
        return self._grid.copy()

    def windows(self) -> Iterator[Window]:
        """
        Yield every window of CONNECT_N cells.

        Order: horizontal windows row by row from the bottom, vertical windows
        column by column from the left, then the two diagonal directions.
        Nothing is cached; each call walks the current cells.
        """
        cells = self._grid.tolist()
        for direction, positions in window_layout(self.width, self.height):
            values = tuple(cells[r - 1][c - 1] for c, r in positions)
            yield Window(direction, positions, values)

    def render(self) -> str:
        return render_board_ascii(self._grid)

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return self.width == other.width and self.height == other.height and \
            bool(np.array_equal(self._grid, other._grid))

    __hash__ = None

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Board(width={self.width}, height={self.height})"
