"""
errors.py - Exceptions raised by the board, the game state and move handling
"""


class DropFourError(Exception):
    """Base class for every error raised by dropfour."""


class InvalidDimensions(DropFourError, ValueError):
    """Board narrower or shorter than four cells."""


class InvalidPlayers(DropFourError, ValueError):
    """Fewer than two players, or players sharing a token."""


class OutOfBounds(DropFourError, IndexError):
    """Cell address outside the board."""


class IllegalMove(DropFourError):
    """A move the game state refuses to apply."""


class ColumnOutOfRange(IllegalMove, ValueError):
    pass


class NotYourTurn(IllegalMove):
    pass


class ColumnFull(IllegalMove):
    pass
