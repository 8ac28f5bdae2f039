"""
dropfour - Connection game engine with a minimax opponent

Players take turns dropping tokens into the columns of a rectangular board;
four of the same token in a row, column or diagonal wins. The package holds
the board and game state model, a minimax search with alpha-beta pruning for
computer players, and thin terminal and Gymnasium front ends.
"""

from dropfour.errors import (ColumnFull, ColumnOutOfRange, DropFourError, IllegalMove,
                             InvalidDimensions, InvalidPlayers, NotYourTurn, OutOfBounds)
from dropfour.game import NO_MOVE, Board, GameState, HumanPlayer, Move, Player
from dropfour.ai import MinimaxPlayer, MinimaxSearch
from dropfour.utils import Token

__version__ = '0.1.0'

__all__ = [
    'Board', 'GameState', 'Player', 'HumanPlayer', 'MinimaxPlayer', 'MinimaxSearch',
    'Move', 'NO_MOVE', 'Token',
    'DropFourError', 'InvalidDimensions', 'InvalidPlayers', 'OutOfBounds', 'IllegalMove',
    'ColumnOutOfRange', 'NotYourTurn', 'ColumnFull',
]
