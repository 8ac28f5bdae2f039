"""
dropfour.game - Board, players and game state

This package contains the board representation, player identities and the
game state that enforces turn order and detects the end of the game.
"""

from dropfour.game.board import Board, Window
from dropfour.game.players import NO_MOVE, HumanPlayer, Move, NoMove, Player
from dropfour.game.rules import GameState

__all__ = ['Board', 'Window', 'Player', 'HumanPlayer', 'Move', 'NoMove', 'NO_MOVE', 'GameState']
