"""Shared fixtures for the dropfour test suite."""

import pytest

from dropfour.game.players import HumanPlayer, Move
from dropfour.game.rules import GameState
from dropfour.utils import Token


def unexpected_prompt(state, player):
    raise AssertionError(f"{player} was not expected to be prompted")


@pytest.fixture
def scripted():
    """Build prompt functions that answer with the given columns in order."""
    def _scripted(*columns):
        answers = iter(columns)
        return lambda state, player: next(answers)
    return _scripted


@pytest.fixture
def red():
    return HumanPlayer("Alice", Token.RED, unexpected_prompt)


@pytest.fixture
def yellow():
    return HumanPlayer("Bob", Token.YELLOW, unexpected_prompt)


@pytest.fixture
def green():
    return HumanPlayer("Carol", Token.GREEN, unexpected_prompt)


@pytest.fixture
def state(red, yellow):
    """Empty standard 7x6 game, Alice (red) to move."""
    return GameState(7, 6, [red, yellow])


@pytest.fixture
def play():
    """Apply a sequence of columns, each for whoever is to act."""
    def _play(game, *columns):
        for column in columns:
            game.apply_move(Move(game.current_player, column))
        return game
    return _play


@pytest.fixture
def draw_columns():
    """
    Column order that fills a 4x4 board with no four-in-a-row:

        row 4: Y Y R R
        row 3: R R Y Y
        row 2: Y Y R R
        row 1: R R Y Y
    """
    return (1, 3, 2, 4, 3, 1, 4, 2, 1, 3, 2, 4, 3, 1, 4, 2)
