"""
players.py - Player identities, moves and the manual-input player

A player is a name plus a token, and knows how to produce a move when handed
the current game state. The state is always passed in; players never hold a
reference to a game, so one player object can sit in any number of states.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Union

from dropfour.utils import Token

if TYPE_CHECKING:
    from dropfour.game.rules import GameState


class Player(abc.ABC):
    """Base class for anything that can take a seat in a game."""

    def __init__(self, name: str, token: Token):
        self._name = name
        self._token = Token(token)

    @property
    def name(self) -> str:
        return self._name

    @property
    def token(self) -> Token:
        """Read-only; equality and hashing use it together with the name."""
        return self._token

    @abc.abstractmethod
    def get_next_move(self, state: GameState) -> MoveResult:
        """Return the move this player wants to make in ``state``, or NO_MOVE."""
        raise NotImplementedError

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Player):
            return NotImplemented
        return self.name == other.name and self.token == other.token

    def __hash__(self) -> int:
        return hash((self.name, self.token))

    def __str__(self) -> str:
        return f"{self.name} ({self.token.glyph})"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, token={self.token.name})"


@dataclass(frozen=True)
class Move:
    player: Player
    column: int


class NoMove(Enum):
    """Marker returned when there is no legal move to make. Compare with ``is``."""
    NO_MOVE = "no-move"

    def __repr__(self) -> str:
        return "NO_MOVE"


NO_MOVE = NoMove.NO_MOVE

MoveResult = Union[Move, NoMove]

PromptFn = Callable[["GameState", Player], int]


class HumanPlayer(Player):
    """
    Player whose column choice comes from outside the engine.

    ``prompt_fn`` is supplied by the driver (a terminal prompt, a test script,
    a web handler) and is called once per move. Validation of the returned
    column is left to GameState.apply_move so the driver can re-prompt.
    """

    def __init__(self, name: str, token: Token, prompt_fn: PromptFn):
        super().__init__(name, token)
        self.prompt_fn = prompt_fn

    def get_next_move(self, state: GameState) -> Move:
        return Move(self, int(self.prompt_fn(state, self)))
