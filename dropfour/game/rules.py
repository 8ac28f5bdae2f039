"""
rules.py - Game state management for dropfour

GameState ties a Board to an ordered list of players and a turn pointer. It
checks move legality, applies moves and detects wins and draws. Apart from
apply_move nothing changes a state, which lets the search engine copy states
freely without the branches seeing each other.
"""

from typing import Iterator, List, Optional, Sequence, Tuple

from dropfour.debug import DebugLevel, debug
from dropfour.errors import ColumnFull, ColumnOutOfRange, InvalidPlayers, NotYourTurn
from dropfour.game.board import Board, Window
from dropfour.game.players import Move, Player
from dropfour.utils import DEFAULT_HEIGHT, DEFAULT_WIDTH, Token


class GameState:
    """
    Board, players and whose turn it is.

    Players are shared between a state and its copies; they hold no
    per-game data.
    """

    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT,
                 players: Sequence[Player] = ()):
        """
        Start a new game on an empty board.

        Args:
            width: Number of columns (at least 4)
            height: Number of rows (at least 4)
            players: Players in turn order; the first one moves first

        Raises:
            InvalidDimensions: If the board would be smaller than 4x4
            InvalidPlayers: With fewer than two players, a player holding the
                empty token, or two players sharing a token
        """
        board = Board(width, height)
        players = tuple(players)
        if len(players) < 2:
            raise InvalidPlayers(f"at least 2 players are required, got {len(players)}")
        tokens = [player.token for player in players]
        if Token.EMPTY in tokens:
            raise InvalidPlayers("Token.EMPTY cannot be used as a player token")
        if len(set(tokens)) != len(tokens):
            raise InvalidPlayers("players must all have unique tokens")

        self._board = board
        self._players: Tuple[Player, ...] = players
        self._index = 0
        debug.debug(f"New {width}x{height} game: {', '.join(str(p) for p in players)}", "game")

    def copy(self) -> 'GameState':
        """Deep copy of the board and turn pointer; players are shared."""
        new_state = GameState.__new__(GameState)
        new_state._board = self._board.copy()
        new_state._players = self._players
        new_state._index = self._index
        return new_state

    @property
    def width(self) -> int:
        return self._board.width

    @property
    def height(self) -> int:
        return self._board.height

    @property
    def players(self) -> Tuple[Player, ...]:
        return self._players

    @property
    def board(self) -> Board:
        """A copy of the board. Changing it does not affect the game."""
        return self._board.copy()

    @property
    def current_player(self) -> Player:
        return self._players[self._index]

    @property
    def next_player(self) -> Player:
        return self._players[(self._index + 1) % len(self._players)]

    def player_after(self, player: Player) -> Player:
        """The player seated after ``player`` in turn order."""
        index = self._players.index(player)
        return self._players[(index + 1) % len(self._players)]

    def player_for_token(self, token: Token) -> Optional[Player]:
        for player in self._players:
            if player.token == token:
                return player
        return None

    def _check_column(self, col: int):
        if not 1 <= col <= self.width:
            raise ColumnOutOfRange(f"column {col} must be between 1 and {self.width}")

    def can_drop(self, col: int) -> bool:
        """True if a token can still be dropped into ``col``."""
        self._check_column(col)
        return self._board.can_drop(col)

    def legal_moves(self) -> List[int]:
        """Droppable columns in ascending order."""
        return [col for col in range(1, self.width + 1) if self._board.can_drop(col)]

    def apply_move(self, move: Move) -> int:
        """
        Drop the acting player's token and pass the turn on.

        Args:
            move: The player making the move and the target column

        Returns:
            The row the token landed on

        Raises:
            ColumnOutOfRange: If the column is not on the board
            NotYourTurn: If ``move.player`` is not the player to act
            ColumnFull: If the column has no empty row

        A failed move leaves the state untouched.
        """
        self._check_column(move.column)
        if move.player != self.current_player:
            raise NotYourTurn(f"{move.player} may not act now, it is {self.current_player}'s turn")
        if not self._board.can_drop(move.column):
            raise ColumnFull(f"column {move.column} is full")

        row = self._board.drop(move.column, move.player.token)
        self._index = (self._index + 1) % len(self._players)
        if debug.is_enabled_for(DebugLevel.TRACE, "game"):
            debug.trace(f"{move.player} dropped into column {move.column}, row {row}", "game")
        return row

    def windows(self) -> Iterator[Window]:
        return self._board.windows()

    def winning_window(self) -> Optional[Window]:
        """First window, in scan order, holding four identical player tokens."""
        for window in self._board.windows():
            first = window.values[0]
            if first != Token.EMPTY.value and all(value == first for value in window.values):
                return window
        return None

    def winner(self) -> Optional[Player]:
        window = self.winning_window()
        if window is None:
            return None
        return self.player_for_token(Token(window.values[0]))

    def is_draw(self) -> bool:
        return self._board.is_full() and self.winner() is None

    def is_terminal(self) -> bool:
        return self.winner() is not None or self._board.is_full()

    def render(self) -> str:
        return self._board.render()

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return (f"GameState(width={self.width}, height={self.height}, "
                f"players={list(self._players)!r}, current={self.current_player.name!r})")
