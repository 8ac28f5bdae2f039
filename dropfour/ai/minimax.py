"""
minimax.py - Minimax search with alpha-beta pruning for dropfour

This module provides the MinimaxSearch engine and the MinimaxPlayer that
plays whatever the engine picks.

Scores are always from the point of view of the player to act at the root:
a win for that player is +inf, any other win is -inf, and positions cut off
by the depth limit are scored with a window heuristic:

1. Every window of four cells is scored for a player by how many of that
   player's tokens it holds next to empty cells, and negatively by how many
   tokens of the other players it holds next to empty cells.
2. Windows mixing the player's tokens with anyone else's score nothing.
3. The position score is the player's window total minus the total of the
   player seated after them.
"""

import math
import time
from typing import Iterator, NamedTuple, Optional, Sequence, Tuple

from dropfour.debug import debug
from dropfour.game.players import NO_MOVE, Move, MoveResult, Player
from dropfour.game.rules import GameState
from dropfour.utils import DEFAULT_SEARCH_DEPTH, Token

# Score of a window holding n tokens of one side and CONNECT_N - n empty cells
WINDOW_SCORES = {4: 100, 3: 50, 2: 20, 1: 10}


class SearchResult(NamedTuple):
    move: MoveResult
    score: float
    nodes: int


def score_window(values: Sequence[int], token: Token) -> int:
    """
    Score one window for the player holding ``token``.

    Args:
        values: The CONNECT_N cell values of the window
        token: The evaluated player's token

    Returns:
        Positive for windows with only the player's tokens, negative for
        windows with only other tokens, 0 when mixed or empty
    """
    own = 0
    other = 0
    for value in values:
        if value == token:
            own += 1
        elif value != Token.EMPTY.value:
            other += 1

    if own and other:
        return 0
    if own:
        return WINDOW_SCORES[own]
    if other:
        return -WINDOW_SCORES[other]
    return 0


def window_total(state: GameState, player: Player) -> int:
    token = player.token.value
    return sum(score_window(window.values, token) for window in state.windows())


def evaluate(state: GameState, player: Optional[Player] = None) -> float:
    """
    Heuristic value of a position.

    Args:
        state: Position to score
        player: Side to score for; defaults to the player to act

    Returns:
        Window total of ``player`` minus that of the player seated after them
    """
    if player is None:
        player = state.current_player
    opponent = state.player_after(player)
    return float(window_total(state, player) - window_total(state, opponent))


class MinimaxSearch:
    """
    Depth-limited minimax with optional alpha-beta pruning.

    Each explored node works on its own copy of the game state, so the state
    passed to search() is never modified.
    """

    def __init__(self, depth: int = DEFAULT_SEARCH_DEPTH, pruning: bool = True,
                 max_nodes: Optional[int] = None, time_limit: Optional[float] = None):
        """
        Args:
            depth: Plies to look ahead, at least 1
            pruning: Cut off branches with alpha-beta; results are the same
                either way, only the number of visited nodes changes
            max_nodes: Stop expanding after visiting this many nodes
            time_limit: Stop expanding after this many seconds

        When a budget runs out, remaining nodes are scored by the heuristic and
        the best root move whose subtree was searched in full is returned. A
        partly searched first move is used only if no move was finished.
        """
        if depth < 1:
            raise ValueError(f"search depth must be at least 1, got {depth}")
        if max_nodes is not None and max_nodes < 1:
            raise ValueError(f"max_nodes must be positive, got {max_nodes}")
        if time_limit is not None and time_limit <= 0:
            raise ValueError(f"time_limit must be positive, got {time_limit}")
        self.depth = depth
        self.pruning = pruning
        self.max_nodes = max_nodes
        self.time_limit = time_limit
        self.nodes_evaluated = 0  # For performance tracking
        self._deadline: Optional[float] = None
        self._cut_short = False  # set when the budget stopped part of a subtree

    def search(self, state: GameState) -> SearchResult:
        """
        Find the best move for the player to act.

        Returns:
            The chosen move (NO_MOVE if the game is over or no column is
            open), its score and the number of nodes visited
        """
        self.nodes_evaluated = 0
        self._cut_short = False
        self._deadline = None
        if self.time_limit is not None:
            self._deadline = time.perf_counter() + self.time_limit

        root_player = state.current_player
        debug.start_timer("search")
        move, score = self._minimax(NO_MOVE, state, self.depth, -math.inf, math.inf,
                                    True, root_player)
        debug.end_timer("search", "search")

        debug.debug(f"{root_player} best move {_describe(move)} score {score} "
                    f"({self.nodes_evaluated} nodes, depth {self.depth})", "search")
        return SearchResult(move, score, self.nodes_evaluated)

    def _minimax(self, move: MoveResult, state: GameState, depth: int, alpha: float,
                 beta: float, maximizing: bool, root_player: Player) -> Tuple[MoveResult, float]:
        """
        Score ``state``, reached by ``move``, and pick its best child.

        Args:
            move: Move that produced this state (NO_MOVE at the root)
            state: Position to search from
            depth: Remaining plies
            alpha: Best score the maximizing side is already assured of
            beta: Best score the minimizing side is already assured of
            maximizing: True on the root player's plies
            root_player: Player the scores are relative to

        Returns:
            (best child move, score); leaves return their own move
        """
        self.nodes_evaluated += 1

        winner = state.winner()
        if winner is not None:
            return move, (math.inf if winner == root_player else -math.inf)

        if depth == 0:
            return move, evaluate(state, root_player)

        at_root = move is NO_MOVE
        if not at_root and self._budget_exhausted():
            self._cut_short = True
            return move, evaluate(state, root_player)

        best_move: MoveResult = NO_MOVE
        best_score = -math.inf if maximizing else math.inf

        for child_move, child in self._children(state):
            if best_move is not NO_MOVE and self._budget_exhausted():
                self._cut_short = True
                break
            if at_root:
                self._cut_short = False

            _, score = self._minimax(child_move, child, depth - 1, alpha, beta,
                                     not maximizing, root_player)
            if at_root and self._cut_short and best_move is not NO_MOVE:
                # Partly searched root moves only count when nothing else finished
                break

            if maximizing:
                if best_move is NO_MOVE or score > best_score:
                    best_move, best_score = child_move, score
                alpha = max(alpha, score)
            else:
                if best_move is NO_MOVE or score < best_score:
                    best_move, best_score = child_move, score
                beta = min(beta, score)

            if self.pruning and beta <= alpha:
                break

        if best_move is NO_MOVE:
            # Full board without a winner
            return move, evaluate(state, root_player)
        return best_move, best_score

    def _children(self, state: GameState) -> Iterator[Tuple[Move, GameState]]:
        player = state.current_player
        for col in state.legal_moves():
            child = state.copy()
            move = Move(player, col)
            child.apply_move(move)
            yield move, child

    def _budget_exhausted(self) -> bool:
        if self.max_nodes is not None and self.nodes_evaluated >= self.max_nodes:
            return True
        return self._deadline is not None and time.perf_counter() >= self._deadline


class MinimaxPlayer(Player):
    """A player that moves wherever MinimaxSearch tells it to."""

    def __init__(self, name: str, token: Token, depth: int = DEFAULT_SEARCH_DEPTH,
                 pruning: bool = True, max_nodes: Optional[int] = None,
                 time_limit: Optional[float] = None):
        super().__init__(name, token)
        self.engine = MinimaxSearch(depth=depth, pruning=pruning,
                                    max_nodes=max_nodes, time_limit=time_limit)
        self.last_result: Optional[SearchResult] = None

    @property
    def depth(self) -> int:
        return self.engine.depth

    def get_next_move(self, state: GameState) -> MoveResult:
        self.last_result = self.engine.search(state)
        debug.info(f"{self} chose {_describe(self.last_result.move)} "
                   f"after {self.last_result.nodes} nodes", "search")
        return self.last_result.move


def _describe(move: MoveResult) -> str:
    if move is NO_MOVE:
        return "no move"
    return f"column {move.column}"
