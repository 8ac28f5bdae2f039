"""
Tests for the window heuristic, the minimax search and MinimaxPlayer.
"""

import math

import pytest

from dropfour.ai.minimax import (MinimaxPlayer, MinimaxSearch, evaluate, score_window,
                                 window_total)
from dropfour.game.players import NO_MOVE, Move
from dropfour.game.rules import GameState
from dropfour.utils import Token

R = Token.RED.value
Y = Token.YELLOW.value
G = Token.GREEN.value
E = Token.EMPTY.value


class TestScoreWindow:
    """Per-window scores for the evaluated player."""

    @pytest.mark.parametrize("values,expected", [
        ((R, R, R, R), 100),
        ((R, R, E, R), 50),
        ((E, R, R, E), 20),
        ((E, E, E, R), 10),
        ((Y, Y, Y, Y), -100),
        ((Y, E, Y, Y), -50),
        ((Y, Y, E, E), -20),
        ((E, Y, E, E), -10),
        ((E, E, E, E), 0),
        ((R, Y, E, E), 0),
        ((R, R, R, Y), 0),
    ])
    def test_table(self, values, expected):
        assert score_window(values, Token.RED) == expected

    def test_other_tokens_count_together(self):
        assert score_window((Y, G, E, E), Token.RED) == -20
        assert score_window((Y, G, Y, G), Token.RED) == -100


class TestEvaluate:
    """Position scores: own window total minus the next player's."""

    def test_empty_board_is_level(self, state):
        assert evaluate(state) == 0

    def test_single_central_token(self, state, red, yellow, play):
        # (4,1) lies in 4 horizontal, 1 vertical and 1 window of each diagonal
        play(state, 4)
        assert window_total(state, red) == 70
        assert window_total(state, yellow) == -70
        assert evaluate(state, red) == 140
        assert evaluate(state) == -140

    def test_two_player_symmetry(self, state, red, yellow, play):
        play(state, 4, 3, 4, 5, 2)
        assert evaluate(state, red) == -evaluate(state, yellow)

    def test_three_players_use_next_seat(self, red, yellow, green, play):
        game = GameState(7, 6, [red, yellow, green])
        play(game, 4, 1)
        expected = window_total(game, green) - window_total(game, red)
        assert evaluate(game) == expected


class TestSearchChoices:
    """The engine wins when it can and blocks when it must."""

    def test_never_picks_full_column(self, state, play):
        play(state, 1, 1, 1, 1, 1, 1)
        for depth in (1, 2, 3):
            result = MinimaxSearch(depth=depth).search(state)
            assert result.move is not NO_MOVE
            assert result.move.column != 1
            assert state.can_drop(result.move.column)

    @pytest.mark.parametrize("depth", [1, 2, 3])
    def test_takes_immediate_win(self, state, red, play, depth):
        play(state, 1, 1, 2, 2, 3, 3)
        result = MinimaxSearch(depth=depth).search(state)
        assert result.move == Move(red, 4)
        assert result.score == math.inf

    @pytest.mark.parametrize("depth", [2, 3])
    def test_blocks_immediate_loss(self, state, yellow, play, depth):
        play(state, 1, 1, 2, 2, 3)
        result = MinimaxSearch(depth=depth).search(state)
        assert result.move == Move(yellow, 4)
        assert result.score > -math.inf

    def test_vertical_threat_blocked(self, state, yellow, play):
        play(state, 7, 1, 7, 2, 7)
        assert MinimaxSearch(depth=2).search(state).move == Move(yellow, 7)

    def test_forced_loss_still_returns_a_move(self, state, yellow, play):
        # Red threatens both (1,1) and (5,1): every reply loses
        play(state, 2, 2, 3, 3, 4)
        result = MinimaxSearch(depth=2).search(state)
        assert result.score == -math.inf
        assert result.move == Move(yellow, 1)

    def test_does_not_modify_state(self, state, play):
        play(state, 4, 4, 3)
        board, player = state.board, state.current_player
        MinimaxSearch(depth=3).search(state)
        assert state.board == board
        assert state.current_player == player


class TestPruning:
    """Alpha-beta changes the work done, never the answer."""

    @pytest.mark.parametrize("columns,depth", [
        ((), 3),
        ((4, 4, 3), 4),
        ((1, 1, 2, 2, 3), 3),
        ((4, 3, 4, 5, 2, 4, 6), 4),
        ((1, 2, 3, 4, 5, 6, 7, 7, 6, 5), 3),
    ])
    def test_pruned_matches_unpruned(self, state, play, columns, depth):
        play(state, *columns)
        pruned = MinimaxSearch(depth=depth, pruning=True).search(state)
        full = MinimaxSearch(depth=depth, pruning=False).search(state)
        assert pruned.move == full.move
        assert pruned.score == full.score
        assert pruned.nodes <= full.nodes

    def test_pruning_saves_work(self, state):
        pruned = MinimaxSearch(depth=4, pruning=True).search(state)
        full = MinimaxSearch(depth=4, pruning=False).search(state)
        assert pruned.nodes < full.nodes
        assert full.nodes == 1 + 7 + 7 ** 2 + 7 ** 3 + 7 ** 4


class TestNoMove:
    """Finished positions have no move to offer."""

    def test_full_board(self, red, yellow, play, draw_columns):
        game = GameState(4, 4, [red, yellow])
        play(game, *draw_columns)
        result = MinimaxSearch(depth=3).search(game)
        assert result.move is NO_MOVE

    def test_already_won(self, state, play):
        play(state, 1, 2, 1, 2, 1, 2, 1)
        result = MinimaxSearch(depth=3).search(state)
        assert result.move is NO_MOVE
        assert result.score == -math.inf
        assert result.nodes == 1


class TestBudget:
    """Node and time budgets cut the search short but still give a legal move."""

    def test_node_budget(self, state):
        engine = MinimaxSearch(depth=6, max_nodes=50)
        result = engine.search(state)
        assert result.move is not NO_MOVE
        assert state.can_drop(result.move.column)
        assert result.nodes <= 50

    @pytest.mark.parametrize("max_nodes", range(24, 80))
    def test_budget_keeps_finished_block(self, state, yellow, play, max_nodes):
        # Column 4 is fully searched by node 24; later columns are cut off
        # part way or lose to Red's reply in column 4
        play(state, 1, 1, 2, 2, 3)
        result = MinimaxSearch(depth=2, max_nodes=max_nodes).search(state)
        assert result.move == Move(yellow, 4)
        assert result.score > -math.inf

    def test_budget_never_beats_full_search(self, state, play):
        play(state, 1, 1, 2, 2, 3)
        full = MinimaxSearch(depth=2).search(state)
        limited = MinimaxSearch(depth=2, max_nodes=full.nodes).search(state)
        assert limited.move == full.move
        assert limited.score == full.score

    def test_time_budget(self, state):
        result = MinimaxSearch(depth=8, time_limit=1e-9).search(state)
        assert result.move is not NO_MOVE
        assert result.nodes < 100

    @pytest.mark.parametrize("kwargs", [
        {"depth": 0},
        {"depth": 3, "max_nodes": 0},
        {"depth": 3, "time_limit": 0},
    ])
    def test_invalid_settings(self, kwargs):
        with pytest.raises(ValueError):
            MinimaxSearch(**kwargs)


class TestMinimaxPlayer:
    """The automated player returns whatever the engine picks."""

    def test_returns_engine_move(self, yellow, play):
        bot = MinimaxPlayer("Bot", Token.RED, depth=2)
        game = GameState(7, 6, [bot, yellow])
        play(game, 1, 1, 2, 2, 3, 3)
        assert bot.get_next_move(game) == Move(bot, 4)
        assert bot.last_result.score == math.inf
        assert bot.depth == 2

    def test_three_player_game(self, red, yellow, play):
        bot = MinimaxPlayer("Bot", Token.GREEN, depth=3)
        game = GameState(5, 5, [red, yellow, bot])
        play(game, 3, 3)
        move = bot.get_next_move(game)
        assert move.player == bot
        assert game.can_drop(move.column)

    def test_self_play_finishes(self):
        first = MinimaxPlayer("First", Token.RED, depth=2)
        second = MinimaxPlayer("Second", Token.YELLOW, depth=1)
        game = GameState(5, 4, [first, second])
        for _ in range(5 * 4):
            if game.is_terminal():
                break
            move = game.current_player.get_next_move(game)
            assert move is not NO_MOVE
            game.apply_move(move)
        assert game.is_terminal()
        assert game.current_player.get_next_move(game) is NO_MOVE
