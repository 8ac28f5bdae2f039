"""
gym_env.py - Gymnasium environment wrapping a dropfour game

The learning agent always holds the first seat. After each agent move the
opponent player (a MinimaxPlayer unless another Player is supplied) answers
immediately, so every step returns a position where the agent is to act or
the game is over.
"""

from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from dropfour.ai.minimax import MinimaxPlayer
from dropfour.debug import debug
from dropfour.game.players import NO_MOVE, Move, Player
from dropfour.game.rules import GameState
from dropfour.utils import DEFAULT_HEIGHT, DEFAULT_WIDTH, Token


class AgentSeat(Player):
    """Seat held by the environment's caller. Moves arrive through step()."""

    def get_next_move(self, state: GameState):
        raise RuntimeError("the agent's moves are supplied through DropFourEnv.step()")


class DropFourEnv(gym.Env):
    """
    Two-player dropfour environment following the Gymnasium interface.

    Actions are 0-based column indices; action ``a`` drops into column ``a + 1``.
    Observations are the board cells as an int8 array of shape
    (height, width) with the bottom row first.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT,
                 opponent: Optional[Player] = None, render_mode: Optional[str] = None):
        """
        Args:
            width: Number of columns
            height: Number of rows
            opponent: Player answering the agent's moves; must not use Token.RED
            render_mode: One of metadata['render_modes'], or None
        """
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"unsupported render mode {render_mode!r}")

        self.width = width
        self.height = height
        self.render_mode = render_mode
        self.agent = AgentSeat("Agent", Token.RED)
        self.opponent = opponent if opponent is not None else MinimaxPlayer("Minimax", Token.YELLOW, depth=2)
        self.state = GameState(width, height, [self.agent, self.opponent])

        self.action_space = spaces.Discrete(width)
        self.observation_space = spaces.Box(
            low=0, high=max(Token).value, shape=(height, width), dtype=np.int8
        )

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01  # Small negative reward to encourage faster solutions

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        self.state = GameState(self.width, self.height, [self.agent, self.opponent])
        debug.debug("Environment reset", "env")

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict[str, Any]]:
        """
        Drop the agent's token in column ``action + 1`` and let the opponent reply.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        if self.state.is_terminal():
            raise RuntimeError("step() called on a finished game; call reset() first")

        column = int(action) + 1
        if not 1 <= column <= self.width or not self.state.can_drop(column):
            debug.warning(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        self.state.apply_move(Move(self.agent, column))

        if not self.state.is_terminal():
            reply = self.opponent.get_next_move(self.state)
            if reply is not NO_MOVE:
                self.state.apply_move(reply)

        reward, terminated = self._outcome()
        if self.render_mode == "human":
            self.render()
        return self._get_observation(), reward, terminated, False, self._get_info()

    def _outcome(self) -> Tuple[float, bool]:
        winner = self.state.winner()
        if winner == self.agent:
            debug.info("Game over: agent wins", "env")
            return self.reward_win, True
        if winner is not None:
            debug.info(f"Game over: {winner} wins", "env")
            return self.reward_lose, True
        if self.state.is_draw():
            debug.info("Game over: draw", "env")
            return self.reward_draw, True
        return self.reward_step, False

    def render(self) -> Optional[str]:
        if self.render_mode is None:
            return None
        if self.render_mode == "ascii":
            return self.state.render()
        print(self.state.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.state.board.grid

    def _get_info(self) -> Dict[str, Any]:
        winner = self.state.winner()
        return {
            'valid_moves': [col - 1 for col in self.state.legal_moves()],
            'current_player': self.state.current_player.name,
            'winner': winner.name if winner is not None else None,
        }
