"""
env.py - Gymnasium environment over a fourway game session

This module exposes a GameSession through the standard Gymnasium
reset/step/render API so programmatic clients can drive games.
"""

from typing import Any, Dict, Iterable, Optional, Tuple, Union

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from fourway.debug import debug
from fourway.game.rules import GameSession, GameStatus
from fourway.utils import DEFAULT_HEIGHT, DEFAULT_PLAYERS, DEFAULT_WIDTH, code_dtype

CELL_PIXELS = 50
BACKGROUND_RGB = (0, 0, 128)
EMPTY_RGB = (0, 0, 0)


class FourWayEnv(gym.Env):
    """
    Connect-four environment for any roster and board size.

    Observations are integer arrays of shape (height, width) with row 0 at the
    bottom; cell value k means the k-th player of the roster (1-based) and 0
    an empty cell. Rewards go to the player who just moved.
    """

    metadata = {'render_modes': ['ascii', 'human', 'rgb_array'], 'render_fps': 4}

    def __init__(self, players: Iterable = DEFAULT_PLAYERS, width: int = DEFAULT_WIDTH,
                 height: int = DEFAULT_HEIGHT, render_mode: Optional[str] = None):
        """
        Initialize the environment.

        Args:
            players: Roster in turn order (Player instances or colour strings)
            width: Number of columns
            height: Number of rows
            render_mode: One of ``metadata['render_modes']`` or None
        """
        debug.debug("Initializing FourWayEnv", "env")

        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        self.session = GameSession(players, width, height)
        self.render_mode = render_mode

        n_players = len(self.session.players)
        board = self.session.board
        self.action_space = spaces.Discrete(board.width)
        self.observation_space = spaces.Box(
            low=0, high=n_players, shape=(board.height, board.width), dtype=code_dtype(n_players)
        )

        self.reward_win = 1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Reset the environment to a fresh game with the same roster.

        Returns:
            Initial observation and info dictionary
        """
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)

        self.session.reset()

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Play ``action`` for the active player.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)

        Raises:
            GameAlreadyOverError: If called after the game ended without a reset
        """
        debug.debug(f"Environment step with action {action}", "env")

        outcome = self.session.apply_move(int(action))

        if not outcome.accepted:
            debug.warning(f"Invalid action: {action} ({outcome.reason})", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        reward = self.reward_step
        terminated = False

        if outcome.status == GameStatus.WON:
            debug.info(f"Game over: player {outcome.winner} wins", "env")
            reward = self.reward_win
            terminated = True
        elif outcome.status == GameStatus.TIED:
            debug.info("Game over: tie", "env")
            reward = self.reward_draw
            terminated = True

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[Union[str, np.ndarray]]:
        """
        Render the current state of the environment.

        Returns:
            ASCII text, an RGB frame, or None depending on render_mode
        """
        if self.render_mode is None:
            return None

        if self.render_mode == "ascii":
            return self.session.render()

        if self.render_mode == "human":
            print(self.session.render())
            return None

        return self._render_rgb()

    def _render_rgb(self) -> np.ndarray:
        board = self.session.board
        height, width = board.height, board.width
        frame = np.zeros((height * CELL_PIXELS, width * CELL_PIXELS, 3), dtype=np.uint8)
        frame[:, :] = BACKGROUND_RGB

        palette = np.array([EMPTY_RGB] + [p.rgb for p in self.session.players], dtype=np.uint8)
        cells = board.encode([p.identity for p in self.session.players])

        # One disc mask shared by all cells
        yy, xx = np.mgrid[0:CELL_PIXELS, 0:CELL_PIXELS]
        centre = CELL_PIXELS // 2
        disc = (yy - centre) ** 2 + (xx - centre) ** 2 <= (CELL_PIXELS * 2 // 5) ** 2

        for row in range(height):
            # Row 0 is the bottom, which is the last band of pixels
            top = (height - 1 - row) * CELL_PIXELS
            for column in range(width):
                left = column * CELL_PIXELS
                tile = frame[top:top + CELL_PIXELS, left:left + CELL_PIXELS]
                tile[disc] = palette[cells[row, column]]

        return frame

    def _get_observation(self) -> np.ndarray:
        return self.session.board.encode([p.identity for p in self.session.players])

    def _get_info(self) -> Dict[str, Any]:
        session = self.session
        return {
            'valid_moves': session.valid_columns(),
            'current_player': session.active_player_index,
            'current_identity': session.active_player.identity,
            'game_result': session.status.name,
            'winner': session.winner,
            'moves_made': session.moves_played,
            'winning_line': session.winning_line(),
            'last_move': session.last_placement,
        }

    def close(self):
        pass
