"""
Gymnasium environment wrapper for Minesweeper sessions.

Lets scripts and agents drive a GameController through the standard
reset/step interface.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from ..engine import Difficulty, DifficultyTable, STANDARD, observation

from .game import GameController


# ============================================================================
# Rewards
# ============================================================================

WIN_REWARD = 10.0
LOSS_REWARD = -10.0
PROGRESS_REWARD = 1.0
NO_OP_REWARD = -0.1


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium adapter over a GameController.

    Observation:
        The session's observation matrix (see engine.observation): -1
        hidden, -2 flagged, 0-8 revealed counts, 9 revealed mine.

    Actions:
        Discrete action space of size 2 * rows * cols.
        Action i < rows * cols reveals cell (i // cols, i % cols);
        larger actions toggle the flag on cell i - rows * cols.

    Rewards:
        - +1 for an action that changes the game
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for an action with no effect
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        difficulty: object = Difficulty.EASY,
        table: DifficultyTable = STANDARD,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Build the environment around a fresh controller.

        Args:
            difficulty: Tier played in every episode.
            table: Difficulty table the tier is resolved against.
            render_mode: "ansi" returns text from render(), "human" prints it.
        """
        super().__init__()

        self.difficulty = difficulty
        self.table = table
        self.config = table.resolve(difficulty)
        self.render_mode = render_mode
        self.controller = GameController(difficulty, table, rng=self.np_random)

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=self.config.shape,
            dtype=np.int8,
        )

        # One reveal and one flag action per cell
        self._cells = self.config.total_cells
        self.action_space = spaces.Discrete(2 * self._cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start the session for the next episode.

        Args:
            seed: Reseeds mine placement and the initial cursor.
            options: May hold "mines", a list of (row, col) positions to
                seed instead of random placement.

        Returns:
            Observation and info of the fresh session.
        """
        super().reset(seed=seed)
        if seed is not None:
            self.controller.rng = self.np_random
        self.controller.new_game(self.difficulty)
        if options and options.get("mines") is not None:
            self.controller.seed_mines(options["mines"])
        self._steps = 0

        return self._get_obs(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Apply one reveal or flag action to the session.

        Args:
            action: Reveal (cell index) or flag (cells + cell index) action.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        flag, row, col = self._decode_action(int(action))
        self._steps += 1

        before = self.controller.session
        if flag:
            after = self.controller.toggle_flag(row, col)
        else:
            after = self.controller.reveal(row, col)

        reward = self._calculate_reward(before, after)
        terminated = after.game_over

        return self._get_obs(), reward, terminated, False, self._get_info()

    def _decode_action(self, action: int) -> Tuple[bool, int, int]:
        """Convert flat action index to (is_flag, row, col)."""
        flag = action >= self._cells
        cell = action - self._cells if flag else action
        return flag, cell // self.config.cols, cell % self.config.cols

    def _calculate_reward(self, before, after) -> float:
        """Reward for the transition from one session to the next."""
        if after is before:
            return NO_OP_REWARD
        if after.game_over:
            return WIN_REWARD if after.game_won else LOSS_REWARD
        return PROGRESS_REWARD

    def _get_obs(self) -> np.ndarray:
        session = self.controller.session
        return observation(session.board, session.revealed, session.flagged)

    def _get_info(self) -> Dict[str, Any]:
        """Counters and outcome of the current session."""
        session = self.controller.session
        if not session.game_over:
            game_state = "PLAYING"
        else:
            game_state = "WON" if session.game_won else "LOST"

        return {
            "steps": self._steps,
            "revealed": session.revealed_count,
            "total_safe": session.config.safe_cells,
            "flags": session.flag_count,
            "timer": session.timer,
            "game_state": game_state,
            "score": session.score,
        }

    def render(self) -> Optional[str]:
        """Draw the board as text."""
        if self.render_mode == "ansi":
            return render_ansi(self._get_obs())
        if self.render_mode == "human":
            print(render_ansi(self._get_obs()))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Actions that would change the current session.

        Returns:
            Boolean array where True = valid action. Hidden cells can be
            revealed or flagged; flagged cells can only be unflagged.
        """
        session = self.controller.session
        mask = np.zeros(self.action_space.n, dtype=bool)
        if session.game_over:
            return mask
        hidden = ~session.revealed
        mask[: self._cells] = (hidden & ~session.flagged).ravel()
        mask[self._cells:] = hidden.ravel()
        return mask


def render_ansi(obs: np.ndarray) -> str:
    """Render an observation as an ASCII grid."""
    symbols = {-1: ".", -2: "F", 9: "*", 0: " "}
    lines = []
    for row in obs:
        lines.append(" ".join(symbols.get(int(val), str(int(val))) for val in row))
    return "\n".join(lines)
