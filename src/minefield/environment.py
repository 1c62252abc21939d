"""
Gymnasium environment wrapper for Minesweeper.

Provides a standard RL interface over the game logic.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .logic import GameLogic
from .setting import EASY, GameSetting


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array of shape (height, width) indexed [y, x] where:
        - -1 = unrevealed cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9-12 = end-of-game mine and flag states

    Actions:
        Discrete action space of size width * height.
        Action i reveals the cell at (i % width, i // width).

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for invalid action (already revealed)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        setting: Optional[GameSetting] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            setting: Game setting (default: easy preset).
            render_mode: How to render the environment.

        Raises:
            ValueError: If the setting is not playable.
        """
        super().__init__()

        self.setting = setting or EASY
        if not self.setting.validate():
            raise ValueError(f"Invalid game setting: {self.setting}")

        self.logic = GameLogic()
        self.logic.restart(self.setting)
        self.render_mode = render_mode

        # Define observation space
        self.observation_space = spaces.Box(
            low=-2,
            high=12,
            shape=(self.setting.height, self.setting.width),
            dtype=np.int8,
        )

        # Define action space (one action per cell)
        self.action_space = spaces.Discrete(self.setting.num_cells)

        self._steps = 0
        self._total_safe_cells = (
            self.setting.num_cells - self.setting.mine_count
        )

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducible mine placement.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.logic.rng = self.np_random
        self.logic.restart()
        self._steps = 0

        return self._get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index to reveal (y * width + x).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        x, y = self._action_to_position(action)
        self._steps += 1

        reward = self._calculate_reward(x, y)

        observation = self._get_observation()
        terminated = not self.logic.is_playing
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (x, y) position."""
        action = int(action)
        return action % self.setting.width, action // self.setting.width

    def _calculate_reward(self, x: int, y: int) -> float:
        """
        Reveal a cell and compute the reward.

        Args:
            x: Column index.
            y: Row index.

        Returns:
            Reward value.
        """
        if not self.logic.reveal(x, y):
            return -0.1

        if self.logic.is_won:
            return 10.0
        if self.logic.is_lost:
            return -10.0

        return 1.0

    def _get_observation(self) -> np.ndarray:
        return self.logic.snapshot().to_array()

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "revealed": (
                self._total_safe_cells - self.logic.to_reveal_cell_num
            ),
            "total_safe": self._total_safe_cells,
            "game_result": self.logic.game_result.name,
            "valid_actions": len(self.logic.get_valid_actions()),
        }

    def render(self) -> Optional[str]:
        """Render the current game state."""
        if self.render_mode == "ansi":
            return self.logic.snapshot().render()
        if self.render_mode == "human":
            print(self.logic.snapshot().render())
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        for x, y in self.logic.get_valid_actions():
            mask[self.logic.grid_to_index(x, y)] = True
        return mask
