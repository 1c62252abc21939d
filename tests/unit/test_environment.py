"""
Unit tests for MinesweeperEnv.

Tests spaces, reset/step behavior, rewards, seeding and rendering.
"""
import pytest
import numpy as np
from minefield import GameResult, GameSetting, MinesweeperEnv, HARD


def start_unfinished_game(env: MinesweeperEnv) -> np.ndarray:
    """Reveal cell 0 on the first seed whose game is still running."""
    for seed in range(100):
        env.reset(seed=seed)
        obs, *_ = env.step(0)
        if env.logic.is_playing:
            return obs
    raise AssertionError("every seed finished the game on the first step")


# ============================================================================
# Space Tests
# ============================================================================

class TestSpaces:
    """Test observation and action spaces."""

    def test_default_spaces(self, default_env: MinesweeperEnv) -> None:
        """Easy setting should give a 9x9 grid and 81 actions."""
        assert default_env.observation_space.shape == (9, 9)
        assert default_env.action_space.n == 81

    def test_spaces_follow_setting(self) -> None:
        """Spaces should be (height, width) for non-square settings."""
        env = MinesweeperEnv(setting=HARD)
        assert env.observation_space.shape == (16, 30)
        assert env.action_space.n == 480

    def test_invalid_setting_raises(self) -> None:
        """Invalid settings should be rejected at construction."""
        with pytest.raises(ValueError, match="Invalid game setting"):
            MinesweeperEnv(setting=GameSetting.custom(1, 1, 1))


# ============================================================================
# Reset and Step Tests
# ============================================================================

class TestResetAndStep:
    """Test episode flow."""

    def test_reset_observation_all_unrevealed(
        self, default_env: MinesweeperEnv
    ) -> None:
        """Reset should give an all-unrevealed observation."""
        obs, info = default_env.reset(seed=0)
        assert obs.dtype == np.int8
        assert np.all(obs == -1)
        assert default_env.observation_space.contains(obs)
        assert info["steps"] == 0
        assert info["revealed"] == 0
        assert info["total_safe"] == 71
        assert info["game_result"] == GameResult.PLAYING.name

    def test_first_step_is_safe(self, small_env: MinesweeperEnv) -> None:
        """First action should never hit a mine."""
        for seed in range(50):
            small_env.reset(seed=seed)
            _, reward, _, _, info = small_env.step(5)
            assert reward in (1.0, 10.0)
            assert info["game_result"] != GameResult.LOSE.name
            assert info["revealed"] >= 1

    def test_step_reveals_action_cell(
        self, small_env: MinesweeperEnv
    ) -> None:
        """Action i should reveal cell (i % width, i // width)."""
        small_env.reset(seed=1)
        obs, _, _, _, _ = small_env.step(6)
        assert obs[1, 2] >= 0

    def test_repeated_action_is_penalized(
        self, small_env: MinesweeperEnv
    ) -> None:
        """Revealing an already revealed cell should cost -0.1."""
        small_env.reset(seed=2)
        small_env.step(0)
        _, reward, _, truncated, _ = small_env.step(0)
        assert reward == pytest.approx(-0.1)
        assert truncated is False

    def test_mine_ends_episode(self, small_env: MinesweeperEnv) -> None:
        """Revealing a mine should terminate with -10."""
        start_unfinished_game(small_env)
        mine = min(small_env.logic.mine_indexes)
        obs, reward, terminated, _, info = small_env.step(mine)
        assert reward == -10.0
        assert terminated is True
        assert info["game_result"] == GameResult.LOSE.name
        assert obs.flat[mine] == 10

    def test_episode_ends_with_win_when_avoiding_mines(
        self, small_env: MinesweeperEnv
    ) -> None:
        """Revealing only safe cells should end in a win."""
        start_unfinished_game(small_env)
        mines = small_env.logic.mine_indexes
        terminated = False
        reward = 0.0
        for action in range(16):
            if terminated:
                break
            if action in mines or not small_env.get_action_mask()[action]:
                continue
            _, reward, terminated, _, _ = small_env.step(action)
        assert terminated is True
        assert reward == 10.0
        assert small_env.logic.is_won is True

    def test_reset_starts_new_game(self, small_env: MinesweeperEnv) -> None:
        """Reset should clear the previous game."""
        small_env.reset(seed=5)
        small_env.step(0)
        obs, info = small_env.reset()
        assert np.all(obs == -1)
        assert small_env.logic.mines_placed is False
        assert info["steps"] == 0


# ============================================================================
# Seeding Tests
# ============================================================================

class TestSeeding:
    """Test reproducibility of seeded episodes."""

    def test_same_seed_same_episode(self) -> None:
        """Same seed and actions should give identical observations."""
        first = MinesweeperEnv()
        second = MinesweeperEnv()
        first.reset(seed=11)
        second.reset(seed=11)
        obs_first, *_ = first.step(40)
        obs_second, *_ = second.step(40)
        assert np.array_equal(obs_first, obs_second)
        assert first.logic.mine_indexes == second.logic.mine_indexes


# ============================================================================
# Action Mask and Render Tests
# ============================================================================

class TestMaskAndRender:
    """Test action masks and text rendering."""

    def test_mask_all_valid_after_reset(
        self, default_env: MinesweeperEnv
    ) -> None:
        """Every cell should be a valid action at the start."""
        default_env.reset(seed=0)
        mask = default_env.get_action_mask()
        assert mask.dtype == bool
        assert mask.shape == (81,)
        assert mask.all()

    def test_mask_excludes_revealed(
        self, small_env: MinesweeperEnv
    ) -> None:
        """Revealed cells should not be valid actions."""
        obs = start_unfinished_game(small_env)
        mask = small_env.get_action_mask()
        assert not mask[0]
        assert mask.sum() == np.count_nonzero(obs == -1)

    def test_ansi_render(self) -> None:
        """ANSI mode should return one line per row."""
        env = MinesweeperEnv(render_mode="ansi")
        env.reset(seed=0)
        text = env.render()
        lines = text.split("\n")
        assert len(lines) == 9
        assert lines[0] == " ".join(["."] * 9)

    def test_no_render_mode_returns_none(
        self, default_env: MinesweeperEnv
    ) -> None:
        default_env.reset(seed=0)
        assert default_env.render() is None
