"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import Callable, Iterable, List, Tuple

import numpy as np

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import GameLogic, GameSetting, MinesweeperEnv


# ============================================================================
# Scripted Random Generator
# ============================================================================

class ScriptedRng:
    """Stand-in generator returning predetermined ``integers`` draws."""

    def __init__(self, picks: Iterable[int]) -> None:
        self._picks = iter(picks)

    def integers(self, low: int, high: int) -> int:
        value = next(self._picks)
        assert low <= value < high
        return value


def picks_for_mines(
    num_cells: int, excluded_index: int, mine_indexes: List[int]
) -> List[int]:
    """
    Compute the draws that make mine placement pick the given indexes.

    Replays the partial shuffle over the dense range that skips the
    excluded index, choosing the pool position of each wanted mine.
    """
    pool = list(range(num_cells - 1))
    picks = []
    for i, mine in enumerate(mine_indexes):
        dense = mine - 1 if mine > excluded_index else mine
        j = pool.index(dense)
        pool[i], pool[j] = pool[j], pool[i]
        picks.append(j)
    return picks


RiggedFactory = Callable[
    [int, int, List[Tuple[int, int]], Tuple[int, int]], GameLogic
]


# ============================================================================
# Game Logic Fixtures
# ============================================================================

@pytest.fixture
def default_logic() -> GameLogic:
    """Create a game with the default easy setting."""
    return GameLogic(rng=np.random.default_rng(0))


@pytest.fixture
def small_logic() -> GameLogic:
    """Create a small 3x3 game with 1 mine."""
    logic = GameLogic(rng=np.random.default_rng(0))
    logic.restart(GameSetting.custom(3, 3, 1))
    return logic


@pytest.fixture
def rigged_logic() -> RiggedFactory:
    """
    Factory for games with a fixed mine layout.

    The returned function takes width, height, mine (x, y) positions and
    the (x, y) of the first reveal; the first reveal must be done by the
    test to trigger placement.
    """
    def factory(
        width: int,
        height: int,
        mines: List[Tuple[int, int]],
        first_click: Tuple[int, int],
    ) -> GameLogic:
        excluded_index = first_click[1] * width + first_click[0]
        mine_indexes = [y * width + x for x, y in mines]
        picks = picks_for_mines(width * height, excluded_index, mine_indexes)
        logic = GameLogic(rng=ScriptedRng(picks))
        assert logic.restart(GameSetting.custom(width, height, len(mines)))
        return logic

    return factory


# ============================================================================
# Environment Fixtures
# ============================================================================

@pytest.fixture
def default_env() -> MinesweeperEnv:
    """Create an environment with the easy setting."""
    return MinesweeperEnv()


@pytest.fixture
def small_env() -> MinesweeperEnv:
    """Create a 4x4 environment with 2 mines."""
    return MinesweeperEnv(setting=GameSetting.custom(4, 4, 2))
