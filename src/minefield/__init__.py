"""
Minesweeper rules engine.

Provides the game setting, cell states, the game logic state machine
and a Gymnasium environment built on top of it.
"""
from .cell import Cell, CellState, GameResult, MineField
from .setting import GameSetting, SettingKind, EASY, MEDIUM, HARD
from .snapshot import GameSnapshot
from .logic import GameLogic
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CellState",
    "GameResult",
    "MineField",
    "GameSetting",
    "SettingKind",
    "EASY",
    "MEDIUM",
    "HARD",
    "GameSnapshot",
    "GameLogic",
    "MinesweeperEnv",
]
