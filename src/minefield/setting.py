"""
Game setting module for Minesweeper.

Describes the grid dimensions and mine count of a game, either one of
the built-in presets or a custom configuration.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


# ============================================================================
# Constants
# ============================================================================

EASY_WIDTH = 9
EASY_HEIGHT = 9
EASY_MINE_COUNT = 10

MEDIUM_WIDTH = 16
MEDIUM_HEIGHT = 16
MEDIUM_MINE_COUNT = 40

HARD_WIDTH = 30
HARD_HEIGHT = 16
HARD_MINE_COUNT = 99


class SettingKind(Enum):
    """Available setting variants."""

    EASY = auto()
    MEDIUM = auto()
    HARD = auto()
    CUSTOM = auto()


_PRESETS = {
    SettingKind.EASY: (EASY_WIDTH, EASY_HEIGHT, EASY_MINE_COUNT),
    SettingKind.MEDIUM: (MEDIUM_WIDTH, MEDIUM_HEIGHT, MEDIUM_MINE_COUNT),
    SettingKind.HARD: (HARD_WIDTH, HARD_HEIGHT, HARD_MINE_COUNT),
}


# ============================================================================
# Game Setting
# ============================================================================

@dataclass(frozen=True)
class GameSetting:
    """
    Configuration for a Minesweeper game.

    Presets carry their dimensions implicitly; the custom fields are only
    read for ``SettingKind.CUSTOM``.

    Attributes:
        kind: Which preset (or custom) this setting is.
        custom_width: Number of columns of a custom setting.
        custom_height: Number of rows of a custom setting.
        custom_mine_count: Number of mines of a custom setting.
    """

    kind: SettingKind = SettingKind.EASY
    custom_width: int = 0
    custom_height: int = 0
    custom_mine_count: int = 0

    @classmethod
    def easy(cls) -> "GameSetting":
        return cls(SettingKind.EASY)

    @classmethod
    def medium(cls) -> "GameSetting":
        return cls(SettingKind.MEDIUM)

    @classmethod
    def hard(cls) -> "GameSetting":
        return cls(SettingKind.HARD)

    @classmethod
    def custom(cls, width: int, height: int, mine_count: int) -> "GameSetting":
        """Create a custom setting. Call ``validate()`` before using it."""
        return cls(SettingKind.CUSTOM, width, height, mine_count)

    @classmethod
    def from_name(cls, name: str) -> Optional["GameSetting"]:
        """
        Look up a preset by name.

        Args:
            name: Preset name, case-insensitive ("easy", "medium", "hard").

        Returns:
            The preset setting, or None if the name is not a preset.
        """
        try:
            kind = SettingKind[name.upper()]
        except KeyError:
            return None
        if kind == SettingKind.CUSTOM:
            return None
        return cls(kind)

    # ========================================================================
    # Derived Dimensions
    # ========================================================================

    @property
    def width(self) -> int:
        """Number of columns."""
        if self.kind == SettingKind.CUSTOM:
            return self.custom_width
        return _PRESETS[self.kind][0]

    @property
    def height(self) -> int:
        """Number of rows."""
        if self.kind == SettingKind.CUSTOM:
            return self.custom_height
        return _PRESETS[self.kind][1]

    @property
    def mine_count(self) -> int:
        """Total mines to place."""
        if self.kind == SettingKind.CUSTOM:
            return self.custom_mine_count
        return _PRESETS[self.kind][2]

    @property
    def num_cells(self) -> int:
        return self.width * self.height

    def validate(self) -> bool:
        """
        Check whether this setting can be played.

        Presets are always valid. A custom setting needs at least two
        columns and two rows, and between one mine and one fewer mine
        than there are cells.

        Returns:
            True if the setting is playable, False otherwise.
        """
        if self.kind != SettingKind.CUSTOM:
            return True
        if self.custom_width <= 1 or self.custom_height <= 1:
            return False
        return 1 <= self.custom_mine_count < self.custom_width * self.custom_height

    def __str__(self) -> str:
        return (
            f"{self.kind.name.lower()} "
            f"({self.width}x{self.height}, {self.mine_count} mines)"
        )


# Preset difficulty levels
EASY = GameSetting.easy()
MEDIUM = GameSetting.medium()
HARD = GameSetting.hard()
