"""
Read-only view of a game, handed to renderers and agents.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .cell import Cell, GameResult
from .setting import GameSetting


@dataclass(frozen=True)
class GameSnapshot:
    """
    Immutable copy of the player-visible game state.

    Attributes:
        setting: Setting of the game.
        cells: Cell states in row-major order (index = y * width + x).
        result: Result of the game at the time of the snapshot.
    """

    setting: GameSetting
    cells: Tuple[Cell, ...]
    result: GameResult

    @property
    def width(self) -> int:
        return self.setting.width

    @property
    def height(self) -> int:
        return self.setting.height

    def cell_at(self, x: int, y: int) -> Optional[Cell]:
        """Get cell at position, or None if out of bounds."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            return None
        return self.cells[y * self.width + x]

    def to_array(self) -> np.ndarray:
        """
        Get the cells as a numpy array.

        Returns:
            int8 array of shape (height, width) holding
            ``Cell.to_observation`` values, indexed ``[y, x]``.
        """
        values = [cell.to_observation() for cell in self.cells]
        return np.array(values, dtype=np.int8).reshape(self.height, self.width)

    def render(self) -> str:
        """Render the cells as text, one line per row."""
        lines = []
        for y in range(self.height):
            row = self.cells[y * self.width:(y + 1) * self.width]
            lines.append(" ".join(cell.to_char() for cell in row))
        return "\n".join(lines)
