"""
Cell module for Minesweeper game.

Represents the state of individual cells on the mine field and the
overall result of a game.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import List


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    UNREVEALED = auto()
    REVEALED = auto()
    FLAGGED = auto()
    # End-of-game states, only produced after a mine is revealed
    MINE = auto()
    EXPLODED_MINE = auto()
    CORRECTLY_FLAGGED = auto()
    INCORRECTLY_FLAGGED = auto()


class GameResult(Enum):
    """Possible results of a game."""

    PLAYING = auto()
    WIN = auto()
    LOSE = auto()


_OBSERVATIONS = {
    CellState.UNREVEALED: -1,
    CellState.FLAGGED: -2,
    CellState.MINE: 9,
    CellState.EXPLODED_MINE: 10,
    CellState.CORRECTLY_FLAGGED: 11,
    CellState.INCORRECTLY_FLAGGED: 12,
}

_CHARS = {
    CellState.UNREVEALED: ".",
    CellState.FLAGGED: "F",
    CellState.MINE: "*",
    CellState.EXPLODED_MINE: "X",
    CellState.CORRECTLY_FLAGGED: "+",
    CellState.INCORRECTLY_FLAGGED: "x",
}


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass(frozen=True)
class Cell:
    """
    State of a single cell in the Minesweeper grid.

    Attributes:
        state: Current visual state.
        adjacent_mines: Count of mines in neighboring cells (0-8). Only
            meaningful when ``state`` is ``CellState.REVEALED``.
    """

    state: CellState = CellState.UNREVEALED
    adjacent_mines: int = 0

    @classmethod
    def revealed(cls, adjacent_mines: int) -> "Cell":
        """
        Create a revealed cell.

        Args:
            adjacent_mines: Number of neighboring mines.

        Raises:
            ValueError: If the count is outside 0-8.
        """
        if not 0 <= adjacent_mines <= 8:
            raise ValueError(f"Invalid adjacent mine count: {adjacent_mines}")
        return cls(CellState.REVEALED, adjacent_mines)

    @property
    def is_unrevealed(self) -> bool:
        """Check if cell is unrevealed."""
        return self.state == CellState.UNREVEALED

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    def to_observation(self) -> int:
        """
        Convert cell to observation value for agents.

        Returns:
            -1: Unrevealed cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Mine exposed after a loss
            10: The mine that was clicked
            11: Flag that was on a mine
            12: Flag that was not on a mine
        """
        if self.state == CellState.REVEALED:
            return self.adjacent_mines
        return _OBSERVATIONS[self.state]

    def to_char(self) -> str:
        """Single character used by text renderings."""
        if self.state == CellState.REVEALED:
            return str(self.adjacent_mines) if self.adjacent_mines else " "
        return _CHARS[self.state]


UNREVEALED = Cell(CellState.UNREVEALED)
FLAGGED = Cell(CellState.FLAGGED)
MINE = Cell(CellState.MINE)
EXPLODED_MINE = Cell(CellState.EXPLODED_MINE)
CORRECTLY_FLAGGED = Cell(CellState.CORRECTLY_FLAGGED)
INCORRECTLY_FLAGGED = Cell(CellState.INCORRECTLY_FLAGGED)

# Row-major list of cells, index = y * width + x
MineField = List[Cell]
