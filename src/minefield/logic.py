"""
Game logic module for Minesweeper.

Implements the rules engine: lazy mine placement on the first reveal,
flood-fill revealing, flag toggling, and win/lose detection.
"""
import logging
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Set, Tuple

import numpy as np

from .cell import (
    CORRECTLY_FLAGGED,
    EXPLODED_MINE,
    FLAGGED,
    INCORRECTLY_FLAGGED,
    MINE,
    UNREVEALED,
    Cell,
    CellState,
    GameResult,
    MineField,
)
from .setting import EASY, GameSetting
from .snapshot import GameSnapshot

logger = logging.getLogger(__name__)


# ============================================================================
# Game Logic Class
# ============================================================================

@dataclass(eq=False)
class GameLogic:
    """
    Minesweeper rules engine.

    Owns the current setting, the mine field, the mine positions and
    the game result. Mines are placed on the first reveal so that the
    first revealed cell is never a mine.

    Mutating operations never raise for bad input; they return False
    and leave the game untouched instead.

    Attributes:
        rng: Random generator used for mine placement. Anything with a
            numpy-style ``integers(low, high)`` method works.
    """

    rng: Optional[np.random.Generator] = field(default=None, repr=False)
    _setting: GameSetting = field(default=EASY, init=False)
    _cells: MineField = field(default_factory=list, init=False, repr=False)
    _mine_indexes: Optional[Set[int]] = field(
        default=None, init=False, repr=False
    )
    _to_reveal_cell_num: int = field(default=0, init=False)
    _game_result: GameResult = field(default=GameResult.PLAYING, init=False)

    def __post_init__(self) -> None:
        """Start a game with the default setting."""
        if self.rng is None:
            self.rng = np.random.default_rng()
        self._init_state(self._setting)

    # ========================================================================
    # State Initialization (Low-level)
    # ========================================================================

    def _init_state(self, setting: GameSetting) -> None:
        """Reset every field for a fresh game with the given setting."""
        self._setting = setting
        self._cells = [UNREVEALED] * setting.num_cells
        self._mine_indexes = None
        self._to_reveal_cell_num = setting.num_cells - setting.mine_count
        self._game_result = GameResult.PLAYING

    def _place_mines(self, excluded_index: int) -> None:
        """
        Place mines randomly, keeping one cell mine-free.

        Runs a partial Fisher-Yates shuffle over the dense range of every
        index except the excluded one, then shifts values at or past the
        excluded index up by one.

        Args:
            excluded_index: Index of the cell that triggered placement.
        """
        length = self._setting.num_cells - 1
        mine_count = self._setting.mine_count
        pool = list(range(length))
        for i in range(mine_count):
            j = int(self.rng.integers(i, length))
            pool[i], pool[j] = pool[j], pool[i]

        self._mine_indexes = {
            value + 1 if value >= excluded_index else value
            for value in pool[:mine_count]
        }
        logger.debug(
            "Placed %d mines avoiding index %d", mine_count, excluded_index
        )

    # ========================================================================
    # Grid Utilities (Low-level)
    # ========================================================================

    def grid_to_index(self, x: int, y: int) -> int:
        """Convert (x, y) to a row-major cell index."""
        return y * self._setting.width + x

    def _is_valid_position(self, x: int, y: int) -> bool:
        """Check if position is within grid bounds."""
        return 0 <= x < self._setting.width and 0 <= y < self._setting.height

    def surrounding_cells(self, x: int, y: int) -> List[Tuple[int, int]]:
        """
        Get neighboring cell positions.

        Args:
            x: Column of center cell.
            y: Row of center cell.

        Returns:
            List of up to 8 in-bounds (x, y) tuples, always in the same
            order for the same position.
        """
        neighbors = []
        for delta_x in (-1, 0, 1):
            for delta_y in (-1, 0, 1):
                if delta_x == 0 and delta_y == 0:
                    continue
                new_x = x + delta_x
                new_y = y + delta_y
                if self._is_valid_position(new_x, new_y):
                    neighbors.append((new_x, new_y))
        return neighbors

    def _count_adjacent_mines(self, neighbors: List[Tuple[int, int]]) -> int:
        """Count mines among the given positions."""
        return sum(
            1 for x, y in neighbors
            if self.grid_to_index(x, y) in self._mine_indexes
        )

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def restart(self, setting: Optional[GameSetting] = None) -> bool:
        """
        Start a new game.

        Args:
            setting: Setting for the new game. Reuses the current setting
                when None.

        Returns:
            True if the game was restarted, False if the setting is
            invalid (the current game is then left untouched).
        """
        if setting is None:
            setting = self._setting
        if not setting.validate():
            logger.debug("Rejected invalid setting %s", setting)
            return False
        self._init_state(setting)
        logger.debug("Restarted game with %s", setting)
        return True

    def reveal(self, x: int, y: int) -> bool:
        """
        Reveal a cell at the given position.

        On the first reveal, places mines avoiding this cell. If the cell
        has no adjacent mines, its neighbors are revealed too, spreading
        through the connected zero-count region. If the cell is a mine,
        the game is lost.

        Args:
            x: Column to reveal.
            y: Row to reveal.

        Returns:
            True if the reveal happened, False if the game is over, the
            position is out of bounds, or the cell is not unrevealed.
        """
        if not self._can_reveal(x, y):
            return False

        index = self.grid_to_index(x, y)
        if self._mine_indexes is None:
            self._place_mines(index)

        if index in self._mine_indexes:
            self._on_mine_revealed(index)
            return True

        self._flood_reveal(x, y)
        return True

    def _can_reveal(self, x: int, y: int) -> bool:
        """Check if a cell can be revealed."""
        if self._game_result != GameResult.PLAYING:
            return False
        if not self._is_valid_position(x, y):
            return False
        return self._cells[self.grid_to_index(x, y)].is_unrevealed

    def _flood_reveal(self, x: int, y: int) -> None:
        """
        Reveal a safe cell and spread through zero-count neighbors.

        Uses an explicit stack so large grids stay clear of the
        recursion limit. Neighbors of a zero-count cell are never mines.
        """
        pending = [(x, y)]
        while pending:
            x, y = pending.pop()
            index = self.grid_to_index(x, y)
            if not self._cells[index].is_unrevealed:
                continue

            neighbors = self.surrounding_cells(x, y)
            count = self._count_adjacent_mines(neighbors)
            self._cells[index] = Cell.revealed(count)
            self._to_reveal_cell_num -= 1

            if self._to_reveal_cell_num == 0:
                self._game_result = GameResult.WIN
                logger.debug("Game won")
                return

            if count == 0:
                pending.extend(reversed(neighbors))

    def _on_mine_revealed(self, index: int) -> None:
        """Lose the game and expose mines and flags."""
        self._game_result = GameResult.LOSE
        for i, cell in enumerate(self._cells):
            if i == index:
                self._cells[i] = EXPLODED_MINE
            elif cell.state == CellState.UNREVEALED:
                if i in self._mine_indexes:
                    self._cells[i] = MINE
            elif cell.state == CellState.FLAGGED:
                if i in self._mine_indexes:
                    self._cells[i] = CORRECTLY_FLAGGED
                else:
                    self._cells[i] = INCORRECTLY_FLAGGED
        logger.debug("Game lost on index %d", index)

    def toggle_flag(self, x: int, y: int) -> bool:
        """
        Toggle flag on a cell.

        Only unrevealed and flagged cells change; toggling any other cell
        does nothing but still counts as success.

        Args:
            x: Column.
            y: Row.

        Returns:
            False if the game is over or the position is out of bounds,
            True otherwise.
        """
        if self._game_result != GameResult.PLAYING:
            return False
        if not self._is_valid_position(x, y):
            return False

        index = self.grid_to_index(x, y)
        cell = self._cells[index]
        if cell.state == CellState.UNREVEALED:
            self._cells[index] = FLAGGED
        elif cell.state == CellState.FLAGGED:
            self._cells[index] = UNREVEALED
        return True

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    def snapshot(self) -> GameSnapshot:
        """Get an immutable copy of the setting, cells and result."""
        return GameSnapshot(
            setting=self._setting,
            cells=tuple(self._cells),
            result=self._game_result,
        )

    @property
    def setting(self) -> GameSetting:
        """Get current setting."""
        return self._setting

    @property
    def game_result(self) -> GameResult:
        """Get current game result."""
        return self._game_result

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self._game_result == GameResult.PLAYING

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._game_result == GameResult.WIN

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._game_result == GameResult.LOSE

    @property
    def mines_placed(self) -> bool:
        return self._mine_indexes is not None

    @property
    def mine_indexes(self) -> Optional[FrozenSet[int]]:
        """Get mine cell indexes, or None before the first reveal."""
        if self._mine_indexes is None:
            return None
        return frozenset(self._mine_indexes)

    @property
    def to_reveal_cell_num(self) -> int:
        """Number of safe cells still to reveal."""
        return self._to_reveal_cell_num

    @property
    def flag_count(self) -> int:
        return sum(1 for cell in self._cells if cell.is_flagged)

    def get_cell(self, x: int, y: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self._is_valid_position(x, y):
            return None
        return self._cells[self.grid_to_index(x, y)]

    def get_valid_actions(self) -> List[Tuple[int, int]]:
        """
        Get list of cells that can be revealed.

        Returns:
            List of (x, y) positions of unrevealed cells, empty once the
            game is over.
        """
        if self._game_result != GameResult.PLAYING:
            return []
        width = self._setting.width
        return [
            (index % width, index // width)
            for index, cell in enumerate(self._cells)
            if cell.is_unrevealed
        ]
