"""
Cell views for Minesweeper.

Describes what a front end should draw for a single cell, derived from
the board, revealed and flagged matrices.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

import numpy as np

from .board import MINE


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


HIDDEN_OBSERVATION = -1
FLAGGED_OBSERVATION = -2
MINE_OBSERVATION = 9


# ============================================================================
# Cell View
# ============================================================================

@dataclass(frozen=True)
class CellView:
    """
    Visible state of a single cell.

    Attributes:
        state: Current visual state (hidden, revealed, or flagged).
        value: Adjacent mine count, or -1 for a mine. None unless revealed.
        selected: Whether the keyboard cursor is on this cell.
    """

    state: CellState = CellState.HIDDEN
    value: Optional[int] = None
    selected: bool = False

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    @property
    def is_mine(self) -> bool:
        """Check if cell is a revealed mine."""
        return self.is_revealed and self.value == MINE

    def to_observation(self) -> int:
        """
        Convert cell to an observation value.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine
        """
        if self.state == CellState.HIDDEN:
            return HIDDEN_OBSERVATION
        if self.state == CellState.FLAGGED:
            return FLAGGED_OBSERVATION
        if self.value == MINE:
            return MINE_OBSERVATION
        return int(self.value)


def cell_view(
    board: np.ndarray,
    revealed: np.ndarray,
    flagged: np.ndarray,
    row: int,
    col: int,
    selected: bool = False,
) -> CellView:
    """
    Build the view of one cell.

    A revealed cell shows its value even if it was flagged before a
    forced end-of-game reveal.

    Raises:
        IndexError: If (row, col) is outside the board.
    """
    rows, cols = np.shape(board)
    if not (0 <= row < rows and 0 <= col < cols):
        raise IndexError(f"Cell ({row}, {col}) is outside a {rows}x{cols} board")

    if revealed[row, col]:
        return CellView(CellState.REVEALED, int(board[row, col]), selected)
    if flagged[row, col]:
        return CellView(CellState.FLAGGED, None, selected)
    return CellView(CellState.HIDDEN, None, selected)


def observation(
    board: np.ndarray, revealed: np.ndarray, flagged: np.ndarray
) -> np.ndarray:
    """
    Get board state as a numpy array.

    Returns:
        2D int8 array where:
            -1 = hidden
            -2 = flagged
            0-8 = revealed with adjacent count
            9 = revealed mine
    """
    board = np.asarray(board)
    obs = np.full(board.shape, HIDDEN_OBSERVATION, dtype=np.int8)
    obs[np.asarray(flagged, dtype=bool)] = FLAGGED_OBSERVATION
    revealed = np.asarray(revealed, dtype=bool)
    obs[revealed] = board[revealed]
    obs[revealed & (board == MINE)] = MINE_OBSERVATION
    return obs
