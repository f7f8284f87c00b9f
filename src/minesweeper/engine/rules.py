"""
Win and loss evaluation for Minesweeper.
"""
from typing import Optional

import numpy as np

from .board import MINE
from .config import DifficultyConfig


# ============================================================================
# Win Checks
# ============================================================================

def check_win(
    config: DifficultyConfig,
    revealed: np.ndarray,
    board: Optional[np.ndarray] = None,
) -> bool:
    """
    Check if every non-mine cell has been revealed.

    Args:
        config: Board configuration.
        revealed: Revealed mask.
        board: Board used to leave revealed mines out of the count. When
            omitted, every revealed cell counts.

    Returns:
        True if the revealed safe cells equal rows * cols - mines.
    """
    revealed = np.asarray(revealed, dtype=bool)
    if board is not None:
        revealed = revealed & (np.asarray(board) != MINE)
    return int(revealed.sum()) == config.safe_cells


def check_flags_win(
    config: DifficultyConfig,
    first_click: bool,
    flagged: np.ndarray,
    board: np.ndarray,
) -> bool:
    """
    Check if exactly the set of mines has been flagged.

    Returns False before mines are placed, when any flag sits on a safe
    cell, or when fewer flags than mines are placed.
    """
    if first_click:
        return False
    flagged = np.asarray(flagged, dtype=bool)
    if np.any(flagged & (np.asarray(board) != MINE)):
        return False
    return int(flagged.sum()) == config.mines


# ============================================================================
# End-of-game Reveals
# ============================================================================

def reveal_all(revealed: np.ndarray) -> np.ndarray:
    """Revealed mask for a won game: every cell."""
    return np.ones_like(revealed, dtype=bool)


def reveal_mines(revealed: np.ndarray, board: np.ndarray) -> np.ndarray:
    """Revealed mask for a lost game: current reveals plus every mine."""
    return np.asarray(revealed, dtype=bool) | (np.asarray(board) == MINE)


# ============================================================================
# Scoring
# ============================================================================

def client_score(config: DifficultyConfig, timer: int) -> float:
    """
    Score shown on the win screen.

    Larger boards and faster times score higher, ranking games the same
    way as total_cells / seconds_taken.
    """
    return round(1000.0 * config.total_cells / max(timer, 1), 2)
