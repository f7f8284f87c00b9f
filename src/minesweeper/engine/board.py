"""
Board construction for Minesweeper.

Builds empty grids, places mines (randomly around a safe zone or from an
explicit list) and computes adjacency counts. Every function returns new
numpy arrays and never keeps a reference to its inputs.
"""
import logging
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .config import DifficultyConfig

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

MINE = -1
BOARD_DTYPE = np.int8

Position = Tuple[int, int]


# ============================================================================
# Neighbor Utilities (Low-level)
# ============================================================================

def neighbors(config: DifficultyConfig, row: int, col: int) -> List[Position]:
    """
    Get valid neighboring cell positions.

    Args:
        config: Board configuration.
        row: Row index of center cell.
        col: Column index of center cell.

    Returns:
        List of (row, col) tuples for valid neighbors.
    """
    result = []
    for delta_row in (-1, 0, 1):
        for delta_col in (-1, 0, 1):
            if delta_row == 0 and delta_col == 0:
                continue
            new_row = row + delta_row
            new_col = col + delta_col
            if config.in_bounds(new_row, new_col):
                result.append((new_row, new_col))
    return result


def safe_zone(config: DifficultyConfig, row: int, col: int) -> List[Position]:
    """The clicked cell plus its in-bounds neighbors."""
    return [(row, col)] + neighbors(config, row, col)


# ============================================================================
# Grid Initialization
# ============================================================================

def create_empty(
    config: DifficultyConfig,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Create an empty board with matching revealed and flagged matrices.

    Returns:
        Tuple of (board, revealed, flagged) where board is all zeros and
        both masks are all False.
    """
    board = np.zeros(config.shape, dtype=BOARD_DTYPE)
    revealed = np.zeros(config.shape, dtype=bool)
    flagged = np.zeros(config.shape, dtype=bool)
    return board, revealed, flagged


def count_adjacent(board: np.ndarray) -> np.ndarray:
    """
    Recompute adjacency counts for every non-mine cell.

    Args:
        board: Matrix where MINE marks a mine; other values are ignored.

    Returns:
        New board with mines kept and every other cell set to the number
        of mines among its 8-connected neighbors.
    """
    mines = (np.asarray(board) == MINE).astype(BOARD_DTYPE)
    rows, cols = mines.shape
    # Zero border lets every cell sum its 3x3 window without clipping.
    padded = np.pad(mines, 1)
    counts = np.zeros((rows, cols), dtype=BOARD_DTYPE)
    for delta_row in (-1, 0, 1):
        for delta_col in (-1, 0, 1):
            if delta_row == 0 and delta_col == 0:
                continue
            counts += padded[
                1 + delta_row: 1 + delta_row + rows,
                1 + delta_col: 1 + delta_col + cols,
            ]
    return np.where(mines == 1, BOARD_DTYPE(MINE), counts).astype(BOARD_DTYPE)


# ============================================================================
# Mine Placement
# ============================================================================

def place_mines(
    config: DifficultyConfig,
    exclude_row: int,
    exclude_col: int,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """
    Place mines randomly, keeping the 3x3 area around a cell mine-free.

    Uses rejection sampling: random cells are drawn until config.mines
    distinct cells outside the excluded area have been accepted. Each
    accepted mine bumps the counters of its non-mine neighbors.

    When the board is too small for the full safe zone (fewer free cells
    than mines), only the excluded cell itself is kept safe.

    Args:
        config: Board configuration.
        exclude_row: Row of the first revealed cell.
        exclude_col: Column of the first revealed cell.
        rng: Random generator (a fresh unseeded one by default).

    Returns:
        New board with mines and adjacency counts.
    """
    rng = rng if rng is not None else np.random.default_rng()

    excluded = set(safe_zone(config, exclude_row, exclude_col))
    if config.total_cells - len(excluded) < config.mines:
        logger.warning(
            "Board %dx%d cannot fit %d mines outside the 3x3 safe zone; "
            "keeping only (%d, %d) safe",
            config.rows, config.cols, config.mines, exclude_row, exclude_col,
        )
        excluded = {(exclude_row, exclude_col)}

    board = np.zeros(config.shape, dtype=BOARD_DTYPE)
    placed = 0
    while placed < config.mines:
        row = int(rng.integers(config.rows))
        col = int(rng.integers(config.cols))
        if board[row, col] == MINE or (row, col) in excluded:
            continue
        board[row, col] = MINE
        placed += 1
        for neighbor_row, neighbor_col in neighbors(config, row, col):
            if board[neighbor_row, neighbor_col] != MINE:
                board[neighbor_row, neighbor_col] += 1

    logger.debug(
        "Placed %d mines on %dx%d board around (%d, %d)",
        placed, config.rows, config.cols, exclude_row, exclude_col,
    )
    return board


def build_from_mines(
    config: DifficultyConfig, mines: Iterable[Sequence[int]]
) -> np.ndarray:
    """
    Build a board with mines at exactly the given positions.

    Args:
        config: Board configuration.
        mines: (row, col) pairs. Pairs outside the board are ignored and
            duplicates collapse into one mine.

    Returns:
        New board with mines and adjacency counts.
    """
    board = np.zeros(config.shape, dtype=BOARD_DTYPE)
    ignored = 0
    for row, col in mines:
        if config.in_bounds(row, col):
            board[row, col] = MINE
        else:
            ignored += 1
    if ignored:
        logger.debug("Ignored %d out-of-bounds mine positions", ignored)
    return count_adjacent(board)


def mine_positions(board: np.ndarray) -> List[Position]:
    """List (row, col) positions of every mine on a board."""
    return [(int(row), int(col)) for row, col in np.argwhere(board == MINE)]
