"""
Reveal propagation for Minesweeper.

Flood-opens contiguous zero-count regions starting from a cell.
"""
import logging

import numpy as np

from .board import neighbors
from .config import DifficultyConfig

logger = logging.getLogger(__name__)


def reveal_flood(
    config: DifficultyConfig,
    flagged: np.ndarray,
    board: np.ndarray,
    revealed: np.ndarray,
    row: int,
    col: int,
) -> np.ndarray:
    """
    Reveal a cell and flood through neighboring empty cells.

    Cells with a count of 0 open all their neighbors; numbered cells are
    revealed but stop the flood. Flagged cells are never revealed and
    block the flood. The caller's revealed matrix is left untouched.

    Args:
        config: Board configuration.
        flagged: Flag mask.
        board: Board with mines and adjacency counts.
        revealed: Current revealed mask.
        row: Row index to start from.
        col: Column index to start from.

    Returns:
        New revealed mask. Equal to the input when the start cell is out of
        bounds, already revealed, or flagged.
    """
    result = np.array(revealed, dtype=bool, copy=True)
    if not config.in_bounds(row, col) or result[row, col] or flagged[row, col]:
        return result

    stack = [(row, col)]
    opened = 0
    while stack:
        current_row, current_col = stack.pop()
        if result[current_row, current_col] or flagged[current_row, current_col]:
            continue
        result[current_row, current_col] = True
        opened += 1

        if board[current_row, current_col] == 0:
            for neighbor_row, neighbor_col in neighbors(config, current_row, current_col):
                if not result[neighbor_row, neighbor_col]:
                    stack.append((neighbor_row, neighbor_col))

    logger.debug("Flood from (%d, %d) opened %d cells", row, col, opened)
    return result
