"""
Minesweeper board engine.

Pure functions for difficulty lookup, board construction, reveal
propagation and win/loss evaluation.
"""
from .config import (
    Difficulty,
    DifficultyConfig,
    DifficultyTable,
    STANDARD,
    TEST,
    resolve,
)
from .board import (
    MINE,
    build_from_mines,
    count_adjacent,
    create_empty,
    mine_positions,
    neighbors,
    place_mines,
)
from .reveal import reveal_flood
from .rules import (
    check_flags_win,
    check_win,
    client_score,
    reveal_all,
    reveal_mines,
)
from .cell import CellState, CellView, cell_view, observation

__all__ = [
    "Difficulty",
    "DifficultyConfig",
    "DifficultyTable",
    "STANDARD",
    "TEST",
    "resolve",
    "MINE",
    "build_from_mines",
    "count_adjacent",
    "create_empty",
    "mine_positions",
    "neighbors",
    "place_mines",
    "reveal_flood",
    "check_flags_win",
    "check_win",
    "client_score",
    "reveal_all",
    "reveal_mines",
    "CellState",
    "CellView",
    "cell_view",
    "observation",
]
