"""
Minesweeper game state controller.

Wraps the board engine with session state, pure transitions and a
thread-safe dispatcher.
"""
from .session import GameSession, build_session, clamp_selection, random_selection
from .actions import (
    NewGame,
    Reveal,
    ToggleFlag,
    SetSelection,
    Tick,
    SeedMines,
    new_game,
    reveal,
    toggle_flag,
    set_selection,
    tick,
    seed_mines,
    reduce,
)
from .game import GameController, Ticker
from .environment import MinesweeperEnv

__all__ = [
    "GameSession",
    "build_session",
    "clamp_selection",
    "random_selection",
    "NewGame",
    "Reveal",
    "ToggleFlag",
    "SetSelection",
    "Tick",
    "SeedMines",
    "new_game",
    "reveal",
    "toggle_flag",
    "set_selection",
    "tick",
    "seed_mines",
    "reduce",
    "GameController",
    "Ticker",
    "MinesweeperEnv",
]
