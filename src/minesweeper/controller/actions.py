"""
State transitions for Minesweeper sessions.

Every transition is a pure function (session, ...) -> session. When an
action has no effect the very same session object is returned, so callers
can detect no-ops with an identity check.
"""
import logging
from dataclasses import dataclass, field, replace
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np

from ..engine import (
    MINE,
    DifficultyTable,
    STANDARD,
    build_from_mines,
    check_flags_win,
    check_win,
    create_empty,
    place_mines,
    reveal_flood,
)

from .session import GameSession, build_session, clamp_selection, end_game

logger = logging.getLogger(__name__)


# ============================================================================
# Transitions
# ============================================================================

def new_game(
    difficulty: object,
    table: DifficultyTable = STANDARD,
    reset_id: int = 0,
    selection: Optional[Tuple[int, int]] = None,
    rng: Optional[np.random.Generator] = None,
) -> GameSession:
    """Start a fresh session; see build_session."""
    return build_session(difficulty, table, reset_id, selection, rng)


def reveal(
    session: GameSession,
    row: int,
    col: int,
    rng: Optional[np.random.Generator] = None,
) -> GameSession:
    """
    Reveal a cell.

    On the first reveal, mines are placed around the target so the
    first click is always safe. Hitting a mine loses the game; revealing
    the last safe cell wins it.

    Args:
        session: Current session.
        row: Row index to reveal.
        col: Column index to reveal.
        rng: Random generator used for mine placement.

    Returns:
        The next session, or the same session when the reveal is a no-op.
    """
    if not _can_reveal(session, row, col):
        return session

    board = session.board
    changes = {}
    if session.first_click:
        board = place_mines(session.config, row, col, rng)
        changes.update(board=board, first_click=False, is_running=True)

    if board[row, col] == MINE:
        revealed = np.array(session.revealed, copy=True)
        revealed[row, col] = True
        return end_game(session.update(**changes), False, board, revealed)

    revealed = reveal_flood(
        session.config, session.flagged, board, session.revealed, row, col
    )
    next_session = session.update(revealed=revealed, **changes)

    if check_win(session.config, revealed, board):
        return end_game(next_session, True, board, revealed)
    return next_session


def _can_reveal(session: GameSession, row: int, col: int) -> bool:
    """Check if a cell can be revealed."""
    if session.game_over:
        return False
    if not session.config.in_bounds(row, col):
        return False
    return not (session.flagged[row, col] or session.revealed[row, col])


def toggle_flag(session: GameSession, row: int, col: int) -> GameSession:
    """
    Toggle flag on a cell.

    A flag placed before the first reveal starts the timer but does not
    place mines. After toggling, a session whose flags cover exactly the
    mines is won.

    Returns:
        The next session, or the same session when the toggle is a no-op.
    """
    if session.game_over:
        return session
    if not session.config.in_bounds(row, col):
        return session
    if session.revealed[row, col]:
        return session

    flagged = np.array(session.flagged, copy=True)
    currently_flagged = bool(flagged[row, col])
    flagged[row, col] = not currently_flagged
    next_session = session.update(
        flagged=flagged,
        flag_count=session.flag_count + (-1 if currently_flagged else 1),
        is_running=True,
    )

    if check_flags_win(
        session.config, session.first_click, flagged, session.board
    ):
        return end_game(next_session, True, session.board, session.revealed)
    return next_session


def set_selection(session: GameSession, row: int, col: int) -> GameSession:
    """Move the keyboard cursor, clamped to the board."""
    row, col = clamp_selection(session.config, row, col)
    if (row, col) == (session.selected_row, session.selected_col):
        return session
    return session.update(selected_row=row, selected_col=col)


def tick(session: GameSession) -> GameSession:
    """Advance the timer by one second while the game is running."""
    if not session.is_running or session.game_over:
        return session
    return session.update(timer=session.timer + 1)


def seed_mines(
    session: GameSession, mines: Iterable[Sequence[int]]
) -> GameSession:
    """
    Replace the board with mines at fixed positions.

    Clears reveals, flags and the timer and leaves the session ready for
    play with first_click already consumed. Out-of-bounds positions are
    ignored and duplicates collapse, and the session's mine count becomes
    the number of mines actually placed.

    Raises:
        ValueError: If the positions cover every cell of the board.
    """
    board = build_from_mines(session.config, mines if mines is not None else [])
    placed = int((board == MINE).sum())
    config = replace(session.config, mines=placed)
    _, revealed, flagged = create_empty(config)
    logger.debug("Seeded game #%d with %d mines", session.reset_id, placed)
    return session.update(
        config=config,
        board=board,
        revealed=revealed,
        flagged=flagged,
        first_click=False,
        is_running=False,
        game_over=False,
        game_won=False,
        score=None,
        timer=0,
        flag_count=0,
    )


# ============================================================================
# Actions
# ============================================================================

@dataclass(frozen=True)
class NewGame:
    """Start a new session; keeps the current tier when difficulty is None."""

    difficulty: Optional[str] = None


@dataclass(frozen=True)
class Reveal:
    row: int
    col: int


@dataclass(frozen=True)
class ToggleFlag:
    row: int
    col: int


@dataclass(frozen=True)
class SetSelection:
    row: int
    col: int


@dataclass(frozen=True)
class Tick:
    pass


@dataclass(frozen=True)
class SeedMines:
    mines: Tuple[Tuple[int, int], ...] = field(default_factory=tuple)


def reduce(
    session: GameSession,
    action: object,
    table: DifficultyTable = STANDARD,
    rng: Optional[np.random.Generator] = None,
) -> GameSession:
    """
    Apply an action to a session.

    Args:
        session: Current session.
        action: One of NewGame, Reveal, ToggleFlag, SetSelection, Tick,
            SeedMines.
        table: Difficulty table used by NewGame.
        rng: Random generator for mine placement and the initial cursor.

    Raises:
        TypeError: If the action type is unknown.
    """
    if isinstance(action, NewGame):
        difficulty = action.difficulty or session.difficulty
        return new_game(difficulty, table, session.reset_id + 1, rng=rng)
    if isinstance(action, Reveal):
        return reveal(session, action.row, action.col, rng)
    if isinstance(action, ToggleFlag):
        return toggle_flag(session, action.row, action.col)
    if isinstance(action, SetSelection):
        return set_selection(session, action.row, action.col)
    if isinstance(action, Tick):
        return tick(session)
    if isinstance(action, SeedMines):
        return seed_mines(session, action.mines)
    raise TypeError(f"Unknown action: {action!r}")
