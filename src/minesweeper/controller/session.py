"""
Game session state for Minesweeper.

A GameSession is an immutable snapshot of one game. Transitions build
new sessions with dataclasses.replace; matrices held by a session are
read-only so two snapshots can safely share an unchanged matrix.
"""
import logging
from dataclasses import dataclass, replace
from typing import Optional, Tuple

import numpy as np

from ..engine import (
    Difficulty,
    DifficultyConfig,
    DifficultyTable,
    STANDARD,
    client_score,
    create_empty,
    reveal_all,
    reveal_mines,
)

logger = logging.getLogger(__name__)


def freeze(matrix: np.ndarray) -> np.ndarray:
    """Return a read-only copy of a matrix."""
    frozen = np.array(matrix, copy=True)
    frozen.flags.writeable = False
    return frozen


# ============================================================================
# Game Session
# ============================================================================

@dataclass(frozen=True, eq=False)
class GameSession:
    """
    Snapshot of a Minesweeper game.

    Attributes:
        difficulty: Tier name the session was built for.
        config: Board dimensions and mine count.
        board: Mines (-1) and adjacency counts; all zero before first reveal.
        revealed: Revealed mask.
        flagged: Flag mask.
        game_over: Whether the session is terminal.
        game_won: Whether the terminal state is a win.
        score: Win-screen score, None unless won.
        first_click: True until mines are placed.
        timer: Elapsed seconds.
        flag_count: Number of flags currently placed.
        is_running: Whether the timer advances on tick.
        selected_row: Keyboard cursor row.
        selected_col: Keyboard cursor column.
        reset_id: Incremented for every new session.
    """

    difficulty: str
    config: DifficultyConfig
    board: np.ndarray
    revealed: np.ndarray
    flagged: np.ndarray
    game_over: bool = False
    game_won: bool = False
    score: Optional[float] = None
    first_click: bool = True
    timer: int = 0
    flag_count: int = 0
    is_running: bool = False
    selected_row: int = 0
    selected_col: int = 0
    reset_id: int = 0

    @property
    def revealed_count(self) -> int:
        """Number of revealed cells."""
        return int(self.revealed.sum())

    @property
    def mines_left(self) -> int:
        """Mine counter shown to the player (may go negative)."""
        return self.config.mines - self.flag_count

    def update(self, **changes) -> "GameSession":
        """Copy of this session with the given fields changed."""
        for name in ("board", "revealed", "flagged"):
            if name in changes:
                changes[name] = freeze(changes[name])
        return replace(self, **changes)


# ============================================================================
# Selection Cursor
# ============================================================================

def clamp_selection(config: DifficultyConfig, row: int, col: int) -> Tuple[int, int]:
    """Clamp a requested cursor position into the board."""
    row = max(0, min(config.rows - 1, row))
    col = max(0, min(config.cols - 1, col))
    return row, col


def random_selection(
    config: DifficultyConfig, rng: Optional[np.random.Generator] = None
) -> Tuple[int, int]:
    """Pick an initial cursor position within two cells of the center."""
    rng = rng if rng is not None else np.random.default_rng()
    row = config.rows // 2 + int(rng.integers(5)) - 2
    col = config.cols // 2 + int(rng.integers(5)) - 2
    return clamp_selection(config, row, col)


# ============================================================================
# Construction and Terminal States
# ============================================================================

def build_session(
    difficulty: object,
    table: DifficultyTable = STANDARD,
    reset_id: int = 0,
    selection: Optional[Tuple[int, int]] = None,
    rng: Optional[np.random.Generator] = None,
) -> GameSession:
    """
    Build a fresh session for a difficulty tier.

    Args:
        difficulty: Tier name or Difficulty member.
        table: Difficulty table to resolve the tier against.
        reset_id: Identifier of this session.
        selection: Initial cursor; random near the center if omitted.
        rng: Random generator for the initial cursor.

    Raises:
        ValueError: If the tier is unknown.
    """
    config = table.resolve(difficulty)
    name = difficulty.value if isinstance(difficulty, Difficulty) else str(difficulty)
    board, revealed, flagged = create_empty(config)
    if selection is None:
        selected_row, selected_col = random_selection(config, rng)
    else:
        selected_row, selected_col = clamp_selection(config, *selection)

    logger.info(
        "New %s game #%d: %dx%d with %d mines",
        name, reset_id, config.rows, config.cols, config.mines,
    )
    return GameSession(
        difficulty=name,
        config=config,
        board=freeze(board),
        revealed=freeze(revealed),
        flagged=freeze(flagged),
        selected_row=selected_row,
        selected_col=selected_col,
        reset_id=reset_id,
    )


def end_game(
    session: GameSession,
    won: bool,
    board: np.ndarray,
    revealed: np.ndarray,
) -> GameSession:
    """
    Move a session into its terminal state.

    A win reveals every cell and scores the game; a loss reveals every
    mine and leaves the score empty.
    """
    if won:
        final_revealed = reveal_all(revealed)
        score = client_score(session.config, session.timer)
        logger.info(
            "Game #%d won in %ds (score %.2f)", session.reset_id, session.timer, score
        )
    else:
        final_revealed = reveal_mines(revealed, board)
        score = None
        logger.info("Game #%d lost after %ds", session.reset_id, session.timer)

    return session.update(
        board=board,
        revealed=final_revealed,
        game_over=True,
        game_won=won,
        is_running=False,
        score=score,
    )
