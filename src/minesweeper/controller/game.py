"""
Game controller for Minesweeper.

Owns the current session, serializes every transition behind a lock and
notifies listeners about new sessions. A Ticker drives the one-second
timer from a background thread.
"""
import logging
import threading
from typing import Callable, Iterable, List, Optional, Sequence

import numpy as np

from ..engine import (
    CellView,
    Difficulty,
    DifficultyTable,
    STANDARD,
    cell_view,
    observation,
)

from .actions import (
    NewGame,
    Reveal,
    SeedMines,
    SetSelection,
    Tick,
    ToggleFlag,
    reduce,
)
from .session import GameSession, build_session

logger = logging.getLogger(__name__)

Listener = Callable[[GameSession], None]


# ============================================================================
# Game Controller
# ============================================================================

class GameController:
    """
    Single owner of a Minesweeper session.

    All mutations go through dispatch(), which applies the pure
    transition under a lock and then notifies listeners outside it.
    Listeners subscribed with on_game_over are called once for every
    session that becomes terminal (e.g. to submit a score).
    """

    def __init__(
        self,
        difficulty: object = Difficulty.EASY,
        table: DifficultyTable = STANDARD,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        """
        Initialize the controller with a fresh session.

        Args:
            difficulty: Initial tier.
            table: Difficulty table for every session of this controller.
            seed: Seed for the random generator (ignored if rng is given).
            rng: Random generator for mine placement and cursor start.
        """
        self.table = table
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self._lock = threading.RLock()
        self._listeners: List[Listener] = []
        self._game_over_listeners: List[Listener] = []
        self._session = build_session(difficulty, table, 0, rng=self.rng)

    @property
    def session(self) -> GameSession:
        """Current session."""
        with self._lock:
            return self._session

    # ========================================================================
    # Listeners
    # ========================================================================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Call listener with every new session.

        Returns:
            Function that removes the listener.
        """
        with self._lock:
            self._listeners.append(listener)
        return lambda: self._remove(self._listeners, listener)

    def on_game_over(self, listener: Listener) -> Callable[[], None]:
        """Call listener once when a session becomes terminal."""
        with self._lock:
            self._game_over_listeners.append(listener)
        return lambda: self._remove(self._game_over_listeners, listener)

    def _remove(self, listeners: List[Listener], listener: Listener) -> None:
        with self._lock:
            if listener in listeners:
                listeners.remove(listener)

    def _notify(self, listeners: Iterable[Listener], session: GameSession) -> None:
        for listener in listeners:
            try:
                listener(session)
            except Exception:
                logger.exception("Listener %r failed", listener)

    # ========================================================================
    # Actions
    # ========================================================================

    def dispatch(self, action: object) -> GameSession:
        """
        Apply an action to the current session.

        Returns:
            The session after the action.

        Raises:
            TypeError: If the action type is unknown.
        """
        with self._lock:
            previous = self._session
            current = reduce(previous, action, self.table, self.rng)
            self._session = current
            listeners = list(self._listeners)
            finished = current.game_over and not previous.game_over
            game_over_listeners = list(self._game_over_listeners) if finished else []

        if current is not previous:
            self._notify(listeners, current)
            self._notify(game_over_listeners, current)
        return current

    def new_game(self, difficulty: Optional[object] = None) -> GameSession:
        """Start a new session, keeping the current tier if none is given."""
        if isinstance(difficulty, Difficulty):
            difficulty = difficulty.value
        return self.dispatch(NewGame(difficulty))

    def reveal(self, row: int, col: int) -> GameSession:
        return self.dispatch(Reveal(row, col))

    def toggle_flag(self, row: int, col: int) -> GameSession:
        return self.dispatch(ToggleFlag(row, col))

    def set_selection(self, row: int, col: int) -> GameSession:
        return self.dispatch(SetSelection(row, col))

    def move_selection(self, delta_row: int, delta_col: int) -> GameSession:
        """Move the cursor relative to its current position."""
        session = self.session
        return self.dispatch(
            SetSelection(session.selected_row + delta_row, session.selected_col + delta_col)
        )

    def tick(self) -> GameSession:
        return self.dispatch(Tick())

    def seed_mines(self, mines: Iterable[Sequence[int]]) -> GameSession:
        """Replace the board with mines at fixed positions."""
        return self.dispatch(SeedMines(tuple(tuple(pos) for pos in mines)))

    # ========================================================================
    # Views
    # ========================================================================

    def cell(self, row: int, col: int) -> CellView:
        """View of one cell of the current session."""
        session = self.session
        selected = (row, col) == (session.selected_row, session.selected_col)
        return cell_view(
            session.board, session.revealed, session.flagged, row, col, selected
        )

    def observation(self) -> np.ndarray:
        """Observation matrix of the current session."""
        session = self.session
        return observation(session.board, session.revealed, session.flagged)


# ============================================================================
# Ticker
# ============================================================================

class Ticker:
    """
    Background thread that ticks a controller at a fixed interval.

    The ticker stops by itself once the session it was started for has
    ended or has been replaced by a new game.
    """

    def __init__(self, controller: GameController, interval: float = 1.0) -> None:
        if interval <= 0:
            raise ValueError("Tick interval must be positive")
        self.controller = controller
        self.interval = interval
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._reset_id: Optional[int] = None

    @property
    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> "Ticker":
        """Start ticking the controller's current session."""
        if self.is_alive:
            return self
        self._stop.clear()
        self._reset_id = self.controller.session.reset_id
        self._thread = threading.Thread(
            target=self._run, name="minesweeper-ticker", daemon=True
        )
        self._thread.start()
        return self

    def stop(self, timeout: Optional[float] = None) -> None:
        """Stop ticking and wait for the thread to exit."""
        self._stop.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout)

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            session = self.controller.session
            if session.reset_id != self._reset_id or session.game_over:
                logger.debug("Ticker for game #%s finished", self._reset_id)
                break
            self.controller.tick()
