"""
Run submission contract for the scoring backend.

Builds the payload a client sends after a won game and parses the
backend's reply. The backend's score formula lives here too so clients
and tests can predict rankings.
"""
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from ..engine import Difficulty

# Field limits accepted by the backend
MAX_SECONDS = 60 * 60 * 24
MAX_COUNT = 999999
MAX_MODE_LENGTH = 100
MAX_PLATFORM_LENGTH = 50
MAX_VERSION_LENGTH = 50


def compute_score_numeric(total_cells: int, seconds_taken: int) -> float:
    """
    Ranked score of a run: bigger boards in less time score higher.

    Raises:
        ValueError: If seconds_taken is below one.
    """
    if seconds_taken < 1:
        raise ValueError("seconds_taken must be at least 1")
    return total_cells / seconds_taken


def build_mode_string(difficulty: object, rows: int, cols: int, mines: int) -> str:
    """Leaderboard key for a board, e.g. "easy|9x9|10"."""
    if isinstance(difficulty, Difficulty):
        difficulty = difficulty.value
    return f"{difficulty}|{rows}x{cols}|{mines}"


def mode_for_session(session) -> str:
    """Leaderboard key for a session's tier and board."""
    config = session.config
    return build_mode_string(session.difficulty, config.rows, config.cols, config.mines)


@dataclass(frozen=True)
class RunSubmission:
    """
    A finished run as submitted to the scoring backend.

    Attributes:
        mode: Leaderboard key (see build_mode_string).
        seconds_taken: Time to win, at least one second.
        bombs_marked: Flags placed when the game ended.
        total_cells: Cells on the board.
        client_platform: Platform name such as "web" or "desktop".
        client_version: Optional client version string.
    """

    mode: str
    seconds_taken: int
    bombs_marked: int
    total_cells: int
    client_platform: str
    client_version: Optional[str] = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Ensure every field is within the backend's limits."""
        if not 1 <= len(self.mode) <= MAX_MODE_LENGTH:
            raise ValueError(f"mode must be 1-{MAX_MODE_LENGTH} characters")
        if not 1 <= self.seconds_taken <= MAX_SECONDS:
            raise ValueError(f"seconds_taken must be between 1 and {MAX_SECONDS}")
        if not 0 <= self.bombs_marked <= MAX_COUNT:
            raise ValueError(f"bombs_marked must be between 0 and {MAX_COUNT}")
        if not 1 <= self.total_cells <= MAX_COUNT:
            raise ValueError(f"total_cells must be between 1 and {MAX_COUNT}")
        if not 1 <= len(self.client_platform) <= MAX_PLATFORM_LENGTH:
            raise ValueError(
                f"client_platform must be 1-{MAX_PLATFORM_LENGTH} characters"
            )
        if self.client_version is not None and len(self.client_version) > MAX_VERSION_LENGTH:
            raise ValueError(
                f"client_version must be at most {MAX_VERSION_LENGTH} characters"
            )

    @property
    def expected_score(self) -> float:
        """Score the backend will compute for this run."""
        return compute_score_numeric(self.total_cells, self.seconds_taken)

    @classmethod
    def from_session(
        cls,
        session,
        client_platform: str,
        client_version: Optional[str] = None,
    ) -> "RunSubmission":
        """
        Build a submission from a won session.

        Raises:
            ValueError: If the session has not been won.
        """
        if not (session.game_over and session.game_won):
            raise ValueError("Only won games can be submitted")
        return cls(
            mode=mode_for_session(session),
            seconds_taken=max(session.timer, 1),
            bombs_marked=session.flag_count,
            total_cells=session.config.total_cells,
            client_platform=client_platform,
            client_version=client_version,
        )

    def to_payload(self) -> Dict[str, Any]:
        """JSON body for the backend."""
        payload: Dict[str, Any] = {
            "mode": self.mode,
            "secondsTaken": self.seconds_taken,
            "bombsMarked": self.bombs_marked,
            "totalCells": self.total_cells,
            "clientPlatform": self.client_platform,
        }
        if self.client_version is not None:
            payload["clientVersion"] = self.client_version
        return payload


@dataclass(frozen=True)
class RunResult:
    """Backend reply to a submission."""

    score: float
    is_pb: bool

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "RunResult":
        """
        Parse the backend's JSON reply.

        Raises:
            ValueError: If score or isPb is missing.
        """
        try:
            return cls(score=float(payload["score"]), is_pb=bool(payload["isPb"]))
        except KeyError as exc:
            raise ValueError(f"Run result is missing {exc.args[0]!r}") from None
