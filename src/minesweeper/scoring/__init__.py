"""
Scoring contract shared with the scoring backend.
"""
from .runs import (
    RunResult,
    RunSubmission,
    build_mode_string,
    compute_score_numeric,
    mode_for_session,
)

__all__ = [
    "RunResult",
    "RunSubmission",
    "build_mode_string",
    "compute_score_numeric",
    "mode_for_session",
]
