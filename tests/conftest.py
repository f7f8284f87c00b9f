"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

import numpy as np

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper.engine import DifficultyConfig, DifficultyTable, STANDARD, TEST
from minesweeper.controller import GameController, GameSession, new_game, seed_mines


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def beginner_config() -> DifficultyConfig:
    """Beginner difficulty configuration."""
    return DifficultyConfig(9, 9, 10)


@pytest.fixture
def single_mine_config() -> DifficultyConfig:
    """A 3x3 board with one mine."""
    return DifficultyConfig(3, 3, 1)


@pytest.fixture
def mine_free_config() -> DifficultyConfig:
    """A 5x5 board with no mines for flood testing."""
    return DifficultyConfig(5, 5, 0)


@pytest.fixture
def single_mine_table(single_mine_config: DifficultyConfig) -> DifficultyTable:
    """Table where every tier is a 3x3 board with one mine."""
    return DifficultyTable(
        "single",
        {
            "easy": single_mine_config,
            "medium": single_mine_config,
            "hard": single_mine_config,
        },
    )


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded random generator."""
    return np.random.default_rng(1234)


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def fresh_session(rng: np.random.Generator) -> GameSession:
    """New standard easy (9x9, 10 mines) session."""
    return new_game("easy", STANDARD, rng=rng)


@pytest.fixture
def corner_mines_session() -> GameSession:
    """3x3 test session with mines at (0, 0) and (2, 2)."""
    session = new_game("easy", TEST, selection=(0, 0))
    return seed_mines(session, [(0, 0), (2, 2)])


@pytest.fixture
def center_mine_session(single_mine_table: DifficultyTable) -> GameSession:
    """3x3 session with a single mine at (1, 1)."""
    session = new_game("easy", single_mine_table, selection=(0, 0))
    return seed_mines(session, [(1, 1)])


@pytest.fixture
def controller() -> GameController:
    """Controller on the test tiers with a fixed seed."""
    return GameController("easy", TEST, seed=7)
