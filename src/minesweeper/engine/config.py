"""
Difficulty configuration for the Minesweeper board engine.

Defines board dimensions per difficulty tier and the tables that map
tier names to configurations.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, Mapping, Union


# ============================================================================
# Constants
# ============================================================================

class Difficulty(str, Enum):
    """Known difficulty tiers."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class DifficultyConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        mines: Total mines to place.
    """

    rows: int = 9
    cols: int = 9
    mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < 1 or self.cols < 1:
            raise ValueError("Board dimensions must be positive")
        if self.mines < 0:
            raise ValueError("Number of mines cannot be negative")
        max_mines = self.rows * self.cols - 1
        if self.mines > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        """Number of cells on the board."""
        return self.rows * self.cols

    @property
    def safe_cells(self) -> int:
        """Number of cells that do not hold a mine."""
        return self.total_cells - self.mines

    @property
    def shape(self) -> tuple:
        """Matrix shape as (rows, cols)."""
        return (self.rows, self.cols)

    def in_bounds(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.rows and 0 <= col < self.cols


# ============================================================================
# Difficulty Tables
# ============================================================================

TierName = Union[str, Difficulty]


@dataclass(frozen=True)
class DifficultyTable:
    """
    Named set of difficulty tiers.

    Two tables ship with the engine: the standard one and a reduced one
    with tiny boards for automated tests. The table is chosen by whoever
    builds a controller, never by the engine itself.
    """

    name: str
    tiers: Mapping[str, DifficultyConfig] = field(default_factory=dict)

    def __post_init__(self) -> None:
        missing = [tier.value for tier in Difficulty if tier.value not in self.tiers]
        if missing:
            raise ValueError(f"Table {self.name!r} is missing tiers: {missing}")

    def __iter__(self) -> Iterator[str]:
        return iter(self.tiers)

    def __contains__(self, tier: object) -> bool:
        return _tier_key(tier) in self.tiers

    def resolve(self, tier: TierName) -> DifficultyConfig:
        """
        Look up the configuration for a tier.

        Args:
            tier: Tier name or Difficulty member.

        Returns:
            The tier's DifficultyConfig.

        Raises:
            ValueError: If the tier is unknown.
        """
        key = _tier_key(tier)
        try:
            return self.tiers[key]
        except KeyError:
            raise ValueError(
                f"Unknown difficulty {tier!r} (expected one of {sorted(self.tiers)})"
            ) from None


def _tier_key(tier: object) -> str:
    if isinstance(tier, Difficulty):
        return tier.value
    return tier if isinstance(tier, str) else repr(tier)


STANDARD_TIERS: Dict[str, DifficultyConfig] = {
    Difficulty.EASY.value: DifficultyConfig(9, 9, 10),
    Difficulty.MEDIUM.value: DifficultyConfig(16, 16, 40),
    Difficulty.HARD.value: DifficultyConfig(16, 30, 99),
}

TEST_TIERS: Dict[str, DifficultyConfig] = {
    Difficulty.EASY.value: DifficultyConfig(3, 3, 2),
    Difficulty.MEDIUM.value: DifficultyConfig(4, 4, 3),
    Difficulty.HARD.value: DifficultyConfig(5, 5, 4),
}

STANDARD = DifficultyTable("standard", STANDARD_TIERS)
TEST = DifficultyTable("test", TEST_TIERS)


def resolve(tier: TierName, table: DifficultyTable = STANDARD) -> DifficultyConfig:
    """Resolve a tier name against a difficulty table (standard by default)."""
    return table.resolve(tier)
