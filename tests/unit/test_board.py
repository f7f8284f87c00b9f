"""
Unit tests for board construction.

Tests empty grids, random mine placement around the safe zone, boards
built from explicit mine lists, and the adjacency invariant.
"""
import numpy as np
import pytest

from minesweeper.engine import (
    MINE,
    DifficultyConfig,
    build_from_mines,
    count_adjacent,
    create_empty,
    mine_positions,
    neighbors,
    place_mines,
)


def brute_force_counts(board: np.ndarray) -> np.ndarray:
    """Adjacency counts computed cell by cell."""
    rows, cols = board.shape
    expected = np.zeros_like(board)
    for row in range(rows):
        for col in range(cols):
            if board[row, col] == MINE:
                expected[row, col] = MINE
                continue
            count = 0
            for r in range(max(0, row - 1), min(rows, row + 2)):
                for c in range(max(0, col - 1), min(cols, col + 2)):
                    if (r, c) != (row, col) and board[r, c] == MINE:
                        count += 1
            expected[row, col] = count
    return expected


# ============================================================================
# Empty Board Tests
# ============================================================================

class TestCreateEmpty:
    """Test empty board creation."""

    def test_shapes_match_config(self) -> None:
        """All matrices should be rows x cols."""
        board, revealed, flagged = create_empty(DifficultyConfig(4, 7, 3))
        assert board.shape == (4, 7)
        assert revealed.shape == (4, 7)
        assert flagged.shape == (4, 7)

    def test_all_zero_and_false(self, beginner_config: DifficultyConfig) -> None:
        """Empty board has no mines and nothing revealed or flagged."""
        board, revealed, flagged = create_empty(beginner_config)
        assert not board.any()
        assert not revealed.any()
        assert not flagged.any()
        assert revealed.dtype == bool


# ============================================================================
# Neighbor Tests
# ============================================================================

class TestNeighbors:
    """Test neighbor enumeration."""

    def test_corner_has_three_neighbors(self, beginner_config: DifficultyConfig) -> None:
        """Corners are clipped to three neighbors."""
        assert sorted(neighbors(beginner_config, 0, 0)) == [(0, 1), (1, 0), (1, 1)]

    def test_edge_has_five_neighbors(self, beginner_config: DifficultyConfig) -> None:
        """Edge cells have five neighbors."""
        assert len(neighbors(beginner_config, 0, 4)) == 5

    def test_center_has_eight_neighbors(self, beginner_config: DifficultyConfig) -> None:
        """Interior cells have eight neighbors, excluding themselves."""
        result = neighbors(beginner_config, 4, 4)
        assert len(result) == 8
        assert (4, 4) not in result


# ============================================================================
# Random Placement Tests
# ============================================================================

class TestPlaceMines:
    """Test random mine placement."""

    def test_places_exact_mine_count(self, beginner_config: DifficultyConfig, rng) -> None:
        """Exactly config.mines mines should be placed."""
        board = place_mines(beginner_config, 4, 4, rng)
        assert int((board == MINE).sum()) == 10

    def test_safe_zone_is_mine_free(self, beginner_config: DifficultyConfig) -> None:
        """No mine lands on or next to the excluded cell."""
        for row in range(beginner_config.rows):
            for col in range(beginner_config.cols):
                rng = np.random.default_rng(row * 100 + col)
                board = place_mines(beginner_config, row, col, rng)
                zone = board[max(0, row - 1): row + 2, max(0, col - 1): col + 2]
                assert not (zone == MINE).any()

    def test_adjacency_counts_are_consistent(self, rng) -> None:
        """Incremental counters match a full recount."""
        config = DifficultyConfig(16, 30, 99)
        for _ in range(10):
            board = place_mines(config, 8, 15, rng)
            np.testing.assert_array_equal(board, brute_force_counts(board))

    def test_dense_board_fills_remaining_cells(self) -> None:
        """A board whose mines fill everything outside the zone terminates."""
        config = DifficultyConfig(4, 4, 12)
        board = place_mines(config, 0, 0, np.random.default_rng(3))
        assert not (board[0:2, 0:2] == MINE).any()
        outside = np.ones((4, 4), dtype=bool)
        outside[0:2, 0:2] = False
        assert (board[outside] == MINE).all()

    def test_small_board_keeps_clicked_cell_safe(self) -> None:
        """When the 3x3 zone covers too much, only the clicked cell stays safe."""
        config = DifficultyConfig(3, 3, 2)
        for seed in range(20):
            board = place_mines(config, 1, 1, np.random.default_rng(seed))
            assert int((board == MINE).sum()) == 2
            assert board[1, 1] != MINE

    def test_same_seed_same_board(self, beginner_config: DifficultyConfig) -> None:
        """Placement is reproducible with a seeded generator."""
        first = place_mines(beginner_config, 0, 0, np.random.default_rng(42))
        second = place_mines(beginner_config, 0, 0, np.random.default_rng(42))
        np.testing.assert_array_equal(first, second)

    def test_default_generator(self, beginner_config: DifficultyConfig) -> None:
        """An unseeded generator is used when none is given."""
        board = place_mines(beginner_config, 4, 4)
        assert int((board == MINE).sum()) == 10


# ============================================================================
# Explicit Placement Tests
# ============================================================================

class TestBuildFromMines:
    """Test deterministic boards."""

    def test_single_center_mine(self, single_mine_config: DifficultyConfig) -> None:
        """Every cell around a center mine counts one."""
        board = build_from_mines(single_mine_config, [(1, 1)])
        expected = np.ones((3, 3), dtype=board.dtype)
        expected[1, 1] = MINE
        np.testing.assert_array_equal(board, expected)

    def test_corner_mines(self) -> None:
        """Two opposite corner mines share the center."""
        board = build_from_mines(DifficultyConfig(3, 3, 2), [(0, 0), (2, 2)])
        expected = np.array([[-1, 1, 0], [1, 2, 1], [0, 1, -1]])
        np.testing.assert_array_equal(board, expected)

    def test_out_of_bounds_positions_ignored(self, single_mine_config: DifficultyConfig) -> None:
        """Bad positions are skipped while the rest are applied."""
        board = build_from_mines(single_mine_config, [(-1, 0), (1, 1), (3, 3), (0, 5)])
        assert mine_positions(board) == [(1, 1)]

    def test_duplicate_positions_collapse(self) -> None:
        """Listing a mine twice places it once."""
        board = build_from_mines(DifficultyConfig(3, 3, 2), [(0, 0), (0, 0)])
        assert mine_positions(board) == [(0, 0)]
        assert board[1, 1] == 1

    def test_empty_list_gives_zero_board(self, single_mine_config: DifficultyConfig) -> None:
        """No mines means every count is zero."""
        assert not build_from_mines(single_mine_config, []).any()


# ============================================================================
# Adjacency Tests
# ============================================================================

class TestCountAdjacent:
    """Test adjacency recomputation."""

    @pytest.mark.parametrize("shape", [(1, 1), (1, 8), (5, 5), (9, 13), (16, 30)])
    def test_matches_brute_force(self, shape: tuple, rng) -> None:
        """Counts match a cell-by-cell recount for random layouts."""
        for density in (0.0, 0.15, 0.5, 0.9):
            mines = rng.random(shape) < density
            board = np.where(mines, MINE, 0).astype(np.int8)
            np.testing.assert_array_equal(count_adjacent(board), brute_force_counts(board))

    def test_input_not_modified(self) -> None:
        """The caller's board is left as it was."""
        board = np.zeros((3, 3), dtype=np.int8)
        board[0, 0] = MINE
        before = board.copy()
        result = count_adjacent(board)
        np.testing.assert_array_equal(board, before)
        assert result is not board
