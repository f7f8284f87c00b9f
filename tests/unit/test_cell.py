"""
Unit tests for cell views.

Tests view state, observation conversion and the observation matrix.
"""
import numpy as np
import pytest

from minesweeper.engine import CellState, CellView, DifficultyConfig, build_from_mines, cell_view, observation


@pytest.fixture
def matrices():
    """Board with a center mine plus empty reveal and flag masks."""
    board = build_from_mines(DifficultyConfig(3, 3, 1), [(1, 1)])
    revealed = np.zeros((3, 3), dtype=bool)
    flagged = np.zeros((3, 3), dtype=bool)
    return board, revealed, flagged


# ============================================================================
# CellView Tests
# ============================================================================

class TestCellView:
    """Test cell view defaults and predicates."""

    def test_default_view_is_hidden(self) -> None:
        """New view should be hidden with no value."""
        view = CellView()
        assert view.state == CellState.HIDDEN
        assert view.is_hidden is True
        assert view.value is None
        assert view.selected is False

    def test_flagged_view(self) -> None:
        """Flagged view reports flagged only."""
        view = CellView(CellState.FLAGGED)
        assert view.is_flagged is True
        assert view.is_hidden is False
        assert view.is_revealed is False

    def test_revealed_mine_view(self) -> None:
        """A revealed -1 is a mine."""
        view = CellView(CellState.REVEALED, -1)
        assert view.is_mine is True

    def test_hidden_view_is_never_a_mine(self) -> None:
        """Hidden cells do not leak mines."""
        assert CellView(CellState.HIDDEN).is_mine is False


# ============================================================================
# Observation Conversion Tests
# ============================================================================

class TestToObservation:
    """Test single-cell observation values."""

    def test_hidden_observation(self) -> None:
        assert CellView().to_observation() == -1

    def test_flagged_observation(self) -> None:
        assert CellView(CellState.FLAGGED).to_observation() == -2

    def test_revealed_number_observation(self) -> None:
        assert CellView(CellState.REVEALED, 3).to_observation() == 3

    def test_revealed_mine_observation(self) -> None:
        assert CellView(CellState.REVEALED, -1).to_observation() == 9


# ============================================================================
# Board View Tests
# ============================================================================

class TestCellViewFromBoard:
    """Test views built from board matrices."""

    def test_hidden_cell_hides_value(self, matrices) -> None:
        """Unrevealed cells do not expose their count."""
        view = cell_view(*matrices, 0, 0)
        assert view.is_hidden is True
        assert view.value is None

    def test_revealed_cell_shows_count(self, matrices) -> None:
        """Revealed cells show their adjacency count."""
        board, revealed, flagged = matrices
        revealed[0, 0] = True
        assert cell_view(board, revealed, flagged, 0, 0).value == 1

    def test_flagged_cell(self, matrices) -> None:
        """Flagged hidden cells show as flagged."""
        board, revealed, flagged = matrices
        flagged[0, 1] = True
        assert cell_view(board, revealed, flagged, 0, 1, selected=True) == CellView(
            CellState.FLAGGED, None, True
        )

    def test_revealed_wins_over_flag(self, matrices) -> None:
        """A flagged mine revealed at game end shows the mine."""
        board, revealed, flagged = matrices
        flagged[1, 1] = True
        revealed[1, 1] = True
        assert cell_view(board, revealed, flagged, 1, 1).is_mine is True

    def test_out_of_bounds_raises(self, matrices) -> None:
        """Views only exist for cells on the board."""
        with pytest.raises(IndexError):
            cell_view(*matrices, 3, 0)
        with pytest.raises(IndexError):
            cell_view(*matrices, 0, -1)


class TestObservation:
    """Test the observation matrix."""

    def test_new_board_observation_all_hidden(self, matrices) -> None:
        """Nothing revealed means all -1."""
        obs = observation(*matrices)
        assert np.all(obs == -1)
        assert obs.dtype == np.int8

    def test_observation_matches_cell_views(self, matrices) -> None:
        """Matrix entries equal per-cell observations."""
        board, revealed, flagged = matrices
        revealed[0, :] = True
        revealed[1, 1] = True
        flagged[2, 2] = True

        obs = observation(board, revealed, flagged)

        for row in range(3):
            for col in range(3):
                view = cell_view(board, revealed, flagged, row, col)
                assert obs[row, col] == view.to_observation()
        assert obs[1, 1] == 9
        assert obs[2, 2] == -2
