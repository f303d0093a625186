"""
Tests for the game board.
"""
import pytest
import numpy as np
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from clearcell.game.board import Board
from clearcell.game.cells import BoardCell


class TestBoardBasics:
    """Test basic board operations."""

    def test_board_creation(self):
        """Test board initialization."""
        board = Board(6, 4)
        assert board.rows == 6
        assert board.cols == 4
        assert board.total_cells == 0

    def test_board_initially_empty(self):
        """New board should be all EMPTY."""
        board = Board(3, 5)
        assert np.all(board.grid == BoardCell.EMPTY)
        assert board.grid.shape == (3, 5)

    def test_get_set_cell(self):
        board = Board(3, 3)
        board.set_cell(1, 2, BoardCell.YELLOW)

        assert board.get_cell(1, 2) is BoardCell.YELLOW
        assert board.get_cell(0, 0) is BoardCell.EMPTY
        assert board.total_cells == 1

    def test_board_reset(self):
        board = Board.from_strings(["RG", "BY"])
        board.reset()

        assert board.total_cells == 0


class TestBoardText:
    """Test building boards from symbols and printing them."""

    def test_from_strings(self):
        board = Board.from_strings(["RG.", "..B"])

        assert board.rows == 2
        assert board.cols == 3
        assert board.get_cell(0, 0) == BoardCell.RED
        assert board.get_cell(0, 1) == BoardCell.GREEN
        assert board.get_cell(1, 2) == BoardCell.BLUE
        assert board.total_cells == 3

    def test_str(self):
        lines = ["RG.", "..B", "Y.."]
        assert str(Board.from_strings(lines)) == "\n".join(lines)

    def test_ragged_rows_rejected(self):
        with pytest.raises(ValueError):
            Board.from_strings(["RGB", "R."])

    def test_unknown_symbol_rejected(self):
        with pytest.raises(ValueError):
            Board.from_strings(["RX."])

    def test_no_rows_rejected(self):
        with pytest.raises(ValueError):
            Board.from_strings([])

    def test_to_cells(self):
        board = Board.from_strings(["R.", ".B"])

        assert board.to_cells() == [
            [BoardCell.RED, BoardCell.EMPTY],
            [BoardCell.EMPTY, BoardCell.BLUE],
        ]


class TestBoardQueries:
    """Test bounds and row queries."""

    def test_in_bounds(self):
        board = Board(3, 4)

        assert board.in_bounds(0, 0)
        assert board.in_bounds(2, 3)
        assert not board.in_bounds(-1, 0)
        assert not board.in_bounds(0, -1)
        assert not board.in_bounds(3, 0)
        assert not board.in_bounds(0, 4)

    def test_can_move(self):
        board = Board.from_strings(["R.", ".."])

        assert board.can_move(0, 0)
        assert not board.can_move(0, 1)
        assert not board.can_move(-1, 0)
        assert not board.can_move(5, 5)

    def test_is_row_empty(self):
        board = Board.from_strings(["...", ".G.", "..."])

        assert board.is_row_empty(0)
        assert not board.is_row_empty(1)
        assert board.is_row_empty(2)

    @pytest.mark.parametrize("lines,expected", [
        (["...", "...", "..."], 0),
        (["R..", "...", "..."], 0),
        (["R..", ".B.", "..."], 1),
        (["...", "...", "..Y"], 2),
        (["R..", "...", "G.."], 2),
    ])
    def test_last_colored_row(self, lines, expected):
        assert Board.from_strings(lines).last_colored_row() == expected


class TestRowShifting:
    """Test row insertion and collapse."""

    def test_push_row(self):
        board = Board.from_strings(["RG", "BY", "GG"])

        board.push_row([BoardCell.YELLOW, BoardCell.RED])

        assert str(board) == "YR\nRG\nBY"

    def test_collapse_row(self):
        board = Board.from_strings(["RR", "..", "GB", "Y.", ".."])

        board.collapse_row(1, 3)

        assert str(board) == "RR\nGB\nY.\n..\n.."

    def test_collapse_leaves_rows_below_untouched(self):
        board = Board.from_strings(["..", "G.", "B.", "YY"])

        board.collapse_row(0, 2)

        assert str(board) == "G.\nB.\n..\nYY"

    def test_push_row_drops_bottom_row(self):
        board = Board.from_strings(["R.", ".G", "YB"])

        board.push_row([BoardCell.BLUE, BoardCell.BLUE])

        assert str(board) == "BB\nR.\n.G"
        assert board.total_cells == 4


class TestBoardState:
    """Test state get/set."""

    def test_get_state_is_copy(self):
        board = Board.from_strings(["R."])

        state = board.get_state()
        state[0, 0] = BoardCell.EMPTY

        assert board.get_cell(0, 0) == BoardCell.RED

    def test_set_state(self):
        board = Board(2, 2)
        board.set_state(np.array([[1, 0], [0, 3]]))

        assert board.grid.dtype == np.int8
        assert str(board) == "R.\n.B"

    def test_set_state_shape_mismatch(self):
        board = Board(2, 2)

        with pytest.raises(ValueError):
            board.set_state(np.zeros((3, 2), dtype=np.int8))

    @pytest.mark.parametrize("value", [-1, 5, 9, 200])
    def test_set_state_rejects_unknown_values(self, value):
        board = Board.from_strings(["R.", ".."])
        state = np.zeros((2, 2), dtype=np.int64)
        state[1, 1] = value

        with pytest.raises(ValueError):
            board.set_state(state)

        assert str(board) == "R.\n.."


class TestCellValidation:
    """Test that only known cell kinds reach the grid."""

    @pytest.mark.parametrize("value", [-1, 5, 9])
    def test_set_cell_rejects_unknown_values(self, value):
        board = Board(2, 2)

        with pytest.raises(ValueError):
            board.set_cell(0, 0, value)

        assert board.get_cell(0, 0) is BoardCell.EMPTY

    def test_set_cell_accepts_plain_ints(self):
        board = Board(2, 2)
        board.set_cell(1, 0, 3)

        assert board.get_cell(1, 0) is BoardCell.BLUE
