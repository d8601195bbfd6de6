"""Tests for the Board model: drops, gravity, fullness and win detection."""

import math
import random

import numpy as np
import pytest

from fourway.errors import FullColumnError, InvalidColumnError, InvalidDimensionError
from fourway.game.board import Board
from fourway.utils import code_dtype
from tests.utils import alternate, play


class TestBoardConstruction:
    """Tests for board dimensions."""

    def test_default_dimensions(self, board):
        """Test the classic 7x6 board is the default."""
        assert board.width == 7
        assert board.height == 6
        assert board.grid.shape == (6, 7)
        assert not board.grid.any()

    def test_custom_dimensions(self):
        """Test custom sizes up to the upper bound."""
        board = Board(99, 1)
        assert (board.width, board.height) == (99, 1)

    def test_integral_float_accepted(self):
        """Test a float with no fractional part is accepted."""
        board = Board(8.0, 5)
        assert board.width == 8
        assert isinstance(board.width, int)

    @pytest.mark.parametrize("value", [0, -1, 100, 250, 7.5, math.nan, math.inf, True, "7", None])
    def test_invalid_width(self, value):
        """Test non-integer, non-positive and oversized widths are rejected."""
        with pytest.raises(InvalidDimensionError) as excinfo:
            Board(value, 6)
        assert excinfo.value.name == "width"

    @pytest.mark.parametrize("value", [0, -3, 100, math.nan])
    def test_invalid_height(self, value):
        """Test invalid heights are rejected."""
        with pytest.raises(InvalidDimensionError) as excinfo:
            Board(7, value)
        assert excinfo.value.name == "height"

    def test_dimensions_read_only(self, board):
        """Test width and height cannot be reassigned."""
        with pytest.raises(AttributeError):
            board.width = 10


class TestDropPiece:
    """Tests for column drops and gravity."""

    def test_pieces_stack_from_the_floor(self, board):
        """Test each drop lands on top of the previous one."""
        rows = play(board, alternate([3, 3, 3]))
        assert rows == [0, 1, 2]
        assert board.cell(3, 0) == "A"
        assert board.cell(3, 1) == "B"
        assert board.cell(3, 3) is None

    def test_drop_mutates_one_cell(self, board):
        """Test a drop changes exactly one cell."""
        before = board.grid.copy()
        board.drop_piece(2, "A")
        assert np.count_nonzero(board.grid != before) == 1

    def test_full_column_rejected_only_after_height_drops(self, board):
        """Test height drops succeed and the next one fails."""
        for i in range(board.height):
            assert board.drop_piece(0, "A" if i % 2 else "B") == i

        with pytest.raises(FullColumnError) as excinfo:
            board.drop_piece(0, "A")
        assert excinfo.value.column == 0

    def test_full_column_rejection_leaves_grid_unchanged(self, board):
        """Test repeated drops into a full column never change the grid."""
        play(board, alternate([4] * board.height))
        before = board.grid.copy()

        for _ in range(3):
            with pytest.raises(FullColumnError):
                board.drop_piece(4, "B")
            np.testing.assert_array_equal(board.grid, before)

    @pytest.mark.parametrize("column", [-1, 7, 100, "3", 2.0, True, None])
    def test_invalid_column(self, board, column):
        """Test columns off the board are rejected."""
        with pytest.raises(InvalidColumnError):
            board.drop_piece(column, "A")
        assert not board.grid.any()

    def test_numpy_integer_column(self, board):
        """Test numpy integers are accepted as columns."""
        assert board.drop_piece(np.int64(5), "A") == 0
        assert board.cell(5, 0) == "A"

    def test_none_occupant_rejected(self, board):
        """Test None cannot be used as an occupant."""
        with pytest.raises(ValueError):
            board.drop_piece(0, None)

    def test_column_queries(self, board):
        """Test column height, fullness and valid columns."""
        play(board, alternate([1] * board.height + [2, 2]))
        assert board.column_height(1) == board.height
        assert board.column_height(2) == 2
        assert board.is_column_full(1)
        assert not board.is_column_full(2)
        assert board.valid_columns() == [0, 2, 3, 4, 5, 6]

    def test_cell_off_board(self, board):
        """Test reading a cell off the board raises IndexError."""
        with pytest.raises(IndexError):
            board.cell(7, 0)


class TestIsFull:
    """Tests for full-board detection."""

    def test_empty_board_not_full(self, board):
        assert not board.is_full()

    def test_full_iff_every_column_has_height_drops(self):
        """Test the board is full exactly when every column is."""
        board = Board(3, 2)
        columns = [0, 0, 1, 1, 2]
        play(board, alternate(columns))
        assert not board.is_full()

        board.drop_piece(2, "B")
        assert board.is_full()
        assert board.valid_columns() == []


class TestWinDetection:
    """Tests for four-in-a-row detection."""

    def test_horizontal(self, board):
        """Test four in the bottom row."""
        play(board, [(0, "A"), (1, "A"), (2, "A")])
        assert not board.has_winning_line_through("A")

        board.drop_piece(3, "A")
        assert board.has_winning_line_through("A")
        assert board.winning_line("A") == [(0, 0), (1, 0), (2, 0), (3, 0)]

    def test_vertical(self, board):
        """Test four stacked in one column."""
        play(board, alternate([0, 1, 0, 1, 0, 1, 0]))
        assert board.has_winning_line_through("A")
        assert not board.has_winning_line_through("B")
        assert board.winning_line("A") == [(0, 0), (0, 1), (0, 2), (0, 3)]

    def test_diagonal_up(self, board):
        """Test a bottom-left to top-right diagonal."""
        play(board, [
            (0, "A"),
            (1, "B"), (1, "A"),
            (2, "B"), (2, "B"), (2, "A"),
            (3, "B"), (3, "B"), (3, "B"),
        ])
        assert not board.has_winning_line_through("A")

        board.drop_piece(3, "A")
        assert board.has_winning_line_through("A")
        assert not board.has_winning_line_through("B")
        assert board.winning_line("A") == [(0, 0), (1, 1), (2, 2), (3, 3)]

    def test_diagonal_down(self, board):
        """Test a top-left to bottom-right diagonal."""
        play(board, [
            (3, "A"),
            (2, "B"), (2, "A"),
            (1, "B"), (1, "B"), (1, "A"),
            (0, "B"), (0, "B"), (0, "B"),
        ])
        assert not board.has_winning_line_through("A")

        board.drop_piece(0, "A")
        assert board.has_winning_line_through("A")
        assert board.winning_line("A") == [(0, 3), (1, 2), (2, 1), (3, 0)]

    def test_line_along_far_edge(self):
        """Test a line touching the last column and top row is found."""
        board = Board(4, 4)
        play(board, alternate([3, 0, 3, 0, 3, 0, 3]))
        assert board.winning_line("A") == [(3, 0), (3, 1), (3, 2), (3, 3)]

    def test_three_is_not_a_win(self, board):
        """Test three aligned pieces in every direction do not win."""
        play(board, [(0, "A"), (1, "A"), (2, "A"), (6, "A"), (6, "A"), (6, "A")])
        assert not board.has_winning_line_through("A")

    def test_broken_line_is_not_a_win(self, board):
        """Test four of a kind with a gap do not win."""
        play(board, [(0, "A"), (1, "A"), (2, "B"), (3, "A"), (4, "A")])
        assert not board.has_winning_line_through("A")

    def test_unknown_occupant(self, board):
        """Test an occupant that never played has no line."""
        play(board, [(0, "A"), (1, "A"), (2, "A"), (3, "A")])
        assert not board.has_winning_line_through("C")
        assert board.winning_line("C") == []

    def test_too_small_board_never_wins(self):
        """Test a 3x3 board cannot hold four in a row."""
        board = Board(3, 3)
        play(board, [(c, "A") for c in (0, 1, 2) for _ in range(3)])
        assert board.is_full()
        assert not board.has_winning_line_through("A")

    def test_placement_check_matches_full_scan(self):
        """Test the last-move check agrees with the whole-board scan in random games."""
        rng = random.Random(7)
        for _ in range(200):
            board = Board(rng.randint(4, 9), rng.randint(4, 8))
            occupants = ["A", "B", "C"][:rng.randint(2, 3)]
            turn = 0
            while board.valid_columns():
                occupant = occupants[turn % len(occupants)]
                column = rng.choice(board.valid_columns())
                row = board.drop_piece(column, occupant)
                won = board.is_winning_placement(column, row)
                assert won == board.has_winning_line_through(occupant)
                if won:
                    break
                turn += 1

    def test_empty_cell_is_not_a_winning_placement(self, board):
        assert not board.is_winning_placement(0, 0)


class TestBoardReset:
    """Tests for clearing the board."""

    def test_reset_empties_grid_and_keeps_dimensions(self):
        board = Board(5, 4)
        play(board, alternate([0, 1, 2, 3, 4]))
        board.reset()

        assert (board.width, board.height) == (5, 4)
        assert not board.grid.any()
        assert board.cell(0, 0) is None
        assert board.valid_columns() == [0, 1, 2, 3, 4]

    def test_reset_forgets_occupants(self, board):
        play(board, [(0, "A"), (1, "A"), (2, "A"), (3, "A")])
        board.reset()
        assert not board.has_winning_line_through("A")


class TestEncodeAndRender:
    """Tests for the numeric and text views of the board."""

    def test_encode_numbers_occupants_by_order(self, board):
        """Test encode writes roster positions, 1-based, row 0 at the bottom."""
        play(board, [(0, "B"), (0, "A"), (6, "C")])
        encoded = board.encode(["A", "B"])

        assert encoded.dtype == np.int8
        assert encoded[0, 0] == 2
        assert encoded[1, 0] == 1
        assert encoded[0, 6] == 0  # "C" not in the list
        assert np.count_nonzero(encoded) == 2

    def test_encode_widens_dtype_for_many_occupants(self):
        """Test occupant numbers above 127 are not wrapped to negatives."""
        board = Board(99, 3)
        occupants = [f"p{i}" for i in range(200)]
        play(board, [(i % 99, occupant) for i, occupant in enumerate(occupants)])
        encoded = board.encode(occupants)

        assert encoded.dtype == np.int16
        assert encoded.min() == 0
        assert encoded.max() == 200
        assert encoded[2, 1] == 200  # p199: third pass, column 1

    @pytest.mark.parametrize("n_values, dtype", [
        (1, np.int8), (127, np.int8), (128, np.int16), (40000, np.int32),
    ])
    def test_code_dtype(self, n_values, dtype):
        assert code_dtype(n_values) == np.dtype(dtype)

    def test_render_draws_top_row_first(self):
        board = Board(4, 2)
        play(board, [(0, "A"), (0, "B"), (3, "A")])
        text = board.render({"A": "X", "B": "O"})

        assert text.splitlines() == [
            "|-------|",
            "|O      |",
            "|X     X|",
            "|-------|",
            "|0 1 2 3|",
        ]

    def test_str_uses_codes_without_symbols(self):
        board = Board(4, 1)
        play(board, [(1, "A"), (2, "B")])
        assert "|  1 2  |" in str(board)
