"""Unit tests for the Sudoku grid, cells and validation."""

import numpy as np
import pytest

from sudsolve.core.board import Cell, SudokuGrid, units_of, peers_of
from sudsolve.core.validator import is_valid_assignment, validate_solution
from sudsolve.exceptions import MalformedInputError

from conftest import EASY_PUZZLE, EASY_SOLUTION


class TestCell:
    """Tests for Cell constraint bookkeeping."""

    def test_mark_impossible(self):
        """Test that marking a digit records it."""
        cell = Cell()
        cell.mark_impossible(4)
        assert 4 in cell.blocked
        assert cell.constraint_count == 1

    def test_mark_impossible_idempotent(self):
        """Test that marking the same digit twice counts once."""
        cell = Cell()
        cell.mark_impossible(7)
        cell.mark_impossible(7)
        assert cell.constraint_count == 1

    def test_mark_impossible_rejects_out_of_range(self):
        """Test that only digits 1-9 can be marked."""
        cell = Cell()
        with pytest.raises(ValueError):
            cell.mark_impossible(0)
        with pytest.raises(ValueError):
            cell.mark_impossible(10)

    def test_forced_value_single_remaining(self):
        """Test that the last remaining digit is returned."""
        cell = Cell(blocked=[1, 2, 3, 4, 5, 6, 8, 9])
        assert cell.constraint_count == 8
        assert cell.forced_value() == 7

    def test_forced_value_none_remaining(self):
        """Test that a fully blocked cell has no forced value."""
        cell = Cell(blocked=range(1, 10))
        assert cell.forced_value() is None

    def test_forced_value_several_remaining(self):
        """Test that an open cell is not determined."""
        cell = Cell(blocked=[1, 2])
        assert cell.forced_value() is None


class TestUnits:
    """Tests for unit and peer relations."""

    def test_units_of_size(self):
        """Test that a unit lists 27 positions with repeats."""
        unit = units_of(4, 4)
        assert len(unit) == 27
        assert unit.count((4, 4)) == 3
        assert len(set(unit)) == 21

    def test_units_of_box(self):
        """Test that the box part uses the containing 3x3 box."""
        unit = units_of(7, 2)
        box = unit[18:]
        assert box[0] == (6, 0)
        assert box[-1] == (8, 2)

    def test_peers_of(self):
        """Test that peers exclude the cell itself."""
        peers = peers_of(0, 0)
        assert len(peers) == 20
        assert (0, 0) not in peers
        assert (2, 2) in peers


class TestSudokuGrid:
    """Tests for SudokuGrid class."""

    def test_from_string(self):
        """Test creating a grid from a string."""
        grid = SudokuGrid.from_string("0" * 80 + "9")
        assert grid.get(8, 8) == 9
        assert grid.count_empty() == 80

    def test_from_string_dots(self):
        """Test that dots mark empty cells."""
        grid = SudokuGrid.from_string(EASY_PUZZLE.replace("0", "."))
        assert grid.to_string() == EASY_PUZZLE

    def test_from_string_bad_length(self):
        """Test that a short string is rejected."""
        with pytest.raises(MalformedInputError):
            SudokuGrid.from_string("123")

    def test_from_string_bad_character(self):
        """Test that letters are rejected."""
        with pytest.raises(MalformedInputError, match="row 1, column 3"):
            SudokuGrid.from_string("12x" + "0" * 78)

    def test_from_string_non_ascii_digits(self):
        """Test that digit characters outside 0-9 are rejected."""
        with pytest.raises(MalformedInputError, match="row 1, column 1"):
            SudokuGrid.from_string("²" + "0" * 80)
        with pytest.raises(MalformedInputError):
            SudokuGrid.from_string("٣" + "0" * 80)

    def test_rejects_wrong_shape(self):
        """Test that non-9x9 arrays are rejected."""
        with pytest.raises(MalformedInputError):
            SudokuGrid(np.zeros((4, 4), dtype=np.int32))

    def test_rejects_out_of_range_value(self):
        """Test that values above 9 are rejected."""
        data = np.zeros((9, 9), dtype=np.int32)
        data[2, 5] = 12
        with pytest.raises(MalformedInputError, match="row 3, column 6"):
            SudokuGrid(data)

    def test_from_2d_list_ragged(self):
        """Test that ragged lists are rejected."""
        with pytest.raises(MalformedInputError):
            SudokuGrid.from_2d_list([[0] * 9] * 8 + [[0] * 8])

    def test_initial_constraints(self, easy_grid):
        """Test that clues in the unit are blocked for empty cells."""
        # Row 0 has 5, 3, 7; column 2 has 8; box 0 has 5, 3, 6, 9, 8
        assert easy_grid.cell(0, 2).blocked == {3, 5, 6, 7, 8, 9}
        assert easy_grid.cell(0, 2).constraint_count == 6

    def test_initial_constraints_do_not_force(self):
        """Test that a cell with one candidate stays empty after setup."""
        grid = SudokuGrid.from_string("123456780" + "0" * 72)
        assert grid.get(0, 8) == 0
        assert grid.cell(0, 8).constraint_count == 8
        assert grid.cell(0, 8).forced_value() == 9

    def test_clue_cells_have_no_constraints(self, easy_grid):
        """Test that setup only touches empty cells."""
        assert easy_grid.cell(0, 0).constraint_count == 0

    def test_clues_are_read_only(self, easy_grid):
        """Test that the clue snapshot cannot be changed."""
        with pytest.raises(ValueError):
            easy_grid.clues[0, 0] = 1
        assert easy_grid.is_original(0, 0)
        assert not easy_grid.is_original(0, 2)

    def test_is_valid(self):
        """Test grid validation."""
        assert SudokuGrid.from_string(EASY_PUZZLE).is_valid()
        assert not SudokuGrid.from_string("55" + "0" * 79).is_valid()
        assert not SudokuGrid.from_string("5" + "0" * 8 + "5" + "0" * 71).is_valid()

    def test_is_solved(self):
        """Test solved detection."""
        assert SudokuGrid.from_string(EASY_SOLUTION).is_solved()
        assert not SudokuGrid.from_string(EASY_PUZZLE).is_solved()

    def test_snapshot_and_restore(self, easy_grid):
        """Test that restoring a unit snapshot undoes changes to it."""
        before = easy_grid.copy()
        snapshot = easy_grid.snapshot_unit(0, 2)
        easy_grid.cell(0, 2).value = 4
        easy_grid.cell(8, 2).mark_impossible(4)
        easy_grid.cell(1, 1).mark_impossible(4)

        easy_grid.restore(snapshot)

        assert easy_grid == before

    def test_copy_is_independent(self, easy_grid):
        """Test that a copy does not share cells."""
        copy = easy_grid.copy()
        copy.cell(0, 2).value = 4
        copy.cell(0, 3).mark_impossible(2)
        assert easy_grid.get(0, 2) == 0
        assert 2 not in easy_grid.cell(0, 3).blocked

    def test_to_array(self, easy_grid):
        """Test conversion to a numpy array."""
        arr = easy_grid.to_array()
        assert arr.shape == (9, 9)
        assert arr[0, 0] == 5
        assert arr[0, 2] == 0

    def test_str(self, easy_grid):
        """Test pretty printing."""
        text = str(easy_grid)
        assert text.splitlines()[1] == "| 5 3 . | . 7 . | . . . |"


class TestValidator:
    """Tests for validation utilities."""

    def test_is_valid_assignment(self):
        """Test placement validation."""
        grid = SudokuGrid.from_string("5" + "0" * 80)

        # Can't place 5 in same row
        assert not is_valid_assignment(grid, 0, 5, 5)

        # Can't place 5 in same column
        assert not is_valid_assignment(grid, 5, 0, 5)

        # Can't place 5 in same box
        assert not is_valid_assignment(grid, 1, 1, 5)

        # Can place different value
        assert is_valid_assignment(grid, 0, 5, 7)

    def test_is_valid_assignment_empty_sentinel(self):
        """Test that the empty value and None are never valid."""
        grid = SudokuGrid.from_string("0" * 81)
        assert not is_valid_assignment(grid, 0, 0, 0)
        assert not is_valid_assignment(grid, 0, 0, None)

    def test_is_valid_assignment_does_not_mutate(self, easy_grid):
        """Test that checking leaves the grid unchanged."""
        before = easy_grid.copy()
        is_valid_assignment(easy_grid, 0, 2, 4)
        assert easy_grid == before

    def test_validate_solution(self):
        """Test checking a solution against its clues."""
        puzzle = SudokuGrid.from_string(EASY_PUZZLE).to_array()
        assert validate_solution(puzzle, SudokuGrid.from_string(EASY_SOLUTION))

        # A valid grid that changes a clue: swap digits 5 and 3 everywhere
        swapped = EASY_SOLUTION.translate(str.maketrans("53", "35"))
        assert not validate_solution(puzzle, SudokuGrid.from_string(swapped))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
