"""Validation utilities for Sudoku grids."""

from __future__ import annotations
import numpy as np
from typing import TYPE_CHECKING, Optional

from .board import EMPTY, SIZE

if TYPE_CHECKING:
    from .board import SudokuGrid


def is_valid_assignment(grid: SudokuGrid, row: int, col: int, value: Optional[int]) -> bool:
    """
    Check if placing a value at (row, col) is valid.

    Does not modify the grid.

    Args:
        grid: The Sudoku grid.
        row: Row index.
        col: Column index.
        value: Value to check. None or 0 is never valid.

    Returns:
        True if the value appears nowhere in the row, column or box.
    """
    if value is None or value == EMPTY:
        return False

    # Check column
    if value in grid.get_col(col):
        return False

    # Check row
    if value in grid.get_row(row):
        return False

    # Check box
    if value in grid.get_box(row, col):
        return False

    return True


def is_valid_board(grid: SudokuGrid) -> bool:
    """
    Check if the entire grid state is valid (no conflicts).

    Args:
        grid: The Sudoku grid to validate.

    Returns:
        True if no constraints are violated.
    """
    return grid.is_valid()


def validate_solution(puzzle: np.ndarray, solution: SudokuGrid) -> bool:
    """
    Validate that a solution correctly solves the puzzle.

    Args:
        puzzle: The original clues, 0 for empty.
        solution: The proposed solution.

    Returns:
        True if solution is complete, valid and keeps every clue.
    """
    puzzle = np.asarray(puzzle)
    if puzzle.shape != (SIZE, SIZE):
        return False

    # Check that solution respects original clues
    given = puzzle != EMPTY
    if not np.array_equal(puzzle[given], solution.to_array()[given]):
        return False

    # Check that solution is complete and valid
    return solution.is_solved()
