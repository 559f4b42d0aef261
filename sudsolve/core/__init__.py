"""Core module for Sudoku grid representation and validation."""

from .board import Cell, SudokuGrid, units_of, peers_of
from .validator import is_valid_assignment, is_valid_board, validate_solution

__all__ = [
    "Cell",
    "SudokuGrid",
    "units_of",
    "peers_of",
    "is_valid_assignment",
    "is_valid_board",
    "validate_solution",
]
