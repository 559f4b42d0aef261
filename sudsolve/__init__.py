"""Sudoku solver using constraint propagation and backtracking search."""

from .core import SudokuGrid
from .exceptions import MalformedInputError
from .solvers import BacktrackingSolver, SolverStats, solve

__version__ = "1.0.0"

__all__ = ["SudokuGrid", "MalformedInputError", "BacktrackingSolver", "SolverStats", "solve"]
