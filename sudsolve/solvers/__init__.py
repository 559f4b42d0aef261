"""Solvers module for Sudoku puzzles."""

from .base_solver import BaseSolver, SolverStats
from .backtracking_solver import BacktrackingSolver, SearchState, solve

__all__ = [
    "BaseSolver",
    "SolverStats",
    "BacktrackingSolver",
    "SearchState",
    "solve",
]
