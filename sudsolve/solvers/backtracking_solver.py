"""Backtracking solver with constraint propagation and unit rollback."""

from __future__ import annotations
import logging
from enum import Enum
from typing import Optional, Tuple

from .base_solver import BaseSolver, SolverStats
from ..core.board import DIGITS, SIZE, SudokuGrid, units_of
from ..core.validator import is_valid_assignment, is_valid_board

log = logging.getLogger(__name__)

# A cell with this many digits ruled out has at most one candidate left.
FORCING_THRESHOLD = SIZE - 1


class SearchState(Enum):
    """Outcome of one level of the search."""
    SEARCHING = "searching"
    SOLVED = "solved"
    FAILED = "failed"
    TIMED_OUT = "timed out"


class BacktrackingSolver(BaseSolver):
    """
    Depth-first search over a :class:`SudokuGrid` with constraint propagation.

    Features:
    - Most-constrained-cell ordering: branch on the empty cell with the
      most digits ruled out (row-major order breaks ties)
    - Propagation of every assignment into the cell's unit, filling in
      naked singles as they appear
    - Rollback of the whole unit when a branch fails, so the grid is
      unchanged after an unsuccessful search
    """

    name = "Backtracking+Propagation"

    HEURISTICS = ("mrv", "first_empty")

    def __init__(self, heuristic: str = "mrv", track_memory: bool = True):
        """
        Initialize the solver.

        Args:
            heuristic: "mrv" to branch on the most constrained cell,
                       "first_empty" to branch on the first empty cell.
            track_memory: Record peak memory of each solve.
        """
        if heuristic not in self.HEURISTICS:
            raise ValueError(
                f"Unknown heuristic {heuristic!r}, expected one of {self.HEURISTICS}"
            )
        super().__init__(track_memory=track_memory)
        self.heuristic = heuristic
        self.state = SearchState.SEARCHING

    def _new_stats(self) -> SolverStats:
        stats = super()._new_stats()
        stats.extra["forced_assignments"] = 0
        stats.extra["max_depth"] = 0
        return stats

    def _solve(self, grid: SudokuGrid) -> bool:
        """Solve using recursive backtracking."""
        self.state = SearchState.SEARCHING

        # Repeated clues can never be completed, but proving that by search
        # can take practically forever on a sparse grid
        if not is_valid_board(grid):
            log.info("Clues repeat a digit within a unit, no solution")
            self.state = SearchState.FAILED
            return False

        log.debug("Solving %d empty cells with %s ordering",
                  grid.count_empty(), self.heuristic)

        self.state = self._search(grid, 0)
        self.stats.timed_out = self.state is SearchState.TIMED_OUT

        log.info("Search %s after %d nodes, %d backtracks",
                 self.state.value, self.stats.nodes_explored, self.stats.backtracks)
        return self.state is SearchState.SOLVED

    def _search(self, grid: SudokuGrid, depth: int) -> SearchState:
        """
        One level of the recursive search.

        Returns SOLVED as soon as any branch below succeeds, leaving the
        grid solved. On FAILED or TIMED_OUT the grid is exactly as it was
        on entry.
        """
        if self._expired():
            return SearchState.TIMED_OUT

        self.stats.iterations += 1
        if depth > self.stats.extra["max_depth"]:
            self.stats.extra["max_depth"] = depth

        position = self.select_branch_cell(grid)
        if position is None:
            # No empty cells left
            return SearchState.SOLVED

        row, col = position
        cell = grid.cells[row][col]

        for value in DIGITS:
            if value in cell.blocked:
                continue
            if not is_valid_assignment(grid, row, col, value):
                continue

            snapshot = grid.snapshot_unit(row, col)
            cell.value = value
            self.stats.nodes_explored += 1

            result = SearchState.FAILED
            if self.propagate(grid, row, col, value):
                result = self._search(grid, depth + 1)
                if result is SearchState.SOLVED:
                    return result

            grid.restore(snapshot)
            self.stats.backtracks += 1
            if result is SearchState.TIMED_OUT:
                return result

        return SearchState.FAILED

    def select_branch_cell(self, grid: SudokuGrid) -> Optional[Tuple[int, int]]:
        """
        Pick the next cell to branch on.

        Returns:
            (row, col) of the chosen empty cell, or None if the grid is full.
        """
        if self.heuristic == "first_empty":
            return self._select_first_empty(grid)
        return self._select_most_constrained(grid)

    @staticmethod
    def _select_most_constrained(grid: SudokuGrid) -> Optional[Tuple[int, int]]:
        """Empty cell with the highest constraint count, first one on ties."""
        best = None
        most_constrained = -1
        for r in range(SIZE):
            for c in range(SIZE):
                cell = grid.cells[r][c]
                if cell.is_empty() and cell.constraint_count > most_constrained:
                    best = (r, c)
                    most_constrained = cell.constraint_count
        return best

    @staticmethod
    def _select_first_empty(grid: SudokuGrid) -> Optional[Tuple[int, int]]:
        for r in range(SIZE):
            for c in range(SIZE):
                if grid.cells[r][c].is_empty():
                    return r, c
        return None

    def propagate(self, grid: SudokuGrid, row: int, col: int, value: int) -> bool:
        """
        Rule out ``value`` for every cell in the unit of (row, col).

        A peer left with a single candidate gets that candidate assigned if
        it is still valid. The assignment is not propagated further.

        Returns:
            False as soon as a peer has no valid candidate. The grid is then
            partly updated and the caller must restore it.
        """
        for r, c in units_of(row, col):
            peer = grid.cells[r][c]
            peer.mark_impossible(value)
            if peer.is_empty() and peer.constraint_count >= FORCING_THRESHOLD:
                forced = peer.forced_value()
                if not is_valid_assignment(grid, r, c, forced):
                    return False
                peer.value = forced
                self.stats.extra["forced_assignments"] += 1
        return True


def solve(grid: SudokuGrid, heuristic: str = "mrv") -> bool:
    """
    Solve ``grid`` in place.

    Returns:
        True if solved. False if no solution exists, in which case the grid
        is unchanged.
    """
    solver = BacktrackingSolver(heuristic=heuristic, track_memory=False)
    return solver.solve(grid).solved
