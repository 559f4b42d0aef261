"""Base solver interface and common utilities."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Any, Optional
import time
import tracemalloc

from ..core.board import SudokuGrid


@dataclass
class SolverStats:
    """Statistics from a solver run."""
    # Core metrics
    solved: bool = False
    timed_out: bool = False
    time_seconds: float = 0.0
    memory_bytes: int = 0
    iterations: int = 0

    # Algorithm-specific metrics
    backtracks: int = 0
    nodes_explored: int = 0

    # Additional metadata
    algorithm: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "solved": self.solved,
            "timed_out": self.timed_out,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            "algorithm": self.algorithm,
            **self.extra
        }


class BaseSolver(ABC):
    """Abstract base class for Sudoku solvers."""

    name: str = "BaseSolver"

    def __init__(self, track_memory: bool = True):
        self.track_memory = track_memory
        self.deadline: Optional[float] = None
        self.stats = self._new_stats()

    def _new_stats(self) -> SolverStats:
        """Fresh stats for a run. Subclasses may seed ``extra``."""
        return SolverStats(algorithm=self.name)

    def _expired(self) -> bool:
        """Check if the current run has passed its deadline."""
        return self.deadline is not None and time.perf_counter() >= self.deadline

    def solve(self, grid: SudokuGrid, timeout_seconds: Optional[float] = None) -> SolverStats:
        """
        Solve a Sudoku grid in place, with timing and memory tracking.

        On success the grid holds the solution. Otherwise it is left as it
        was before the call.

        Args:
            grid: The puzzle to solve.
            timeout_seconds: Give up after this long and report
                ``stats.timed_out``. None means no limit.

        Returns:
            Stats for the run; ``stats.solved`` tells whether a solution was
            found.
        """
        self.stats = self._new_stats()

        # Start memory tracking
        if self.track_memory:
            tracemalloc.start()

        # Start timing
        start_time = time.perf_counter()
        self.deadline = None if timeout_seconds is None else start_time + timeout_seconds

        try:
            self.stats.solved = self._solve(grid)
        finally:
            # End timing
            self.stats.time_seconds = time.perf_counter() - start_time
            self.deadline = None

            # Get memory usage
            if self.track_memory:
                current, peak = tracemalloc.get_traced_memory()
                tracemalloc.stop()
                self.stats.memory_bytes = peak

        return self.stats

    @abstractmethod
    def _solve(self, grid: SudokuGrid) -> bool:
        """
        Internal solve method to be implemented by subclasses.

        Subclasses should stop searching once :meth:`_expired` is true.

        Args:
            grid: The puzzle to solve, modified in place.

        Returns:
            True if the grid was solved.
        """
        pass
