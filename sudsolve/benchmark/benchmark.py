"""Benchmarking framework for timing the solver on puzzle files."""

from __future__ import annotations
import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from tqdm import tqdm

from ..core.board import SudokuGrid
from ..exceptions import MalformedInputError
from ..io.loader import load_csv
from ..solvers import BaseSolver, BacktrackingSolver

log = logging.getLogger(__name__)


@dataclass
class BenchmarkResult:
    """Results from a single benchmark run."""
    puzzle: str
    algorithm: str
    solved: bool
    time_seconds: float
    memory_bytes: int
    iterations: int
    backtracks: int
    nodes_explored: int
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "puzzle": self.puzzle,
            "algorithm": self.algorithm,
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "memory_mb": self.memory_bytes / (1024 * 1024),
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            **self.extra
        }

    @classmethod
    def failure(cls, puzzle: str, algorithm: str, time_seconds: float,
                error: str) -> BenchmarkResult:
        """Result for a run that timed out or raised."""
        return cls(
            puzzle=puzzle,
            algorithm=algorithm,
            solved=False,
            time_seconds=time_seconds,
            memory_bytes=0,
            iterations=0,
            backtracks=0,
            nodes_explored=0,
            extra={"error": error}
        )


class Benchmark:
    """
    Runs each configured solver on each puzzle file and collects metrics.

    Every run starts from a freshly loaded copy of the puzzle.
    """

    def __init__(
        self,
        puzzle_files: Sequence[str],
        solvers: Optional[Dict[str, BaseSolver]] = None,
        timeout_seconds: float = 60.0
    ):
        """
        Initialize the benchmark.

        Args:
            puzzle_files: Comma-delimited puzzle files to solve.
            solvers: Dict of solver_name -> solver_instance (default: both
                     branch orderings of the backtracking solver).
            timeout_seconds: Time after which a solver gives up and the run
                             is recorded as a timeout.
        """
        self.puzzle_files = list(puzzle_files)
        self.timeout_seconds = timeout_seconds

        if solvers is None:
            self.solvers = {
                "MRV": BacktrackingSolver(heuristic="mrv"),
                "FirstEmpty": BacktrackingSolver(heuristic="first_empty"),
            }
        else:
            self.solvers = solvers

        self.results: List[BenchmarkResult] = []

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Run the full benchmark suite.

        Returns:
            List of BenchmarkResult objects.
        """
        self.results = []
        total_tests = len(self.puzzle_files) * len(self.solvers)
        pbar = tqdm(total=total_tests, desc="Benchmarking", disable=not show_progress)

        for path in self.puzzle_files:
            name = os.path.basename(path)
            try:
                puzzle = load_csv(path)
            except (OSError, MalformedInputError) as e:
                log.warning("Skipping %s: %s", path, e)
                for solver_name in self.solvers:
                    self.results.append(BenchmarkResult.failure(name, solver_name, 0.0, str(e)))
                    pbar.update(1)
                continue

            for solver_name, solver in self.solvers.items():
                result = self._run_single(puzzle.copy(), name, solver_name, solver)
                self.results.append(result)
                pbar.update(1)

        pbar.close()
        return self.results

    def _run_single(
        self,
        puzzle: SudokuGrid,
        puzzle_name: str,
        solver_name: str,
        solver: BaseSolver
    ) -> BenchmarkResult:
        """Run a single solver on a single puzzle, stopping it at the timeout."""
        log.info("Running %s on %s", solver_name, puzzle_name)

        try:
            stats = solver.solve(puzzle, timeout_seconds=self.timeout_seconds)
        except Exception as e:
            log.exception("%s failed on %s", solver_name, puzzle_name)
            return BenchmarkResult.failure(puzzle_name, solver_name, 0.0, str(e))

        if stats.timed_out:
            log.warning("%s timed out on %s", solver_name, puzzle_name)
            return BenchmarkResult.failure(
                puzzle_name, solver_name, stats.time_seconds, "Timeout"
            )

        return BenchmarkResult(
            puzzle=puzzle_name,
            algorithm=solver_name,
            solved=stats.solved,
            time_seconds=stats.time_seconds,
            memory_bytes=stats.memory_bytes,
            iterations=stats.iterations,
            backtracks=stats.backtracks,
            nodes_explored=stats.nodes_explored,
            extra=dict(stats.extra)
        )

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics from benchmark results."""
        summary = {
            "total_puzzles": len(self.puzzle_files),
            "solvers_tested": list(self.solvers.keys()),
            "results_by_algorithm": {}
        }

        # Group by algorithm
        for solver_name in self.solvers:
            solver_results = [r for r in self.results if r.algorithm == solver_name]
            if solver_results:
                solved = [r for r in solver_results if r.solved]
                times = [r.time_seconds for r in solver_results]
                memory = [r.memory_bytes for r in solver_results]
                nodes = [r.nodes_explored for r in solver_results]

                summary["results_by_algorithm"][solver_name] = {
                    "solved_pct": len(solved) / len(solver_results) * 100,
                    "avg_time_seconds": sum(times) / len(times),
                    "max_time_seconds": max(times),
                    "min_time_seconds": min(times),
                    "avg_memory_mb": sum(memory) / len(memory) / (1024 * 1024),
                    "avg_nodes_explored": sum(nodes) / len(nodes),
                    "total_solved": len(solved),
                    "total_tested": len(solver_results)
                }

        return summary

    def save_results(self, output_dir: str) -> None:
        """Save benchmark results and summary as JSON files."""
        os.makedirs(output_dir, exist_ok=True)

        # Save raw results as JSON
        results_file = os.path.join(output_dir, "benchmark_results.json")
        with open(results_file, "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        # Save summary
        summary_file = os.path.join(output_dir, "benchmark_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        log.info("Results saved to %s", output_dir)
