"""Visualization utilities for benchmark results."""

from __future__ import annotations
import os
from typing import List

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .benchmark import BenchmarkResult


class Visualizer:
    """
    Chart generator for solver benchmark results.

    Compares the configured solvers on time and search effort.
    """

    # Color palette for algorithms
    COLORS = {
        "MRV": "#2ecc71",         # Green
        "FirstEmpty": "#3498db",  # Blue
    }

    def __init__(self, results: List[BenchmarkResult], output_dir: str = "results"):
        """
        Initialize the visualizer.

        Args:
            results: List of benchmark results.
            output_dir: Directory to save generated charts.
        """
        self.results = results
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        # Set style
        plt.style.use('seaborn-v0_8-whitegrid')
        sns.set_palette("husl")

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        return [
            self.plot_time_comparison(),
            self.plot_time_distribution(),
            self.plot_nodes_by_puzzle(),
        ]

    def _algorithms(self) -> List[str]:
        return sorted(set(r.algorithm for r in self.results))

    def _save(self, fig, name: str) -> str:
        plt.tight_layout()
        path = os.path.join(self.output_dir, name)
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close(fig)
        return path

    def plot_time_comparison(self) -> str:
        """Create bar chart comparing average solve times."""
        fig, ax = plt.subplots(figsize=(10, 6))

        algorithms = self._algorithms()
        avg_times = []
        colors = []

        for algo in algorithms:
            times = [r.time_seconds for r in self.results if r.algorithm == algo]
            avg_times.append(np.mean(times))
            colors.append(self.COLORS.get(algo, "#95a5a6"))

        bars = ax.bar(algorithms, avg_times, color=colors, edgecolor='black', linewidth=0.5)

        # Add value labels on bars
        for bar, time in zip(bars, avg_times):
            height = bar.get_height()
            ax.annotate(f'{time:.4f}s',
                        xy=(bar.get_x() + bar.get_width() / 2, height),
                        xytext=(0, 3),
                        textcoords="offset points",
                        ha='center', va='bottom', fontsize=10)

        ax.set_xlabel('Branch Ordering', fontsize=12)
        ax.set_ylabel('Average Time (seconds)', fontsize=12)
        ax.set_title('Average Solve Time by Branch Ordering', fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)

        return self._save(fig, "time_comparison.png")

    def plot_time_distribution(self) -> str:
        """Create box plot showing time distribution."""
        fig, ax = plt.subplots(figsize=(10, 6))

        algorithms = self._algorithms()
        data = [
            [r.time_seconds for r in self.results if r.algorithm == algo]
            for algo in algorithms
        ]

        bp = ax.boxplot(data, patch_artist=True)
        ax.set_xticks(range(1, len(algorithms) + 1))
        ax.set_xticklabels(algorithms)

        # Color boxes
        for patch, algo in zip(bp['boxes'], algorithms):
            patch.set_facecolor(self.COLORS.get(algo, "#95a5a6"))
            patch.set_alpha(0.7)

        ax.set_xlabel('Branch Ordering', fontsize=12)
        ax.set_ylabel('Time (seconds)', fontsize=12)
        ax.set_title('Solve Time Distribution', fontsize=14, fontweight='bold')

        return self._save(fig, "time_distribution.png")

    def plot_nodes_by_puzzle(self) -> str:
        """Create grouped bar chart of branch assignments tried per puzzle."""
        fig, ax = plt.subplots(figsize=(12, 6))

        algorithms = self._algorithms()
        puzzles = sorted(set(r.puzzle for r in self.results))

        x = np.arange(len(puzzles))
        width = 0.8 / max(len(algorithms), 1)

        for i, algo in enumerate(algorithms):
            nodes = []
            for puzzle in puzzles:
                matching = [
                    r.nodes_explored for r in self.results
                    if r.algorithm == algo and r.puzzle == puzzle
                ]
                nodes.append(np.mean(matching) if matching else 0)

            offset = (i - len(algorithms) / 2 + 0.5) * width
            ax.bar(x + offset, nodes, width,
                   label=algo,
                   color=self.COLORS.get(algo, "#95a5a6"),
                   edgecolor='black', linewidth=0.5)

        ax.set_xlabel('Puzzle', fontsize=12)
        ax.set_ylabel('Nodes Explored (Symlog Scale)', fontsize=12)
        ax.set_title('Search Effort by Puzzle', fontsize=14, fontweight='bold')
        ax.set_xticks(x)
        ax.set_xticklabels(puzzles, rotation=45, ha='right')
        ax.legend(title='Branch Ordering', bbox_to_anchor=(1.05, 1), loc='upper left')

        # Already-solved puzzles explore zero nodes
        ax.set_yscale('symlog')

        return self._save(fig, "nodes_by_puzzle.png")

    def generate_summary_table(self) -> str:
        """Generate a markdown summary table."""
        lines = [
            "# Benchmark Summary\n",
            "| Ordering | Solved | Avg Time | Avg Memory | Avg Nodes | Avg Backtracks |",
            "|----------|--------|----------|------------|-----------|----------------|"
        ]

        for algo in self._algorithms():
            algo_results = [r for r in self.results if r.algorithm == algo]

            solved = sum(1 for r in algo_results if r.solved)
            avg_time = np.mean([r.time_seconds for r in algo_results])
            avg_memory = np.mean([r.memory_bytes / (1024 * 1024) for r in algo_results])
            avg_nodes = np.mean([r.nodes_explored for r in algo_results])
            avg_backtracks = np.mean([r.backtracks for r in algo_results])

            lines.append(
                f"| {algo} | {solved}/{len(algo_results)} | {avg_time:.4f}s | "
                f"{avg_memory:.2f} MB | {int(avg_nodes):,} | {int(avg_backtracks):,} |"
            )

        content = "\n".join(lines)

        path = os.path.join(self.output_dir, "benchmark_summary.md")
        with open(path, "w") as f:
            f.write(content)

        return path
