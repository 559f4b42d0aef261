"""Puzzle file loading and grid presentation."""

from .loader import load_csv, parse_csv, write_csv, find_puzzle_files
from .presenter import render_grid, render_constraint_counts, plot_constraint_heatmap

__all__ = [
    "load_csv",
    "parse_csv",
    "write_csv",
    "find_puzzle_files",
    "render_grid",
    "render_constraint_counts",
    "plot_constraint_heatmap",
]
