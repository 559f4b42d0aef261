"""Text and image rendering of Sudoku grids."""

from __future__ import annotations
import os
import sys
from typing import Callable, Optional

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns

from ..core.board import BOX_SIZE, EMPTY, SIZE, SudokuGrid

CLUE_STYLE = "\033[1;96m"  # bold light cyan
RESET = "\033[0m"


def use_color(stream=None) -> bool:
    """Colorize when writing to a terminal and NO_COLOR is unset."""
    stream = stream if stream is not None else sys.stdout
    if os.environ.get("NO_COLOR"):
        return False
    return hasattr(stream, "isatty") and stream.isatty()


def _render(text_for: Callable[[int, int], str],
            highlight: Callable[[int, int], bool], color: bool) -> str:
    lines = []
    horizontal_sep = '+' + (('-' * (BOX_SIZE * 2 + 1)) + '+') * BOX_SIZE

    for i in range(SIZE):
        if i % BOX_SIZE == 0:
            lines.append(horizontal_sep)
        row_str = '|'
        for j in range(SIZE):
            text = text_for(i, j)
            if color and highlight(i, j):
                text = f"{CLUE_STYLE}{text}{RESET}"
            row_str += ' ' + text
            if (j + 1) % BOX_SIZE == 0:
                row_str += ' |'
        lines.append(row_str)

    lines.append(horizontal_sep)
    return '\n'.join(lines)


def render_grid(grid: SudokuGrid, color: Optional[bool] = None) -> str:
    """
    Render the grid with clues highlighted.

    Args:
        grid: Grid to render. Empty cells are shown as '.'.
        color: Wrap clue digits in ANSI color codes. None decides from
               :func:`use_color`.
    """
    if color is None:
        color = use_color()

    def text_for(r: int, c: int) -> str:
        value = grid.get(r, c)
        return '.' if value == EMPTY else str(value)

    return _render(text_for, grid.is_original, color)


def render_constraint_counts(grid: SudokuGrid, color: Optional[bool] = None) -> str:
    """Render constraint counts of empty cells; assigned cells show their value."""
    if color is None:
        color = use_color()

    def text_for(r: int, c: int) -> str:
        cell = grid.cell(r, c)
        return str(cell.constraint_count) if cell.is_empty() else str(cell.value)

    return _render(text_for, lambda r, c: not grid.is_empty(r, c), color)


def plot_constraint_heatmap(grid: SudokuGrid, path: str) -> str:
    """
    Save a heatmap of constraint counts, assigned cells masked out.

    Returns:
        The path written.
    """
    counts = grid.constraint_counts()
    mask = grid.to_array() != EMPTY

    fig, ax = plt.subplots(figsize=(7, 6))
    sns.heatmap(counts, mask=mask, annot=True, fmt="d", vmin=0, vmax=SIZE,
                cmap="rocket_r", cbar_kws={"label": "Constraint count"},
                linewidths=0.5, linecolor="lightgray", square=True, ax=ax)

    for k in range(0, SIZE + 1, BOX_SIZE):
        ax.axhline(k, color="black", linewidth=2)
        ax.axvline(k, color="black", linewidth=2)

    ax.set_xticklabels(np.arange(1, SIZE + 1))
    ax.set_yticklabels(np.arange(1, SIZE + 1), rotation=0)
    ax.set_title('Constraint Count per Empty Cell', fontsize=14, fontweight='bold')

    plt.tight_layout()
    plt.savefig(path, dpi=150, bbox_inches='tight')
    plt.close(fig)

    return path
