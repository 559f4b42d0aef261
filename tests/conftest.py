"""Shared fixtures for the test suite."""

import matplotlib
matplotlib.use("Agg")

import pytest

from sudsolve.core.board import SudokuGrid


# A known solvable puzzle with a unique solution
EASY_PUZZLE = (
    "530070000"
    "600195000"
    "098000060"
    "800060003"
    "400803001"
    "700020006"
    "060000280"
    "000419005"
    "000080079"
)

EASY_SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)

# Two 5s in the first row
DUPLICATE_CLUE_PUZZLE = "55" + EASY_PUZZLE[2:]


@pytest.fixture
def easy_grid():
    return SudokuGrid.from_string(EASY_PUZZLE)


def write_puzzle(path, puzzle):
    """Write an 81-character puzzle string as a comma-delimited file."""
    rows = [",".join(puzzle[i:i + 9]) for i in range(0, 81, 9)]
    path.write_text("\n".join(rows) + "\n")
    return str(path)
