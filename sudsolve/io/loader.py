"""Reading and writing puzzles as comma-delimited text files."""

from __future__ import annotations
import csv
import logging
import os
from typing import Iterable, List, Union

import numpy as np

from ..core.board import SIZE, SudokuGrid
from ..exceptions import MalformedInputError

log = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def parse_csv(lines: Iterable[str]) -> np.ndarray:
    """
    Parse comma-delimited rows into a 9x9 array of digits.

    Blank lines are skipped and whitespace around tokens is ignored.

    Raises:
        MalformedInputError: Wrong number of rows or columns, or a token
            that is not an integer.
    """
    rows: List[List[int]] = []
    for tokens in csv.reader(lines):
        tokens = [t.strip() for t in tokens]
        if not any(tokens):
            continue
        row_number = len(rows) + 1
        if len(tokens) != SIZE:
            raise MalformedInputError(
                f"Row {row_number} has {len(tokens)} values, expected {SIZE}"
            )
        row = []
        for col, token in enumerate(tokens, 1):
            try:
                # int() also takes non-ASCII digits such as "\u0663"
                if not token.isascii():
                    raise ValueError(token)
                row.append(int(token))
            except ValueError:
                raise MalformedInputError(
                    f"Row {row_number}, column {col}: {token!r} is not an integer"
                ) from None
        rows.append(row)

    if len(rows) != SIZE:
        raise MalformedInputError(f"Found {len(rows)} rows, expected {SIZE}")
    return np.array(rows, dtype=np.int32)


def load_csv(path: PathLike) -> SudokuGrid:
    """
    Load a puzzle from a comma-delimited file.

    Args:
        path: File with one row per line, 9 comma-separated digits per row,
              0 for an empty cell.

    Returns:
        A grid with its constraints initialized.
    """
    log.debug("Reading puzzle from %s", path)
    with open(path, "r", newline="") as f:
        values = parse_csv(f)
    return SudokuGrid(values)


def write_csv(grid: SudokuGrid, path: PathLike) -> None:
    """Write the current values of ``grid`` in the same format load_csv reads."""
    with open(path, "w", newline="") as f:
        writer = csv.writer(f, lineterminator="\n")
        for r in range(SIZE):
            writer.writerow(grid.get_row(r))
    log.debug("Wrote grid to %s", path)


def find_puzzle_files(path: PathLike) -> List[str]:
    """
    Expand a directory into its puzzle files.

    Returns:
        Sorted ``.csv`` and ``.txt`` files directly inside ``path``, or
        ``[path]`` if it is a file.
    """
    path = os.fspath(path)
    if not os.path.isdir(path):
        return [path]
    return sorted(
        os.path.join(path, name)
        for name in os.listdir(path)
        if name.lower().endswith((".csv", ".txt"))
    )
