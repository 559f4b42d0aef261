"""Sudoku grid representation with per-cell constraint records."""

from __future__ import annotations
import numpy as np
from typing import Dict, Iterable, List, Optional, Set, Tuple

from ..exceptions import MalformedInputError


SIZE = 9
BOX_SIZE = 3
EMPTY = 0
DIGITS = tuple(range(1, SIZE + 1))

Position = Tuple[int, int]
CellState = Tuple[int, frozenset]


def box_origin(row: int, col: int) -> Position:
    """Top-left position of the 3x3 box containing (row, col)."""
    return row - (row % BOX_SIZE), col - (col % BOX_SIZE)


def units_of(row: int, col: int) -> List[Position]:
    """
    Get the 27 positions making up the unit of (row, col).

    The column comes first, then the row, then the box. Positions shared by
    more than one of those appear more than once; callers only perform
    idempotent work per position.
    """
    positions = [(i, col) for i in range(SIZE)]
    positions.extend((row, j) for j in range(SIZE))
    box_row, box_col = box_origin(row, col)
    for i in range(BOX_SIZE):
        for j in range(BOX_SIZE):
            positions.append((box_row + i, box_col + j))
    return positions


def peers_of(row: int, col: int) -> Set[Position]:
    """Distinct positions sharing a unit with (row, col), excluding itself."""
    peers = set(units_of(row, col))
    peers.discard((row, col))
    return peers


class Cell:
    """
    One board position: its value plus the digits ruled out for it.

    ``blocked`` only grows through :meth:`mark_impossible`; it shrinks only
    when a saved state is restored.
    """

    __slots__ = ("value", "blocked")

    def __init__(self, value: int = EMPTY, blocked: Iterable[int] = ()):
        self.value = value
        self.blocked: Set[int] = set(blocked)

    @property
    def constraint_count(self) -> int:
        """Number of digits currently known to be impossible here."""
        return len(self.blocked)

    def is_empty(self) -> bool:
        return self.value == EMPTY

    def mark_impossible(self, digit: int) -> None:
        """Rule out ``digit`` for this cell. Marking twice has no extra effect."""
        if digit < 1 or digit > SIZE:
            raise ValueError(f"Digit must be 1-{SIZE}, got {digit}")
        self.blocked.add(digit)

    def forced_value(self) -> Optional[int]:
        """
        Get the only digit not yet ruled out.

        Returns:
            The remaining digit, or None if zero or several digits remain.
        """
        remaining = [d for d in DIGITS if d not in self.blocked]
        if len(remaining) == 1:
            return remaining[0]
        return None

    def state(self) -> CellState:
        return self.value, frozenset(self.blocked)

    def restore(self, state: CellState) -> None:
        self.value = state[0]
        self.blocked = set(state[1])

    def __repr__(self) -> str:
        return f"Cell(value={self.value}, blocked={sorted(self.blocked)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cell):
            return False
        return self.value == other.value and self.blocked == other.blocked


class SudokuGrid:
    """
    A 9x9 Sudoku grid of :class:`Cell` objects.

    The clues the grid was built from are kept in ``clues``, a read-only
    numpy array, so presenters can tell given digits from solved ones.
    Constraints are seeded once, at construction.
    """

    def __init__(self, grid: np.ndarray):
        """
        Initialize a grid from a 9x9 array of digits.

        Args:
            grid: Values 0 (empty) to 9.

        Raises:
            MalformedInputError: If the shape is not 9x9 or a value is out
                of range.
        """
        arr = np.asarray(grid)
        if arr.shape != (SIZE, SIZE):
            raise MalformedInputError(
                f"Grid shape must be ({SIZE}, {SIZE}), got {arr.shape}"
            )
        if not np.issubdtype(arr.dtype, np.integer):
            raise MalformedInputError(f"Grid values must be integers, got {arr.dtype}")
        bad = np.argwhere((arr < EMPTY) | (arr > SIZE))
        if len(bad):
            r, c = bad[0]
            raise MalformedInputError(
                f"Value at row {r + 1}, column {c + 1} must be 0-{SIZE}, got {arr[r, c]}"
            )

        self.clues = arr.astype(np.int32)
        self.clues.setflags(write=False)
        self.cells: List[List[Cell]] = [
            [Cell(int(self.clues[r, c])) for c in range(SIZE)] for r in range(SIZE)
        ]
        self.initialize_constraints()

    def initialize_constraints(self) -> None:
        """
        Rule out, for every empty cell, the digits already placed in its unit.

        Cells left with one or no candidate are not filled here; the search
        handles them once it starts.
        """
        for r in range(SIZE):
            for c in range(SIZE):
                cell = self.cells[r][c]
                if not cell.is_empty():
                    continue
                for pr, pc in units_of(r, c):
                    value = self.cells[pr][pc].value
                    if value != EMPTY:
                        cell.mark_impossible(value)

    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def get(self, row: int, col: int) -> int:
        """Get value at position (row, col). 0 means empty."""
        return self.cells[row][col].value

    def is_empty(self, row: int, col: int) -> bool:
        return self.cells[row][col].value == EMPTY

    def is_original(self, row: int, col: int) -> bool:
        """Check if (row, col) held a clue when the grid was built."""
        return bool(self.clues[row, col] != EMPTY)

    def get_row(self, row: int) -> List[int]:
        return [cell.value for cell in self.cells[row]]

    def get_col(self, col: int) -> List[int]:
        return [self.cells[r][col].value for r in range(SIZE)]

    def get_box(self, row: int, col: int) -> List[int]:
        """Get all values in the box containing (row, col)."""
        box_row, box_col = box_origin(row, col)
        return [
            self.cells[box_row + i][box_col + j].value
            for i in range(BOX_SIZE)
            for j in range(BOX_SIZE)
        ]

    def empty_cells(self) -> List[Position]:
        """Empty positions in row-major order."""
        return [
            (r, c) for r in range(SIZE) for c in range(SIZE)
            if self.cells[r][c].value == EMPTY
        ]

    def count_empty(self) -> int:
        return len(self.empty_cells())

    def count_filled(self) -> int:
        return SIZE * SIZE - self.count_empty()

    def is_complete(self) -> bool:
        return self.count_empty() == 0

    def is_valid(self) -> bool:
        """
        Check that no digit repeats within any row, column or box.
        Empty cells are ignored.
        """
        arr = self.to_array()
        units = [arr[i, :] for i in range(SIZE)]
        units += [arr[:, j] for j in range(SIZE)]
        units += [
            arr[br:br + BOX_SIZE, bc:bc + BOX_SIZE].flatten()
            for br in range(0, SIZE, BOX_SIZE)
            for bc in range(0, SIZE, BOX_SIZE)
        ]
        for unit in units:
            non_zero = unit[unit != EMPTY]
            if len(non_zero) != len(set(non_zero.tolist())):
                return False
        return True

    def is_solved(self) -> bool:
        """Check if every cell is filled and no unit has a repeat."""
        return self.is_complete() and self.is_valid()

    def snapshot_unit(self, row: int, col: int) -> Dict[Position, CellState]:
        """Save the state of every cell in the unit of (row, col)."""
        return {pos: self.cells[pos[0]][pos[1]].state() for pos in units_of(row, col)}

    def restore(self, snapshot: Dict[Position, CellState]) -> None:
        """Put back cell states saved by :meth:`snapshot_unit`."""
        for (r, c), state in snapshot.items():
            self.cells[r][c].restore(state)

    def constraint_counts(self) -> np.ndarray:
        """9x9 array of ``constraint_count`` per cell."""
        return np.array(
            [[cell.constraint_count for cell in row] for row in self.cells],
            dtype=np.int32,
        )

    def to_array(self) -> np.ndarray:
        """Current values as a 9x9 int32 array."""
        return np.array(
            [[cell.value for cell in row] for row in self.cells], dtype=np.int32
        )

    def to_string(self) -> str:
        """Compact 81-character form, 0 for empty cells."""
        return ''.join(str(cell.value) for row in self.cells for cell in row)

    def copy(self) -> SudokuGrid:
        """Deep copy, including constraint records and the clue snapshot."""
        new_grid = SudokuGrid.__new__(SudokuGrid)
        new_grid.clues = self.clues
        new_grid.cells = [
            [Cell(cell.value, cell.blocked) for cell in row] for row in self.cells
        ]
        return new_grid

    @classmethod
    def from_string(cls, s: str) -> SudokuGrid:
        """
        Create a grid from an 81-character string.

        Args:
            s: 0 or . for empty, 1-9 for digits. Whitespace is ignored.
        """
        s = ''.join(s.split())
        if len(s) != SIZE * SIZE:
            raise MalformedInputError(
                f"String length must be {SIZE * SIZE}, got {len(s)}"
            )
        values = []
        for idx, ch in enumerate(s):
            if ch == '.':
                values.append(EMPTY)
            elif ch in "0123456789":
                values.append(int(ch))
            else:
                raise MalformedInputError(
                    f"Invalid character {ch!r} at row {idx // SIZE + 1}, "
                    f"column {idx % SIZE + 1}"
                )
        return cls(np.array(values, dtype=np.int32).reshape(SIZE, SIZE))

    @classmethod
    def from_2d_list(cls, data: List[List[int]]) -> SudokuGrid:
        """Create a grid from a 2D list of digits."""
        if len(data) != SIZE or any(len(row) != SIZE for row in data):
            raise MalformedInputError(f"Expected {SIZE} rows of {SIZE} values")
        return cls(np.array(data, dtype=np.int32))

    def __str__(self) -> str:
        """Pretty-print the grid, '.' for empty cells."""
        lines = []
        horizontal_sep = '+' + (('-' * (BOX_SIZE * 2 + 1)) + '+') * BOX_SIZE

        for i in range(SIZE):
            if i % BOX_SIZE == 0:
                lines.append(horizontal_sep)
            row_str = '|'
            for j in range(SIZE):
                val = self.cells[i][j].value
                row_str += ' .' if val == EMPTY else f' {val}'
                if (j + 1) % BOX_SIZE == 0:
                    row_str += ' |'
            lines.append(row_str)

        lines.append(horizontal_sep)
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f"SudokuGrid(filled={self.count_filled()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SudokuGrid):
            return False
        return self.cells == other.cells and np.array_equal(self.clues, other.clues)

    __hash__ = None
