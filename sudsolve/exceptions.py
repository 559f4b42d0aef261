"""Exceptions raised by the Sudoku solver package."""


class MalformedInputError(ValueError):
    """A puzzle is not a 9x9 grid of integers in 0-9."""
