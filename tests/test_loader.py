"""Unit tests for reading and writing puzzle files."""

import pytest

from sudsolve.exceptions import MalformedInputError
from sudsolve.io.loader import find_puzzle_files, load_csv, parse_csv, write_csv

from conftest import EASY_PUZZLE, write_puzzle


class TestLoadCsv:
    """Tests for the comma-delimited loader."""

    def test_load(self, tmp_path):
        """Test loading a well-formed file."""
        path = write_puzzle(tmp_path / "easy.csv", EASY_PUZZLE)
        grid = load_csv(path)

        assert grid.to_string() == EASY_PUZZLE
        assert grid.is_original(0, 0)
        # Constraints are seeded on load
        assert grid.cell(0, 2).constraint_count == 6

    def test_whitespace_and_blank_lines(self):
        """Test that spaces around tokens and blank lines are ignored."""
        lines = ["", " 1, 2,3,4,5,6,7,8,9 "] + ["0,0,0,0,0,0,0,0,0"] * 8 + ["", ""]
        values = parse_csv(lines)
        assert values.shape == (9, 9)
        assert list(values[0]) == [1, 2, 3, 4, 5, 6, 7, 8, 9]

    def test_too_few_rows(self):
        """Test that a short file is rejected."""
        with pytest.raises(MalformedInputError, match="Found 8 rows"):
            parse_csv(["0,0,0,0,0,0,0,0,0"] * 8)

    def test_too_many_columns(self):
        """Test that a long row is rejected."""
        lines = ["0,0,0,0,0,0,0,0,0"] * 8 + ["0,0,0,0,0,0,0,0,0,0"]
        with pytest.raises(MalformedInputError, match="Row 9 has 10 values"):
            parse_csv(lines)

    def test_non_numeric_token(self):
        """Test that a non-integer token is rejected."""
        lines = ["0,0,a,0,0,0,0,0,0"] + ["0,0,0,0,0,0,0,0,0"] * 8
        with pytest.raises(MalformedInputError, match="column 3"):
            parse_csv(lines)

    def test_non_ascii_digit_token(self):
        """Test that digits from other scripts are not read as integers."""
        lines = ["0,0,0,٣,0,0,0,0,0"] + ["0,0,0,0,0,0,0,0,0"] * 8
        with pytest.raises(MalformedInputError, match="column 4"):
            parse_csv(lines)

    def test_out_of_range_value(self, tmp_path):
        """Test that a value above 9 is rejected before solving."""
        path = tmp_path / "bad.csv"
        path.write_text("10,0,0,0,0,0,0,0,0\n" + "0,0,0,0,0,0,0,0,0\n" * 8)
        with pytest.raises(MalformedInputError):
            load_csv(str(path))

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises OSError."""
        with pytest.raises(OSError):
            load_csv(str(tmp_path / "missing.csv"))


class TestWriteCsv:
    """Tests for writing grids back out."""

    def test_write_then_load(self, tmp_path):
        """Test that a written grid reads back the same."""
        grid = load_csv(write_puzzle(tmp_path / "in.csv", EASY_PUZZLE))
        out = tmp_path / "out.csv"
        write_csv(grid, str(out))

        assert out.read_text().splitlines()[0] == "5,3,0,0,7,0,0,0,0"
        assert load_csv(str(out)).to_string() == EASY_PUZZLE


class TestFindPuzzleFiles:
    """Tests for expanding directories into puzzle files."""

    def test_directory(self, tmp_path):
        """Test that only puzzle files are listed, sorted."""
        (tmp_path / "b.csv").write_text("")
        (tmp_path / "a.txt").write_text("")
        (tmp_path / "notes.md").write_text("")

        files = find_puzzle_files(str(tmp_path))
        assert [f.split("/")[-1] for f in files] == ["a.txt", "b.csv"]

    def test_single_file(self, tmp_path):
        """Test that a file path is returned as is."""
        path = str(tmp_path / "p.csv")
        assert find_puzzle_files(path) == [path]
