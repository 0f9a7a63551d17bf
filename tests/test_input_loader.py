"""Unit tests for the input_loader module.

Tests columnar file loading:
- CSV loading with empty cells
- JSON column and row layouts
- Unsupported formats and shapes
- File not found handling
"""

import json
from pathlib import Path

import pytest

from sankeyflow.input_loader import load_columns


class TestLoadColumns:
    """Tests for load_columns function."""

    def test_loads_csv_columns(self, tmp_path: Path) -> None:
        """CSV headers become columns and cells stay as text."""
        test_file = tmp_path / "flows.csv"
        test_file.write_text("source,target,value\nA,B,10\nB,C,3.5\n", encoding="utf-8")

        result = load_columns(test_file)

        assert result == {
            "source": ["A", "B"],
            "target": ["B", "C"],
            "value": ["10", "3.5"],
        }

    def test_csv_empty_cells_become_none(self, tmp_path: Path) -> None:
        """Empty CSV cells are loaded as None."""
        test_file = tmp_path / "flows.csv"
        test_file.write_text("source,target,value\nA,,10\n", encoding="utf-8")

        result = load_columns(test_file)

        assert result["target"] == [None]

    def test_csv_handles_utf8(self, tmp_path: Path) -> None:
        """UTF-8 labels survive loading."""
        test_file = tmp_path / "flows.csv"
        test_file.write_text("source,target,value\nZürich,東京,1\n", encoding="utf-8")

        result = load_columns(test_file)

        assert result["source"] == ["Zürich"]
        assert result["target"] == ["東京"]

    def test_loads_json_columns(self, tmp_path: Path) -> None:
        """A JSON object of lists is loaded as-is."""
        test_file = tmp_path / "flows.json"
        test_file.write_text(json.dumps({"s": ["A"], "t": ["B"], "v": [1]}), encoding="utf-8")

        result = load_columns(test_file)

        assert result == {"s": ["A"], "t": ["B"], "v": [1]}

    def test_loads_json_rows(self, tmp_path: Path) -> None:
        """A JSON list of row objects is pivoted into columns."""
        test_file = tmp_path / "flows.json"
        rows = [{"s": "A", "t": "B", "v": 1}, {"s": "B", "v": 2, "id": "x"}]
        test_file.write_text(json.dumps(rows), encoding="utf-8")

        result = load_columns(test_file)

        assert result == {
            "s": ["A", "B"],
            "t": ["B", None],
            "v": [1, 2],
            "id": [None, "x"],
        }

    def test_json_scalar_rejected(self, tmp_path: Path) -> None:
        """A scalar JSON document is not a dataset."""
        test_file = tmp_path / "flows.json"
        test_file.write_text("42", encoding="utf-8")

        with pytest.raises(ValueError, match="JSON input must be"):
            load_columns(test_file)

    def test_json_column_not_list_rejected(self, tmp_path: Path) -> None:
        """Columns must be lists."""
        test_file = tmp_path / "flows.json"
        test_file.write_text(json.dumps({"s": "A"}), encoding="utf-8")

        with pytest.raises(ValueError, match="must map column names to lists"):
            load_columns(test_file)

    def test_unsupported_suffix(self, tmp_path: Path) -> None:
        """Only .csv and .json are supported."""
        test_file = tmp_path / "flows.xlsx"
        test_file.write_text("", encoding="utf-8")

        with pytest.raises(ValueError, match="Unsupported file format"):
            load_columns(test_file)

    def test_file_not_found(self, tmp_path: Path) -> None:
        """Missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_columns(tmp_path / "missing.csv")
