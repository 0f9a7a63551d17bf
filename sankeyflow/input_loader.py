"""Columnar input loading module.

This module loads a tabular dataset from disk into a column mapping
(column name -> list of cells). No trimming or numeric coercion is
performed here; that is the job of ingestion.
"""

import csv
import json
from pathlib import Path

from sankeyflow.schema import CellValue

# Default path to the flow table
FLOWS_PATH: Path = Path("data/flows.csv")


def load_columns(file_path: Path = FLOWS_PATH) -> dict[str, list[CellValue]]:
    """Load a columnar dataset from a CSV or JSON file.

    CSV: the header row names the columns; every cell is kept as text
    and empty cells become None.

    JSON: either an object mapping column name to a list of cells, or a
    list of row objects (keys missing from a row become None).

    Args:
        file_path: Path to a .csv or .json file.
            Defaults to data/flows.csv.

    Returns:
        A mapping of column name to cell list.

    Raises:
        FileNotFoundError: If the specified file does not exist.
        ValueError: If the suffix is unsupported or the JSON shape is not
            one of the two accepted forms.
    """
    suffix = file_path.suffix.lower()

    if suffix == ".csv":
        return _load_csv(file_path)
    if suffix == ".json":
        return _load_json(file_path)

    raise ValueError(f"Unsupported file format: {file_path.suffix}")


def _load_csv(file_path: Path) -> dict[str, list[CellValue]]:
    with file_path.open(encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        columns: dict[str, list[CellValue]] = {name: [] for name in reader.fieldnames or []}
        for row in reader:
            for name in columns:
                cell = row.get(name)
                columns[name].append(cell if cell else None)
    return columns


def _load_json(file_path: Path) -> dict[str, list[CellValue]]:
    payload = json.loads(file_path.read_text(encoding="utf-8"))

    if isinstance(payload, dict):
        if not all(isinstance(cells, list) for cells in payload.values()):
            raise ValueError("JSON columns must map column names to lists")
        return {str(name): list(cells) for name, cells in payload.items()}

    if isinstance(payload, list):
        if not all(isinstance(row, dict) for row in payload):
            raise ValueError("JSON rows must be objects")
        names: dict[str, None] = {}
        for row in payload:
            for name in row:
                names.setdefault(name)
        return {name: [row.get(name) for row in payload] for name in names}

    raise ValueError("JSON input must be an object of columns or a list of rows")
