"""Main orchestration module for the sankeyflow pipeline.

This module coordinates the end-to-end workflow:
1. Load columnar flow data
2. Build the aggregated, layered flow graph
3. Validate graph structure
4. Save the graph to JSON
"""

import json
import logging
import sys
from pathlib import Path

from sankeyflow.config import load_config
from sankeyflow.input_loader import load_columns
from sankeyflow.pipeline import describe_columns, run_pipeline
from sankeyflow.schema import SankeyChartData


def save_graph_json(graph: SankeyChartData, output_path: Path) -> None:
    """Save a flow graph as a ``{nodes, links}`` JSON document.

    Args:
        graph: The graph to save.
        output_path: Path where the JSON file will be written.

    Raises:
        OSError: If the file cannot be written.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(graph.to_document(), indent=2),
        encoding="utf-8",
    )


def main() -> int:
    """Run the sankeyflow pipeline.

    Returns:
        Exit code: 0 on success, 1 on failure or when the graph has
        validation errors.
    """
    try:
        config = load_config()
        logging.basicConfig(
            level=config.log_level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

        print(f"[1/4] Loading flow data from {config.input_path}...")
        columns = load_columns(config.input_path)
        info = describe_columns(
            columns, config.source_column, config.target_column, config.value_column
        )
        if info is None:
            raise ValueError(
                "Input is missing one of the columns "
                f"{config.source_column!r}, {config.target_column!r}, {config.value_column!r}"
            )
        print(f"      Loaded {info.row_count} rows")

        print("[2/4] Building flow graph...")
        result = run_pipeline(
            columns,
            config.source_column,
            config.target_column,
            config.value_column,
            config.id_column,
            id_policy=config.id_policy,
            compute_values=config.compute_node_values,
        )
        graph = result.data
        print(f"      {len(graph.nodes)} nodes, {len(graph.links)} links")

        print("[3/4] Validating flow graph...")
        for warning in result.validation.warnings:
            print(f"      Warning: {warning}")
        for error in result.validation.errors:
            print(f"      Error: {error}", file=sys.stderr)
        if not result.validation.is_valid:
            print("\n✗ Graph failed validation; nothing saved", file=sys.stderr)
            return 1
        print("      Validation passed")

        print(f"[4/4] Saving graph to {config.output_path}...")
        save_graph_json(graph, config.output_path)
        print("      Graph saved successfully")

        print("\n✓ Pipeline completed successfully")
        return 0

    except FileNotFoundError as e:
        print(f"\n✗ File not found: {e}", file=sys.stderr)
        return 1

    except ValueError as e:
        print(f"\n✗ Validation error: {e}", file=sys.stderr)
        return 1

    except Exception as e:
        print(f"\n✗ Unexpected error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
