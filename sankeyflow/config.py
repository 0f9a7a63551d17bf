"""Configuration module for sankeyflow.

This module provides configuration management using Pydantic models.
All configuration values are read from environment variables.
Supports loading from .env file via python-dotenv.
"""

import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

# Load environment variables from .env file (if present)
load_dotenv()


class Config(BaseModel):
    """Application configuration loaded from environment variables.

    Attributes:
        input_path: CSV or JSON file holding the columnar data.
        output_path: Where the ``{nodes, links}`` JSON document is written.
        source_column: Column holding source labels.
        target_column: Column holding target labels.
        value_column: Column holding flow values.
        id_column: Optional column holding row identifiers.
        id_policy: How identifiers are resolved when links are merged.
        compute_node_values: Whether to precompute node throughput.
        log_level: Logging level name for the entry point.
    """

    model_config = ConfigDict(extra="forbid")

    input_path: Path = Field(
        default=Path("data/flows.csv"),
        description="Columnar input file (.csv or .json)",
    )
    output_path: Path = Field(
        default=Path("data/sankey_output.json"),
        description="Output JSON document path",
    )
    source_column: str = Field(
        default="source",
        min_length=1,
        description="Source label column",
    )
    target_column: str = Field(
        default="target",
        min_length=1,
        description="Target label column",
    )
    value_column: str = Field(
        default="value",
        min_length=1,
        description="Flow value column",
    )
    id_column: str | None = Field(
        default=None,
        description="Optional identifier column",
    )
    id_policy: Literal["first", "last", "drop"] = Field(
        default="first",
        description="Identifier merge policy for aggregated links",
    )
    compute_node_values: bool = Field(
        default=False,
        description="Precompute node values as max(inflow, outflow)",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Logging level",
    )


def load_config() -> Config:
    """Load configuration from environment variables.

    Reads the following environment variables:
    - SANKEY_INPUT_PATH: Input file (default: "data/flows.csv")
    - SANKEY_OUTPUT_PATH: Output file (default: "data/sankey_output.json")
    - SANKEY_SOURCE_COLUMN: Source column (default: "source")
    - SANKEY_TARGET_COLUMN: Target column (default: "target")
    - SANKEY_VALUE_COLUMN: Value column (default: "value")
    - SANKEY_ID_COLUMN: Identifier column (default: unset)
    - SANKEY_ID_POLICY: "first", "last", or "drop" (default: "first")
    - SANKEY_COMPUTE_NODE_VALUES: Precompute node values (default: "false")
    - LOG_LEVEL: Logging level (default: "WARNING")

    Returns:
        A validated Config instance.

    Raises:
        pydantic.ValidationError: If environment values fail validation.
    """
    # Parse SANKEY_COMPUTE_NODE_VALUES as boolean
    compute_str = os.environ.get("SANKEY_COMPUTE_NODE_VALUES", "false").lower()
    compute_node_values = compute_str in ("true", "1", "yes")

    # Blank means no identifier column
    id_column = os.environ.get("SANKEY_ID_COLUMN", "").strip() or None

    return Config(
        input_path=os.environ.get("SANKEY_INPUT_PATH", "data/flows.csv"),  # type: ignore[arg-type]
        output_path=os.environ.get("SANKEY_OUTPUT_PATH", "data/sankey_output.json"),  # type: ignore[arg-type]
        source_column=os.environ.get("SANKEY_SOURCE_COLUMN", "source"),
        target_column=os.environ.get("SANKEY_TARGET_COLUMN", "target"),
        value_column=os.environ.get("SANKEY_VALUE_COLUMN", "value"),
        id_column=id_column,
        id_policy=os.environ.get("SANKEY_ID_POLICY", "first").lower(),  # type: ignore[arg-type]
        compute_node_values=compute_node_values,
        log_level=os.environ.get("LOG_LEVEL", "WARNING").upper(),  # type: ignore[arg-type]
    )
