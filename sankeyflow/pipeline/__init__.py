"""Flow graph construction pipeline.

This package provides the main entry points for turning columnar rows
into a validated Sankey graph:

    ingestion -> aggregation -> layering (-> node values)

followed by structural validation of the result.

Features:
- Fail-safe boundary: unexpected failures are logged and produce an
  empty graph, never an exception
- Validation gating: no errors are reported before any data has been
  configured or supplied
- Stateless: every call recomputes the full graph from its inputs
"""

import logging
from collections.abc import Mapping

from sankeyflow.aggregator import IdMergePolicy, aggregate_links
from sankeyflow.ingestion import transform_rows_to_flow
from sankeyflow.layering import calculate_node_depths, compute_node_values
from sankeyflow.schema import (
    ColumnData,
    DataInfo,
    PipelineResult,
    SankeyChartData,
    ValidationReport,
)
from sankeyflow.validator import validate_sankey_data

logger = logging.getLogger(__name__)


def build_sankey_data(
    data: ColumnData | None,
    source_column: str | None,
    target_column: str | None,
    value_column: str | None,
    id_column: str | None = None,
    *,
    id_policy: IdMergePolicy = "first",
    compute_values: bool = False,
) -> SankeyChartData:
    """Build an aggregated, layered flow graph from columnar data.

    Args:
        data: Mapping of column name to cell sequence.
        source_column: Column holding source labels.
        target_column: Column holding target labels.
        value_column: Column holding flow values.
        id_column: Optional column holding row identifiers.
        id_policy: Identifier merge policy for aggregated links.
        compute_values: Also set each node's value to
            max(inflow, outflow).

    Returns:
        The graph. Empty when data or a required selector is missing,
        when the columns are inconsistent, or when processing fails.
    """
    if data is None or not source_column or not target_column or not value_column:
        logger.debug("Sankey data or column selectors not configured yet")
        return SankeyChartData.empty()

    try:
        raw = transform_rows_to_flow(data, source_column, target_column, value_column, id_column)
        links = aggregate_links(raw.links, id_policy=id_policy)
        nodes = calculate_node_depths(raw.nodes, links)
        if compute_values:
            nodes = compute_node_values(nodes, links)
        return SankeyChartData(nodes=nodes, links=links)
    except Exception:
        logger.exception("Error processing Sankey data")
        return SankeyChartData.empty()


def run_pipeline(
    data: ColumnData | None,
    source_column: str | None,
    target_column: str | None,
    value_column: str | None,
    id_column: str | None = None,
    *,
    id_policy: IdMergePolicy = "first",
    compute_values: bool = False,
) -> PipelineResult:
    """Build the graph and validate it.

    Validation is skipped (reported valid with no messages) while the
    required selectors are not all configured, and while the result is
    empty because the source column has no rows yet. Once rows exist,
    an empty result is validated so that the caller learns why.

    Args:
        data: Mapping of column name to cell sequence.
        source_column: Column holding source labels.
        target_column: Column holding target labels.
        value_column: Column holding flow values.
        id_column: Optional column holding row identifiers.
        id_policy: Identifier merge policy for aggregated links.
        compute_values: Also precompute node values.

    Returns:
        A PipelineResult with the graph and its validation report.
    """
    graph = build_sankey_data(
        data,
        source_column,
        target_column,
        value_column,
        id_column,
        id_policy=id_policy,
        compute_values=compute_values,
    )

    if not source_column or not target_column or not value_column:
        return PipelineResult(data=graph, validation=ValidationReport())

    if not graph.nodes and not graph.links:
        source_rows = data.get(source_column) if isinstance(data, Mapping) else None
        if not source_rows:
            return PipelineResult(data=graph, validation=ValidationReport())

    return PipelineResult(data=graph, validation=validate_sankey_data(graph))


def describe_columns(
    data: ColumnData | None,
    source_column: str | None,
    target_column: str | None,
    value_column: str | None,
) -> DataInfo | None:
    """Summarise the selected columns.

    Args:
        data: Mapping of column name to cell sequence.
        source_column: Selected source column.
        target_column: Selected target column.
        value_column: Selected value column.

    Returns:
        A DataInfo, or None when data, a selector, or a selected column
        is missing.
    """
    if data is None or not source_column or not target_column or not value_column:
        return None

    sources = data.get(source_column)
    targets = data.get(target_column)
    values = data.get(value_column)
    if sources is None or targets is None or values is None:
        return None

    return DataInfo(
        row_count=len(sources),
        source_column=source_column,
        target_column=target_column,
        value_column=value_column,
        has_data=len(sources) > 0 and len(targets) > 0 and len(values) > 0,
    )
