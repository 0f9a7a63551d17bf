"""Flow graph validation module.

This module checks the structural integrity of a SankeyChartData
instance and classifies each problem as a fatal error (rendering must be
blocked) or an advisory warning. It never raises: graphs from any
producer, including raw JSON documents, are reported on rather than
rejected.
"""

import logging
import math
from collections.abc import Mapping
from typing import Any

from sankeyflow.schema import FlowLink, FlowNode, SankeyChartData, ValidationReport

logger = logging.getLogger(__name__)

MISSING_DATA = "Missing nodes or links data"
NO_NODES = "No nodes found in data"
NO_LINKS = "No links found in data"


def validate_sankey_data(data: SankeyChartData | Mapping[str, Any] | None) -> ValidationReport:
    """Validate a flow graph.

     Performs the following checks:
       1. Nodes and links collections must be present (short-circuits).
       2. Nodes must not be empty (error).
       3. Links must not be empty (error).
       4. Nodes not referenced by any link are orphans (warning).
       5. Links must reference existing nodes (error).
       6. Self-referencing links (warning).
       7. Link values must be strictly positive (error).

    Args:
        data: The graph to validate. Either a SankeyChartData or a plain
            ``{nodes, links}`` mapping.

    Returns:
        A ValidationReport. ``is_valid`` is True iff there are no errors.
    """
    graph = _coerce_graph(data)
    if isinstance(graph, ValidationReport):
        return graph

    errors: list[str] = []
    warnings: list[str] = []

    if not graph.nodes:
        errors.append(NO_NODES)

    if not graph.links:
        errors.append(NO_LINKS)

    orphan_count = _count_orphaned_nodes(graph)
    if orphan_count:
        warnings.append(
            f"Found {orphan_count} orphaned nodes (nodes not connected to any links)"
        )

    dangling_count = _count_dangling_links(graph)
    if dangling_count:
        errors.append(f"Found {dangling_count} links referencing non-existent nodes")

    self_loop_count = sum(1 for link in graph.links if link.source == link.target)
    if self_loop_count:
        warnings.append(f"Found {self_loop_count} self-referencing links")

    non_positive_count = sum(1 for link in graph.links if not link.value > 0)
    if non_positive_count:
        errors.append(f"Found {non_positive_count} links with zero or negative values")

    return ValidationReport(errors=errors, warnings=warnings)


def _coerce_graph(
    data: SankeyChartData | Mapping[str, Any] | None,
) -> SankeyChartData | ValidationReport:
    """Turn the input into a SankeyChartData, or a failing report.

    Plain documents are read leniently: keys other than name, source,
    target and value are ignored, labels are converted to text, and
    values that are not numbers count as non-positive.

    Args:
        data: The graph to validate.

    Returns:
        The graph, or a ValidationReport with a single error when the
        data shape is missing or has entries without labels.
    """
    if isinstance(data, SankeyChartData):
        return data

    if not isinstance(data, Mapping) or data.get("nodes") is None or data.get("links") is None:
        return ValidationReport(errors=[MISSING_DATA])

    nodes = data["nodes"]
    links = data["links"]
    if not _is_record_list(nodes) or not _is_record_list(links):
        return ValidationReport(
            errors=["Malformed nodes or links data (expected lists of objects)"]
        )

    unlabelled = sum(1 for node in nodes if node.get("name") is None)
    unlabelled += sum(
        1 for link in links if link.get("source") is None or link.get("target") is None
    )
    if unlabelled:
        logger.warning("Sankey data has %d nodes or links without labels", unlabelled)
        return ValidationReport(
            errors=[f"Malformed nodes or links data ({unlabelled} entries without labels)"]
        )

    return SankeyChartData(
        nodes=[FlowNode(name=_label(node["name"])) for node in nodes],
        links=[
            FlowLink(
                source=_label(link["source"]),
                target=_label(link["target"]),
                value=_magnitude(link.get("value")),
            )
            for link in links
        ],
    )


def _is_record_list(entries: Any) -> bool:
    return isinstance(entries, (list, tuple)) and all(
        isinstance(entry, Mapping) for entry in entries
    )


def _label(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _magnitude(value: Any) -> float:
    # NaN fails the positivity check
    if value is None or isinstance(value, bool):
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def _count_orphaned_nodes(graph: SankeyChartData) -> int:
    """Count nodes that no link uses as source or target.

    Args:
        graph: The graph to inspect.

    Returns:
        Number of orphaned nodes.
    """
    linked: set[str] = set()
    for link in graph.links:
        linked.add(link.source)
        linked.add(link.target)

    return sum(1 for node in graph.nodes if node.name not in linked)


def _count_dangling_links(graph: SankeyChartData) -> int:
    """Count links whose source or target is not a known node.

    Args:
        graph: The graph to inspect.

    Returns:
        Number of dangling links.
    """
    node_names: set[str] = {node.name for node in graph.nodes}

    return sum(
        1
        for link in graph.links
        if link.source not in node_names or link.target not in node_names
    )
