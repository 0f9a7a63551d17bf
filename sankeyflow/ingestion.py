"""Row ingestion module.

Turns parallel columnar sequences (source, target, value and an optional
identifier) into a provisional flow graph: one link per surviving row and
the set of node labels seen in those rows.

Cells are a closed variant of str, int, float, bool and None. Coercion:

- Labels: None becomes "", booleans become "true"/"false", integral
  floats drop their fractional part ("3.0" -> "3"), then text is trimmed.
- Values: None becomes 0, booleans become 1/0, strings are parsed as
  floats (unparseable text becomes 0), non-finite numbers become 0.
- Identifiers: None or blank means no identifier, anything else is
  converted to text verbatim.

Any other cell type raises TypeError; the pipeline boundary handles it.
"""

import logging
import math

from sankeyflow.schema import CellValue, ColumnData, FlowLink, FlowNode, SankeyChartData

logger = logging.getLogger(__name__)


def transform_rows_to_flow(
    data: ColumnData | None,
    source_column: str | None,
    target_column: str | None,
    value_column: str | None,
    id_column: str | None = None,
) -> SankeyChartData:
    """Build a provisional flow graph from columnar data.

    Rows are dropped silently when the trimmed source or target is empty
    or the coerced value is not strictly positive. Every surviving row
    registers both of its labels as nodes, in order of first appearance
    (source before target, earlier rows first).

    Args:
        data: Mapping of column name to cell sequence.
        source_column: Column holding source labels.
        target_column: Column holding target labels.
        value_column: Column holding flow magnitudes.
        id_column: Optional column holding row identifiers.

    Returns:
        A SankeyChartData with unaggregated links. Empty when a required
        selector is missing or the columns differ in length.

    Raises:
        TypeError: If a cell is not one of the supported scalar types.
    """
    if data is None or not source_column or not target_column or not value_column:
        logger.error("Sankey data or a required column selector is missing")
        return SankeyChartData.empty()

    missing = [
        column for column in (source_column, target_column, value_column) if column not in data
    ]
    if missing:
        logger.error("Selected columns not found in data: %s", ", ".join(missing))

    sources = data.get(source_column) or []
    targets = data.get(target_column) or []
    values = data.get(value_column) or []

    ids = None
    if id_column:
        if id_column in data:
            ids = data[id_column] or []
        else:
            logger.warning("ID column %r not found in data; links carry no identifier", id_column)

    lengths = {len(sources), len(targets), len(values)}
    if ids is not None:
        lengths.add(len(ids))
    if len(lengths) != 1:
        logger.error(
            "Sankey data columns must have equal length (source=%d, target=%d, value=%d%s)",
            len(sources),
            len(targets),
            len(values),
            f", id={len(ids)}" if ids is not None else "",
        )
        return SankeyChartData.empty()

    # dict preserves insertion order and deduplicates
    node_names: dict[str, None] = {}
    links: list[FlowLink] = []

    for row in range(len(sources)):
        source = coerce_label(sources[row])
        target = coerce_label(targets[row])
        value = coerce_value(values[row])

        if not source or not target or value <= 0:
            continue

        node_names.setdefault(source)
        node_names.setdefault(target)

        links.append(FlowLink(
            source=source,
            target=target,
            value=value,
            id=coerce_identifier(ids[row]) if ids is not None else None,
        ))

    nodes = [FlowNode(name=name) for name in node_names]

    if nodes:
        logger.debug(
            "Sankey transformation complete: %d nodes, %d links from %d rows",
            len(nodes),
            len(links),
            len(sources),
        )

    return SankeyChartData(nodes=nodes, links=links)


def coerce_label(cell: CellValue) -> str:
    """Convert a cell to a trimmed node label ("" when absent)."""
    return _cell_to_text(cell).strip()


def coerce_value(cell: CellValue) -> float:
    """Convert a cell to a finite float, falling back to 0."""
    if cell is None:
        return 0.0
    if isinstance(cell, bool):
        return 1.0 if cell else 0.0
    if isinstance(cell, (int, float)):
        number = float(cell)
    elif isinstance(cell, str):
        text = cell.strip()
        if not text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return 0.0
    else:
        raise TypeError(f"Unsupported cell type: {type(cell).__name__}")

    return number if math.isfinite(number) else 0.0


def coerce_identifier(cell: CellValue) -> str | None:
    """Convert a cell to an identifier, or None when absent or blank."""
    text = _cell_to_text(cell)
    return text if text.strip() else None


def _cell_to_text(cell: CellValue) -> str:
    if cell is None:
        return ""
    if isinstance(cell, bool):
        return "true" if cell else "false"
    if isinstance(cell, str):
        return cell
    if isinstance(cell, float) and cell.is_integer():
        return str(int(cell))
    if isinstance(cell, (int, float)):
        return str(cell)
    raise TypeError(f"Unsupported cell type: {type(cell).__name__}")
