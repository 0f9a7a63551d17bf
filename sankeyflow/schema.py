"""Flow graph schema definitions using Pydantic v2.

This module defines the schema for the Sankey flow graph, including
FlowNode and FlowLink models, the SankeyChartData container handed to
the rendering layer, and the ValidationReport produced by the validator.

All models forbid extra fields.
"""

from collections.abc import Mapping, Sequence

from pydantic import BaseModel, ConfigDict, Field, computed_field

# A single cell as supplied by the host: closed variant of scalar types
CellValue = str | int | float | bool | None

# Column name -> sequence of cells; all referenced columns share one length
ColumnData = Mapping[str, Sequence[CellValue]]


class FlowNode(BaseModel):
    """Represents a node in the flow graph.

    Attributes:
        name: Trimmed, non-empty label. Identity of the node.
        depth: Layout column index assigned by layering. None until
            layering has run.
        value: Optional aggregate throughput. Usually left for the
            consumer to derive from links.
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    depth: int | None = Field(default=None, ge=0)
    value: float | None = None


class FlowLink(BaseModel):
    """Represents a directed, valued flow between two nodes.

    Used both for provisional (per-row) edges and for aggregated edges.
    The value is deliberately unconstrained so that graphs from other
    producers can be checked by the validator.

    Attributes:
        source: Label of the source node.
        target: Label of the target node.
        value: Flow magnitude. Strictly positive when produced by ingestion.
        id: Optional identifier carried from the contributing row(s).
    """

    model_config = ConfigDict(extra="forbid")

    source: str
    target: str
    value: float
    id: str | None = None


class SankeyChartData(BaseModel):
    """Root container handed to the rendering layer.

    Attributes:
        nodes: All nodes of the graph, in first-appearance order.
        links: All links of the graph.
    """

    model_config = ConfigDict(extra="forbid")

    nodes: list[FlowNode]
    links: list[FlowLink]

    @classmethod
    def empty(cls) -> "SankeyChartData":
        """Return a graph with no nodes and no links."""
        return cls(nodes=[], links=[])

    def to_document(self) -> dict:
        """Dump to the plain ``{nodes, links}`` document, omitting unset fields."""
        return self.model_dump(exclude_none=True)


class ValidationReport(BaseModel):
    """Outcome of structural validation.

    Attributes:
        errors: Fatal problems. Rendering must be blocked when non-empty.
        warnings: Advisory problems. Never affect validity.
    """

    model_config = ConfigDict(extra="forbid")

    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_valid(self) -> bool:
        return not self.errors


class PipelineResult(BaseModel):
    """A built graph together with its validation report.

    Attributes:
        data: The aggregated, layered graph.
        validation: Structural validation of ``data``.
    """

    model_config = ConfigDict(extra="forbid")

    data: SankeyChartData
    validation: ValidationReport


class DataInfo(BaseModel):
    """Summary of the selected input columns.

    Attributes:
        row_count: Number of rows in the source column.
        source_column: Selected source column name.
        target_column: Selected target column name.
        value_column: Selected value column name.
        has_data: True when all three columns are non-empty.
    """

    model_config = ConfigDict(extra="forbid")

    row_count: int
    source_column: str
    target_column: str
    value_column: str
    has_data: bool
