"""Unit tests for the validator module.

Tests validate_sankey_data function for:
- Valid graph acceptance
- Missing data shape short-circuit
- Empty nodes / links errors
- Orphan and self-loop warnings
- Dangling reference and non-positive value errors
- Plain mapping input from other producers
"""

from sankeyflow.schema import FlowLink, FlowNode, SankeyChartData
from sankeyflow.validator import validate_sankey_data


def _graph(names: list[str], links: list[tuple[str, str, float]]) -> SankeyChartData:
    return SankeyChartData(
        nodes=[FlowNode(name=name) for name in names],
        links=[FlowLink(source=s, target=t, value=v) for s, t, v in links],
    )


class TestValidateSankeyData:
    """Tests for validate_sankey_data function."""

    def test_valid_graph_passes(self) -> None:
        """A connected graph with positive values has no errors or warnings."""
        report = validate_sankey_data(_graph(["A", "B", "C"], [("A", "B", 15), ("B", "C", 3)]))

        assert report.is_valid is True
        assert report.errors == []
        assert report.warnings == []

    def test_missing_data_short_circuits(self) -> None:
        """None input yields a single error."""
        report = validate_sankey_data(None)

        assert report.is_valid is False
        assert report.errors == ["Missing nodes or links data"]
        assert report.warnings == []

    def test_missing_links_key_short_circuits(self) -> None:
        """A mapping without links yields a single error."""
        report = validate_sankey_data({"nodes": []})

        assert report.errors == ["Missing nodes or links data"]

    def test_empty_graph_reports_both_errors(self) -> None:
        """Empty nodes and empty links are both reported."""
        report = validate_sankey_data(SankeyChartData.empty())

        assert report.errors == ["No nodes found in data", "No links found in data"]
        assert report.is_valid is False

    def test_orphan_is_warning(self) -> None:
        """Nodes without links are a warning, not an error."""
        report = validate_sankey_data(
            _graph(["A", "B", "Lonely"], [("A", "B", 1)])
        )

        assert report.is_valid is True
        assert report.warnings == [
            "Found 1 orphaned nodes (nodes not connected to any links)"
        ]

    def test_dangling_links_are_errors(self) -> None:
        """Links referencing unknown nodes are counted as an error."""
        report = validate_sankey_data(
            _graph(["A", "B"], [("A", "B", 1), ("A", "Ghost", 1), ("Ghost", "Other", 1)])
        )

        assert report.is_valid is False
        assert "Found 2 links referencing non-existent nodes" in report.errors

    def test_self_loop_is_warning(self) -> None:
        """Self-referencing links are a warning."""
        report = validate_sankey_data(_graph(["A", "B"], [("A", "B", 1), ("B", "B", 1)]))

        assert report.is_valid is True
        assert report.warnings == ["Found 1 self-referencing links"]

    def test_non_positive_values_are_errors(self) -> None:
        """Zero and negative link values are counted as an error."""
        report = validate_sankey_data(
            _graph(["A", "B", "C"], [("A", "B", 0), ("B", "C", -2), ("A", "C", 4)])
        )

        assert report.errors == ["Found 2 links with zero or negative values"]

    def test_mapping_input_validated(self) -> None:
        """A plain document from another producer is checked the same way."""
        report = validate_sankey_data({
            "nodes": [{"name": "A"}, {"name": "B"}],
            "links": [{"source": "A", "target": "B", "value": 3}],
        })

        assert report.is_valid is True

    def test_mapping_extra_keys_ignored(self) -> None:
        """Presentation keys on nodes and links do not affect validation."""
        report = validate_sankey_data({
            "nodes": [{"name": "A", "itemStyle": {"color": "#5470c6"}}, {"name": "B", "depth": 0}],
            "links": [{"source": "A", "target": "B", "value": 3, "lineStyle": {"width": 1}}],
        })

        assert report.is_valid is True
        assert report.errors == []
        assert report.warnings == []

    def test_mapping_numeric_labels_checked(self) -> None:
        """Numeric labels are compared as text and checks still run."""
        report = validate_sankey_data({
            "nodes": [{"name": 1}, {"name": 2.0}, {"name": 3}],
            "links": [
                {"source": 1, "target": "2", "value": 5},
                {"source": 2, "target": 3, "value": 1},
                {"source": 3, "target": 9, "value": 1},
            ],
        })

        assert report.errors == ["Found 1 links referencing non-existent nodes"]

    def test_mapping_non_numeric_value_is_error(self) -> None:
        """Missing or non-numeric values count as non-positive."""
        report = validate_sankey_data({
            "nodes": [{"name": "A"}, {"name": "B"}],
            "links": [
                {"source": "A", "target": "B", "value": "lots"},
                {"source": "B", "target": "A"},
            ],
        })

        assert report.errors == ["Found 2 links with zero or negative values"]

    def test_mapping_without_labels_is_malformed(self) -> None:
        """Entries without labels produce one error instead of raising."""
        report = validate_sankey_data({
            "nodes": [{"label": "A"}],
            "links": [{"target": "A", "value": 1}],
        })

        assert report.is_valid is False
        assert report.errors == ["Malformed nodes or links data (2 entries without labels)"]

    def test_mapping_with_non_list_entries_is_malformed(self) -> None:
        """Nodes and links must be lists of objects."""
        report = validate_sankey_data({"nodes": "A,B", "links": [["A", "B", 1]]})

        assert report.is_valid is False
        assert len(report.errors) == 1
        assert report.errors[0].startswith("Malformed nodes or links data")

    def test_validity_matches_errors(self) -> None:
        """is_valid is exactly "no errors", whatever the warnings."""
        report = validate_sankey_data(
            _graph(["A", "B", "C"], [("A", "A", 1), ("A", "B", -1)])
        )

        assert report.warnings
        assert report.is_valid == (len(report.errors) == 0)
