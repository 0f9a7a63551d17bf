"""Unit tests for the settings module.

Tests settings document parsing:
- Defaults for blank input
- Deep merge of partial documents
- Fallback to defaults on invalid input
- camelCase serialisation
"""

import json

import pytest

from sankeyflow.settings import PluginSettings, dump_settings, parse_settings


class TestParseSettings:
    """Tests for parse_settings function."""

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_blank_gives_defaults(self, raw) -> None:
        """Blank input yields the default settings."""
        assert parse_settings(raw) == PluginSettings()

    def test_defaults(self) -> None:
        """Defaults mirror the chart's standard look."""
        settings = PluginSettings()

        assert settings.version == "1.0"
        assert settings.sankey.nodes.width == 20
        assert settings.sankey.links.color_mode == "gradient"
        assert settings.sankey.layout.iterations == 32
        assert settings.sankey.interaction.emphasis.focus == "adjacency"

    def test_partial_document_deep_merged(self) -> None:
        """Only the given keys change; siblings keep their defaults."""
        raw = json.dumps({"sankey": {"layout": {"orient": "vertical"}, "nodes": {"label": {"fontSize": 16}}}})

        settings = parse_settings(raw)

        assert settings.sankey.layout.orient == "vertical"
        assert settings.sankey.layout.node_align == "left"
        assert settings.sankey.nodes.label.font_size == 16
        assert settings.sankey.nodes.label.position == "right"
        assert settings.sankey.nodes.width == 20

    def test_invalid_json_gives_defaults(self, caplog: pytest.LogCaptureFixture) -> None:
        """Unparseable JSON is logged and replaced by defaults."""
        settings = parse_settings("{not json")

        assert settings == PluginSettings()
        assert "Invalid settings JSON" in caplog.text

    def test_non_object_gives_defaults(self) -> None:
        """A JSON array is not a settings document."""
        assert parse_settings("[1, 2]") == PluginSettings()

    def test_invalid_value_gives_defaults(self) -> None:
        """Values failing validation fall back to defaults."""
        raw = json.dumps({"sankey": {"links": {"colorMode": "rainbow"}}})

        assert parse_settings(raw) == PluginSettings()


class TestDumpSettings:
    """Tests for dump_settings function."""

    def test_camel_case_keys(self) -> None:
        """JSON keys use camelCase."""
        document = json.loads(dump_settings(PluginSettings()))

        assert document["sankey"]["nodes"]["alignRight"] is False
        assert document["sankey"]["tooltip"]["textStyle"]["fontSize"] == 12

    def test_dump_then_parse_preserves_changes(self) -> None:
        """A dumped document parses back to the same settings."""
        settings = parse_settings(json.dumps({"sankey": {"animation": {"enabled": False}}}))

        assert parse_settings(dump_settings(settings)) == settings
