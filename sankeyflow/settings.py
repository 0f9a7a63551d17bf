"""Presentation settings document for the Sankey chart.

The settings are a versioned, JSON-serializable value owned by the
editing surface and handed to the rendering layer on each render. The
graph engine itself never reads them.

Field names are snake_case in Python and camelCase in JSON.
"""

import json
import logging
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

SETTINGS_VERSION = "1.0"


class _SettingsModel(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class NodeLabelSettings(_SettingsModel):
    show: bool = True
    position: Literal["left", "right", "top", "bottom", "inside"] = "right"
    distance: float = 5
    rotate: float = 0
    font_size: int = Field(default=12, gt=0)
    font_weight: Literal["normal", "bold"] = "normal"
    color: str = "#333333"


class NodeItemStyle(_SettingsModel):
    border_width: float = Field(default=1, ge=0)
    border_color: str = "#ffffff"


class NodeSettings(_SettingsModel):
    width: float = Field(default=20, gt=0)
    gap: float = Field(default=8, ge=0)
    align_right: bool = False
    label: NodeLabelSettings = Field(default_factory=NodeLabelSettings)
    item_style: NodeItemStyle = Field(default_factory=NodeItemStyle)


class LinkLineStyle(_SettingsModel):
    color: str = "#cccccc"
    width: float = Field(default=1, ge=0)
    opacity: float = Field(default=0.7, ge=0, le=1)


class LinkSettings(_SettingsModel):
    curveness: float = Field(default=0.5, ge=0, le=1)
    color_mode: Literal["gradient", "source", "target", "none"] = "gradient"
    opacity: float = Field(default=0.7, ge=0, le=1)
    line_style: LinkLineStyle = Field(default_factory=LinkLineStyle)


class LayoutSettings(_SettingsModel):
    orient: Literal["horizontal", "vertical"] = "horizontal"
    node_align: Literal["left", "right", "justify"] = "left"
    iterations: int = Field(default=32, ge=0)
    node_gap: float = Field(default=8, ge=0)
    level_gap: float = Field(default=20, ge=0)


class TooltipTextStyle(_SettingsModel):
    color: str = "#fff"
    font_size: int = Field(default=12, gt=0)


class TooltipSettings(_SettingsModel):
    show: bool = True
    trigger: Literal["item", "axis"] = "item"
    formatter: str = "{b} : {c}"
    background_color: str = "rgba(50,50,50,0.7)"
    border_color: str = "#333"
    text_style: TooltipTextStyle = Field(default_factory=TooltipTextStyle)


class EmphasisSettings(_SettingsModel):
    focus: Literal["none", "self", "adjacency"] = "adjacency"
    blur_scope: Literal["coordinateSystem", "series", "global"] = "coordinateSystem"


class SelectSettings(_SettingsModel):
    disabled: bool = False


class InteractionSettings(_SettingsModel):
    emphasis: EmphasisSettings = Field(default_factory=EmphasisSettings)
    select: SelectSettings = Field(default_factory=SelectSettings)


class AnimationSettings(_SettingsModel):
    enabled: bool = True
    duration: int = Field(default=1000, ge=0)
    easing: str = "cubicOut"


class SankeySettings(_SettingsModel):
    nodes: NodeSettings = Field(default_factory=NodeSettings)
    links: LinkSettings = Field(default_factory=LinkSettings)
    layout: LayoutSettings = Field(default_factory=LayoutSettings)
    tooltip: TooltipSettings = Field(default_factory=TooltipSettings)
    interaction: InteractionSettings = Field(default_factory=InteractionSettings)
    animation: AnimationSettings = Field(default_factory=AnimationSettings)


class PluginSettings(_SettingsModel):
    """Root settings document.

    Attributes:
        version: Settings document version.
        sankey: Chart settings.
    """

    version: str = SETTINGS_VERSION
    sankey: SankeySettings = Field(default_factory=SankeySettings)


def parse_settings(raw: str | None) -> PluginSettings:
    """Parse a settings JSON document, deep-merged over the defaults.

    Blank input yields the defaults. Invalid JSON, a non-object document
    or values failing validation are logged and also yield the defaults.

    Args:
        raw: JSON text, possibly partial (e.g. only ``sankey.layout``).

    Returns:
        A complete PluginSettings instance.
    """
    if raw is None or not raw.strip():
        return PluginSettings()

    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.error("Invalid settings JSON: %s", e)
        return PluginSettings()

    if not isinstance(parsed, dict):
        logger.error("Settings JSON must be an object, got %s", type(parsed).__name__)
        return PluginSettings()

    defaults = PluginSettings().model_dump(by_alias=True)
    try:
        return PluginSettings.model_validate(_deep_merge(defaults, parsed))
    except ValidationError as e:
        logger.error("Invalid settings values: %s", e)
        return PluginSettings()


def dump_settings(settings: PluginSettings, indent: int | None = None) -> str:
    """Serialise settings to camelCase JSON."""
    return settings.model_dump_json(by_alias=True, indent=indent)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged
