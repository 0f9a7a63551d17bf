"""Tooltip template utilities.

Templates contain placeholders such as ``{source}`` or ``{value}`` that
are substituted from a node or link record at render time. The
``{data.*}`` form is accepted as a deprecated alias.

Available variables:
- {source}, {target}: link endpoints (aliases of {name} for nodes)
- {value}: link or node value
- {id}: link identifier
- {name}: node name
"""

import re
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

SUPPORTED_VARIABLES: list[str] = ["{source}", "{target}", "{value}", "{id}", "{name}"]

DEPRECATED_VARIABLES: list[str] = ["{data.source}", "{data.target}", "{data.value}", "{data.id}"]

DEPRECATION_WARNING = (
    "Using {data.variable} syntax is deprecated. Use {variable} instead "
    "(e.g., {source} instead of {data.source})"
)

_VARIABLE_PATTERN = re.compile(r"\{([^}]+)\}")
_LINE_BREAK_PATTERN = re.compile(r"<br\s*/?>", re.IGNORECASE)


class TooltipValidation(BaseModel):
    """Result of checking a tooltip template.

    Attributes:
        is_valid: False when the template uses unknown variables.
        warnings: Unknown variables and deprecation notices.
        supported_variables: Variables a template may use.
    """

    model_config = ConfigDict(extra="forbid")

    is_valid: bool
    warnings: list[str]
    supported_variables: list[str]


def format_tooltip(
    template: str,
    record: Mapping[str, Any],
    data_type: Literal["node", "edge"],
) -> str:
    """Substitute record values into a tooltip template.

    Unknown placeholders are left verbatim. Missing text fields render as
    an empty string and a missing value renders as 0.

    Args:
        template: Template string with placeholders.
        record: Node fields (name, value) or link fields
            (source, target, value, id).
        data_type: "node" or "edge".

    Returns:
        The formatted tooltip text.
    """
    if data_type == "edge":
        substitutions = {
            "source": _text(record.get("source")),
            "target": _text(record.get("target")),
            "value": _number_text(record.get("value")),
            "id": _text(record.get("id")),
        }
    else:
        name = _text(record.get("name"))
        substitutions = {
            "name": name,
            "source": name,
            "target": name,
            "value": _number_text(record.get("value")),
        }

    def replace(match: re.Match[str]) -> str:
        variable = match.group(1).removeprefix("data.")
        return substitutions.get(variable, match.group(0))

    result = _VARIABLE_PATTERN.sub(replace, template)
    return _LINE_BREAK_PATTERN.sub("<br/>", result)


def validate_tooltip_template(template: str) -> TooltipValidation:
    """Check a template for unknown and deprecated variables.

    Only the plain variables and the deprecated ``{data.source}``,
    ``{data.target}``, ``{data.value}`` and ``{data.id}`` are known.
    ``{data.name}`` is reported as unknown even though format_tooltip
    still substitutes it for nodes.

    Args:
        template: Template string to check.

    Returns:
        A TooltipValidation. Deprecation warnings do not affect validity.
    """
    warnings: list[str] = []
    has_unknown = False

    for match in _VARIABLE_PATTERN.finditer(template):
        variable = match.group(0)
        if variable in SUPPORTED_VARIABLES or variable in DEPRECATED_VARIABLES:
            continue
        warnings.append(f"Unknown variable: {variable}")
        has_unknown = True

    if "{data." in template:
        warnings.append(DEPRECATION_WARNING)

    return TooltipValidation(
        is_valid=not has_unknown,
        warnings=warnings,
        supported_variables=list(SUPPORTED_VARIABLES),
    )


def migrate_tooltip_template(template: str) -> str:
    """Rewrite deprecated ``{data.*}`` placeholders to the plain form."""
    for variable in DEPRECATED_VARIABLES:
        template = template.replace(variable, variable.replace("data.", ""))
    return template


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _number_text(value: Any) -> str:
    if value is None:
        return "0"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
