"""Utility functions for matrioska.

This module provides shared helpers used by the layouts and the CLI, such
as hex color parsing and component tree descriptions.
"""

import re
from typing import Any, Optional

from matrioska.models.component import Component, RuleComponent
from matrioska.models.meta import ComponentMeta

_HEX_COLOR = re.compile(r"^(?:0x|#)?([0-9a-fA-F]{6})$")


def parse_hex_color(value: Any) -> Optional[str]:
    """Parses an RGB hex color string.

    Args:
        value: A string like '1234AB', '0x1234AB' or '#1234AB'.
            Alpha and the compact three digit form are not supported.

    Returns:
        The color as lowercase '#rrggbb', or None if the value is not a
        valid color.
    """
    if not isinstance(value, str):
        return None
    match = _HEX_COLOR.match(value.strip())
    if not match:
        return None
    return f"#{match.group(1).lower()}"


def describe_meta(meta: Optional[ComponentMeta]) -> Optional[dict[str, Any]]:
    if meta is None:
        return None
    return meta.as_dict()


def describe_component(component: Component) -> dict[str, Any]:
    """Describes a component tree without realizing it.

    Rule gates are folded into the gated component's entry as
    `gated: true`; the rule itself is not evaluated.

    Args:
        component: The root of the tree.

    Returns:
        A nested dictionary with 'kind', 'gated', 'meta' and 'children'.
    """
    gated = False
    while isinstance(component, RuleComponent):
        gated = True
        component = component.component

    return {
        "kind": component.kind.value,
        "gated": gated,
        "meta": describe_meta(component.meta),
        "children": [describe_component(c) for c in component.children],
    }
