"""Enumeration definitions for matrioska.

This module contains the Enum classes shared by the component algebra,
the JSON factory and the standard layouts.
"""

from enum import Enum


class ComponentKind(str, Enum):
    """Defines the variant of a Component.

    Attributes:
        SINGLE: A leaf built from its meta only.
        WRAPPER: A node with exactly one child.
        CLUSTER: A node laying out zero or more children.
        RULE: A gate realizing its component only when a rule holds.
    """

    SINGLE = "single"
    WRAPPER = "wrapper"
    CLUSTER = "cluster"
    RULE = "rule"


class BuilderKind(str, Enum):
    """Defines the kind of builder stored in a JSONFactory registry.

    Attributes:
        SINGLE: `(meta) -> Component`.
        WRAPPER: `(child, meta) -> Component`.
        CLUSTER: `(children, meta) -> Component`.
        RULE: `() -> bool`, a named predicate for rule expressions.
    """

    SINGLE = "single"
    WRAPPER = "wrapper"
    CLUSTER = "cluster"
    RULE = "rule"


class RuleOperator(str, Enum):
    """Logical operators accepted in the `rule` key of a document node."""

    AND = "AND"
    OR = "OR"
    NOT = "NOT"


class Orientation(str, Enum):
    """Axis along which a stack arranges its children."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
