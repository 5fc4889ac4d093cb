"""Declarative, rule-gated component trees compiled from JSON documents."""

from matrioska.factory.json_factory import (
    JSONFactory,
    JSONFactoryError,
    MissingKeyError,
)
from matrioska.models.component import (
    ClusterComponent,
    Component,
    RuleComponent,
    SingleComponent,
    WrapperComponent,
)
from matrioska.models.enums import BuilderKind, ComponentKind, RuleOperator
from matrioska.models.meta import (
    ComponentMeta,
    DictMeta,
    MaterializableMeta,
    ZipMeta,
    as_meta,
)
from matrioska.models.rule import AndRule, NotRule, OrRule, Rule, SimpleRule

__version__ = "0.1.0"

__all__ = [
    "AndRule",
    "BuilderKind",
    "ClusterComponent",
    "Component",
    "ComponentKind",
    "ComponentMeta",
    "DictMeta",
    "JSONFactory",
    "JSONFactoryError",
    "MaterializableMeta",
    "MissingKeyError",
    "NotRule",
    "OrRule",
    "Rule",
    "RuleComponent",
    "RuleOperator",
    "SimpleRule",
    "SingleComponent",
    "WrapperComponent",
    "ZipMeta",
    "as_meta",
]
