"""Compiles JSON documents into component trees.

A `JSONFactory` holds four registries keyed by string: builders for single,
wrapper and cluster components, looked up by a node's `type`, and named
predicates, looked up by the node's `rule` expression.

Only a missing `structure` (document level) or `type` (node level) is an
error. Anything else that cannot be resolved, such as an unregistered type
or rule name, is dropped from the tree, so that one document can describe
features that are not registered in every configuration.
"""

from typing import Any, Callable, Optional

from matrioska.models.base import JSONObject
from matrioska.models.component import Component, RuleComponent
from matrioska.models.enums import BuilderKind, RuleOperator
from matrioska.models.meta import ComponentMeta, DictMeta
from matrioska.models.rule import AndRule, NotRule, OrRule, Rule, SimpleRule
from matrioska.observability.logging import get_logger

logger = get_logger(__name__)

SingleFactoryBuilder = Callable[[Optional[ComponentMeta]], Optional[Component]]
WrapperFactoryBuilder = Callable[
    [Component, Optional[ComponentMeta]], Optional[Component]
]
ClusterFactoryBuilder = Callable[
    [list[Component], Optional[ComponentMeta]], Optional[Component]
]
RuleBuilder = Callable[[], bool]


class JSONFactoryError(ValueError):
    pass


class MissingKeyError(JSONFactoryError):
    """A mandatory key is missing from a document or one of its nodes.

    Attributes:
        json_object: The object lacking the key.
        key: The name of the missing key.
    """

    def __init__(self, json_object: Any, key: str):
        self.json_object = json_object
        self.key = key
        super().__init__(f"Missing mandatory key '{key}' in {json_object!r}")


class JSONFactory:
    """Registry of builders and compiler of JSON documents into components."""

    STRUCTURE_KEY = "structure"
    TYPE_KEY = "type"
    META_KEY = "meta"
    CHILDREN_KEY = "children"
    RULE_KEY = "rule"

    def __init__(self):
        self.single_builders: dict[str, SingleFactoryBuilder] = {}
        self.wrapper_builders: dict[str, WrapperFactoryBuilder] = {}
        self.cluster_builders: dict[str, ClusterFactoryBuilder] = {}
        self.rule_builders: dict[str, RuleBuilder] = {}

    def _registry(self, kind: BuilderKind) -> dict[str, Callable]:
        match BuilderKind(kind):
            case BuilderKind.SINGLE:
                return self.single_builders
            case BuilderKind.WRAPPER:
                return self.wrapper_builders
            case BuilderKind.CLUSTER:
                return self.cluster_builders
            case BuilderKind.RULE:
                return self.rule_builders

    def register(
        self, builder: Callable, for_type: str, *, kind: BuilderKind
    ) -> None:
        """Registers a builder for a type, or a predicate for a rule name.

        Registering the same name twice for one kind replaces the previous
        builder.

        Args:
            builder: The builder or predicate.
            for_type: The `type` (or rule name) used in documents.
            kind: Which registry the builder belongs to.
        """
        registry = self._registry(kind)
        registry[for_type] = builder
        logger.debug(
            f"Registered {BuilderKind(kind).value} builder for '{for_type}'",
            extra={
                "extra_fields": {
                    "event": "builder_registered",
                    "kind": BuilderKind(kind).value,
                    "type": for_type,
                }
            },
        )

    def register_single(
        self, builder: SingleFactoryBuilder, for_type: str
    ) -> None:
        self.register(builder, for_type, kind=BuilderKind.SINGLE)

    def register_wrapper(
        self, builder: WrapperFactoryBuilder, for_type: str
    ) -> None:
        self.register(builder, for_type, kind=BuilderKind.WRAPPER)

    def register_cluster(
        self, builder: ClusterFactoryBuilder, for_type: str
    ) -> None:
        self.register(builder, for_type, kind=BuilderKind.CLUSTER)

    def register_rule(self, builder: RuleBuilder, for_type: str) -> None:
        self.register(builder, for_type, kind=BuilderKind.RULE)

    def registered_types(self, kind: BuilderKind) -> list[str]:
        """Lists the names registered for a kind of builder, sorted."""
        return sorted(self._registry(kind))

    def make_component(self, document: JSONObject) -> Optional[Component]:
        """Compiles a document into a component tree.

        Args:
            document: A mapping whose mandatory `structure` key holds the
                root node.

        Returns:
            The root component, or None when the root node cannot be
            resolved with the registered builders.

        Raises:
            MissingKeyError: If the document has no `structure` object, or
                any node has no `type` string.
        """
        structure = (
            document.get(self.STRUCTURE_KEY)
            if isinstance(document, dict)
            else None
        )
        if not isinstance(structure, dict):
            logger.warning(
                "Document has no structure",
                extra={
                    "extra_fields": {
                        "event": "missing_key",
                        "key": self.STRUCTURE_KEY,
                    }
                },
            )
            raise MissingKeyError(document, self.STRUCTURE_KEY)
        return self._make_component(structure)

    def make_component_from_structure(
        self, structure: JSONObject
    ) -> Optional[Component]:
        """Compiles a single node (and its descendants) into a component.

        Raises:
            MissingKeyError: If `structure` is not an object, or any node
                has no `type` string.
        """
        if not isinstance(structure, dict):
            logger.warning(
                "Structure is not an object",
                extra={
                    "extra_fields": {
                        "event": "missing_key",
                        "key": self.TYPE_KEY,
                    }
                },
            )
            raise MissingKeyError(structure, self.TYPE_KEY)
        return self._make_component(structure)

    def _make_component(self, structure: JSONObject) -> Optional[Component]:
        node_type = structure.get(self.TYPE_KEY)
        if not isinstance(node_type, str):
            logger.warning(
                "Node has no type",
                extra={
                    "extra_fields": {
                        "event": "missing_key",
                        "key": self.TYPE_KEY,
                    }
                },
            )
            raise MissingKeyError(structure, self.TYPE_KEY)

        raw_meta = structure.get(self.META_KEY)
        meta = DictMeta(raw_meta) if isinstance(raw_meta, dict) else None

        raw_children = structure.get(self.CHILDREN_KEY)
        if not isinstance(raw_children, list):
            raw_children = []

        children: list[Component] = []
        for raw_child in raw_children:
            if not isinstance(raw_child, dict):
                self._log_dropped(node_type, "child_not_an_object")
                continue
            child = self._make_component(raw_child)
            if child is not None:
                children.append(child)

        component = self._resolve(node_type, children, meta)
        if component is None:
            return None

        if self.RULE_KEY in structure:
            rule = self._make_rule(structure[self.RULE_KEY])
            if rule is None:
                logger.debug(
                    f"Ignored rule of '{node_type}' node",
                    extra={
                        "extra_fields": {
                            "event": "rule_dropped",
                            "type": node_type,
                        }
                    },
                )
            else:
                component = RuleComponent(rule=rule, component=component)

        return component

    def _resolve(
        self,
        node_type: str,
        children: list[Component],
        meta: Optional[ComponentMeta],
    ) -> Optional[Component]:
        if node_type in self.single_builders:
            return self.single_builders[node_type](meta)

        if node_type in self.wrapper_builders and children:
            return self.wrapper_builders[node_type](children[0], meta)

        if node_type in self.cluster_builders:
            return self.cluster_builders[node_type](children, meta)

        if node_type in self.wrapper_builders:
            self._log_dropped(node_type, "wrapper_without_child")
        else:
            self._log_dropped(node_type, "type_not_registered")
        return None

    def _make_rule(self, value: Any) -> Optional[Rule]:
        """Parses the value of a `rule` key.

        A string names a registered predicate. An object with a single
        `AND`, `OR` or `NOT` key combines one or a list of nested rule
        values; operands that cannot be parsed are left out, then AND/OR
        need at least two operands and NOT exactly one.
        """
        if isinstance(value, str):
            evaluator = self.rule_builders.get(value)
            if evaluator is None:
                logger.debug(
                    f"Rule '{value}' is not registered",
                    extra={
                        "extra_fields": {
                            "event": "rule_not_registered",
                            "rule": value,
                        }
                    },
                )
                return None
            return SimpleRule(evaluator=evaluator)

        if not isinstance(value, dict) or len(value) != 1:
            return None

        ((name, operands),) = value.items()
        try:
            operator = RuleOperator(name)
        except ValueError:
            logger.debug(
                f"Unknown rule operator '{name}'",
                extra={
                    "extra_fields": {
                        "event": "rule_operator_unknown",
                        "operator": name,
                    }
                },
            )
            return None

        if not isinstance(operands, list):
            operands = [operands]
        rules = [
            rule
            for rule in (self._make_rule(operand) for operand in operands)
            if rule is not None
        ]

        match operator:
            case RuleOperator.NOT:
                if len(rules) != 1:
                    return None
                return NotRule(rule=rules[0])
            case RuleOperator.AND:
                if len(rules) < 2:
                    return None
                return AndRule(rules=rules)
            case RuleOperator.OR:
                if len(rules) < 2:
                    return None
                return OrRule(rules=rules)

    def _log_dropped(self, node_type: str, reason: str) -> None:
        logger.debug(
            f"Dropped '{node_type}' node: {reason}",
            extra={
                "extra_fields": {
                    "event": "node_dropped",
                    "type": node_type,
                    "reason": reason,
                }
            },
        )
