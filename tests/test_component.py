from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from matrioska.models.component import (
    ClusterComponent,
    RuleComponent,
    SingleComponent,
    WrapperComponent,
)
from matrioska.models.enums import ComponentKind
from matrioska.models.meta import DictMeta
from matrioska.models.rule import AndRule, NotRule, OrRule, SimpleRule


def rand_component(meta=None):
    return SingleComponent(builder=lambda _: object(), meta=meta)


def const(value):
    return SimpleRule(evaluator=lambda: value)


class TestSingleComponent:
    def test_realize(self):
        component = SingleComponent(builder=lambda _: "node")
        assert component.realize() == "node"

    def test_passes_meta_to_builder(self):
        builder = MagicMock(return_value="node")
        SingleComponent(builder=builder, meta={"foo": "bar"}).realize()
        builder.assert_called_once_with(DictMeta({"foo": "bar"}))

    def test_meta(self):
        component = rand_component(meta={"foo": "bar"})
        assert component.meta.lookup("foo") == "bar"
        assert component.kind == ComponentKind.SINGLE
        assert component.children == []

    def test_builder_may_return_none(self):
        assert SingleComponent(builder=lambda _: None).realize() is None

    def test_realize_is_not_memoized(self):
        builder = MagicMock(side_effect=["first", "second"])
        component = SingleComponent(builder=builder)
        assert component.realize() == "first"
        assert component.realize() == "second"

    def test_rejects_invalid_meta(self):
        with pytest.raises(ValidationError):
            SingleComponent(builder=lambda _: None, meta=42)

    def test_is_immutable(self):
        component = rand_component()
        with pytest.raises(ValidationError):
            component.meta = DictMeta({})


class TestWrapperComponent:
    def test_realize(self):
        component = WrapperComponent(
            builder=lambda child, meta: "node", child=rand_component()
        )
        assert component.realize() == "node"

    def test_passes_child_and_meta_to_builder(self):
        child = rand_component()
        builder = MagicMock(return_value="node")
        WrapperComponent(builder=builder, child=child, meta={"foo": "bar"}).realize()
        builder.assert_called_once_with(child, DictMeta({"foo": "bar"}))

    def test_child_is_not_realized_by_the_engine(self):
        child_builder = MagicMock(return_value="child")
        child = SingleComponent(builder=child_builder)
        WrapperComponent(builder=lambda c, m: "node", child=child).realize()
        child_builder.assert_not_called()

    def test_meta_and_children(self):
        child = rand_component()
        component = WrapperComponent(
            builder=lambda c, m: None, child=child, meta={"foo": "bar"}
        )
        assert component.meta.lookup("foo") == "bar"
        assert component.children == [child]
        assert component.kind == ComponentKind.WRAPPER


class TestClusterComponent:
    def test_realize(self):
        component = ClusterComponent(
            builder=lambda children, meta: "node", children=[rand_component()]
        )
        assert component.realize() == "node"

    def test_passes_children_and_meta_to_builder(self):
        children = [rand_component(), rand_component()]
        builder = MagicMock(return_value="node")
        ClusterComponent(
            builder=builder, children=children, meta={"foo": "bar"}
        ).realize()
        builder.assert_called_once_with(children, DictMeta({"foo": "bar"}))

    def test_no_children(self):
        component = ClusterComponent(builder=lambda c, m: len(c))
        assert component.children == []
        assert component.realize() == 0
        assert component.kind == ComponentKind.CLUSTER


class TestRuleComponent:
    def cluster(self, builder=None, meta=None):
        return ClusterComponent(
            builder=builder or (lambda c, m: object()),
            children=[rand_component()],
            meta=meta,
        )

    def test_realizes_child_when_true(self):
        component = RuleComponent(rule=NotRule(rule=const(False)), component=self.cluster())
        assert component.realize() is not None

    def test_does_not_realize_child_when_false(self):
        rule = AndRule(rules=[const(False), const(True)])
        component = RuleComponent(rule=rule, component=self.cluster())
        assert component.realize() is None

    def test_passes_children_to_child_builder_when_true(self):
        builder = MagicMock(return_value="node")
        cluster = self.cluster(builder=builder, meta={"foo": "bar"})
        rule = OrRule(rules=[const(False), const(True)])
        assert RuleComponent(rule=rule, component=cluster).realize() == "node"
        builder.assert_called_once_with(cluster.children, DictMeta({"foo": "bar"}))

    def test_does_not_call_child_builder_when_false(self):
        builder = MagicMock(return_value="node")
        cluster = self.cluster(builder=builder, meta={"one": "two"})
        RuleComponent(rule=NotRule(rule=const(True)), component=cluster).realize()
        builder.assert_not_called()

    def test_meta_regardless_of_evaluation(self):
        rule = const(False)
        cluster = self.cluster(meta={"foo": "bar"})
        false_component = RuleComponent(rule=rule, component=cluster)
        true_component = RuleComponent(rule=NotRule(rule=rule), component=cluster)
        assert false_component.meta == DictMeta({"foo": "bar"})
        assert true_component.meta == DictMeta({"foo": "bar"})

    def test_meta_none(self):
        component = RuleComponent(rule=const(False), component=rand_component())
        assert component.meta is None

    def test_children_are_the_gated_components(self):
        cluster = self.cluster()
        component = RuleComponent(rule=const(False), component=cluster)
        assert component.children == cluster.children
        assert component.kind == ComponentKind.RULE

    def test_rule_evaluated_on_every_realization(self):
        evaluator = MagicMock(side_effect=[True, False])
        component = RuleComponent(
            rule=SimpleRule(evaluator=evaluator), component=rand_component()
        )
        assert component.realize() is not None
        assert component.realize() is None
