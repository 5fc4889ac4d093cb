"""Boolean rules deciding whether a component is realized.

Rules form a small expression tree. Leaves are host-supplied evaluators,
inner nodes combine them with and/or/not:

    visible = SimpleRule(evaluator=is_admin) | ~SimpleRule(evaluator=is_guest)
    visible.evaluate()

And/or nodes evaluate every operand, even when the result is already
decided, so evaluators with side effects always run.
"""

from abc import ABC, abstractmethod
from typing import Callable

from pydantic import Field

from matrioska.models.base import ModelBase

RuleEvaluator = Callable[[], bool]


class Rule(ModelBase, ABC):
    """Base class of the rule expression tree."""

    @abstractmethod
    def evaluate(self) -> bool:
        """Evaluates the rule.

        Returns:
            The boolean value of the expression.
        """
        pass  # pragma: no cover

    def __and__(self, other: "Rule") -> "AndRule":
        return AndRule(rules=[self, other])

    def __or__(self, other: "Rule") -> "OrRule":
        return OrRule(rules=[self, other])

    def __invert__(self) -> "NotRule":
        return NotRule(rule=self)


class SimpleRule(Rule):
    """A leaf rule backed by a zero-argument evaluator."""

    evaluator: RuleEvaluator = Field(
        ..., description="Host-supplied predicate called on every evaluation."
    )

    def evaluate(self) -> bool:
        return bool(self.evaluator())


class AndRule(Rule):
    """Logical AND over all operands. True when there are no operands."""

    rules: list[Rule] = Field(default_factory=list)

    def evaluate(self) -> bool:
        evaluations = [rule.evaluate() for rule in self.rules]
        return all(evaluations)


class OrRule(Rule):
    """Logical OR over all operands. False when there are no operands."""

    rules: list[Rule] = Field(default_factory=list)

    def evaluate(self) -> bool:
        evaluations = [rule.evaluate() for rule in self.rules]
        return any(evaluations)


class NotRule(Rule):
    """Logical negation of a single rule."""

    rule: Rule

    def evaluate(self) -> bool:
        return not self.rule.evaluate()
