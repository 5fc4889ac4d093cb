"""The component algebra.

A component describes a node of a view hierarchy without building it.
Building (realizing) is delegated to a builder callable supplied by the
caller, which makes the tree independent from any concrete UI toolkit.

Components are immutable. Realization is not memoized: every call to
`realize()` invokes the builders again.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar, Optional

from pydantic import Field, field_validator

from matrioska.models.base import ModelBase, RealizedNode
from matrioska.models.enums import ComponentKind
from matrioska.models.meta import ComponentMeta, as_meta
from matrioska.models.rule import Rule

SingleBuilder = Callable[[Optional[ComponentMeta]], Optional[RealizedNode]]
WrapperBuilder = Callable[
    ["Component", Optional[ComponentMeta]], Optional[RealizedNode]
]
ClusterBuilder = Callable[
    [list["Component"], Optional[ComponentMeta]], Optional[RealizedNode]
]


class Component(ModelBase, ABC):
    """Base class of the component tree.

    Every component exposes `meta` (its metadata, possibly None),
    `children` (its direct child components) and `realize()`.
    """

    kind: ClassVar[ComponentKind]

    @abstractmethod
    def realize(self) -> Optional[RealizedNode]:
        """Builds the renderable node represented by this component.

        Returns:
            The node returned by the builder. None means the component
            should not be rendered; the caller handles any fallback.
        """
        pass  # pragma: no cover


class _MetaComponent(Component):
    meta: Optional[ComponentMeta] = Field(
        default=None, description="Metadata handed to the builder."
    )

    @field_validator("meta", mode="before")
    @classmethod
    def _coerce_meta(cls, value: Any) -> Optional[ComponentMeta]:
        try:
            return as_meta(value)
        except TypeError as e:
            raise ValueError(str(e)) from e


class SingleComponent(_MetaComponent):
    """A leaf component.

    Attributes:
        builder: Called with the meta, returns the node or None.
        meta: Metadata handed to the builder.
    """

    kind: ClassVar[ComponentKind] = ComponentKind.SINGLE

    builder: Callable[..., Any]

    @property
    def children(self) -> list[Component]:
        return []

    def realize(self) -> Optional[RealizedNode]:
        return self.builder(self.meta)


class WrapperComponent(_MetaComponent):
    """A component with exactly one child.

    The builder receives the child component, not its realization, and is
    responsible for realizing and embedding it.

    Attributes:
        builder: Called with the child and the meta.
        child: The wrapped component.
        meta: Metadata handed to the builder.
    """

    kind: ClassVar[ComponentKind] = ComponentKind.WRAPPER

    builder: Callable[..., Any]
    child: Component

    @property
    def children(self) -> list[Component]:
        return [self.child]

    def realize(self) -> Optional[RealizedNode]:
        return self.builder(self.child, self.meta)


class ClusterComponent(_MetaComponent):
    """A component laying out zero or more children.

    The builder receives the child components and skips the ones that
    realize to None.

    Attributes:
        builder: Called with the children and the meta.
        children: The child components, in display order.
        meta: Metadata handed to the builder.
    """

    kind: ClassVar[ComponentKind] = ComponentKind.CLUSTER

    builder: Callable[..., Any]
    children: list[Component] = Field(default_factory=list)

    def realize(self) -> Optional[RealizedNode]:
        return self.builder(self.children, self.meta)


class RuleComponent(Component):
    """A component realized only while its rule evaluates to true.

    The gate has no meta of its own: `meta` and `children` are the gated
    component's, whatever the rule evaluates to.
    """

    kind: ClassVar[ComponentKind] = ComponentKind.RULE

    rule: Rule
    component: Component

    @property
    def meta(self) -> Optional[ComponentMeta]:
        return self.component.meta

    @property
    def children(self) -> list[Component]:
        return self.component.children

    def realize(self) -> Optional[RealizedNode]:
        if self.rule.evaluate():
            return self.component.realize()
        return None
