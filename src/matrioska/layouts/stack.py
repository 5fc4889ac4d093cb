"""Stack cluster: arranges its children in a column or a row."""

from typing import Optional

import gradio as gr
from pydantic import Field, ValidationError, field_validator

from matrioska.models.component import ClusterComponent, Component
from matrioska.models.enums import Orientation
from matrioska.models.meta import ComponentMeta, MaterializableMeta
from matrioska.utils import parse_hex_color


class StackConfig(MaterializableMeta):
    """Stack component configuration.

    Values that are missing or invalid in the meta fall back to defaults.

    Attributes:
        title: Heading displayed above the children.
        spacing: Spacing between children, exposed as a CSS class.
        orientation: Column (vertical) or row (horizontal).
        preserve_parent_width: Whether children stretch to the parent width
            instead of keeping their own size.
        background_color: '#rrggbb' color exposed as a CSS class.
    """

    title: Optional[str] = None
    spacing: float = Field(default=10, ge=0)
    orientation: Orientation = Orientation.VERTICAL
    preserve_parent_width: bool = False
    background_color: Optional[str] = None

    @field_validator("background_color", mode="before")
    @classmethod
    def _parse_color(cls, value):
        return parse_hex_color(value)

    @classmethod
    def from_meta(cls, meta: ComponentMeta) -> "StackConfig":
        config = super().from_meta(meta)
        if config is not None:
            return config
        # Keep whatever fields are valid on their own
        values = {}
        for name in cls.model_fields:
            value = meta.lookup(name)
            if value is None:
                continue
            try:
                cls.model_validate({name: value})
            except ValidationError:
                continue
            values[name] = value
        return cls.model_validate(values)

    def css_classes(self) -> list[str]:
        classes = ["matrioska-stack", f"matrioska-spacing-{int(self.spacing)}"]
        if self.preserve_parent_width:
            classes.append("matrioska-fill-width")
        if self.background_color:
            classes.append(f"matrioska-bg-{self.background_color.lstrip('#')}")
        return classes


def stack(children: list[Component], meta: Optional[ComponentMeta]) -> Component:
    """A stack cluster component.

    Args:
        children: The children components, realized in order.
        meta: Should represent a StackConfig.

    Returns:
        A cluster component realizing into a gr.Column or gr.Row.
    """
    return ClusterComponent(builder=_stack_builder, children=children, meta=meta)


def _stack_builder(children: list[Component], meta: Optional[ComponentMeta]):
    config = StackConfig.materialize(meta) or StackConfig()

    if config.orientation == Orientation.HORIZONTAL:
        container = gr.Row(elem_classes=config.css_classes())
    else:
        container = gr.Column(elem_classes=config.css_classes())

    with container:
        if config.title:
            gr.Markdown(f"### {config.title}")
        # Children realizing to None add nothing to the container
        for child in children:
            child.realize()
    return container
