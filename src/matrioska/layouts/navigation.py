"""Navigation wrapper: a titled group around a single child."""

from typing import Optional

import gradio as gr

from matrioska.models.component import Component, WrapperComponent
from matrioska.models.meta import ComponentMeta, MaterializableMeta


class NavigationConfig(MaterializableMeta):
    title: Optional[str] = None


def navigation(child: Component, meta: Optional[ComponentMeta]) -> Component:
    """A navigation wrapper component.

    Realizes into a gr.Group holding the child. The group is returned even
    when the child realizes to nothing.
    """
    return WrapperComponent(builder=_navigation_builder, child=child, meta=meta)


def _navigation_builder(child: Component, meta: Optional[ComponentMeta]):
    config = NavigationConfig.materialize(meta) or NavigationConfig()
    with gr.Group(elem_classes=["matrioska-navigation"]) as group:
        if config.title:
            gr.Markdown(f"## {config.title}")
        child.realize()
    return group
