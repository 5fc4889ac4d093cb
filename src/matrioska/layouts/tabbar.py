"""Tab bar cluster: one tab per child, configured by the children's metas."""

from typing import Optional

import gradio as gr

from matrioska.models.component import ClusterComponent, Component
from matrioska.models.meta import ComponentMeta, MaterializableMeta


class TabConfig(MaterializableMeta):
    """Tab configuration, read from each child's meta.

    Attributes:
        title: The tab label.
        icon_name: The tab icon, exposed as a CSS class.
    """

    title: str
    icon_name: str


class TabBarConfig(MaterializableMeta):
    """Tab bar configuration.

    Attributes:
        selected_index: Index of the initially selected tab. Ignored when
            out of range.
    """

    selected_index: int


def tab_bar(children: list[Component], meta: Optional[ComponentMeta]) -> Component:
    """A tab bar cluster component.

    Args:
        children: Each child should have a meta representing a TabConfig;
            children without one are skipped.
        meta: An optional TabBarConfig.

    Returns:
        A cluster component realizing into a gr.Tabs.
    """
    return ClusterComponent(builder=_tab_bar_builder, children=children, meta=meta)


def _tab_bar_builder(children: list[Component], meta: Optional[ComponentMeta]):
    shown: list[gr.Tab] = []
    with gr.Tabs() as tabs:
        for index, child in enumerate(children):
            config = TabConfig.materialize(child.meta)
            if config is None:
                continue
            with gr.Tab(
                label=config.title,
                id=index,
                elem_classes=[f"matrioska-icon-{config.icon_name}"],
            ) as tab:
                node = child.realize()
            if node is None:
                tab.visible = False
            else:
                shown.append(tab)

    bar_config = TabBarConfig.materialize(meta)
    if bar_config is not None and 0 <= bar_config.selected_index < len(shown):
        tabs.selected = shown[bar_config.selected_index].id
    return tabs
