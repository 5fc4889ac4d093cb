"""Label leaf: a block of markdown text."""

from typing import Optional

import gradio as gr
from pydantic import field_validator

from matrioska.models.component import Component, SingleComponent
from matrioska.models.meta import ComponentMeta, MaterializableMeta
from matrioska.utils import parse_hex_color


class LabelConfig(MaterializableMeta):
    text: str = ""
    color: Optional[str] = None

    @field_validator("color", mode="before")
    @classmethod
    def _parse_color(cls, value):
        return parse_hex_color(value)


def label(meta: Optional[ComponentMeta]) -> Component:
    return SingleComponent(builder=_label_builder, meta=meta)


def _label_builder(meta: Optional[ComponentMeta]):
    config = LabelConfig.materialize(meta) or LabelConfig()
    classes = ["matrioska-label"]
    if config.color:
        classes.append(f"matrioska-color-{config.color.lstrip('#')}")
    return gr.Markdown(config.text, elem_classes=classes)
