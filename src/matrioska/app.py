"""Gradio application built from a compiled component tree."""

from typing import Optional

import gradio as gr

from matrioska.factory.json_factory import JSONFactory
from matrioska.layouts import register_standard_layouts
from matrioska.models.component import Component
from matrioska.observability.logging import get_logger

logger = get_logger(__name__)

EMPTY_PLACEHOLDER = "_Nothing to display._"


def build_factory(rules: Optional[dict[str, bool]] = None) -> JSONFactory:
    """Creates a factory with the standard layouts and constant rules.

    Args:
        rules: Maps rule names to the value their predicate returns.

    Returns:
        A ready to use JSONFactory.
    """
    factory = register_standard_layouts(JSONFactory())
    for name, value in (rules or {}).items():
        factory.register_rule(_constant(value), name)
    return factory


def _constant(value: bool):
    return lambda: value


def create_ui(component: Optional[Component], title: str = "Matrioska") -> gr.Blocks:
    """Constructs the Gradio UI for a component tree.

    Args:
        component: The root component, realized inside the Blocks context.
            None, or a root realizing to nothing, shows a placeholder.
        title: The page title.

    Returns:
        A gr.Blocks object containing the realized tree.
    """
    with gr.Blocks(title=title) as demo:
        node = component.realize() if component is not None else None
        if node is None:
            logger.info("Root component realized to nothing")
            gr.Markdown(EMPTY_PLACEHOLDER)
    return demo
