"""Standard layouts realizing components into gradio blocks.

Components built by these layouts must be realized inside a `gr.Blocks()`
context.
"""

from matrioska.factory.json_factory import JSONFactory
from matrioska.layouts.label import LabelConfig, label
from matrioska.layouts.navigation import NavigationConfig, navigation
from matrioska.layouts.stack import StackConfig, stack
from matrioska.layouts.tabbar import TabBarConfig, TabConfig, tab_bar


def register_standard_layouts(factory: JSONFactory) -> JSONFactory:
    """Registers the standard layouts under their document types.

    Types: 'stack' and 'tabbar' (clusters), 'navigation' (wrapper),
    'label' (single).
    """
    factory.register_cluster(stack, "stack")
    factory.register_cluster(tab_bar, "tabbar")
    factory.register_wrapper(navigation, "navigation")
    factory.register_single(label, "label")
    return factory


__all__ = [
    "LabelConfig",
    "NavigationConfig",
    "StackConfig",
    "TabBarConfig",
    "TabConfig",
    "label",
    "navigation",
    "register_standard_layouts",
    "stack",
    "tab_bar",
]
