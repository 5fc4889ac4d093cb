"""Compiling a document into a component tree.

This example demonstrates how to:
1. Register builders and rule predicates on a JSONFactory.
2. Compile a JSON document into a component tree.
3. Realize the tree into plain dictionaries, without any UI toolkit.
"""

import json
from pathlib import Path

from matrioska import ClusterComponent, JSONFactory, SingleComponent, WrapperComponent
from matrioska.reader import read_document

DOCUMENT_PATH = Path(__file__).with_name("app_structure.json")


def view(meta):
    return SingleComponent(
        builder=lambda m: {"view": m.as_dict() if m else {}}, meta=meta
    )


def container(children, meta):
    def build(children, meta):
        nodes = [c.realize() for c in children]
        return {
            "container": meta.as_dict() if meta else {},
            "children": [n for n in nodes if n is not None],
        }

    return ClusterComponent(builder=build, children=children, meta=meta)


def wrapper(child, meta):
    return WrapperComponent(
        builder=lambda c, m: {"wrapper": c.realize()}, child=child, meta=meta
    )


def run_example():
    # 1. Register builders for the types used in the document
    factory = JSONFactory()
    factory.register_cluster(container, "tabbar")
    factory.register_cluster(container, "stack")
    factory.register_wrapper(wrapper, "navigation")
    factory.register_single(view, "label")

    # 2. Register the rule predicates
    factory.register_rule(lambda: True, "is_gold_member")
    factory.register_rule(lambda: False, "is_male")

    # 3. Compile the document; unregistered types such as 'table_view' are dropped
    component = factory.make_component(read_document(DOCUMENT_PATH))

    # 4. Realize: the rules are evaluated now, the first tab is hidden
    print(json.dumps(component.realize(), indent=2))


if __name__ == "__main__":
    run_example()
