"""Serving a document with the standard gradio layouts.

This example demonstrates how to:
1. Build a factory with the standard layouts and constant rules.
2. Realize the compiled tree into a gr.Blocks application.
3. Launch the application.

The same can be done from the command line with:
    matrioska serve examples/app_structure.json -r is_gold_member=true -r is_male=false
"""

from pathlib import Path

from matrioska.app import build_factory, create_ui
from matrioska.observability.logging import setup_logging
from matrioska.reader import read_document

DOCUMENT_PATH = Path(__file__).with_name("app_structure.json")


def run_example():
    setup_logging("DEBUG")

    factory = build_factory({"is_gold_member": True, "is_male": False})
    component = factory.make_component(read_document(DOCUMENT_PATH))

    demo = create_ui(component, title="Matrioska Shop")
    demo.launch()


if __name__ == "__main__":
    run_example()
