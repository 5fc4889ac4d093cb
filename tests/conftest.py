import logging

import pytest


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def app_document():
    return {
        "structure": {
            "type": "tabbar",
            "meta": {"selected_index": 0},
            "children": [
                {
                    "type": "stack",
                    "meta": {"title": "Home", "icon_name": "home"},
                    "children": [
                        {"type": "label", "meta": {"text": "Welcome"}},
                        {
                            "type": "label",
                            "meta": {"text": "Gold offers"},
                            "rule": "is_gold_member",
                        },
                        {"type": "map_view"},
                    ],
                },
                {
                    "type": "navigation",
                    "meta": {"title": "Profile", "icon_name": "user"},
                    "children": [{"type": "label", "meta": {"text": "Me"}}],
                },
            ],
        }
    }
