"""Shared fixtures for inline highlighting tests."""

import pytest


def make_chapter(name, content, sub_items=None):
    """Build a chapter item the way mdBook serializes it."""
    return {
        "Chapter": {
            "name": name,
            "content": content,
            "number": None,
            "sub_items": sub_items or [],
            "path": f"{name.lower()}.md",
            "source_path": f"{name.lower()}.md",
            "parent_names": [],
        }
    }


@pytest.fixture
def context():
    """Provide a preprocessor context with an empty book.toml."""
    return {
        "root": "/tmp/book",
        "config": {
            "book": {"title": "Test Book", "src": "src"},
            "preprocessor": {"inline-highlighting": {}},
            "output": {"html": {}},
        },
        "renderer": "html",
        "mdbook_version": "0.5.0",
    }


@pytest.fixture
def book():
    """Provide a book with nested chapters, a part title and a separator."""
    return {
        "items": [
            make_chapter("Intro", "Run `[sh] make` first.\n"),
            "Separator",
            {"PartTitle": "Guide"},
            make_chapter(
                "Usage",
                "Call `main()`.\n",
                sub_items=[make_chapter("Details", "Set `[rust] let x = 1;`.\n")],
            ),
        ]
    }
