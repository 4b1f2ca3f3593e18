"""Walking the mdBook book structure.

The book arrives as the JSON form of mdBook's ``Book``. Its top-level list is
``items`` (mdBook 0.5) or ``sections`` (older releases). Each entry is either
``{"Chapter": {...}}``, ``{"PartTitle": "..."}`` or the string
``"Separator"``. Chapters nest through ``sub_items``.

Chapters are handled as plain dicts so fields this module does not know
about survive the round trip unchanged.
"""

from __future__ import annotations

from typing import Callable, Iterator

ITEM_KEYS = ("items", "sections")


def book_items(book: dict) -> list:
    """Return the top-level item list of a book."""
    for key in ITEM_KEYS:
        if key in book:
            return book[key]
    return []


def _walk(items: list) -> Iterator[dict]:
    for item in items:
        if not isinstance(item, dict):
            continue
        chapter = item.get("Chapter")
        if chapter is None:
            continue
        yield chapter
        yield from _walk(chapter.get("sub_items") or [])


def iter_chapters(book: dict) -> Iterator[dict]:
    """Yield every chapter depth-first, in reading order."""
    return _walk(book_items(book))


def for_each_chapter(book: dict, func: Callable[[dict], str]) -> int:
    """Replace each chapter's content with func(chapter).

    Returns:
        Number of chapters visited
    """
    count = 0
    for chapter in iter_chapters(book):
        chapter["content"] = func(chapter)
        count += 1
    return count
