"""Inline code span parsing."""

from __future__ import annotations

from mdbook_inline_highlighting.parsing.classifier import (
    OutputKind,
    SpanClassifier,
    SpanResult,
    classify,
    inline_with_highlighting,
)
from mdbook_inline_highlighting.parsing.state import SpanState

__all__ = [
    "OutputKind",
    "SpanClassifier",
    "SpanResult",
    "SpanState",
    "classify",
    "inline_with_highlighting",
]
