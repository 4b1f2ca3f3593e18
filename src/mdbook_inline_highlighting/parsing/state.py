"""State machine states for inline code span classification."""

from __future__ import annotations

import enum


class SpanState(enum.Enum):
    """State machine states for span classification."""

    START = "start"
    IN_TAG = "in_tag"
    EXPECT_SEPARATOR = "expect_separator"
    BODY = "body"
