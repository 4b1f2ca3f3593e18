"""Pure classification logic for inline code spans (no markdown or logging dependencies)."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from mdbook_inline_highlighting.parsing.state import SpanState

ESCAPE_CHAR = "\\"
TAG_START = "["
TAG_END = "]"
SEPARATOR = " "

HIGHLIGHT_OPEN = '<code class="hljs language-'
HIGHLIGHT_CLOSE = "</code>"

# Tag value that asks for the default language instead of an explicit one
NO_LANGUAGE = "none"


class OutputKind(enum.Enum):
    """How the rewritten span must be emitted."""

    CODE = "code"
    HTML = "html"


@dataclass
class SpanResult:
    """Result of classifying one inline code span."""

    text: str
    kind: OutputKind
    diagnostic: str | None = None

    @property
    def is_html(self) -> bool:
        return self.kind is OutputKind.HTML


def inline_with_highlighting(code: str, language: str) -> str:
    """Wrap code in an inline element that highlight.js picks up."""
    return f'{HIGHLIGHT_OPEN}{language}">{code}{HIGHLIGHT_CLOSE}'


class SpanClassifier:
    """Classifies the raw text of a single inline code span.

    Walks the span character-by-character through a small state machine:

        START --'['--> IN_TAG --']'--> EXPECT_SEPARATOR --' '--> BODY
          |                                   |
          +--'\\' or other--> BODY            +--anything else--> malformed

    A span that ends while still in IN_TAG or EXPECT_SEPARATOR is malformed.
    Malformed spans fall back to treating the whole original text as an
    untagged body and report a diagnostic instead of raising.

    Usage:
        result = SpanClassifier("[rust] let x = 1;", default_language=None).classify()
        if result.is_html:
            emit_html(result.text)
    """

    def __init__(self, code: str, default_language: str | None = None) -> None:
        self._code = code
        self._default_language = default_language
        self._state = SpanState.START
        self._tag_buffer = ""
        self._language: str | None = None
        self._body_start = 0
        self._diagnostic: str | None = None

    @property
    def current_state(self) -> SpanState:
        """Current state of the classifier."""
        return self._state

    def classify(self) -> SpanResult:
        """Run the state machine over the span and resolve the output."""
        if not self._code:
            return SpanResult(text="", kind=OutputKind.CODE)

        for i, ch in enumerate(self._code):
            self._feed_char(i, ch)
            if self._diagnostic is not None:
                return self._fallback()
            if self._state == SpanState.BODY:
                break

        if self._state == SpanState.IN_TAG:
            self._diagnostic = f"missing closing character `{TAG_END}`"
            return self._fallback()
        if self._state == SpanState.EXPECT_SEPARATOR:
            self._diagnostic = "missing space after language identifier"
            return self._fallback()

        return self._resolve(self._code[self._body_start :], self._language)

    def _feed_char(self, i: int, ch: str) -> None:
        """Process a single character at index i."""
        if self._state == SpanState.START:
            self._feed_start(i, ch)
        elif self._state == SpanState.IN_TAG:
            self._feed_tag(ch)
        elif self._state == SpanState.EXPECT_SEPARATOR:
            self._feed_separator(i, ch)

    def _feed_start(self, i: int, ch: str) -> None:
        """Dispatch on the first character of the span."""
        if ch == TAG_START:
            self._state = SpanState.IN_TAG
            return
        if ch == ESCAPE_CHAR:
            # Only the escape marker itself is dropped
            self._body_start = i + 1
        self._state = SpanState.BODY

    def _feed_tag(self, ch: str) -> None:
        """Collect the language identifier up to the closing bracket."""
        if ch == TAG_END:
            self._state = SpanState.EXPECT_SEPARATOR
        else:
            self._tag_buffer += ch

    def _feed_separator(self, i: int, ch: str) -> None:
        """Require exactly one space between the tag and the body."""
        if ch != SEPARATOR:
            self._diagnostic = "missing space after language identifier"
            return
        if self._tag_buffer != NO_LANGUAGE:
            self._language = self._tag_buffer
        self._body_start = i + 1
        self._state = SpanState.BODY

    def _fallback(self) -> SpanResult:
        """Treat the whole original span as untagged body text."""
        result = self._resolve(self._code, None)
        result.diagnostic = self._diagnostic
        return result

    def _resolve(self, body: str, language: str | None) -> SpanResult:
        """Pick the explicit language, then the default, then plain code."""
        effective = language if language is not None else self._default_language
        if effective is None:
            return SpanResult(text=body, kind=OutputKind.CODE)
        return SpanResult(
            text=inline_with_highlighting(body, effective),
            kind=OutputKind.HTML,
        )


def classify(code: str, default_language: str | None = None) -> SpanResult:
    """Classify an inline code span's text.

    Args:
        code: Raw span content, backtick delimiters already stripped
        default_language: Language applied when the span has no usable tag

    Returns:
        SpanResult with the replacement text, its kind, and a diagnostic
        message when the tag was malformed
    """
    return SpanClassifier(code, default_language).classify()
