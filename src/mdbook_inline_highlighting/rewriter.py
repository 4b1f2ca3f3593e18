"""Rewrites the inline code spans of a markdown document.

The document is parsed into a markdown-it token stream, every ``code_inline``
token is passed through the span classifier, and the stream is rendered back
to markdown with mdformat's renderer. Everything that is not inline code keeps
its token and its position.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterator, Sequence

import mdformat.plugins
from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdformat.renderer import MDRenderer

from mdbook_inline_highlighting.parsing import classify
from mdbook_inline_highlighting.parsing.classifier import HIGHLIGHT_CLOSE, HIGHLIGHT_OPEN

logger = logging.getLogger(__name__)

# mdformat parser extensions: gfm covers tables, strikethrough and task lists
PARSER_EXTENSIONS = ("gfm", "footnote")

MDFORMAT_OPTIONS = {
    "wrap": "keep",
    "number": False,
    "end_of_line": "lf",
    "validate": True,
    "exclude": [],
    "plugin": {},
}

DiagnosticSink = Callable[[str], None]


def _log_diagnostic(message: str) -> None:
    logger.error(message)


def new_markdown_parser(smart_punctuation: bool = False) -> MarkdownIt:
    """Build a markdown-it parser that mdformat can render back to markdown."""
    mdit = MarkdownIt("commonmark", {"typographer": smart_punctuation})
    mdit.options["mdformat"] = dict(MDFORMAT_OPTIONS)
    mdit.options["store_labels"] = True
    mdit.options["parser_extension"] = []
    mdit.options["codeformatters"] = {}
    for name in PARSER_EXTENSIONS:
        try:
            plugin = mdformat.plugins.PARSER_EXTENSIONS[name]
        except KeyError:
            raise RuntimeError(
                f"mdformat parser extension {name!r} is not installed"
            ) from None
        if plugin not in mdit.options["parser_extension"]:
            mdit.options["parser_extension"].append(plugin)
            plugin.update_mdit(mdit)
    if smart_punctuation:
        mdit.enable(["replacements", "smartquotes"])
    return mdit


def iter_code_spans(tokens: Sequence[Token]) -> Iterator[Token]:
    """Yield every inline code token, in document order."""
    for token in tokens:
        if token.type == "code_inline":
            yield token
        if token.children:
            yield from iter_code_spans(token.children)


def _is_highlight_open(token: Token) -> bool:
    return (
        token.type == "html_inline"
        and token.content.startswith(HIGHLIGHT_OPEN)
        and not token.content.endswith(HIGHLIGHT_CLOSE)
    )


def _is_highlight_close(token: Token) -> bool:
    return token.type == "html_inline" and token.content == HIGHLIGHT_CLOSE


def _merge_children(source: str, children: list[Token]) -> list[Token]:
    merged: list[Token] = []
    cursor = 0
    i = 0
    while i < len(children):
        child = children[i]
        if _is_highlight_open(child):
            end = next(
                (j for j in range(i + 1, len(children)) if _is_highlight_close(children[j])),
                None,
            )
            start = source.find(child.content, cursor)
            stop = source.find(HIGHLIGHT_CLOSE, start + len(child.content)) if start >= 0 else -1
            if end is not None and stop >= 0:
                stop += len(HIGHLIGHT_CLOSE)
                child.content = source[start:stop]
                merged.append(child)
                cursor = stop
                i = end + 1
                continue
        merged.append(child)
        i += 1
    return merged


def merge_highlighted_spans(tokens: Sequence[Token]) -> None:
    """Collapse already highlighted ``<code class="hljs ...">`` elements.

    Parsing rendered output again splits such an element into its opening
    tag, the body as ordinary inline tokens, and the closing tag. The body
    would then be escaped when rendered, so the whole element is replaced by
    a single ``html_inline`` token holding the raw source slice.
    """
    for token in tokens:
        if token.type == "inline" and token.children:
            token.children = _merge_children(token.content, token.children)


def rewrite_tokens(
    tokens: Sequence[Token],
    default_language: str | None = None,
    on_diagnostic: DiagnosticSink | None = None,
) -> int:
    """Classify each inline code token in place.

    Already highlighted elements are merged back into single raw tokens
    first. Plain results keep the ``code_inline`` token with updated content;
    raw markup results turn the token into ``html_inline``.

    Returns:
        Number of spans converted to raw markup
    """
    merge_highlighted_spans(tokens)
    converted = 0
    for token in iter_code_spans(tokens):
        result = classify(token.content, default_language)
        if result.diagnostic and on_diagnostic:
            on_diagnostic(result.diagnostic)
        token.content = result.text
        if result.is_html:
            token.type = "html_inline"
            token.markup = ""
            converted += 1
    return converted


class MarkdownRewriter:
    """Applies span classification to whole documents.

    One instance holds a configured parser and is reused for every chapter of
    a run, since the default language and smart punctuation setting are fixed
    for the run.
    """

    def __init__(
        self,
        default_language: str | None = None,
        smart_punctuation: bool = False,
        on_diagnostic: DiagnosticSink | None = None,
    ) -> None:
        self.default_language = default_language
        self._on_diagnostic = on_diagnostic or _log_diagnostic
        self._mdit = new_markdown_parser(smart_punctuation)
        self._renderer = MDRenderer()

    def rewrite(self, text: str, name: str | None = None) -> str:
        """Rewrite one document, returning it unchanged if rendering fails.

        Args:
            text: Markdown source of the document
            name: Chapter name used to locate diagnostics
        """
        label = name if name is not None else "<unnamed>"

        def report(message: str) -> None:
            self._on_diagnostic(f"{message} in chapter `{label}`")

        env: dict = {}
        tokens = self._mdit.parse(text, env)
        converted = rewrite_tokens(tokens, self.default_language, report)
        logger.debug("Chapter %s: %d inline code spans highlighted", label, converted)

        try:
            return self._renderer.render(tokens, self._mdit.options, env)
        except Exception as e:
            logger.error(f"Markdown serialization failed in chapter `{label}`: {e}")
            return text


def rewrite(
    text: str,
    default_language: str | None = None,
    smart_punctuation: bool = False,
    *,
    name: str | None = None,
    on_diagnostic: DiagnosticSink | None = None,
) -> str:
    """Rewrite the inline code spans of a single markdown document."""
    rewriter = MarkdownRewriter(default_language, smart_punctuation, on_diagnostic)
    return rewriter.rewrite(text, name=name)
