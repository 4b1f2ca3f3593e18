"""mdBook preprocessor that highlights tagged inline code spans."""

from __future__ import annotations

import logging

from mdbook_inline_highlighting.book import for_each_chapter
from mdbook_inline_highlighting.config import PREPROCESSOR_NAME, load_config
from mdbook_inline_highlighting.rewriter import MarkdownRewriter

logger = logging.getLogger(__name__)

# mdBook release the book JSON layout was taken from
MDBOOK_VERSION = "0.5.0"

SUPPORTED_RENDERERS = ("html",)


class PreprocessorError(Exception):
    """Raised when mdBook hands over input that cannot be processed."""


def _major_minor(version: str) -> tuple[str, ...]:
    return tuple(version.split(".")[:2])


class InlineHighlightingPreprocessor:
    """Rewrites every chapter of a book with the configured highlighting settings."""

    name = PREPROCESSOR_NAME

    def run(self, context: dict, book: dict) -> dict:
        """Process a book in place and return it.

        Args:
            context: Preprocessor context (root, config, renderer, mdbook_version)
            book: Book structure as sent by mdBook
        """
        if not isinstance(book, dict):
            raise PreprocessorError(f"Expected a book object, got {type(book).__name__}")

        version = context.get("mdbook_version")
        if isinstance(version, str) and _major_minor(version) != _major_minor(MDBOOK_VERSION):
            logger.warning(
                "The %s preprocessor was built against mdBook %s, "
                "but is being called from mdBook %s",
                self.name,
                MDBOOK_VERSION,
                version,
            )

        config, error = load_config(context)
        if error:
            logger.warning(error)

        rewriter = MarkdownRewriter(
            default_language=config.default_language,
            smart_punctuation=config.smart_punctuation,
        )

        def process(chapter: dict) -> str:
            return rewriter.rewrite(chapter.get("content") or "", name=chapter.get("name"))

        count = for_each_chapter(book, process)
        logger.debug("Processed %d chapters", count)
        return book

    def supports_renderer(self, renderer: str) -> bool:
        """Raw HTML fragments only make sense for the HTML renderer."""
        return renderer in SUPPORTED_RENDERERS
