import argparse
import json
import logging
import os
import sys
from typing import Optional, TextIO

from rich.console import Console
from rich.logging import RichHandler

from mdbook_inline_highlighting.preprocessor import (
    InlineHighlightingPreprocessor,
    PreprocessorError,
)

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "MDBOOK_INLINE_HIGHLIGHTING_LOG"


def setup_logging(level: str) -> None:
    """Send log records to stderr; stdout carries the book JSON."""
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
    )
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[handler],
        force=True,
    )


def read_input(stream: TextIO) -> tuple[dict, dict]:
    """Parse the ``[context, book]`` pair mdBook writes to the preprocessor."""
    try:
        data = json.load(stream)
    except json.JSONDecodeError as e:
        raise PreprocessorError(f"Unable to parse the input: {e}") from e

    if not isinstance(data, list) or len(data) != 2:
        raise PreprocessorError("Expected a JSON array of [context, book]")
    context, book = data
    if not isinstance(context, dict):
        raise PreprocessorError("Preprocessor context must be a JSON object")
    return context, book


def handle_preprocessing(
    preprocessor: InlineHighlightingPreprocessor,
    stdin: TextIO,
    stdout: TextIO,
) -> None:
    context, book = read_input(stdin)
    processed = preprocessor.run(context, book)
    json.dump(processed, stdout)


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the mdbook-inline-highlighting command."""
    parser = argparse.ArgumentParser(
        prog="mdbook-inline-highlighting",
        description="mdBook preprocessor that highlights tagged inline code spans",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get(LOG_LEVEL_ENV, "INFO"),
        help=f"Logging level (default: ${LOG_LEVEL_ENV} or INFO)",
    )
    subparsers = parser.add_subparsers(dest="command")
    supports = subparsers.add_parser(
        "supports", help="Check whether a renderer is supported by this preprocessor"
    )
    supports.add_argument("renderer", help="Renderer name, e.g. html")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    preprocessor = InlineHighlightingPreprocessor()

    if args.command == "supports":
        return 0 if preprocessor.supports_renderer(args.renderer) else 1

    try:
        handle_preprocessing(preprocessor, sys.stdin, sys.stdout)
    except PreprocessorError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
