from .parsing import OutputKind, SpanResult, classify, inline_with_highlighting
from .rewriter import MarkdownRewriter, rewrite
from .preprocessor import InlineHighlightingPreprocessor, PreprocessorError

__all__ = [
    "OutputKind",
    "SpanResult",
    "classify",
    "inline_with_highlighting",
    "MarkdownRewriter",
    "rewrite",
    "InlineHighlightingPreprocessor",
    "PreprocessorError",
]
__version__ = "0.1.0"
