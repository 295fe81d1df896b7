"""htmldoc: HTML fragments to a semantic document model and Markdown."""

__version__ = "0.1.0"

from .errors import DepthLimitError, HtmlDocError, ParseError, TokenizeError
from .model import Document, ParseContext
from .parse import parse_html
from .render import render_markdown

__all__ = [
    "__version__",
    "DepthLimitError",
    "Document",
    "HtmlDocError",
    "ParseContext",
    "ParseError",
    "TokenizeError",
    "parse_html",
    "render_markdown",
]
