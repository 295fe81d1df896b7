"""Parse HTML into a Document."""

from __future__ import annotations

import logging

from ..config import MAX_DEPTH
from ..dom.builder import tokenize
from ..dom.minify import minify_html
from ..errors import ParseError
from ..model.compact import compact
from ..model.nodes import Document, Paragraph, ParseContext, Unknown
from .blocks import build_block

logger = logging.getLogger(__name__)


def parse_html(
    source: str,
    context: ParseContext | None = None,
    *,
    minify: bool = True,
    max_depth: int = MAX_DEPTH,
) -> Document:
    """Parse an HTML fragment or document into a Document.

    Args:
        source: HTML text
        context: Optional rendering context; its highlight theme is tagged
            onto code blocks
        minify: Collapse insignificant whitespace before parsing
        max_depth: Maximum element nesting depth

    Returns:
        Document holding ``source`` verbatim and a single compacted block

    Raises:
        ParseError: If the HTML cannot be tokenized or nests too deeply
    """
    cx = context or ParseContext()
    html = minify_html(source) if minify else source
    tree = tokenize(html, max_depth=max_depth)
    logger.debug("Tokenized %d DOM nodes", len(tree.nodes))

    # The outer accumulator is never flushed: the document node flushes its own.
    paragraph = Paragraph()
    try:
        node = build_block(tree, tree.root, paragraph, cx)
    except RecursionError as e:
        raise ParseError("Document nesting is too deep to parse") from e
    if node is None:
        logger.debug("No content blocks found")
        node = Unknown()

    return Document(source=source, blocks=[compact(node)])
