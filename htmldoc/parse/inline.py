"""Build inline content (text runs, marks and images) from a DOM subtree."""

from __future__ import annotations

import logging

from ..dom.tree import DomNode, DomTree, NodeKind
from ..model.nodes import (
    BoldMark,
    CodeMark,
    ImageNode,
    InlineNode,
    ItalicMark,
    LinkMark,
    MarkSpan,
    Paragraph,
    StrikethroughMark,
)
from .attrs import attribute, is_emoji_class, width_height

logger = logging.getLogger(__name__)

_STYLE_MARKS = {
    "em": ItalicMark,
    "i": ItalicMark,
    "strong": BoldMark,
    "b": BoldMark,
    "del": StrikethroughMark,
    "s": StrikethroughMark,
    "code": CodeMark,
}

# Never rendered as text
SKIPPED_TAGS = {"style", "script"}


def image_node(node: DomNode) -> ImageNode | None:
    """Build an image from an ``<img>`` element; None when ``src`` is missing."""
    src = attribute(node, "src")
    if src is None:
        logger.debug("Skipping <img> without src attribute")
        return None

    width, height = width_height(node)
    return ImageNode(
        url=src,
        alt=attribute(node, "alt"),
        title=attribute(node, "title"),
        width=width,
        height=height,
        is_inline=is_emoji_class(node),
    )


def _mark_for(node: DomNode) -> BoldMark | ItalicMark | StrikethroughMark | CodeMark | LinkMark | None:
    if node.tag == "a":
        return LinkMark(url=attribute(node, "href") or "", title=attribute(node, "title"))
    mark_type = _STYLE_MARKS.get(node.tag)
    return mark_type() if mark_type else None


def _clip(marks: list[MarkSpan], start: int, end: int) -> list[MarkSpan]:
    """Marks overlapping ``[start, end)``, clipped and rebased to ``start``."""
    clipped = []
    for span in marks:
        lo = max(span.start, start)
        hi = min(span.end, end)
        if lo < hi:
            clipped.append(MarkSpan(start=lo - start, end=hi - start, mark=span.mark))
    return clipped


def _collect(tree: DomTree, node: DomNode) -> tuple[str, list[MarkSpan], list[tuple[int, ImageNode]]]:
    """Text, marks and ``(offset, image)`` pairs of a subtree, offsets into the text."""
    if node.kind is NodeKind.TEXT:
        return node.text, [], []

    if node.kind not in (NodeKind.ELEMENT, NodeKind.DOCUMENT):
        return "", [], []

    if node.tag == "img":
        image = image_node(node)
        return "", [], [(0, image)] if image is not None else []

    if node.tag in SKIPPED_TAGS:
        return "", [], []

    text = ""
    marks: list[MarkSpan] = []
    images: list[tuple[int, ImageNode]] = []
    for child in tree.children(node):
        child_text, child_marks, child_images = _collect(tree, child)
        offset = len(text)
        text += child_text
        for span in child_marks:
            marks.append(MarkSpan(start=span.start + offset, end=span.end + offset, mark=span.mark))
        images.extend((at + offset, image) for at, image in child_images)

    mark = _mark_for(node) if node.kind is NodeKind.ELEMENT else None
    if mark is not None:
        marks.append(MarkSpan(start=0, end=len(text), mark=mark))

    if isinstance(mark, LinkMark):
        images = [
            (at, image.model_copy(update={"link": mark.url}) if image.link is None else image)
            for at, image in images
        ]
    return text, marks, images


def build_inline(tree: DomTree, node: DomNode, paragraph: Paragraph) -> tuple[str, list[MarkSpan]]:
    """Append the inline content of ``node`` to ``paragraph``.

    Images nested in the subtree split the text into separate inline nodes,
    so they keep their position; each node carries the marks clipped to its
    stretch of text.

    Returns the text of the subtree and the marks over it, with ranges that
    index into that text.
    """
    text, marks, images = _collect(tree, node)

    pos = 0
    for at, image in images:
        paragraph.push(InlineNode(text=text[pos:at], marks=_clip(marks, pos, at)))
        paragraph.push_image(image)
        pos = at
    paragraph.push(InlineNode(text=text[pos:], marks=_clip(marks, pos, len(text))))

    return text, marks
