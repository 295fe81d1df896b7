"""Classify DOM nodes into block nodes.

The walk threads one paragraph accumulator through the recursion. Inline
content accumulates into it, and it is flushed into a ``Paragraph`` block
whenever a block boundary is reached, so paragraphs and blocks come out in
document order.
"""

from __future__ import annotations

from ..dom.tree import DomNode, DomTree, NodeKind
from ..model.nodes import (
    BlockNode,
    Blockquote,
    Break,
    CodeBlock,
    Heading,
    ListBlock,
    ListItem,
    Paragraph,
    ParseContext,
    Root,
)
from .code import extract_pre_code
from .inline import SKIPPED_TAGS, build_inline, image_node
from .table import build_table

BLOCK_ELEMENTS = frozenset(
    {
        "html",
        "body",
        "head",
        "address",
        "article",
        "aside",
        "blockquote",
        "details",
        "summary",
        "dialog",
        "div",
        "dl",
        "fieldset",
        "figcaption",
        "figure",
        "footer",
        "form",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "header",
        "hr",
        "main",
        "nav",
        "ol",
        "p",
        "pre",
        "section",
        "table",
        "ul",
        "style",
        "script",
    }
)

HEADING_LEVELS = {"h1": 1, "h2": 2, "h3": 3, "h4": 4, "h5": 5, "h6": 6}


def flush_paragraph(children: list[BlockNode], paragraph: Paragraph) -> None:
    """Move a non-empty accumulator into ``children`` as a Paragraph block."""
    if paragraph.is_empty():
        return
    children.append(paragraph.take())


def _after_flushed(children: list[BlockNode], block: BlockNode) -> BlockNode:
    """Return ``block``, wrapped in a Root with the flushed content before it."""
    if not children:
        return block
    children.append(block)
    return Root(children=children)


def _collect_children(
    tree: DomTree,
    node: DomNode,
    paragraph: Paragraph,
    cx: ParseContext,
    children: list[BlockNode],
) -> list[BlockNode]:
    for child in tree.children(node):
        block = build_block(tree, child, paragraph, cx)
        if block is not None:
            flush_paragraph(children, paragraph)
            children.append(block)
    flush_paragraph(children, paragraph)
    return children


def _build_heading(tree: DomTree, node: DomNode, paragraph: Paragraph) -> BlockNode:
    children: list[BlockNode] = []
    flush_paragraph(children, paragraph)

    content = Paragraph()
    for child in tree.children(node):
        build_inline(tree, child, content)

    level = HEADING_LEVELS.get(node.tag, 6)
    return _after_flushed(children, Heading(level=level, children=content))


def _build_image(node: DomNode, paragraph: Paragraph) -> BlockNode | None:
    image = image_node(node)
    if image is None:
        return None

    if image.is_inline:
        # Emoji flow with the surrounding text.
        paragraph.push_image(image)
        return None

    children: list[BlockNode] = []
    flush_paragraph(children, paragraph)
    block = Paragraph()
    block.push_image(image)
    return _after_flushed(children, block)


def _build_list_item(tree: DomTree, node: DomNode, paragraph: Paragraph, cx: ParseContext) -> BlockNode:
    children: list[BlockNode] = []
    flush_paragraph(children, paragraph)

    for child in tree.children(node):
        child_paragraph = Paragraph()
        block = build_block(tree, child, child_paragraph, cx)
        if block is not None:
            children.append(block)
        if child_paragraph.is_empty():
            continue
        last = children[-1] if children else None
        if isinstance(last, Paragraph):
            last.merge(child_paragraph)
        else:
            children.append(child_paragraph)

    flush_paragraph(children, paragraph)
    return ListItem(children=children, spread=False, checked=None)


def _build_pre(tree: DomTree, node: DomNode, paragraph: Paragraph, cx: ParseContext) -> BlockNode | None:
    children: list[BlockNode] = []
    flush_paragraph(children, paragraph)

    extracted = extract_pre_code(tree, node)
    if extracted is not None:
        code, lang = extracted
        return _after_flushed(children, CodeBlock(code=code, lang=lang, theme=cx.highlight_theme))

    # Not a code block shape: keep the content as a generic container.
    _collect_children(tree, node, paragraph, cx, children)
    return Root(children=children) if children else None


def _build_element(tree: DomTree, node: DomNode, paragraph: Paragraph, cx: ParseContext) -> BlockNode | None:
    tag = node.tag

    if tag == "br":
        return Break(html=True)
    if tag in HEADING_LEVELS:
        return _build_heading(tree, node, paragraph)
    if tag == "img":
        return _build_image(node, paragraph)
    if tag in ("ul", "ol"):
        before: list[BlockNode] = []
        flush_paragraph(before, paragraph)
        items = _collect_children(tree, node, paragraph, cx, [])
        return _after_flushed(before, ListBlock(children=items, ordered=tag == "ol"))
    if tag == "li":
        return _build_list_item(tree, node, paragraph, cx)
    if tag == "table":
        children: list[BlockNode] = []
        flush_paragraph(children, paragraph)
        return _after_flushed(children, build_table(tree, node))
    if tag == "blockquote":
        before = []
        flush_paragraph(before, paragraph)
        quoted = _collect_children(tree, node, paragraph, cx, [])
        return _after_flushed(before, Blockquote(children=quoted))
    if tag == "pre":
        return _build_pre(tree, node, paragraph, cx)
    if tag in SKIPPED_TAGS:
        return None

    if tag in BLOCK_ELEMENTS:
        children = []
        flush_paragraph(children, paragraph)
        _collect_children(tree, node, paragraph, cx, children)
        return Root(children=children) if children else None

    # Everything else is inline content.
    build_inline(tree, node, paragraph)
    if paragraph.is_image():
        return paragraph.take()
    return None


def build_block(
    tree: DomTree,
    node: DomNode,
    paragraph: Paragraph,
    cx: ParseContext,
) -> BlockNode | None:
    """Build the block node for ``node``.

    Args:
        tree: DOM tree being walked
        node: Node to classify
        paragraph: Accumulator for inline content at this level
        cx: Parse context

    Returns:
        The block node, or None when the node only contributed inline
        content (or nothing at all)
    """
    if node.kind is NodeKind.TEXT:
        paragraph.push_str(node.text)
        return None
    if node.kind is NodeKind.ELEMENT:
        return _build_element(tree, node, paragraph, cx)
    if node.kind is NodeKind.DOCUMENT:
        children = _collect_children(tree, node, paragraph, cx, [])
        return Root(children=children) if children else None
    # Comments, doctype and processing instructions carry no content.
    return None
