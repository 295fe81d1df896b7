"""Collapse redundant ``Root`` wrappers left by paragraph flushing."""

from __future__ import annotations

from .nodes import CONTAINER_TYPES, BlockNode, Document, Root


def compact(node: BlockNode) -> BlockNode:
    """Return ``node`` with every single-child ``Root`` replaced by its child.

    Applied depth-first to all container blocks. The result is a fresh tree;
    compacting it again returns an equal tree.
    """
    if not isinstance(node, CONTAINER_TYPES):
        return node

    children = [compact(child) for child in node.children]
    if isinstance(node, Root) and len(children) == 1:
        return children[0]
    return node.model_copy(update={"children": children})


def compact_document(document: Document) -> Document:
    return document.model_copy(update={"blocks": [compact(b) for b in document.blocks]})
