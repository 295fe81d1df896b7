"""Generic DOM tree, tokenizer and minifier."""

from .builder import tokenize
from .minify import minify_html
from .tree import DomNode, DomTree, NodeKind

__all__ = [
    "DomNode",
    "DomTree",
    "NodeKind",
    "minify_html",
    "tokenize",
]
