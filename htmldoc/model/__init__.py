"""Document model."""

from .compact import compact, compact_document
from .nodes import (
    BlockNode,
    Blockquote,
    BoldMark,
    Break,
    CodeBlock,
    CodeMark,
    Document,
    Heading,
    ImageNode,
    Inline,
    InlineNode,
    ItalicMark,
    Length,
    LinkMark,
    ListBlock,
    ListItem,
    MarkSpan,
    Paragraph,
    ParseContext,
    Root,
    StrikethroughMark,
    Table,
    TableCell,
    TableRow,
    TextMark,
    Unknown,
)

__all__ = [
    "BlockNode",
    "Blockquote",
    "BoldMark",
    "Break",
    "CodeBlock",
    "CodeMark",
    "Document",
    "Heading",
    "ImageNode",
    "Inline",
    "InlineNode",
    "ItalicMark",
    "Length",
    "LinkMark",
    "ListBlock",
    "ListItem",
    "MarkSpan",
    "Paragraph",
    "ParseContext",
    "Root",
    "StrikethroughMark",
    "Table",
    "TableCell",
    "TableRow",
    "TextMark",
    "Unknown",
    "compact",
    "compact_document",
]
