"""HTML to document model conversion."""

from .attrs import attribute, is_emoji_class, length_of, style_map, width_height
from .blocks import BLOCK_ELEMENTS, build_block
from .code import code_language, extract_pre_code
from .document import parse_html
from .inline import build_inline, image_node
from .table import build_cell, build_row, build_table

__all__ = [
    "BLOCK_ELEMENTS",
    "attribute",
    "build_block",
    "build_cell",
    "build_inline",
    "build_row",
    "build_table",
    "code_language",
    "extract_pre_code",
    "image_node",
    "is_emoji_class",
    "length_of",
    "parse_html",
    "style_map",
    "width_height",
]
