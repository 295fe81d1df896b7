"""Markdown rendering and token counting."""

from .markdown import render_inline, render_markdown
from .tokens import count_tokens

__all__ = [
    "count_tokens",
    "render_inline",
    "render_markdown",
]
