"""Token counting using tiktoken."""

from __future__ import annotations

import tiktoken

from ..config import TIKTOKEN_ENCODING

# Lazy-loaded encoder
_encoder: tiktoken.Encoding | None = None


def get_encoder() -> tiktoken.Encoding:
    """Get or create the tiktoken encoder."""
    global _encoder
    if _encoder is None:
        _encoder = tiktoken.get_encoding(TIKTOKEN_ENCODING)
    return _encoder


def count_tokens(text: str) -> int:
    """Count cl100k_base tokens in text.

    Args:
        text: Text to tokenize

    Returns:
        Token count
    """
    if not text:
        return 0
    return len(get_encoder().encode(text))
