"""Configuration constants for htmldoc."""

import os

# Maximum element nesting accepted by the tokenizer.
# Override via HTMLDOC_MAX_DEPTH environment variable
MAX_DEPTH = int(os.getenv("HTMLDOC_MAX_DEPTH", "256"))

# Theme reference tagged on code blocks when no ParseContext is given
DEFAULT_HIGHLIGHT_THEME = os.getenv("HTMLDOC_HIGHLIGHT_THEME", "default")

# Discourse marks emoji images with these classes
EMOJI_CLASSES = frozenset({"emoji", "emoji-only"})

# <code class="language-rust"> / <code class="lang-rust">
CODE_LANGUAGE_PREFIXES = ("language-", "lang-")

# Parser versioning for export determinism
PARSER_VERSION = "0.1.0"
SCHEMA_VERSION = 1

# Token counting model
TIKTOKEN_ENCODING = "cl100k_base"
