"""Extract code and language from <pre> blocks.

Handles the shapes produced by Discourse and common Markdown processors:

- ``<pre><code class="language-rust">...</code></pre>``
- ``<pre><code class="lang-rust">...</code></pre>``
- ``<pre><code>...</code></pre>`` (no language)
- ``<pre>...</pre>`` (no ``<code>`` wrapper)
"""

from __future__ import annotations

from ..config import CODE_LANGUAGE_PREFIXES
from ..dom.tree import DomNode, DomTree
from .attrs import attribute


def code_language(node: DomNode) -> str | None:
    """Language id from a ``language-*`` or ``lang-*`` class token."""
    classes = attribute(node, "class")
    if not classes:
        return None
    for cls in classes.split():
        for prefix in CODE_LANGUAGE_PREFIXES:
            if cls.startswith(prefix):
                return cls[len(prefix):]
    return None


def extract_pre_code(tree: DomTree, node: DomNode) -> tuple[str, str | None] | None:
    """Return ``(code, lang)`` for a ``<pre>`` element, or None if it has no text."""
    for child in tree.children(node):
        if child.is_element and child.tag == "code":
            text = tree.text_content(child)
            if text:
                return text, code_language(child)

    text = tree.text_content(node)
    if text:
        return text, None
    return None
