"""Collapse insignificant whitespace in HTML before tree building.

Forum and CMS markup is usually pretty-printed, and the indentation between
tags would otherwise surface as stray spaces in paragraphs. The minifier is
best-effort: on any failure the input is returned untouched.
"""

from __future__ import annotations

import logging
import re
from html import escape
from html.parser import HTMLParser

from .builder import P_CLOSERS, VOID_TAGS

logger = logging.getLogger(__name__)

# Tags whose boundaries make surrounding whitespace insignificant
BLOCK_TAGS = P_CLOSERS | {
    "html",
    "head",
    "body",
    "title",
    "meta",
    "link",
    "base",
    "br",
    "li",
    "dd",
    "dt",
    "caption",
    "colgroup",
    "col",
    "thead",
    "tbody",
    "tfoot",
    "tr",
    "td",
    "th",
    "legend",
    "option",
}

# Content kept verbatim
PRESERVE_TAGS = {"pre", "textarea", "script", "style"}

# Raw text elements: content must not be entity-escaped on output
RAW_TEXT_TAGS = {"script", "style"}

# HTML whitespace only; U+00A0 is content.
_WHITESPACE = re.compile(r"[ \t\n\r\f]+")


def minify_html(html: str) -> str:
    """Minify HTML whitespace, omitting comments and the doctype.

    Args:
        html: Source HTML

    Returns:
        Minified HTML, or ``html`` unchanged if minification fails
    """
    minifier = _Minifier()
    try:
        minifier.feed(html)
        minifier.close()
    except Exception as e:
        logger.debug("Minification failed, using original HTML: %s", e)
        return html
    return "".join(minifier.out)


def _render_attrs(attrs: list[tuple[str, str | None]]) -> str:
    parts = [f'{k.lower()}="{escape(v or "", quote=True)}"' for k, v in attrs]
    if not parts:
        return ""
    return " " + " ".join(parts)


class _Minifier(HTMLParser):
    """Streaming re-serializer that drops whitespace at block boundaries."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.out: list[str] = []
        self._pending_space = False
        self._at_boundary = True
        self._preserve: list[str] = []

    def _flush_space(self) -> None:
        if self._pending_space:
            self.out.append(" ")
            self._pending_space = False
            self._at_boundary = True

    def _block_boundary(self) -> None:
        self._pending_space = False
        self._at_boundary = True

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        tag_l = tag.lower()
        if self._preserve:
            self.out.append(f"<{tag_l}{_render_attrs(attrs)}>")
            return

        if tag_l in BLOCK_TAGS:
            self._block_boundary()
        else:
            self._flush_space()

        self.out.append(f"<{tag_l}{_render_attrs(attrs)}>")

        if tag_l in PRESERVE_TAGS:
            self._preserve.append(tag_l)
        elif tag_l in VOID_TAGS and tag_l not in BLOCK_TAGS:
            # <img>, <input>: content, so a following space is significant
            self._at_boundary = False

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self.handle_starttag(tag, attrs)
        if tag.lower() not in VOID_TAGS:
            self.handle_endtag(tag)

    def handle_endtag(self, tag: str) -> None:
        tag_l = tag.lower()
        if tag_l in VOID_TAGS and tag_l != "br":
            return

        if self._preserve:
            if tag_l != self._preserve[-1]:
                self.out.append(f"</{tag_l}>")
                return
            self._preserve.pop()
            self.out.append(f"</{tag_l}>")
            if tag_l in BLOCK_TAGS:
                self._block_boundary()
            return

        if tag_l in BLOCK_TAGS:
            self._block_boundary()
        # Inline end tags keep the pending space so it lands after the tag.
        self.out.append(f"</{tag_l}>")

    def handle_data(self, data: str) -> None:
        if not data:
            return

        if self._preserve:
            if self._preserve[-1] in RAW_TEXT_TAGS:
                self.out.append(data)
            else:
                self.out.append(escape(data, quote=False))
            return

        collapsed = _WHITESPACE.sub(" ", data)
        if collapsed == " ":
            if not self._at_boundary:
                self._pending_space = True
            return

        if collapsed.startswith(" ") and not self._at_boundary:
            self._pending_space = True
        trailing = collapsed.endswith(" ")
        core = collapsed.strip(" ")

        self._flush_space()
        self.out.append(escape(core, quote=False))
        self._at_boundary = False
        if trailing:
            self._pending_space = True

    def handle_comment(self, data: str) -> None:
        return

    def handle_decl(self, decl: str) -> None:
        # Doctype omitted.
        return

    def unknown_decl(self, data: str) -> None:
        return

    def handle_pi(self, data: str) -> None:
        return
