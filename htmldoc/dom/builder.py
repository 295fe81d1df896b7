"""Build a generic DOM tree from HTML text.

Uses the standard library tokenizer and recovers the tree shape for the
irregular markup commonly emitted by forums and CMSes: unclosed paragraphs,
list items and table cells, stray end tags, and self-closed non-void tags.
"""

from __future__ import annotations

import logging
from html.parser import HTMLParser

from ..config import MAX_DEPTH
from ..errors import DepthLimitError, TokenizeError
from .tree import DomNode, DomTree, NodeKind

logger = logging.getLogger(__name__)

# HTML void elements (no end tag, never have children)
VOID_TAGS = {
    "area",
    "base",
    "br",
    "col",
    "embed",
    "hr",
    "img",
    "input",
    "link",
    "meta",
    "param",
    "source",
    "track",
    "wbr",
}

HEADING_TAGS = {"h1", "h2", "h3", "h4", "h5", "h6"}

NEWLINE_STRIP_TAGS = {"pre", "listing", "textarea"}

# Start tags that implicitly close an open <p>
P_CLOSERS = {
    "address",
    "article",
    "aside",
    "blockquote",
    "details",
    "dialog",
    "div",
    "dl",
    "fieldset",
    "figcaption",
    "figure",
    "footer",
    "form",
    "header",
    "hgroup",
    "hr",
    "main",
    "menu",
    "nav",
    "ol",
    "p",
    "pre",
    "section",
    "summary",
    "table",
    "ul",
} | HEADING_TAGS

# An open <p> is only closed when no scope boundary sits between it and the new tag.
_P_SCOPE = {"button", "caption", "html", "table", "td", "th", "template", "object"}

# tag -> (open tags it closes, tags that stop the search)
_IMPLIED_END = {
    "li": ({"li"}, {"ul", "ol", "menu", "table"}),
    "dt": ({"dt", "dd"}, {"dl", "table"}),
    "dd": ({"dt", "dd"}, {"dl", "table"}),
    "td": ({"td", "th"}, {"tr", "table"}),
    "th": ({"td", "th"}, {"tr", "table"}),
    "tr": ({"tr"}, {"table", "thead", "tbody", "tfoot"}),
    "thead": ({"thead", "tbody", "tfoot"}, {"table"}),
    "tbody": ({"thead", "tbody", "tfoot"}, {"table"}),
    "tfoot": ({"thead", "tbody", "tfoot"}, {"table"}),
    "option": ({"option"}, {"select", "datalist"}),
}

# Cells opened directly in one of these get an implied <tr>
_ROW_PARENTS = {"table", "thead", "tbody", "tfoot"}


def tokenize(html: str, max_depth: int = MAX_DEPTH) -> DomTree:
    """Parse HTML text into a generic DOM tree.

    Args:
        html: HTML fragment or full document
        max_depth: Maximum element nesting depth

    Returns:
        Arena DOM tree whose first node is the document node

    Raises:
        DepthLimitError: If elements nest deeper than ``max_depth``
        TokenizeError: If the tokenizer fails on the input
    """
    builder = _TreeBuilder(max_depth)
    try:
        builder.feed(html)
        builder.close()
    except DepthLimitError:
        raise
    except Exception as e:
        raise TokenizeError(f"Failed to tokenize HTML: {e}") from e
    return builder.tree


class _TreeBuilder(HTMLParser):
    """Streaming tree builder over the standard library tokenizer."""

    def __init__(self, max_depth: int) -> None:
        super().__init__(convert_charrefs=True)
        self.tree = DomTree()
        self._stack: list[int] = [0]
        self._max_depth = max_depth
        self._strip_newline = False

    @property
    def _current(self) -> int:
        return self._stack[-1]

    def _open_tags(self) -> list[str]:
        return [self.tree.nodes[i].tag for i in self._stack]

    def _pop_to(self, position: int) -> None:
        """Close every open element from the top of the stack down to ``position``."""
        del self._stack[position:]

    def _close_open(self, targets: set[str], boundaries: set[str]) -> None:
        tags = self._open_tags()
        for position in range(len(tags) - 1, 0, -1):
            tag = tags[position]
            if tag in targets:
                self._pop_to(position)
                return
            if tag in boundaries:
                return

    def _apply_implied_ends(self, tag: str) -> None:
        if tag in P_CLOSERS:
            self._close_open({"p"}, _P_SCOPE)
        if tag in HEADING_TAGS and self.tree.nodes[self._current].tag in HEADING_TAGS:
            self._stack.pop()
        implied = _IMPLIED_END.get(tag)
        if implied:
            self._close_open(*implied)

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        tag_l = tag.lower()
        self._strip_newline = tag_l in NEWLINE_STRIP_TAGS
        self._apply_implied_ends(tag_l)

        if tag_l in ("td", "th") and self.tree.nodes[self._current].tag in _ROW_PARENTS:
            self.handle_starttag("tr", [])

        node = DomNode(
            NodeKind.ELEMENT,
            tag=tag_l,
            attrs=[(k.lower(), v if v is not None else "") for k, v in attrs],
        )
        index = self.tree.add(self._current, node)

        if tag_l in VOID_TAGS:
            return

        depth = len(self._stack)
        if depth > self._max_depth:
            raise DepthLimitError(depth, self._max_depth)
        self._stack.append(index)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        # <div/> is not self-closing in HTML, but forum markup expects it to be.
        self.handle_starttag(tag, attrs)
        if tag.lower() not in VOID_TAGS:
            self.handle_endtag(tag)

    def handle_endtag(self, tag: str) -> None:
        tag_l = tag.lower()
        self._strip_newline = False

        if tag_l == "br":
            # Browsers treat </br> as <br>.
            self.handle_starttag("br", [])
            return

        if tag_l in VOID_TAGS:
            return

        tags = self._open_tags()
        for position in range(len(tags) - 1, 0, -1):
            if tags[position] == tag_l:
                self._pop_to(position)
                return

        logger.debug("Ignoring unmatched end tag </%s>", tag_l)

    def handle_data(self, data: str) -> None:
        data = data.replace("\r\n", "\n").replace("\r", "\n")
        if self._strip_newline:
            # A newline right after <pre> is not part of its content.
            self._strip_newline = False
            if data.startswith("\n"):
                data = data[1:]
        if not data:
            return
        parent = self.tree.nodes[self._current]
        if parent.children:
            last = self.tree.nodes[parent.children[-1]]
            if last.kind is NodeKind.TEXT:
                last.text += data
                return
        self.tree.add(self._current, DomNode(NodeKind.TEXT, text=data))

    def handle_comment(self, data: str) -> None:
        self.tree.add(self._current, DomNode(NodeKind.COMMENT, text=data))

    def handle_decl(self, decl: str) -> None:
        if decl.lower().startswith("doctype"):
            self.tree.add(self._current, DomNode(NodeKind.DOCTYPE, text=decl))
        else:
            self.tree.add(self._current, DomNode(NodeKind.COMMENT, text=decl))

    def unknown_decl(self, data: str) -> None:
        # <![CDATA[...]]> is a bogus comment in HTML content.
        self.tree.add(self._current, DomNode(NodeKind.COMMENT, text=data))

    def handle_pi(self, data: str) -> None:
        self.tree.add(self._current, DomNode(NodeKind.PROCESSING_INSTRUCTION, text=data))
