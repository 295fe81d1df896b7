"""Render the document model to CommonMark/GFM markdown."""

from __future__ import annotations

import re

from ..model.nodes import (
    Blockquote,
    Break,
    CodeBlock,
    Document,
    Heading,
    ImageNode,
    InlineNode,
    ListBlock,
    ListItem,
    MarkSpan,
    Paragraph,
    Root,
    Table,
)

_DELIMITERS = {
    "bold": "**",
    "italic": "*",
    "strikethrough": "~~",
}

# Characters that would read back as markup in plain text
_ESCAPED = re.compile(r"([\\`*_\[\]])")


def render_markdown(node) -> str:
    """Convert a Document (or a single block node) to markdown.

    Args:
        node: Document or block node

    Returns:
        Normalized markdown string
    """
    if isinstance(node, Document):
        md = "\n\n".join(_render_block(block) for block in node.blocks)
    else:
        md = _render_block(node)
    return _normalize_output(md)


def render_inline(paragraph: Paragraph) -> str:
    """Render a paragraph's inline nodes."""
    parts = []
    for child in paragraph.children:
        if isinstance(child, ImageNode):
            parts.append(_render_image(child))
        else:
            parts.append(_render_text(child))
    return "".join(parts)


def _render_image(image: ImageNode) -> str:
    alt = image.alt or ""
    if image.title:
        md = f'![{alt}]({image.url} "{image.title}")'
    else:
        md = f"![{alt}]({image.url})"
    if image.link:
        return f"[{md}]({image.link})"
    return md


def _render_text(node: InlineNode) -> str:
    text = node.text
    spans = [
        (span, index)
        for index, span in enumerate(node.marks)
        if 0 <= span.start < span.end <= len(text)
    ]
    # Outer spans first; on equal ranges the later (enclosing tag's) mark is outer.
    spans.sort(key=lambda item: (item[0].start, -item[0].end, -item[1]))
    return _render_range(text, 0, len(text), [span for span, _ in spans], frozenset())


def _render_range(text: str, start: int, end: int, spans: list[MarkSpan], open_kinds: frozenset[str]) -> str:
    out: list[str] = []
    pos = start
    i = 0
    while i < len(spans):
        outer = spans[i]
        inner: list[MarkSpan] = []
        j = i + 1
        while j < len(spans) and spans[j].start < outer.end:
            if spans[j].end <= outer.end:
                inner.append(spans[j])
            j += 1
        out.append(_escape(text[pos:outer.start]))
        out.append(_render_span(text, outer, inner, open_kinds))
        pos = outer.end
        i = j
    out.append(_escape(text[pos:end]))
    return "".join(out)


def _escape(text: str) -> str:
    return _ESCAPED.sub(r"\\\1", text)


def _split_whitespace(content: str) -> tuple[str, str, str]:
    core = content.strip()
    if not core:
        return "", content, ""
    lead = content[: len(content) - len(content.lstrip())]
    trail = content[len(content.rstrip()):]
    return lead, core, trail


def _code_span(content: str) -> str:
    longest = max((len(run) for run in re.findall(r"`+", content)), default=0)
    fence = "`" * (longest + 1)
    if content.startswith("`") or content.endswith("`"):
        content = f" {content} "
    return f"{fence}{content}{fence}"


def _render_span(text: str, span: MarkSpan, inner: list[MarkSpan], open_kinds: frozenset[str]) -> str:
    mark = span.mark
    if mark.kind == "code":
        lead, core, trail = _split_whitespace(text[span.start:span.end])
        if not core:
            return lead
        return f"{lead}{_code_span(core)}{trail}"

    content = _render_range(text, span.start, span.end, inner, open_kinds | {mark.kind})
    if mark.kind in open_kinds and mark.kind != "link":
        return content

    lead, core, trail = _split_whitespace(content)
    if not core:
        return content

    if mark.kind == "link":
        if mark.title:
            return f'{lead}[{core}]({mark.url} "{mark.title}"){trail}'
        return f"{lead}[{core}]({mark.url}){trail}"

    delimiter = _DELIMITERS[mark.kind]
    return f"{lead}{delimiter}{core}{delimiter}{trail}"


def _render_block(block) -> str:
    if isinstance(block, Root):
        return _join_blocks(block.children, "\n\n")
    if isinstance(block, Heading):
        return f"{'#' * block.level} {render_inline(block.children).strip()}"
    if isinstance(block, Paragraph):
        return render_inline(block).strip()
    if isinstance(block, ListBlock):
        return _render_list(block)
    if isinstance(block, ListItem):
        return _render_list(ListBlock(children=[block]))
    if isinstance(block, Table):
        return _render_table(block)
    if isinstance(block, Blockquote):
        return _format_blockquote(_join_blocks(block.children, "\n\n"))
    if isinstance(block, CodeBlock):
        return _render_code_block(block)
    if isinstance(block, Break):
        return "<br>" if block.html else "  "
    return ""


def _join_blocks(blocks: list, separator: str) -> str:
    parts = [_render_block(b) for b in blocks]
    return separator.join(p for p in parts if p)


def _render_list(block: ListBlock) -> str:
    items: list[str] = []
    spread = any(isinstance(c, ListItem) and c.spread for c in block.children)
    for index, child in enumerate(block.children):
        marker = f"{index + 1}. " if block.ordered else "- "
        if isinstance(child, ListItem):
            body = _join_blocks(child.children, "\n\n" if child.spread else "\n")
        else:
            body = _render_block(child)
        indent = " " * len(marker)
        lines = body.split("\n")
        rendered = [marker + lines[0]]
        rendered.extend(indent + line if line else "" for line in lines[1:])
        items.append("\n".join(rendered))
    return ("\n\n" if spread else "\n").join(items)


def _render_table(table: Table) -> str:
    """Render a table as GFM; the first row becomes the header."""
    rows = [[_escape_table_cell(render_inline(cell.content)) for cell in row.cells] for row in table.rows]
    if not rows:
        return ""

    max_cols = max(len(row) for row in rows)
    for row in rows:
        while len(row) < max_cols:
            row.append("")

    lines: list[str] = []
    lines.append("| " + " | ".join(rows[0]) + " |")
    lines.append("| " + " | ".join("---" for _ in range(max_cols)) + " |")
    for row in rows[1:]:
        lines.append("| " + " | ".join(row) + " |")
    return "\n".join(lines)


def _render_code_block(block: CodeBlock) -> str:
    longest = max((len(run) for run in re.findall(r"`{3,}", block.code)), default=2)
    fence = "`" * max(3, longest + 1)
    code = block.code.rstrip("\n")
    return f"{fence}{block.lang or ''}\n{code}\n{fence}"


def _format_blockquote(text: str) -> str:
    """Format text as a blockquote."""
    lines = text.strip().split("\n")
    return "\n".join(f"> {line}" if line else ">" for line in lines)


def _escape_table_cell(text: str) -> str:
    """Escape text for use in a table cell."""
    text = text.replace("|", "\\|")
    text = text.replace("\n", " ")
    return text.strip()


def _normalize_output(md: str) -> str:
    """Normalize markdown output.

    - Single blank line between blocks
    - No trailing whitespace (except two-space hard breaks)
    - No leading/trailing blank lines
    - Fenced code is left untouched
    """
    md = md.replace("\r\n", "\n").replace("\r", "\n")

    cleaned_lines: list[str] = []
    fence: str | None = None
    blank_run = 0
    for line in md.split("\n"):
        stripped = line.lstrip()
        if fence is not None:
            cleaned_lines.append(line)
            blank_run = 0
            if stripped.startswith(fence) and not stripped.strip("`"):
                fence = None
            continue

        match = re.match(r"`{3,}", stripped)
        if match:
            fence = match.group(0)

        if line.endswith("  ") and line.strip():
            line = line.rstrip() + "  "
        else:
            line = line.rstrip()

        if not line:
            blank_run += 1
            if blank_run > 1:
                continue
        else:
            blank_run = 0
        cleaned_lines.append(line)

    return "\n".join(cleaned_lines).strip()
