"""Document model: block nodes, inline nodes and text marks.

Every node carries a ``kind`` discriminator so the tree can be exported to
JSON and validated back without ambiguity.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from ..config import DEFAULT_HIGHLIGHT_THEME


class Length(BaseModel):
    """An absolute pixel length or a fraction of the available space."""

    value: float
    unit: Literal["px", "relative"] = "px"

    @classmethod
    def px(cls, value: float) -> Length:
        return cls(value=value, unit="px")

    @classmethod
    def relative(cls, fraction: float) -> Length:
        return cls(value=fraction, unit="relative")


class BoldMark(BaseModel):
    kind: Literal["bold"] = "bold"


class ItalicMark(BaseModel):
    kind: Literal["italic"] = "italic"


class StrikethroughMark(BaseModel):
    kind: Literal["strikethrough"] = "strikethrough"


class CodeMark(BaseModel):
    kind: Literal["code"] = "code"


class LinkMark(BaseModel):
    kind: Literal["link"] = "link"
    url: str = ""
    title: str | None = None


TextMark = Annotated[
    Union[BoldMark, ItalicMark, StrikethroughMark, CodeMark, LinkMark],
    Field(discriminator="kind"),
]


class MarkSpan(BaseModel):
    """A mark applied to ``text[start:end]`` of an inline node."""

    start: int
    end: int
    mark: TextMark


class InlineNode(BaseModel):
    """A run of text with the marks that style it."""

    kind: Literal["text"] = "text"
    text: str
    marks: list[MarkSpan] = Field(default_factory=list)


class ImageNode(BaseModel):
    """An image. Inline (emoji) images flow with text; others stand alone."""

    kind: Literal["image"] = "image"
    url: str
    alt: str | None = None
    title: str | None = None
    width: Length | None = None
    height: Length | None = None
    link: str | None = None
    is_inline: bool = False


Inline = Annotated[Union[InlineNode, ImageNode], Field(discriminator="kind")]


class Paragraph(BaseModel):
    """Ordered inline content.

    Also used as the mutable accumulator while walking the DOM: text and
    inline nodes are pushed in document order, and ``take`` drains it.
    """

    kind: Literal["paragraph"] = "paragraph"
    children: list[Inline] = Field(default_factory=list)

    def push_str(self, text: str) -> None:
        if not text:
            return
        last = self.children[-1] if self.children else None
        if isinstance(last, InlineNode) and not last.marks:
            last.text += text
        else:
            self.children.append(InlineNode(text=text))

    def push(self, node: InlineNode) -> None:
        if not node.marks:
            self.push_str(node.text)
        elif node.text:
            self.children.append(node)

    def push_image(self, image: ImageNode) -> None:
        self.children.append(image)

    def take(self) -> Paragraph:
        """Return the accumulated content and reset this paragraph to empty."""
        taken = Paragraph(children=self.children)
        self.children = []
        return taken

    def merge(self, other: Paragraph) -> None:
        self.children.extend(other.children)

    def is_empty(self) -> bool:
        return not self.children

    def is_image(self) -> bool:
        """True when the paragraph holds a single image and nothing else."""
        return len(self.children) == 1 and isinstance(self.children[0], ImageNode)

    def text_len(self) -> int:
        return sum(len(c.text) for c in self.children if isinstance(c, InlineNode))

    def plain_text(self) -> str:
        return "".join(c.text for c in self.children if isinstance(c, InlineNode))


class TableCell(BaseModel):
    content: Paragraph = Field(default_factory=Paragraph)
    width: Length | None = None


class TableRow(BaseModel):
    cells: list[TableCell] = Field(default_factory=list)


class Table(BaseModel):
    kind: Literal["table"] = "table"
    rows: list[TableRow] = Field(default_factory=list)


class Root(BaseModel):
    kind: Literal["root"] = "root"
    children: list[BlockNode] = Field(default_factory=list)


class Heading(BaseModel):
    kind: Literal["heading"] = "heading"
    level: int = Field(ge=1, le=6)
    children: Paragraph = Field(default_factory=Paragraph)


class ListBlock(BaseModel):
    kind: Literal["list"] = "list"
    children: list[BlockNode] = Field(default_factory=list)
    ordered: bool = False


class ListItem(BaseModel):
    kind: Literal["list_item"] = "list_item"
    children: list[BlockNode] = Field(default_factory=list)
    spread: bool = False
    checked: bool | None = None


class Blockquote(BaseModel):
    kind: Literal["blockquote"] = "blockquote"
    children: list[BlockNode] = Field(default_factory=list)


class CodeBlock(BaseModel):
    kind: Literal["code_block"] = "code_block"
    code: str
    lang: str | None = None
    theme: str | None = None


class Break(BaseModel):
    kind: Literal["break"] = "break"
    html: bool = True


class Unknown(BaseModel):
    kind: Literal["unknown"] = "unknown"


BlockNode = Annotated[
    Union[
        Root,
        Heading,
        Paragraph,
        ListBlock,
        ListItem,
        Table,
        Blockquote,
        CodeBlock,
        Break,
        Unknown,
    ],
    Field(discriminator="kind"),
]

# Block variants that hold a list of child blocks
CONTAINER_TYPES = (Root, ListBlock, ListItem, Blockquote)


class ParseContext(BaseModel):
    """Rendering context passed through the parse; only tags code blocks."""

    highlight_theme: str = DEFAULT_HIGHLIGHT_THEME


class Document(BaseModel):
    """A parsed document: the source text and its block tree."""

    model_config = ConfigDict(frozen=True)

    source: str
    blocks: list[BlockNode] = Field(default_factory=list)

    def to_markdown(self) -> str:
        from ..render.markdown import render_markdown

        return render_markdown(self)


for _model in (Root, ListBlock, ListItem, Blockquote, Document):
    _model.model_rebuild()
