"""Tests for inline paragraph building."""

import unittest

from htmldoc.dom.builder import tokenize
from htmldoc.model.nodes import (
    BoldMark,
    CodeMark,
    ImageNode,
    InlineNode,
    ItalicMark,
    LinkMark,
    MarkSpan,
    Paragraph,
    StrikethroughMark,
)
from htmldoc.parse.inline import build_inline


def _build(html: str) -> tuple[str, list[MarkSpan], Paragraph]:
    tree = tokenize(html)
    (node,) = tree.children(tree.root)
    paragraph = Paragraph()
    text, marks = build_inline(tree, node, paragraph)
    return text, marks, paragraph


class TestBuildInline(unittest.TestCase):
    def test_text_node(self) -> None:
        text, marks, paragraph = _build("plain")
        self.assertEqual(text, "plain")
        self.assertEqual(marks, [])
        self.assertEqual(paragraph.children, [InlineNode(text="plain")])

    def test_nested_marks_span_whole_tag(self) -> None:
        text, marks, paragraph = _build("<b>bold <i>both</i></b>")
        self.assertEqual(text, "bold both")
        expected = [
            MarkSpan(start=5, end=9, mark=ItalicMark()),
            MarkSpan(start=0, end=9, mark=BoldMark()),
        ]
        self.assertEqual(marks, expected)
        self.assertEqual(paragraph.children, [InlineNode(text="bold both", marks=expected)])

    def test_child_marks_are_offset(self) -> None:
        text, marks, _ = _build("<span>ab<code>cd</code>ef<s>gh</s></span>")
        self.assertEqual(text, "abcdefgh")
        self.assertEqual(
            marks,
            [
                MarkSpan(start=2, end=4, mark=CodeMark()),
                MarkSpan(start=6, end=8, mark=StrikethroughMark()),
            ],
        )

    def test_link(self) -> None:
        text, marks, _ = _build('<a href="https://x" title="T">go</a>')
        self.assertEqual(text, "go")
        self.assertEqual(marks, [MarkSpan(start=0, end=2, mark=LinkMark(url="https://x", title="T"))])

    def test_link_without_href(self) -> None:
        _, marks, _ = _build("<a>go</a>")
        self.assertEqual(marks[0].mark, LinkMark(url="", title=None))

    def test_image(self) -> None:
        text, marks, paragraph = _build('<img src="e.png" alt=":)" class="emoji">')
        self.assertEqual((text, marks), ("", []))
        self.assertEqual(paragraph.children, [ImageNode(url="e.png", alt=":)", is_inline=True)])

    def test_image_without_src_is_skipped(self) -> None:
        text, marks, paragraph = _build('<img alt="x">')
        self.assertEqual((text, marks), ("", []))
        self.assertTrue(paragraph.is_empty())

    def test_linked_image(self) -> None:
        _, _, paragraph = _build('<a href="https://x"><img src="i.png"></a>')
        self.assertEqual(paragraph.children, [ImageNode(url="i.png", link="https://x")])
        self.assertTrue(paragraph.is_image())

    def test_image_splits_marked_text(self) -> None:
        text, marks, paragraph = _build('<b>ab<img src="e.png" class="emoji">cd</b>')
        self.assertEqual(text, "abcd")
        self.assertEqual(marks, [MarkSpan(start=0, end=4, mark=BoldMark())])
        self.assertEqual(
            paragraph.children,
            [
                InlineNode(text="ab", marks=[MarkSpan(start=0, end=2, mark=BoldMark())]),
                ImageNode(url="e.png", is_inline=True),
                InlineNode(text="cd", marks=[MarkSpan(start=0, end=2, mark=BoldMark())]),
            ],
        )

    def test_image_inside_link_keeps_position(self) -> None:
        _, _, paragraph = _build('<a href="https://x">go <i>now<img src="e.png" class="emoji"></i> then</a>')
        link = LinkMark(url="https://x")
        self.assertEqual(
            paragraph.children,
            [
                InlineNode(
                    text="go now",
                    marks=[
                        MarkSpan(start=3, end=6, mark=ItalicMark()),
                        MarkSpan(start=0, end=6, mark=link),
                    ],
                ),
                ImageNode(url="e.png", is_inline=True, link="https://x"),
                InlineNode(text=" then", marks=[MarkSpan(start=0, end=5, mark=link)]),
            ],
        )

    def test_script_is_not_text(self) -> None:
        text, _, _ = _build("<span>a<script>x()</script></span>")
        self.assertEqual(text, "a")


class TestParagraph(unittest.TestCase):
    def test_push_str_extends_plain_text(self) -> None:
        paragraph = Paragraph()
        paragraph.push_str("a")
        paragraph.push_str("b")
        paragraph.push_str("")
        self.assertEqual(paragraph.children, [InlineNode(text="ab")])

    def test_take_resets(self) -> None:
        paragraph = Paragraph()
        paragraph.push_str("a")
        taken = paragraph.take()
        self.assertEqual(taken.plain_text(), "a")
        self.assertTrue(paragraph.is_empty())

    def test_merge(self) -> None:
        first = Paragraph()
        first.push_str("a")
        second = Paragraph()
        second.push(InlineNode(text="b", marks=[MarkSpan(start=0, end=1, mark=BoldMark())]))
        first.merge(second)
        self.assertEqual(first.text_len(), 2)
        self.assertEqual(len(first.children), 2)


if __name__ == "__main__":
    unittest.main()
