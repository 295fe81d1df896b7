"""Tests for table building and code block extraction."""

import unittest

from htmldoc.dom.builder import tokenize
from htmldoc.model.nodes import Length
from htmldoc.parse.code import code_language, extract_pre_code
from htmldoc.parse.table import build_table


def _first(html: str):
    tree = tokenize(html)
    (node,) = tree.children(tree.root)
    return tree, node


class TestBuildTable(unittest.TestCase):
    def test_flattens_sections(self) -> None:
        tree, node = _first(
            "<table><thead><tr><th>Name</th><th>Value</th></tr></thead>"
            "<tbody><tr><td>A</td><td>1</td></tr></tbody></table>"
        )
        table = build_table(tree, node)
        cells = [[c.content.plain_text() for c in row.cells] for row in table.rows]
        self.assertEqual(cells, [["Name", "Value"], ["A", "1"]])

    def test_skips_empty_cells_and_rows(self) -> None:
        tree, node = _first("<table><tr><td>A</td><td></td></tr><tr><td></td></tr></table>")
        table = build_table(tree, node)
        self.assertEqual(len(table.rows), 1)
        self.assertEqual([c.content.plain_text() for c in table.rows[0].cells], ["A"])

    def test_cell_width(self) -> None:
        tree, node = _first('<table><tr><td width="50%">A</td><td style="width: 120px">B</td><td>C</td></tr></table>')
        widths = [c.width for c in build_table(tree, node).rows[0].cells]
        self.assertEqual(widths, [Length.relative(0.5), Length.px(120), None])

    def test_cell_keeps_marks(self) -> None:
        tree, node = _first("<table><tr><td><b>A</b></td></tr></table>")
        content = build_table(tree, node).rows[0].cells[0].content
        self.assertEqual(content.children[0].marks[0].mark.kind, "bold")


class TestExtractPreCode(unittest.TestCase):
    def test_lang_prefix(self) -> None:
        tree, node = _first('<pre><code class="lang-rust">fn main() {\n    println!("Hello");\n}</code></pre>')
        self.assertEqual(
            extract_pre_code(tree, node),
            ('fn main() {\n    println!("Hello");\n}', "rust"),
        )

    def test_language_prefix_among_classes(self) -> None:
        tree, node = _first('<pre><code class="hljs language-javascript">const x = 42;</code></pre>')
        self.assertEqual(extract_pre_code(tree, node), ("const x = 42;", "javascript"))

    def test_no_language(self) -> None:
        tree, node = _first("<pre><code>plain code here</code></pre>")
        self.assertEqual(extract_pre_code(tree, node), ("plain code here", None))

    def test_without_code_element(self) -> None:
        tree, node = _first("<pre>raw <b>preformatted</b> text</pre>")
        self.assertEqual(extract_pre_code(tree, node), ("raw preformatted text", None))

    def test_empty_code_falls_back_to_pre_text(self) -> None:
        tree, node = _first("<pre><code></code>text</pre>")
        self.assertEqual(extract_pre_code(tree, node), ("text", None))

    def test_empty_pre(self) -> None:
        tree, node = _first("<pre></pre>")
        self.assertIsNone(extract_pre_code(tree, node))

    def test_code_language_first_match(self) -> None:
        tree, node = _first('<code class="lang-py language-rust">x</code>')
        self.assertEqual(code_language(node), "py")


if __name__ == "__main__":
    unittest.main()
