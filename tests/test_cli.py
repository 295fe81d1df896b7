"""Tests for the htmldoc command line."""

import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest.mock import patch

from htmldoc.cli import main


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.tmp = Path(tmp.name)
        self.input = self.tmp / "post.html"
        self.input.write_text(
            '<h2>Notes</h2><p>Use <code>cargo</code></p><pre><code class="lang-sh">cargo build</code></pre>',
            encoding="utf-8",
        )

    def _run(self, *argv: str) -> tuple[int, str, str]:
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def test_markdown_to_stdout(self) -> None:
        code, out, _ = self._run("markdown", str(self.input))
        self.assertEqual(code, 0)
        self.assertEqual(out, "## Notes\n\nUse `cargo`\n\n```sh\ncargo build\n```\n")

    def test_markdown_to_file(self) -> None:
        target = self.tmp / "post.md"
        code, out, _ = self._run("markdown", str(self.input), "-o", str(target))
        self.assertEqual(code, 0)
        self.assertEqual(out, "")
        self.assertTrue(target.read_text(encoding="utf-8").startswith("## Notes"))

    def test_markdown_from_stdin(self) -> None:
        with patch("sys.stdin", io.StringIO("<p>piped</p>")):
            code, out, _ = self._run("markdown", "-")
        self.assertEqual(code, 0)
        self.assertEqual(out, "piped\n")

    def test_json_with_theme(self) -> None:
        with patch("htmldoc.render.tokens.count_tokens", return_value=5):
            code, out, _ = self._run("json", str(self.input), "--theme", "monokai")
        self.assertEqual(code, 0)
        payload = json.loads(out)
        self.assertEqual(payload["tokens"], 5)
        blocks = payload["document"]["blocks"][0]["children"]
        self.assertEqual(blocks[-1]["kind"], "code_block")
        self.assertEqual(blocks[-1]["theme"], "monokai")

    def test_stats(self) -> None:
        with patch("htmldoc.render.tokens.count_tokens", return_value=12):
            code, out, _ = self._run("stats", str(self.input))
        self.assertEqual(code, 0)
        self.assertIn("Blocks:", out)
        self.assertIn("code_block", out)
        self.assertIn("heading", out)
        self.assertIn("Tokens: 12", out)

    def test_missing_input_fails(self) -> None:
        code, _, err = self._run("markdown", str(self.tmp / "missing.html"))
        self.assertEqual(code, 1)
        self.assertIn("Error:", err)

    def test_parse_error_fails(self) -> None:
        self.input.write_text("<div>" * 300, encoding="utf-8")
        code, _, err = self._run("markdown", str(self.input))
        self.assertEqual(code, 1)
        self.assertIn("nesting depth", err)


if __name__ == "__main__":
    unittest.main()
