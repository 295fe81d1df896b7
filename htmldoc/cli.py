"""CLI entry point for htmldoc."""

from __future__ import annotations

import argparse
import logging
import sys
from collections import Counter
from pathlib import Path
from typing import Any

from . import __version__
from .errors import HtmlDocError
from .model.nodes import CONTAINER_TYPES


def app(argv: list[str] | None = None) -> None:
    """Console script entrypoint."""
    raise SystemExit(main(argv))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="htmldoc",
        description="Convert HTML fragments into a semantic document model and markdown.",
    )
    parser.add_argument(
        "--version",
        "-V",
        action="version",
        version=f"htmldoc {__version__}",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug diagnostics to stderr")

    sub = parser.add_subparsers(dest="cmd", required=True)

    p_md = sub.add_parser("markdown", help="Render HTML as markdown")
    p_md.add_argument("input", help="HTML file, or - for stdin")
    p_md.add_argument("--out", "-o", type=Path, help="Output file (default: stdout)")
    p_md.add_argument("--no-minify", action="store_true", help="Parse whitespace as written")

    p_json = sub.add_parser("json", help="Export the document model as JSON")
    p_json.add_argument("input", help="HTML file, or - for stdin")
    p_json.add_argument("--out", "-o", type=Path, help="Output file (default: stdout)")
    p_json.add_argument("--no-minify", action="store_true", help="Parse whitespace as written")
    p_json.add_argument("--theme", help="Highlight theme tagged on code blocks")

    p_stats = sub.add_parser("stats", help="Show block counts and markdown token count")
    p_stats.add_argument("input", help="HTML file, or - for stdin")
    p_stats.add_argument("--no-minify", action="store_true", help="Parse whitespace as written")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.cmd == "markdown":
        return _cmd_markdown(args)
    if args.cmd == "json":
        return _cmd_json(args)
    if args.cmd == "stats":
        return _cmd_stats(args)

    parser.print_help()
    return 2


def _read_input(name: str) -> str:
    if name == "-":
        return sys.stdin.read()
    return Path(name).read_text(encoding="utf-8")


def _write_output(text: str, out: Path | None) -> None:
    if out is None:
        sys.stdout.write(text)
        return
    out.write_text(text, encoding="utf-8")


def _parse(args: Any, theme: str | None = None):
    from .model.nodes import ParseContext
    from .parse.document import parse_html

    context = ParseContext(highlight_theme=theme) if theme else None
    return parse_html(_read_input(args.input), context, minify=not args.no_minify)


def _cmd_markdown(args: Any) -> int:
    try:
        document = _parse(args)
        _write_output(document.to_markdown() + "\n", args.out)
    except (HtmlDocError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def _cmd_json(args: Any) -> int:
    from .export import create_export, export_json

    try:
        document = _parse(args, theme=args.theme)
        _write_output(export_json(create_export(document)), args.out)
    except (HtmlDocError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def _count_kinds(blocks: list, counts: Counter) -> None:
    for block in blocks:
        counts[block.kind] += 1
        if isinstance(block, CONTAINER_TYPES):
            _count_kinds(block.children, counts)


def _cmd_stats(args: Any) -> int:
    from .render.tokens import count_tokens

    try:
        document = _parse(args)
    except (HtmlDocError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    counts: Counter = Counter()
    _count_kinds(document.blocks, counts)
    markdown = document.to_markdown()

    print(f"Source: {len(document.source):,} chars")
    print("Blocks:")
    for kind, count in sorted(counts.items()):
        print(f"  {kind:12} {count}")
    print(f"Markdown: {len(markdown):,} chars")
    print(f"Tokens: {count_tokens(markdown):,}")
    return 0


if __name__ == "__main__":
    app()
