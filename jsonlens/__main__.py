"""
Command-line entry point: ``python -m jsonlens [FILE]``.

Exit codes: 0 on success, 1 when the input is not renderable JSON, 2 when the
tree build fails.
"""

import argparse
import logging
import sys
from typing import Optional, TextIO

from .core.builder import build
from .preprocessing.extractors import PayloadExtractor
from .render.html import render_document_html, render_grid_html
from .render.text import render_document_text, render_grid_text
from .security.exceptions import (
    ExtractionError,
    SecurityError,
    ShapeError,
    TokenStreamError,
)
from .table.synthesizer import TableSynthesizer
from .utils.config import ViewerConfig


def _cli(
    argv: list[str], stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None
) -> int:
    ap = argparse.ArgumentParser(
        prog="jsonlens", description="Show the JSON or JSONP document in a payload"
    )
    ap.add_argument("file", nargs="?", help="input file (default: standard input)")
    ap.add_argument("--table", action="store_true", help="render a top-level array as a table")
    ap.add_argument("--html", action="store_true", help="emit HTML instead of text")
    ap.add_argument("--no-jsonp", action="store_true", help="do not unwrap JSONP calls")
    ap.add_argument("-v", "--verbose", action="store_true", help="log debug output to stderr")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    stdout = stdout or sys.stdout

    if args.file:
        with open(args.file, encoding="utf-8") as handle:
            text = handle.read()
    else:
        text = (stdin or sys.stdin).read()

    config = ViewerConfig(allow_jsonp=not args.no_jsonp)
    try:
        extracted = PayloadExtractor(config).extract(text)
    except ExtractionError as exc:
        print(f"Not JSON: {exc.reason.value}", file=sys.stderr)
        return 1

    if args.table:
        try:
            grid = TableSynthesizer(config.table).synthesize(extracted.parsed_value)
        except ShapeError as exc:
            print(exc.message, file=sys.stderr)
            return 1
        print(render_grid_html(grid) if args.html else render_grid_text(grid), file=stdout)
        return 0

    try:
        document = build(extracted.normalized_text, extracted.wrapper_name, config)
    except (TokenStreamError, SecurityError) as exc:
        print(f"Build failed: {exc}", file=sys.stderr)
        return 2

    rendered = render_document_html(document) if args.html else render_document_text(document)
    print(rendered, file=stdout)
    return 0


def main() -> None:
    sys.exit(_cli(sys.argv[1:]))


if __name__ == "__main__":
    main()
