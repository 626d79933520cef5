"""Command line entry point: ``sqlign -i INPUT -o OUTPUT``.

Reads SQL (or, with ``--tree``, a serialized tree), renders it, and writes
the formatted document to the output path once rendering has succeeded.
Any input or I/O failure prints a single ``Error: ...`` line to stderr and
exits with status 1.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from sqlign.debug import dump_tree
from sqlign.errors import SqlignError
from sqlign.nodes import SyntaxTree
from sqlign.renderers import render_sql
from sqlign.serialization import tree_from_json
from sqlign.treesource import parse_sql
from sqlign.utils.logger import get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sqlign",
        description="This utility formats SQL code alignment",
    )
    parser.add_argument("-i", "--input", type=Path, required=True, help="SQL file to format")
    parser.add_argument("-o", "--output", type=Path, required=True, help="Where to write the result")
    parser.add_argument(
        "--tree",
        action="store_true",
        help="Read INPUT as a JSON syntax tree instead of SQL text",
    )
    parser.add_argument(
        "--dump-tree",
        action="store_true",
        help="List the syntax tree on stderr before rendering",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def load_tree(path: Path, *, serialized: bool = False) -> SyntaxTree:
    """Read ``path`` and build its syntax tree."""
    text = path.read_text(encoding="utf-8")
    if serialized:
        return tree_from_json(text, source_file=str(path))
    return parse_sql(text, source_file=str(path))


def run(args: argparse.Namespace) -> None:
    tree = load_tree(args.input, serialized=args.tree)
    if args.dump_tree:
        sys.stderr.write(dump_tree(tree))
    formatted = render_sql(tree)
    args.output.write_text(formatted, encoding="utf-8")
    logger.info("Formatted %s -> %s", args.input, args.output)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        run(args)
    except (SqlignError, OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
