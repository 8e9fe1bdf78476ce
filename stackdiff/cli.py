"""stackdiff CLI.

Entry point for the ``stackdiff`` command-line tool.

Usage:
    stackdiff diff <before.json> <after.json> [--key KEY]
                   [--show-unchanged-properties] [--no-color]
    stackdiff changeset <describe-change-set.json> [--nested ID=FILE ...]
                        [--show-unchanged-properties] [--no-color]

Exit codes:
    0  no differences (diff) / rendered successfully (changeset)
    1  differences found (diff)
    2  invalid input
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, NoReturn

from .changeset import render_change_set
from .core.errors import StackDiffError
from .core.json_diff import build_diff, has_changes
from .core.render import get_diff_lines
from .core.types import RenderOptions
from .version import STACKDIFF_VERSION

logger = logging.getLogger(__name__)

EXIT_DIFFERENT = 1
EXIT_ERROR = 2

# ---------------------------------------------------------------------------
# Input helpers
# ---------------------------------------------------------------------------


def _load_json(path: str) -> Any:
    if path == "-":
        return json.load(sys.stdin)
    with open(path, "r", encoding="utf-8") as handle:
        return json.load(handle)


def _parse_nested(entries: List[str]) -> Dict[str, Any]:
    nested: Dict[str, Any] = {}
    for entry in entries:
        change_set_id, sep, path = entry.rpartition("=")
        if not sep or not change_set_id or not path:
            raise StackDiffError(f"--nested expects ID=FILE, got {entry!r}")
        nested[change_set_id] = _load_json(path)
    return nested


def _options(args: argparse.Namespace) -> RenderOptions:
    return RenderOptions(
        show_color=not args.no_color,
        show_unchanged_properties=args.show_unchanged_properties,
    )


def _fail(message: str) -> NoReturn:
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(EXIT_ERROR)


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------


def _cmd_diff(args: argparse.Namespace) -> None:
    try:
        before = _load_json(args.before)
        after = _load_json(args.after)
    except (OSError, ValueError) as exc:
        _fail(str(exc))

    diff = build_diff(before, after)
    changed = has_changes(diff)
    logger.debug("%s -> %s: changed=%s", args.before, args.after, changed)

    for line in get_diff_lines(diff, _options(args), key=args.key):
        print(line)

    if changed:
        sys.exit(EXIT_DIFFERENT)


def _cmd_changeset(args: argparse.Namespace) -> None:
    try:
        response = _load_json(args.file)
        nested = _parse_nested(args.nested)
        report = render_change_set(response, _options(args), nested)
    except (OSError, ValueError, StackDiffError) as exc:
        _fail(str(exc))

    print(report.text())


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def _add_render_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--show-unchanged-properties",
        action="store_true",
        default=False,
        help="Show unchanged properties in the diff",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        default=False,
        help="Disable ANSI colors",
    )


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="stackdiff",
        description="stackdiff: readable structural diffs of resource definitions",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {STACKDIFF_VERSION}"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command")

    diff_parser = subparsers.add_parser("diff", help="Compare two JSON documents")
    diff_parser.add_argument("before", help="JSON file before the change ('-' = stdin)")
    diff_parser.add_argument("after", help="JSON file after the change ('-' = stdin)")
    diff_parser.add_argument(
        "--key", default="", help="Label printed above the diff (e.g. a logical id)"
    )
    _add_render_flags(diff_parser)
    diff_parser.set_defaults(func=_cmd_diff)

    changeset_parser = subparsers.add_parser(
        "changeset", help="Render a saved DescribeChangeSet response"
    )
    changeset_parser.add_argument("file", help="DescribeChangeSet JSON ('-' = stdin)")
    changeset_parser.add_argument(
        "--nested",
        action="append",
        default=[],
        metavar="ID=FILE",
        help="Response for a nested stack change set (repeatable)",
    )
    _add_render_flags(changeset_parser)
    changeset_parser.set_defaults(func=_cmd_changeset)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
