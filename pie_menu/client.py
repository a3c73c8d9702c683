"""Command line client: send a menu to a running server and print the choice."""
from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from .constants import DEFAULT_BUS_NAME, DEFAULT_MAX_DEPTH, DEFAULT_MAX_ITEMS, DEFAULT_OBJECT_PATH
from .domain.errors import MenuParseError
from .domain.menu import format_menu_tree
from .domain.parser import parse_menu_description

EXIT_SELECTED = 0
EXIT_CANCELLED = 1
EXIT_REJECTED = 2
EXIT_TIMEOUT = 3

_EXIT_CODES = {
    "selected": EXIT_SELECTED,
    "cancelled": EXIT_CANCELLED,
    "rejected": EXIT_REJECTED,
    "timeout": EXIT_TIMEOUT,
}


def read_description(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="pie-menu-client", description=__doc__)
    subparsers = parser.add_subparsers(dest="command", required=True)

    show = subparsers.add_parser("show", help="Show a menu and wait for the result.")
    show.add_argument("source", help="Path to a JSON menu description, or - for stdin.")
    show.add_argument("--bus-name", default=DEFAULT_BUS_NAME)
    show.add_argument("--object-path", default=DEFAULT_OBJECT_PATH)
    show.add_argument("--timeout", type=float, default=None, help="Seconds to wait for the user.")
    show.add_argument("--json", action="store_true", help="Print the result as JSON.")

    validate = subparsers.add_parser("validate", help="Check a description without a server.")
    validate.add_argument("source", help="Path to a JSON menu description, or - for stdin.")
    validate.add_argument("--max-depth", type=int, default=DEFAULT_MAX_DEPTH)
    validate.add_argument("--max-items", type=int, default=DEFAULT_MAX_ITEMS)
    return parser.parse_args(argv)


def run_validate(args: argparse.Namespace) -> int:
    try:
        menu = parse_menu_description(
            read_description(args.source),
            max_depth=args.max_depth,
            max_items=args.max_items,
        )
    except MenuParseError as exc:
        print(f"invalid menu: {exc}", file=sys.stderr)
        return EXIT_REJECTED
    print(format_menu_tree(menu))
    if menu.is_empty:
        print("warning: menu has no items and will be rejected by the server", file=sys.stderr)
    return 0


def run_show(args: argparse.Namespace) -> int:
    from sdbus.dbus_exceptions import DbusFailedError

    from .integrations.dbus_client import request_menu

    description = read_description(args.source)
    try:
        result = asyncio.run(
            request_menu(
                description,
                bus_name=args.bus_name,
                object_path=args.object_path,
                timeout=args.timeout,
            )
        )
    except DbusFailedError as exc:
        print(f"menu server unavailable: {exc}", file=sys.stderr)
        return EXIT_REJECTED
    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False))
    elif result.item is not None:
        print(result.item)
    else:
        print(result.status, file=sys.stderr)
    return _EXIT_CODES.get(result.status, EXIT_REJECTED)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        if args.command == "validate":
            return run_validate(args)
        return run_show(args)
    except OSError as exc:
        print(f"cannot read {args.source}: {exc}", file=sys.stderr)
        return EXIT_REJECTED


if __name__ == "__main__":
    sys.exit(main())
