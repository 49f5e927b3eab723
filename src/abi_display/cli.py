"""Command line tool for rendering decoded ABI values."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from abi_display.links import DEFAULT_ADDRESS_BASE, AddressRouter
from abi_display.parsing import decode_type
from abi_display.renderer import ERROR, Renderer
from abi_display.values import from_json


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Render a decoded ABI value as display HTML or copy text"
    )
    parser.add_argument(
        "type",
        help="ABI type string, e.g. 'uint256[]' or '(address,bytes32)'",
    )
    parser.add_argument(
        "value",
        help="Value as JSON; bytes and addresses are 0x-prefixed hex strings",
    )
    parser.add_argument(
        "-c", "--copy",
        action="store_true",
        help="Print the copy/paste form instead of the display form",
    )
    parser.add_argument(
        "--no-links",
        action="store_true",
        help="Render addresses as plain hex instead of links",
    )
    parser.add_argument(
        "--address-base",
        default=DEFAULT_ADDRESS_BASE,
        help=f"Path prefix for address links (default: {DEFAULT_ADDRESS_BASE})",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        type_def = decode_type(args.type)
    except (SyntaxError, ValueError) as e:
        print(f"Error: Invalid ABI type '{args.type}': {e}", file=sys.stderr)
        return 1

    try:
        value = from_json(type_def, json.loads(args.value))
    except ValueError as e:
        print(f"Error: Invalid value: {e}", file=sys.stderr)
        return 1

    renderer = Renderer(address_path=AddressRouter(args.address_base))
    if args.copy:
        result = renderer.render_copy(type_def, value)
    else:
        result = renderer.render_display(type_def, value, args.no_links)

    if result is ERROR:
        print(f"Error: Cannot render value as {type_def}", file=sys.stderr)
        return 1

    print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
