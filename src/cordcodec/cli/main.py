"""Main CLI entry point for cordcodec."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from .. import __version__
from ..cli.analyze import check_payload, inspect_file
from ..exceptions import CordcodecError


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the cordcodec CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="cordcodec: Streaming JSON codec for Discord API entities",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  cordcodec --inspect entities.py           Show the field tables of entities
  cordcodec --check Message payload.json    Decode and re-encode a payload
  cordcodec --version                       Show version
        """,
    )

    parser.add_argument(
        "--inspect",
        metavar="FILE",
        type=str,
        help="Show wire keys, kinds and omission policy of entities defined in FILE",
    )

    parser.add_argument(
        "--check",
        nargs=2,
        metavar=("ENTITY", "FILE"),
        help="Decode a JSON payload as a Discord entity and print its canonical encoding",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"cordcodec {__version__}",
    )

    args = parser.parse_args(argv)

    if args.inspect:
        file_path = Path(args.inspect)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1

        try:
            inspect_file(file_path)
            return 0
        except (CordcodecError, ImportError, SyntaxError, ValueError) as e:
            print(f"Error inspecting file: {e}", file=sys.stderr)
            return 1

    if args.check:
        entity_name, payload = args.check
        file_path = Path(payload)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1

        try:
            print(check_payload(entity_name, file_path.read_bytes()))
            return 0
        except (CordcodecError, KeyError) as e:
            print(f"Error checking payload: {e}", file=sys.stderr)
            return 1

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
