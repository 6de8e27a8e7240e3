"""Command line interface for calltracer."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import cast

from .inspect_cmd import VerbosityArg, run_inspect


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="calltracer")
    subparsers = parser.add_subparsers(dest="command", required=True)

    inspect_parser = subparsers.add_parser("inspect", help="Analyze a call trace JSON file")
    inspect_parser.add_argument("trace_file", type=Path, help="Path to call trace JSON file")
    inspect_parser.add_argument(
        "--sender",
        default=None,
        help="Transaction sender (defaults to the root frame's from address)",
    )
    inspect_parser.add_argument(
        "--receiver",
        default=None,
        help="Transaction receiver (defaults to the root frame's to address)",
    )
    inspect_parser.add_argument(
        "--storage",
        action="store_true",
        help="Include storage reads and writes in the call tree",
    )
    inspect_parser.add_argument(
        "--external-only",
        action="store_true",
        help="Hide internal JUMP frames, hoisting their logs to the enclosing call",
    )
    inspect_parser.add_argument(
        "--verbosity",
        choices=["minimal", "standard", "full"],
        default="standard",
        help="Console render verbosity",
    )
    inspect_parser.add_argument(
        "--json",
        action="store_true",
        help="Emit the full analysis as JSON instead of text output",
    )
    inspect_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Optional output file path for --json analysis",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "inspect":
        return run_inspect(
            args.trace_file,
            cast(VerbosityArg, args.verbosity),
            sender=args.sender,
            receiver=args.receiver,
            include_storage=args.storage,
            external_only=args.external_only,
            as_json=args.json,
            output_path=args.output,
        )

    parser.error("Unknown command")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
