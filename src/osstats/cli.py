"""CLI interface for osstats."""

from __future__ import annotations

import argparse
import sys

from .commands.snapshot import cmd_snapshot, cmd_version
from .config import settings
from .core import DOMAINS
from .formatters import FORMATS
from .logging import configure_logging


def build_parser() -> argparse.ArgumentParser:
    """Build argument parser."""
    parser = argparse.ArgumentParser(
        prog="osstats",
        description="Concurrent OS, CPU, memory, network and process metrics snapshot",
    )

    parser.add_argument(
        "--version",
        "-V",
        action="store_true",
        help="Show version and exit",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: $LOG_LEVEL or INFO)",
    )

    subparsers = parser.add_subparsers(dest="command")

    # snapshot command
    p_snapshot = subparsers.add_parser(
        "snapshot",
        help="Take a single snapshot of every metric domain",
    )
    p_snapshot.add_argument(
        "--window",
        "-w",
        type=int,
        default=settings.sampling_window_ms,
        help=f"Sampling window in milliseconds (default: {settings.sampling_window_ms})",
    )
    p_snapshot.add_argument(
        "--format",
        "-f",
        choices=FORMATS,
        default="pretty",
        help="Output format (default: pretty)",
    )
    p_snapshot.add_argument(
        "--only",
        nargs="+",
        choices=DOMAINS,
        default=None,
        metavar="DOMAIN",
        help=f"Collect only these domains ({', '.join(DOMAINS)})",
    )
    p_snapshot.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Output file (default: stdout)",
    )
    p_snapshot.set_defaults(func=cmd_snapshot)

    # version command
    p_version = subparsers.add_parser(
        "version",
        help="Show version",
    )
    p_version.set_defaults(func=cmd_version)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(level=args.log_level)

    if args.version:
        from . import __version__

        sys.stdout.write(f"osstats version {__version__}\n")
        raise SystemExit(0)

    if not args.command:
        parser.print_help()
        raise SystemExit(0)

    rc = int(args.func(args))
    raise SystemExit(rc)


if __name__ == "__main__":
    main()
