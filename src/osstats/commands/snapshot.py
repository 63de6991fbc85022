"""Snapshot command handler."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import time

from ..core import DOMAINS, collect_snapshot
from ..errors import MetricsUnavailable
from ..formatters import get_formatter
from ..utils import output_text

log = logging.getLogger(__name__)


def cmd_snapshot(args: argparse.Namespace) -> int:
    """Take a single snapshot and report how long it took."""
    window = int(args.window)
    if window <= 0:
        sys.stderr.write("Error: --window must be > 0\n")
        return 2

    formatter = get_formatter(args.format)
    domains = args.only or DOMAINS

    started = time.perf_counter()
    try:
        snapshot = asyncio.run(collect_snapshot(window, domains))
    except ValueError as e:
        sys.stderr.write(f"Error: {e}\n")
        return 2
    except MetricsUnavailable as e:
        log.error("snapshot failed: %s", e, extra={"source": e.source}, exc_info=True)
        return 1
    elapsed_ms = (time.perf_counter() - started) * 1000

    text = formatter.format(snapshot)
    if args.format == "pretty":
        text += f"\nElapsed: {elapsed_ms:.0f} ms"
    output_text(text, args.output)

    log.info("snapshot done", extra={"window_ms": window, "elapsed_ms": round(elapsed_ms, 1)})
    return 0


def cmd_version(args: argparse.Namespace) -> int:
    """Show version."""
    from .. import __version__

    sys.stdout.write(f"osstats version {__version__}\n")
    return 0
