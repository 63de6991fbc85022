"""Snapshot aggregation: fan out to every collector and merge the results."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Iterable
from typing import Any

from .collectors import (
    CPUCollector,
    MemoryCollector,
    NetworkCollector,
    ProcessCollector,
    SystemCollector,
)
from .collectors.base import BaseCollector, validate_window
from .config import settings

log = logging.getLogger(__name__)

# Snapshot field order
DOMAINS = ("os", "cpu", "mem", "net", "proc")


def build_collectors(
    sampling_window_ms: int,
    domains: Iterable[str] = DOMAINS,
    *,
    averaging_period_minutes: int | None = None,
) -> list[BaseCollector]:
    """Instantiate the collectors for *domains*, in snapshot field order."""
    wanted = set(domains)
    unknown = wanted - set(DOMAINS)
    if unknown:
        raise ValueError(f"Unknown domain(s): {', '.join(sorted(unknown))}. Available: {', '.join(DOMAINS)}")

    period = settings.averaging_period_minutes if averaging_period_minutes is None else averaging_period_minutes
    factories = {
        "os": lambda: SystemCollector(),
        "cpu": lambda: CPUCollector(sampling_window_ms, period),
        "mem": lambda: MemoryCollector(),
        "net": lambda: NetworkCollector(sampling_window_ms),
        "proc": lambda: ProcessCollector(sampling_window_ms),
    }
    return [factories[d]() for d in DOMAINS if d in wanted]


async def collect_snapshot(
    sampling_window_ms: int,
    domains: Iterable[str] = DOMAINS,
) -> dict[str, Any]:
    """Collect the requested domains concurrently into one snapshot.

    Either every requested field is populated or MetricsUnavailable is
    raised; there is no partial result.
    """
    validate_window(sampling_window_ms)
    collectors = build_collectors(sampling_window_ms, domains)

    started = time.perf_counter()
    results = await asyncio.gather(*(c.collect() for c in collectors))
    log.debug(
        "snapshot collected",
        extra={
            "window_ms": sampling_window_ms,
            "elapsed_ms": round((time.perf_counter() - started) * 1000, 1),
        },
    )

    return {c.name: result for c, result in zip(collectors, results)}


async def get_stats(sampling_window_ms: int) -> dict[str, Any]:
    """OS, CPU, memory, network and own-process metrics in one snapshot.

    Args:
        sampling_window_ms: Window in milliseconds over which CPU usage,
            network throughput and process CPU usage are measured.

    Returns:
        Dict with keys ``os``, ``cpu``, ``mem``, ``net`` and ``proc``.

    Raises:
        ValueError: if the window is not a positive int.
        MetricsUnavailable: if any metric source fails.
    """
    return await collect_snapshot(sampling_window_ms, DOMAINS)
