"""Base collector interface and the leaf-query fan-out."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any

from ..errors import MetricsUnavailable

log = logging.getLogger(__name__)


def validate_window(sampling_window_ms: int) -> int:
    """Return *sampling_window_ms* if it is a positive int, else raise ValueError."""
    if isinstance(sampling_window_ms, bool) or not isinstance(sampling_window_ms, int):
        raise ValueError(f"sampling window must be an int, got {sampling_window_ms!r}")
    if sampling_window_ms <= 0:
        raise ValueError(f"sampling window must be > 0 ms, got {sampling_window_ms}")
    return sampling_window_ms


async def leaf(source: str, query: Callable[..., Any], *args: Any) -> Any:
    """Run one blocking leaf query in a worker thread.

    Any failure is re-raised as MetricsUnavailable carrying the original cause.
    """
    try:
        return await asyncio.to_thread(query, *args)
    except MetricsUnavailable:
        raise
    except Exception as e:
        log.warning("leaf query failed", extra={"source": source})
        raise MetricsUnavailable(source=source, message=str(e) or type(e).__name__) from e


async def timed_leaf(source: str, query: Awaitable[Any]) -> Any:
    """Await a suspending leaf query (one that sleeps for a sampling window)."""
    try:
        return await query
    except MetricsUnavailable:
        raise
    except Exception as e:
        log.warning("leaf query failed", extra={"source": source})
        raise MetricsUnavailable(source=source, message=str(e) or type(e).__name__) from e


async def gather_fields(queries: dict[str, Awaitable[Any]]) -> dict[str, Any]:
    """Start every query, wait for all, and merge results in key order.

    The first failure propagates. Queries still in flight are left to finish
    and their results are dropped.
    """
    names = list(queries)
    results = await asyncio.gather(*queries.values())
    return dict(zip(names, results))


class BaseCollector(ABC):
    """Abstract base class for all metric collectors."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Collector name used as key in snapshot."""
        ...

    @abstractmethod
    def queries(self) -> dict[str, Awaitable[Any]]:
        """Leaf queries keyed by result field, in output order."""
        ...

    async def collect(self) -> dict[str, Any]:
        """Collect and return metrics as a dictionary."""
        return await gather_fields(self.queries())
