"""Memory metrics collector."""

from __future__ import annotations

from collections.abc import Awaitable
from pathlib import Path
from typing import Any

import psutil

from ..utils import bytes_to_mb, percent
from .base import BaseCollector, leaf

MEMINFO_PATH = Path("/proc/meminfo")

# Extra /proc/meminfo fields not exposed by psutil
MEMINFO_FIELDS = frozenset(
    {
        "Buffers", "Cached", "Slab", "SReclaimable", "SUnreclaim",
        "PageTables", "KernelStack", "Mapped", "Shmem",
        "CommitLimit", "Committed_AS", "HugePages_Total",
        "HugePages_Free", "Hugepagesize",
    }
)


def parse_meminfo(text: str) -> dict[str, int]:
    """Pick MEMINFO_FIELDS out of /proc/meminfo content, converted to bytes.

    Fields without a ``kB`` suffix (page counts) are returned as-is.
    """
    result: dict[str, int] = {}
    for line in text.splitlines():
        key, sep, rest = line.partition(":")
        key = key.strip()
        if not sep or key not in MEMINFO_FIELDS:
            continue
        parts = rest.split()
        try:
            value = int(parts[0])
        except (ValueError, IndexError):
            continue
        if len(parts) > 1 and parts[1] == "kB":
            value *= 1024
        result[key] = value
    return result


def total_memory() -> int:
    return int(psutil.virtual_memory().total)


def free_memory() -> int:
    """Memory available to new allocations without swapping."""
    return int(psutil.virtual_memory().available)


def used_memory() -> int:
    vm = psutil.virtual_memory()
    return int(vm.total - vm.available)


def memory_info() -> dict[str, Any]:
    """Structured breakdown: MB figures, percentages, swap, and kernel detail."""
    vm = psutil.virtual_memory()
    swap = psutil.swap_memory()
    used = vm.total - vm.available

    info: dict[str, Any] = {
        "total_mb": bytes_to_mb(vm.total),
        "used_mb": bytes_to_mb(used),
        "free_mb": bytes_to_mb(vm.available),
        "used_percent": percent(used, vm.total),
        "free_percent": percent(vm.available, vm.total),
        "swap": {
            "total_mb": bytes_to_mb(swap.total),
            "used_mb": bytes_to_mb(swap.used),
            "free_mb": bytes_to_mb(swap.free),
            "used_percent": round(swap.percent, 2),
        },
    }

    if MEMINFO_PATH.exists():
        info["detail"] = parse_meminfo(MEMINFO_PATH.read_text())

    return info


class MemoryCollector(BaseCollector):
    """Collect memory metrics."""

    @property
    def name(self) -> str:
        return "mem"

    def queries(self) -> dict[str, Awaitable[Any]]:
        return {
            "total": leaf("mem.total", total_memory),
            "free": leaf("mem.free", free_memory),
            "used": leaf("mem.used", used_memory),
            "info": leaf("mem.info", memory_info),
        }


async def get_memory_stats() -> dict[str, Any]:
    """Total, free and used bytes plus a detailed breakdown."""
    return await MemoryCollector().collect()
