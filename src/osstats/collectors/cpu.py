"""CPU metrics collector."""

from __future__ import annotations

import asyncio
import platform
from collections.abc import Awaitable
from pathlib import Path
from typing import Any

import psutil

from ..config import LOADAVG_PERIODS
from .base import BaseCollector, leaf, timed_leaf, validate_window
from .process import count_processes, count_zombies


def validate_period(averaging_period_minutes: int) -> int:
    """Return *averaging_period_minutes* if the OS keeps a load average for it."""
    if isinstance(averaging_period_minutes, bool) or averaging_period_minutes not in LOADAVG_PERIODS:
        raise ValueError(
            f"averaging period must be one of 1, 5, 15 minutes, got {averaging_period_minutes!r}"
        )
    return averaging_period_minutes


def _cpu_totals(times: Any) -> tuple[float, float]:
    """Return (total, idle) seconds for one cpu_times() sample."""
    total = sum(times)
    # guest time is already counted in user/nice on Linux
    total -= getattr(times, "guest", 0.0)
    total -= getattr(times, "guest_nice", 0.0)
    idle = times.idle + getattr(times, "iowait", 0.0)
    return total, idle


def busy_percent(start: Any, end: Any) -> float:
    """Busy share of all cores between two psutil.cpu_times() samples."""
    start_total, start_idle = _cpu_totals(start)
    end_total, end_idle = _cpu_totals(end)
    elapsed = end_total - start_total
    if elapsed <= 0:
        return 0.0
    busy = elapsed - (end_idle - start_idle)
    return round(min(100.0, max(0.0, busy / elapsed * 100)), 2)


async def usage_over(sampling_window_ms: int) -> float:
    """CPU busy percentage measured across *sampling_window_ms*."""
    start = psutil.cpu_times()
    await asyncio.sleep(sampling_window_ms / 1000)
    end = psutil.cpu_times()
    return busy_percent(start, end)


async def free_over(sampling_window_ms: int) -> float:
    """CPU idle percentage measured across *sampling_window_ms*."""
    return round(100.0 - await usage_over(sampling_window_ms), 2)


def cpu_model() -> str:
    """CPU model name, best effort across platforms."""
    cpuinfo = Path("/proc/cpuinfo")
    if cpuinfo.exists():
        for line in cpuinfo.read_text().splitlines():
            key, _, value = line.partition(":")
            if key.strip() in ("model name", "Model", "Processor") and value.strip():
                return value.strip()
    return platform.processor() or "unknown"


def cpu_count() -> int:
    return psutil.cpu_count(logical=True) or 1


def loadavg() -> list[float]:
    return [round(x, 2) for x in psutil.getloadavg()]


def loadavg_time(averaging_period_minutes: int) -> float:
    """Load average over 1, 5 or 15 minutes."""
    return loadavg()[LOADAVG_PERIODS.index(validate_period(averaging_period_minutes))]


def average() -> dict[str, float]:
    """Idle and total CPU time summed over all cores, plus per-core means."""
    per_core = psutil.cpu_times(percpu=True)
    total_idle = 0.0
    total_tick = 0.0
    for times in per_core:
        total, _ = _cpu_totals(times)
        total_tick += total
        total_idle += times.idle
    cores = max(1, len(per_core))
    return {
        "total_idle": round(total_idle, 2),
        "total_tick": round(total_tick, 2),
        "avg_idle": round(total_idle / cores, 2),
        "avg_total": round(total_tick / cores, 2),
    }


class CPUCollector(BaseCollector):
    """Collect CPU metrics."""

    def __init__(self, sampling_window_ms: int, averaging_period_minutes: int = 5) -> None:
        self.averaging_period_minutes = validate_period(averaging_period_minutes)
        self.sampling_window_ms = validate_window(sampling_window_ms)

    @property
    def name(self) -> str:
        return "cpu"

    def queries(self) -> dict[str, Awaitable[Any]]:
        window = self.sampling_window_ms
        return {
            "model": leaf("cpu.model", cpu_model),
            "count": leaf("cpu.count", cpu_count),
            "loadavg": leaf("cpu.loadavg", loadavg),
            "loadavg_time": leaf("cpu.loadavg_time", loadavg_time, self.averaging_period_minutes),
            "average": leaf("cpu.average", average),
            "usage_percent": timed_leaf("cpu.usage_percent", usage_over(window)),
            "free_percent": timed_leaf("cpu.free_percent", free_over(window)),
            "total_processes": leaf("cpu.total_processes", count_processes),
            "zombie_processes": leaf("cpu.zombie_processes", count_zombies),
        }


async def get_cpu_stats(sampling_window_ms: int, averaging_period_minutes: int) -> dict[str, Any]:
    """Model, core count, load, usage and process counts for the CPU."""
    return await CPUCollector(sampling_window_ms, averaging_period_minutes).collect()
