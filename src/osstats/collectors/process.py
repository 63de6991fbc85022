"""Process metrics: the process table and the current process itself."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable
from typing import Any, NamedTuple

import psutil

from .base import BaseCollector, leaf, timed_leaf, validate_window

_SUMMARY_ATTRS = ["pid", "name", "cmdline", "cpu_times", "create_time", "memory_percent"]


class CpuTimeUs(NamedTuple):
    """User and system CPU time of a process, in microseconds."""

    user: int
    system: int


def count_processes() -> int:
    return len(psutil.pids())


def count_zombies() -> int:
    zombies = 0
    for proc in psutil.process_iter(["status"]):
        if proc.info["status"] == psutil.STATUS_ZOMBIE:
            zombies += 1
    return zombies


def _summarize(info: dict[str, Any], now: float) -> dict[str, Any]:
    """Shape one process_iter() row like a `ps -eo pcpu,pmem,time,args` line."""
    cpu_times = info["cpu_times"]
    cpu_time = (cpu_times.user + cpu_times.system) if cpu_times else 0.0
    elapsed = now - (info["create_time"] or now)
    # ps reports %CPU as CPU time over lifetime, not an instantaneous rate
    cpu_percent = cpu_time / elapsed * 100 if elapsed > 0 else 0.0
    cmdline = info["cmdline"]
    return {
        "pid": info["pid"],
        "name": info["name"],
        "cpu_percent": round(cpu_percent, 2),
        "memory_percent": round(info["memory_percent"] or 0, 2),
        "cpu_time": round(cpu_time, 2),
        "command": " ".join(cmdline) if cmdline else info["name"],
    }


def top_processes(sort_by: str, top_n: int = 10) -> list[dict[str, Any]]:
    """Top *top_n* processes ordered by ``cpu_percent`` or ``memory_percent``."""
    if sort_by not in ("cpu_percent", "memory_percent"):
        raise ValueError(f"cannot sort processes by {sort_by!r}")
    if top_n < 1:
        raise ValueError(f"top_n must be >= 1, got {top_n}")

    now = time.time()
    processes: list[dict[str, Any]] = []
    # process_iter() already drops processes that vanish mid-scan
    for proc in psutil.process_iter(_SUMMARY_ATTRS, ad_value=None):
        processes.append(_summarize(proc.info, now))

    return sorted(processes, key=lambda p: p[sort_by], reverse=True)[:top_n]


def self_cpu_time() -> CpuTimeUs:
    """CPU time consumed so far by the current process."""
    times = psutil.Process().cpu_times()
    return CpuTimeUs(user=round(times.user * 1_000_000), system=round(times.system * 1_000_000))


def cpu_usage_percent(start: CpuTimeUs, end: CpuTimeUs, sampling_window_ms: int) -> float:
    """Percent of one core used between two samples taken *sampling_window_ms* apart.

    CPU time is in microseconds and the window in milliseconds, hence the
    factor of 1000.
    """
    used_us = (end.user - start.user) + (end.system - start.system)
    return max(0.0, used_us / (sampling_window_ms * 1000) * 100)


async def self_cpu_usage(sampling_window_ms: int) -> float:
    """CPU usage of the current process over *sampling_window_ms*."""
    start = self_cpu_time()
    await asyncio.sleep(sampling_window_ms / 1000)
    return cpu_usage_percent(start, self_cpu_time(), sampling_window_ms)


def self_uptime() -> float:
    """Seconds since the current process started."""
    return max(0.0, time.time() - psutil.Process().create_time())


class ProcessCollector(BaseCollector):
    """Collect metrics about the running Python process."""

    def __init__(self, sampling_window_ms: int) -> None:
        self.sampling_window_ms = validate_window(sampling_window_ms)

    @property
    def name(self) -> str:
        return "proc"

    def queries(self) -> dict[str, Awaitable[Any]]:
        return {
            "uptime": leaf("proc.uptime", self_uptime),
            "cpu_usage": timed_leaf("proc.cpu_usage", self_cpu_usage(self.sampling_window_ms)),
        }


async def get_process_stats(sampling_window_ms: int) -> dict[str, Any]:
    """Uptime and CPU usage of the current process."""
    return await ProcessCollector(sampling_window_ms).collect()
