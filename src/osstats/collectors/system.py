"""OS / host info collector."""

from __future__ import annotations

import platform
import socket
import sys
import time
from collections.abc import Awaitable
from pathlib import Path
from typing import Any

import psutil

from ..config import settings
from .base import BaseCollector, leaf
from .cpu import cpu_model, loadavg
from .process import top_processes

OS_RELEASE_PATH = Path("/etc/os-release")
FILE_NR_PATH = Path("/proc/sys/fs/file-nr")


def os_name() -> str:
    """Distribution name on Linux, platform string elsewhere."""
    if OS_RELEASE_PATH.exists():
        for line in OS_RELEASE_PATH.read_text().splitlines():
            key, _, value = line.partition("=")
            if key == "PRETTY_NAME" and value:
                return value.strip().strip('"')
    return platform.platform()


def primary_ip() -> str | None:
    """First non-loopback IPv4 address of the host."""
    for addrs in psutil.net_if_addrs().values():
        for addr in addrs:
            if addr.family == socket.AF_INET and not addr.address.startswith("127."):
                return addr.address
    return None


def uptime() -> float:
    """Seconds since boot."""
    return round(max(0.0, time.time() - psutil.boot_time()), 2)


def open_files() -> int | None:
    """Allocated file handles system-wide, None where the kernel has no such counter."""
    if not FILE_NR_PATH.exists():
        return None
    return int(FILE_NR_PATH.read_text().split()[0])


def cpu_descriptors() -> list[dict[str, Any]]:
    """Model, clock speed (MHz) and CPU times (seconds) for every logical core."""
    model = cpu_model()
    per_core = psutil.cpu_times(percpu=True)
    freqs = psutil.cpu_freq(percpu=True) or []

    cpus = []
    for i, times in enumerate(per_core):
        if i < len(freqs):
            speed = round(freqs[i].current)
        elif len(freqs) == 1:
            speed = round(freqs[0].current)
        else:
            speed = None
        cpus.append(
            {
                "model": model,
                "speed": speed,
                "times": {
                    "user": round(times.user, 2),
                    "nice": round(getattr(times, "nice", 0.0), 2),
                    "sys": round(times.system, 2),
                    "idle": round(times.idle, 2),
                    "irq": round(getattr(times, "irq", 0.0), 2),
                },
            }
        )
    return cpus


def vmstats() -> dict[str, Any]:
    """Raw virtual and swap memory counters as reported by the kernel."""
    return {
        "virtual": psutil.virtual_memory()._asdict(),
        "swap": psutil.swap_memory()._asdict(),
    }


class SystemCollector(BaseCollector):
    """Collect OS and host info."""

    def __init__(self, top_n: int | None = None) -> None:
        self.top_n = settings.top_n if top_n is None else top_n
        if self.top_n < 1:
            raise ValueError(f"top_n must be >= 1, got {self.top_n}")

    @property
    def name(self) -> str:
        return "os"

    def queries(self) -> dict[str, Awaitable[Any]]:
        return {
            "name": leaf("os.name", os_name),
            "type": leaf("os.type", platform.system),
            "arch": leaf("os.arch", platform.machine),
            "platform": leaf("os.platform", lambda: sys.platform),
            "ip": leaf("os.ip", primary_ip),
            "hostname": leaf("os.hostname", socket.gethostname),
            "uptime": leaf("os.uptime", uptime),
            "open_files": leaf("os.open_files", open_files),
            "loadavg": leaf("os.loadavg", loadavg),
            "cpus": leaf("os.cpus", cpu_descriptors),
            "top_cpu": leaf("os.top_cpu", top_processes, "cpu_percent", self.top_n),
            "top_mem": leaf("os.top_mem", top_processes, "memory_percent", self.top_n),
            "vmstats": leaf("os.vmstats", vmstats),
        }


async def get_os_stats() -> dict[str, Any]:
    """Platform, host, load, per-core and top-process information."""
    return await SystemCollector().collect()
