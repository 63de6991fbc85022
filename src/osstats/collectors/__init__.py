"""System metrics collectors, one per snapshot field."""

from __future__ import annotations

from .base import BaseCollector
from .cpu import CPUCollector, get_cpu_stats
from .memory import MemoryCollector, get_memory_stats
from .network import NetworkCollector, get_network_stats
from .process import ProcessCollector, get_process_stats
from .system import SystemCollector, get_os_stats

__all__ = [
    "BaseCollector",
    "CPUCollector",
    "MemoryCollector",
    "NetworkCollector",
    "ProcessCollector",
    "SystemCollector",
    "get_cpu_stats",
    "get_memory_stats",
    "get_network_stats",
    "get_os_stats",
    "get_process_stats",
]
