"""
osstats

OS, CPU, memory, network and own-process metrics gathered concurrently
into a single snapshot.
"""

from __future__ import annotations

from .collectors import (
    get_cpu_stats,
    get_memory_stats,
    get_network_stats,
    get_os_stats,
    get_process_stats,
)
from .core import get_stats
from .errors import MetricsUnavailable

__all__ = [
    "MetricsUnavailable",
    "__version__",
    "get_cpu_stats",
    "get_memory_stats",
    "get_network_stats",
    "get_os_stats",
    "get_process_stats",
    "get_stats",
]

__version__ = "0.1.0"
