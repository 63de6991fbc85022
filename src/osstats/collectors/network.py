"""Network metrics collector."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import Any

import psutil

from ..utils import bytes_to_mb
from .base import BaseCollector, leaf, timed_leaf, validate_window


def is_loopback(interface: str) -> bool:
    return interface == "lo" or interface.startswith("lo0") or "loopback" in interface.lower()


def interface_stats() -> list[dict[str, Any]]:
    """Cumulative counters for every interface."""
    counters = psutil.net_io_counters(pernic=True)
    if_stats = psutil.net_if_stats()

    interfaces = []
    for name in sorted(counters):
        io = counters[name]
        iface: dict[str, Any] = {"interface": name}

        if name in if_stats:
            s = if_stats[name]
            iface["is_up"] = s.isup
            iface["speed"] = s.speed
            iface["mtu"] = s.mtu

        iface.update(
            {
                "bytes_sent": io.bytes_sent,
                "bytes_recv": io.bytes_recv,
                "packets_sent": io.packets_sent,
                "packets_recv": io.packets_recv,
                "errin": io.errin,
                "errout": io.errout,
                "dropin": io.dropin,
                "dropout": io.dropout,
            }
        )
        interfaces.append(iface)

    return interfaces


def traffic_between(start: dict[str, Any], end: dict[str, Any]) -> dict[str, Any]:
    """MB received/sent between two pernic counter samples.

    Returns ``{"interfaces": {name: traffic}, "total": traffic}``.

    Interfaces missing from either sample are skipped; counter resets read as 0.
    """
    interfaces: dict[str, dict[str, float]] = {}
    total_in = 0
    total_out = 0
    for name in sorted(end):
        if name not in start or is_loopback(name):
            continue
        received = max(0, end[name].bytes_recv - start[name].bytes_recv)
        sent = max(0, end[name].bytes_sent - start[name].bytes_sent)
        total_in += received
        total_out += sent
        interfaces[name] = {"input_mb": bytes_to_mb(received), "output_mb": bytes_to_mb(sent)}

    return {
        "interfaces": interfaces,
        "total": {"input_mb": bytes_to_mb(total_in), "output_mb": bytes_to_mb(total_out)},
    }


async def traffic_over(sampling_window_ms: int) -> dict[str, Any]:
    """Bytes in/out per interface measured across *sampling_window_ms*."""
    start = psutil.net_io_counters(pernic=True)
    await asyncio.sleep(sampling_window_ms / 1000)
    end = psutil.net_io_counters(pernic=True)
    return traffic_between(start, end)


class NetworkCollector(BaseCollector):
    """Collect network metrics."""

    def __init__(self, sampling_window_ms: int) -> None:
        self.sampling_window_ms = validate_window(sampling_window_ms)

    @property
    def name(self) -> str:
        return "net"

    def queries(self) -> dict[str, Awaitable[Any]]:
        return {
            "stats": leaf("net.stats", interface_stats),
            "in_out": timed_leaf("net.in_out", traffic_over(self.sampling_window_ms)),
        }


async def get_network_stats(sampling_window_ms: int) -> dict[str, Any]:
    """Per-interface counters and traffic over the sampling window."""
    return await NetworkCollector(sampling_window_ms).collect()
