"""Tests for CPU collector."""

from __future__ import annotations

from collections import namedtuple

import psutil
import pytest

from osstats.collectors import cpu
from osstats.collectors.cpu import CPUCollector, busy_percent, get_cpu_stats

scputimes = namedtuple("scputimes", ["user", "system", "idle"])
scputimes_linux = namedtuple(
    "scputimes_linux", ["user", "nice", "system", "idle", "iowait", "guest", "guest_nice"]
)


def test_busy_percent() -> None:
    start = scputimes(10.0, 5.0, 85.0)
    end = scputimes(20.0, 10.0, 170.0)
    assert busy_percent(start, end) == 15.0


def test_busy_percent_counts_iowait_as_idle_and_skips_guest() -> None:
    start = scputimes_linux(0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0)
    end = scputimes_linux(40.0, 0.0, 10.0, 40.0, 10.0, 20.0, 0.0)
    # total 100 after dropping guest, idle 50
    assert busy_percent(start, end) == 50.0


def test_busy_percent_no_elapsed_time() -> None:
    sample = scputimes(1.0, 1.0, 1.0)
    assert busy_percent(sample, sample) == 0.0


def test_loadavg_time_picks_period(monkeypatch) -> None:
    monkeypatch.setattr(psutil, "getloadavg", lambda: (1.0, 2.0, 3.0))
    assert cpu.loadavg() == [1.0, 2.0, 3.0]
    assert cpu.loadavg_time(1) == 1.0
    assert cpu.loadavg_time(5) == 2.0
    assert cpu.loadavg_time(15) == 3.0


def test_average(monkeypatch) -> None:
    per_core = [scputimes(10.0, 10.0, 80.0), scputimes(30.0, 10.0, 60.0)]
    monkeypatch.setattr(psutil, "cpu_times", lambda percpu=False: per_core)
    assert cpu.average() == {
        "total_idle": 140.0,
        "total_tick": 200.0,
        "avg_idle": 70.0,
        "avg_total": 100.0,
    }


def test_averaging_period_must_be_a_load_window() -> None:
    with pytest.raises(ValueError):
        CPUCollector(100, 7)
    with pytest.raises(ValueError):
        CPUCollector(100, True)
    with pytest.raises(ValueError):
        cpu.loadavg_time(True)


def test_window_must_be_positive() -> None:
    with pytest.raises(ValueError):
        CPUCollector(-5)


@pytest.mark.asyncio
async def test_get_cpu_stats() -> None:
    stats = await get_cpu_stats(100, 5)

    assert list(stats) == [
        "model",
        "count",
        "loadavg",
        "loadavg_time",
        "average",
        "usage_percent",
        "free_percent",
        "total_processes",
        "zombie_processes",
    ]
    assert stats["count"] >= 1
    assert len(stats["loadavg"]) == 3
    assert isinstance(stats["loadavg_time"], float)
    assert 0.0 <= stats["usage_percent"] <= 100.0
    assert 0.0 <= stats["free_percent"] <= 100.0
    assert stats["total_processes"] >= 1
    assert 0 <= stats["zombie_processes"] <= stats["total_processes"]
