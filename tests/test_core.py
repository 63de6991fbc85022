"""Tests for snapshot aggregation."""

from __future__ import annotations

import asyncio
import contextlib
import time

import psutil
import pytest

from osstats import MetricsUnavailable, get_stats
from osstats.collectors import process
from osstats.collectors.base import gather_fields, leaf
from osstats.core import DOMAINS, build_collectors, collect_snapshot


@pytest.mark.asyncio
async def test_get_stats_populates_every_field() -> None:
    started = time.perf_counter()
    snapshot = await get_stats(500)
    elapsed = time.perf_counter() - started

    assert list(snapshot) == ["os", "cpu", "mem", "net", "proc"]
    assert all(snapshot[key] is not None for key in snapshot)
    assert snapshot["cpu"]["count"] >= 1
    assert snapshot["mem"]["total"] > 0
    assert snapshot["proc"]["uptime"] >= 0

    # four branches sleep for the window; run in sequence they would take 2s
    assert elapsed >= 0.5 - 0.002
    assert elapsed < 1.5


@pytest.mark.asyncio
async def test_leaf_fault_fails_whole_snapshot(monkeypatch) -> None:
    def boom(*args, **kwargs):
        raise OSError("permission denied")

    monkeypatch.setattr(psutil, "virtual_memory", boom)

    with pytest.raises(MetricsUnavailable) as excinfo:
        await get_stats(50)

    assert isinstance(excinfo.value.__cause__, OSError)
    assert excinfo.value.source.startswith(("os.", "mem."))
    assert "permission denied" in str(excinfo.value)

    # let the abandoned branches run out before the loop closes
    await asyncio.sleep(0.2)


@pytest.mark.asyncio
async def test_get_stats_rejects_bad_window() -> None:
    with pytest.raises(ValueError):
        await get_stats(0)
    with pytest.raises(ValueError):
        await get_stats(1.5)


@pytest.mark.asyncio
async def test_collect_snapshot_subset_keeps_field_order() -> None:
    snapshot = await collect_snapshot(50, ["proc", "mem"])
    assert list(snapshot) == ["mem", "proc"]


def test_build_collectors_unknown_domain() -> None:
    with pytest.raises(ValueError, match="disk"):
        build_collectors(100, ["cpu", "disk"])


def test_build_collectors_all_domains() -> None:
    assert [c.name for c in build_collectors(100)] == list(DOMAINS)


@pytest.mark.asyncio
async def test_leaf_wraps_errors() -> None:
    def fails() -> None:
        raise KeyError("gone")

    with pytest.raises(MetricsUnavailable) as excinfo:
        await leaf("test.fails", fails)

    assert excinfo.value.source == "test.fails"
    assert isinstance(excinfo.value.__cause__, KeyError)


@pytest.mark.asyncio
async def test_leaf_passes_metrics_unavailable_through() -> None:
    original = MetricsUnavailable(source="inner", message="nope")

    def fails() -> None:
        raise original

    with pytest.raises(MetricsUnavailable) as excinfo:
        await leaf("outer", fails)

    assert excinfo.value is original


@pytest.mark.asyncio
async def test_gather_fields_merges_in_key_order_not_completion_order() -> None:
    async def after(delay: float, value: str) -> str:
        await asyncio.sleep(delay)
        return value

    result = await gather_fields({"slow": after(0.05, "a"), "fast": after(0, "b")})
    assert list(result.items()) == [("slow", "a"), ("fast", "b")]


@pytest.mark.asyncio
async def test_error_survives_generator_context_manager(monkeypatch) -> None:
    exits: list[str] = []

    @contextlib.contextmanager
    def timing():
        try:
            yield
        finally:
            exits.append("done")

    def boom(*args, **kwargs):
        raise OSError("permission denied")

    monkeypatch.setattr(psutil, "virtual_memory", boom)

    with pytest.raises(MetricsUnavailable) as excinfo:
        with timing():
            await get_stats(20)

    assert exits == ["done"]
    assert isinstance(excinfo.value.__cause__, OSError)

    with pytest.raises(MetricsUnavailable):
        with contextlib.ExitStack() as stack:
            stack.callback(exits.append, "stack")
            await get_stats(20)

    assert exits == ["done", "stack"]

    await asyncio.sleep(0.2)


@pytest.mark.asyncio
async def test_windowed_leaf_fault_fails_whole_snapshot(monkeypatch) -> None:
    real_cpu_time = process.self_cpu_time
    calls = 0

    def fails_after_window() -> process.CpuTimeUs:
        nonlocal calls
        calls += 1
        if calls > 1:
            raise OSError("process accounting unavailable")
        return real_cpu_time()

    monkeypatch.setattr(process, "self_cpu_time", fails_after_window)

    with pytest.raises(MetricsUnavailable) as excinfo:
        await get_stats(50)

    assert excinfo.value.source == "proc.cpu_usage"
    assert isinstance(excinfo.value.__cause__, OSError)
    assert calls == 2

    await asyncio.sleep(0.2)


@pytest.mark.asyncio
async def test_network_window_fault_fails_whole_snapshot(monkeypatch) -> None:
    def boom(*args, **kwargs):
        raise OSError("no /proc/net/dev")

    monkeypatch.setattr(psutil, "net_io_counters", boom)

    with pytest.raises(MetricsUnavailable) as excinfo:
        await get_stats(50)

    assert excinfo.value.source in {"net.stats", "net.in_out"}
    assert isinstance(excinfo.value.__cause__, OSError)

    await asyncio.sleep(0.2)
