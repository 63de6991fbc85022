"""Table formatter for human-readable output."""

from __future__ import annotations

from typing import Any

from ..utils import bytes_to_human
from .base import BaseFormatter


class TableFormatter(BaseFormatter):
    """Format snapshot as human-readable table."""

    def format(self, snapshot: dict[str, Any]) -> str:
        lines: list[str] = [f"{'=' * 60}", "  System Snapshot", f"{'=' * 60}"]

        if "os" in snapshot:
            os_info = snapshot["os"]
            lines.append("")
            lines.append("OS")
            lines.append(f"  Hostname:  {os_info.get('hostname', 'N/A')}")
            lines.append(f"  Name:      {os_info.get('name', 'N/A')} ({os_info.get('arch', '')})")
            lines.append(f"  IP:        {os_info.get('ip') or 'N/A'}")
            lines.append(f"  Uptime:    {os_info.get('uptime', 0):.0f}s")
            open_files = os_info.get("open_files")
            if open_files is not None:
                lines.append(f"  Open FDs:  {open_files}")

        if "cpu" in snapshot:
            cpu = snapshot["cpu"]
            lines.append("")
            lines.append("CPU")
            lines.append(f"  Model:     {cpu.get('model', 'N/A')}")
            lines.append(f"  Cores:     {cpu.get('count', 0)}")
            lines.append(f"  Usage:     {cpu.get('usage_percent', 0):.1f}%")
            loadavg = cpu.get("loadavg")
            if loadavg:
                lines.append(f"  Load Avg:  {loadavg[0]:.2f} / {loadavg[1]:.2f} / {loadavg[2]:.2f}")
            lines.append(
                f"  Processes: {cpu.get('total_processes', 0)} ({cpu.get('zombie_processes', 0)} zombie)"
            )

        if "mem" in snapshot:
            mem = snapshot["mem"]
            info = mem.get("info", {})
            lines.append("")
            lines.append("MEMORY")
            lines.append(
                f"  Used:      {bytes_to_human(mem.get('used', 0))} / {bytes_to_human(mem.get('total', 0))} ({info.get('used_percent', 0):.1f}%)"
            )
            lines.append(f"  Free:      {bytes_to_human(mem.get('free', 0))}")
            swap = info.get("swap", {})
            if swap.get("total_mb", 0) > 0:
                lines.append(
                    f"  Swap:      {swap.get('used_mb', 0):.2f} MB / {swap.get('total_mb', 0):.2f} MB ({swap.get('used_percent', 0):.1f}%)"
                )

        if "net" in snapshot:
            in_out = snapshot["net"].get("in_out", {})
            lines.append("")
            lines.append("NETWORK")
            rows = {**in_out.get("interfaces", {}), "(total)": in_out.get("total", {})}
            for name, traffic in rows.items():
                lines.append(
                    f"  {name:15} in: {traffic.get('input_mb', 0):>8.2f} MB  out: {traffic.get('output_mb', 0):>8.2f} MB"
                )

        if "proc" in snapshot:
            proc = snapshot["proc"]
            lines.append("")
            lines.append("PROCESS")
            lines.append(f"  Uptime:    {proc.get('uptime', 0):.1f}s")
            lines.append(f"  CPU:       {proc.get('cpu_usage', 0):.1f}%")

        lines.append("")
        lines.append(f"{'=' * 60}")

        return "\n".join(lines)
