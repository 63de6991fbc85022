"""Output formatters."""

from __future__ import annotations

from .base import BaseFormatter
from .json_fmt import JsonFormatter
from .pretty import PrettyFormatter
from .table import TableFormatter

__all__ = [
    "BaseFormatter",
    "JsonFormatter",
    "PrettyFormatter",
    "TableFormatter",
    "get_formatter",
]

FORMATS = ("pretty", "json", "table")


def get_formatter(fmt: str) -> BaseFormatter:
    """Get formatter by name."""
    formatters: dict[str, type[BaseFormatter]] = {
        "pretty": PrettyFormatter,
        "json": JsonFormatter,
        "table": TableFormatter,
    }

    if fmt not in formatters:
        raise ValueError(f"Unknown format: {fmt}. Available: {', '.join(formatters.keys())}")

    return formatters[fmt]()
