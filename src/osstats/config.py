from __future__ import annotations

import os
from dataclasses import dataclass, field

# Load averages the OS keeps, in minutes
LOADAVG_PERIODS = (1, 5, 15)


def _get_str(name: str, default: str) -> str:
    return os.getenv(name, default)


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_positive_int(name: str, default: int) -> int:
    value = _get_int(name, default)
    return value if value > 0 else default


def _get_choice(name: str, default: int, choices: tuple[int, ...]) -> int:
    value = _get_int(name, default)
    return value if value in choices else default


@dataclass(frozen=True, slots=True)
class Settings:
    sampling_window_ms: int = field(
        default_factory=lambda: _get_positive_int("OSSTATS_SAMPLING_WINDOW_MS", 1000)
    )
    # get_stats always averages load over this period
    averaging_period_minutes: int = field(
        default_factory=lambda: _get_choice("OSSTATS_AVERAGING_PERIOD_MINUTES", 5, LOADAVG_PERIODS)
    )
    top_n: int = field(default_factory=lambda: _get_positive_int("OSSTATS_TOP_N", 10))
    log_level: str = field(default_factory=lambda: _get_str("LOG_LEVEL", "INFO"))


settings = Settings()
