from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

from .config import settings

_CONFIGURED = False


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Attach structured extras if present
        for key in ("source", "window_ms", "elapsed_ms"):
            if hasattr(record, key):
                payload[key] = getattr(record, key)

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def configure_logging(*, level: str | None = None, stream: TextIO | None = None) -> None:
    """Idempotent logging setup.

    - JSON logs, one object per line (stderr unless *stream* is given).
    - Respects LOG_LEVEL env var.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    log_level = (level or settings.log_level or "INFO").upper()
    root = logging.getLogger()
    root.setLevel(log_level)

    root.handlers.clear()

    handler = logging.StreamHandler(stream=stream or sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)

    _CONFIGURED = True
