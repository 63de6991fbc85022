from __future__ import annotations

from dataclasses import dataclass


@dataclass(eq=False)
class MetricsUnavailable(Exception):
    """A metric source could not be read.

    Raised when any leaf query against the OS or the process runtime fails.
    The original exception is kept as ``__cause__``. Must stay mutable:
    contextlib assigns ``__traceback__`` and ``__context__`` on the way out.
    """

    source: str
    message: str

    def __str__(self) -> str:
        return f"{self.source}: {self.message}"
