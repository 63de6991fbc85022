"""Section-per-field formatter."""

from __future__ import annotations

from pprint import pformat
from typing import Any

from .base import BaseFormatter


class PrettyFormatter(BaseFormatter):
    """One ``#### KEY ####`` header per top-level field, then its value."""

    rule = "#" * 20

    def format(self, snapshot: dict[str, Any]) -> str:
        sections = []
        for key, value in snapshot.items():
            sections.append(f"{self.rule} {key.upper()} {self.rule}\n{pformat(value, sort_dicts=False)}\n")
        return "\n".join(sections)
