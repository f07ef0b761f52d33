"""
Filters component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class EntryFilter:
    """
    Filter state for the entries table.

    Every criterion is optional; an empty filter keeps every entry.
    Date bounds are inclusive calendar dates compared against dateAdded.
    """

    term: str = ""
    date_from: date | None = None
    date_to: date | None = None

    @property
    def is_empty(self) -> bool:
        return not self.term.strip() and self.date_from is None and self.date_to is None
