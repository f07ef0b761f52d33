"""
Filters component - client-side filtering and CSV export of entries.

Functional Core - every function here is pure. Filters return new lists and
never mutate the base list they were given, so the table can always
recompute the view from the unfiltered entries.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime

from contact_desk.domain.entities import Entry
from contact_desk.rules.models import ExportRules

from .models import EntryFilter

DEFAULT_HEADER = ["Name", "Mobile No", "Address", "Date Added"]
DEFAULT_DATE_FORMAT = "{month}/{day}/{year}"
DEFAULT_FILENAME_PREFIX = "user-entries"


# --- Filters ---


def text_filter(entries: Iterable[Entry], term: str | None) -> list[Entry]:
    """
    Case-insensitive substring match on name, mobile and address.

    The term is compared against the stored digits as typed, so
    "555-123" does not match "5551234567".
    """
    entries = list(entries)
    if term is None or not term.strip():
        return entries

    needle = term.lower()

    return [
        e
        for e in entries
        if needle in e.name.lower() or needle in e.mobile.lower() or needle in e.address.lower()
    ]


def date_range_filter(
    entries: Iterable[Entry],
    date_from: date | None = None,
    date_to: date | None = None,
) -> list[Entry]:
    """Keep entries whose dateAdded falls within [date_from, date_to]."""
    result = []
    for e in entries:
        added = e.date_added.date()
        if date_from is not None and added < date_from:
            continue
        if date_to is not None and added > date_to:
            continue
        result.append(e)
    return result


def apply_filters(entries: Iterable[Entry], flt: EntryFilter) -> list[Entry]:
    """Logical AND of the text filter and both date bounds."""
    filtered = text_filter(entries, flt.term)
    return date_range_filter(filtered, flt.date_from, flt.date_to)


def parse_date_bound(value: str | None) -> date | None:
    """
    Parse a ``YYYY-MM-DD`` date picker value.

    Blank input means "no bound". Raises ValueError for anything else
    that is not an ISO date.
    """
    if value is None or not value.strip():
        return None
    return date.fromisoformat(value.strip())


def summarize(filtered: list[Entry], total: int) -> str:
    """Result label shown above the entries table."""
    if filtered:
        noun = "record" if len(filtered) == 1 else "records"
        return f"{len(filtered)} {noun} found"
    if total == 0:
        return "No records found"
    return "No records match your filters"


# --- Export ---


def format_display_date(value: date | datetime, fmt: str = DEFAULT_DATE_FORMAT) -> str:
    """Render a date with unpadded fields, e.g. ``1/1/2024`` for the US default."""
    return fmt.format(month=value.month, day=value.day, year=value.year)


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def export_csv(entries: Iterable[Entry], rules: ExportRules | None = None) -> str:
    """
    Build the CSV download for the given entries.

    Name and address are always quoted with embedded quotes doubled; the
    mobile number is digits only and written bare. Rows are joined with
    ``\\n`` and there is no trailing newline.
    """
    header = rules.header if rules else DEFAULT_HEADER
    date_format = rules.date_format if rules else DEFAULT_DATE_FORMAT

    lines = [",".join(header)]
    for e in entries:
        lines.append(
            ",".join(
                [
                    _quote(e.name),
                    e.mobile,
                    _quote(e.address),
                    format_display_date(e.date_added, date_format),
                ]
            )
        )
    return "\n".join(lines)


def export_filename(today: date, prefix: str = DEFAULT_FILENAME_PREFIX) -> str:
    return f"{prefix}-{today.isoformat()}.csv"
