"""
Filters component - text/date filtering and CSV export for the entries table.
"""

from .component import (
    apply_filters,
    date_range_filter,
    export_csv,
    export_filename,
    format_display_date,
    parse_date_bound,
    summarize,
    text_filter,
)
from .models import EntryFilter

__all__ = [
    # Models
    "EntryFilter",
    # Filters
    "text_filter",
    "date_range_filter",
    "apply_filters",
    "parse_date_bound",
    "summarize",
    # Export
    "export_csv",
    "export_filename",
    "format_display_date",
]
