"""
Entries component - contact entry CRUD over the key-value store.

Covers the entries API operations and the entry form validation rules.
"""

from ._impl import (
    EntryService,
    generate_entry_id,
    normalize_mobile,
    sort_entries,
    validate_edit_form,
    validate_entry_fields,
    validate_entry_form,
)
from .component import run, run_create, run_delete, run_list, run_update
from .models import (
    CONFLICT,
    FORBIDDEN,
    NOT_FOUND,
    UPSTREAM_FAILURE,
    VALIDATION,
    CreateEntryInput,
    DeleteEntryInput,
    EntryError,
    EntryListOutput,
    EntryOutput,
    ListEntriesInput,
    UpdateEntryInput,
)
from .ports import KeyValueStorePort, TimePort

__all__ = [
    # Entry points
    "run",
    "run_create",
    "run_list",
    "run_update",
    "run_delete",
    # Input models
    "CreateEntryInput",
    "ListEntriesInput",
    "UpdateEntryInput",
    "DeleteEntryInput",
    # Output models
    "EntryOutput",
    "EntryListOutput",
    "EntryError",
    # Error codes
    "CONFLICT",
    "FORBIDDEN",
    "NOT_FOUND",
    "UPSTREAM_FAILURE",
    "VALIDATION",
    # Ports
    "KeyValueStorePort",
    "TimePort",
    # Core
    "EntryService",
    "generate_entry_id",
    "normalize_mobile",
    "sort_entries",
    "validate_edit_form",
    "validate_entry_fields",
    "validate_entry_form",
]
