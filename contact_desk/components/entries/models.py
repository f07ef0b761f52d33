"""
Entries component - Data models.

Inputs carry the authenticated actor; outputs carry either the result or a
list of EntryError values whose ``code`` the HTTP layer maps to a status.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from contact_desk.domain.entities import Entry, User

# --- Error codes ---

FORBIDDEN = "forbidden"
NOT_FOUND = "not_found"
VALIDATION = "validation"
CONFLICT = "conflict"
UPSTREAM_FAILURE = "upstream_failure"


@dataclass(frozen=True)
class EntryError:
    """Entry operation error."""

    code: str
    message: str
    field: str | None = None


# --- Input Models ---


@dataclass
class CreateEntryInput:
    """Input for creating an entry. The owner is always ``actor``."""

    actor: User
    name: str
    mobile: str
    address: str
    entry_id: str | None = None
    date_added: datetime | None = None


@dataclass
class ListEntriesInput:
    actor: User


@dataclass
class UpdateEntryInput:
    """Partial update. ``expected_version`` enables the fail-fast conflict check."""

    actor: User
    entry_id: str
    name: str | None = None
    mobile: str | None = None
    address: str | None = None
    expected_version: int | None = None


@dataclass
class DeleteEntryInput:
    actor: User
    entry_id: str


# --- Output Models ---


@dataclass
class EntryOutput:
    entry: Entry | None = None
    success: bool = False
    errors: list[EntryError] = field(default_factory=list)

    @property
    def error_code(self) -> str | None:
        return self.errors[0].code if self.errors else None


@dataclass
class EntryListOutput:
    entries: list[Entry] = field(default_factory=list)
    success: bool = False
    errors: list[EntryError] = field(default_factory=list)

    @property
    def error_code(self) -> str | None:
        return self.errors[0].code if self.errors else None
