"""
EntryService - contact entry storage over a prefix-queryable key-value store.

Functional Core - validation and key derivation are pure; the service only
talks to the store through KeyValueStorePort.

Key layout:
    user_entry:<userId>:<entryId>   the entry record
    entry_owner:<entryId>           {"userId": ...} secondary index

"List my entries" is a scan of ``user_entry:<userId>:`` and "list all" is a
scan of ``user_entry:``. Update and delete receive a bare entry id, so the
owner namespace is resolved through the index, falling back to a scan of
every entry when the index record is missing.
"""

from __future__ import annotations

import re
import secrets
from datetime import datetime, timedelta
from typing import Any

from contact_desk.domain.entities import Entry, User, as_utc
from contact_desk.domain.policy import PolicyEngine
from contact_desk.rules.models import EditFormRules, EntryRules

from .models import CONFLICT, FORBIDDEN, NOT_FOUND, VALIDATION, EntryError
from .ports import KeyValueStorePort, TimePort

MOBILE_MIN_DIGITS = 10
MOBILE_MAX_DIGITS = 15

_NON_DIGITS = re.compile(r"\D")
# Client ids travel as a URL path segment and as part of the store key.
_ENTRY_ID = re.compile(r"[A-Za-z0-9._-]+")


# --- Validation Functions ---


def normalize_mobile(raw: str) -> str:
    """Strip every non-digit character: "123-456-7890" -> "1234567890"."""
    return _NON_DIGITS.sub("", raw)


def validate_entry_fields(
    name: str | None = None,
    mobile: str | None = None,
    address: str | None = None,
    *,
    min_digits: int = MOBILE_MIN_DIGITS,
    max_digits: int = MOBILE_MAX_DIGITS,
) -> list[EntryError]:
    """Validate the supplied fields. ``None`` means "not supplied" and is skipped."""
    errors: list[EntryError] = []

    if name is not None and not name.strip():
        errors.append(EntryError(code=VALIDATION, message="Name is required", field="name"))

    if mobile is not None:
        digits = normalize_mobile(mobile)
        if not mobile.strip():
            errors.append(
                EntryError(code=VALIDATION, message="Mobile number is required", field="mobile")
            )
        elif not min_digits <= len(digits) <= max_digits:
            errors.append(
                EntryError(
                    code=VALIDATION,
                    message=f"Mobile number must be {min_digits}-{max_digits} digits",
                    field="mobile",
                )
            )

    if address is not None and not address.strip():
        errors.append(EntryError(code=VALIDATION, message="Address is required", field="address"))

    return errors


def validate_entry_form(
    name: str | None,
    mobile: str | None,
    address: str | None,
    *,
    min_digits: int = MOBILE_MIN_DIGITS,
    max_digits: int = MOBILE_MAX_DIGITS,
) -> list[EntryError]:
    """Validate a complete new-entry form; every field is required."""
    return validate_entry_fields(
        name or "",
        mobile or "",
        address or "",
        min_digits=min_digits,
        max_digits=max_digits,
    )


def validate_edit_form(
    name: str | None,
    mobile: str | None,
    address: str | None,
    rules: EditFormRules | None = None,
    *,
    min_digits: int = MOBILE_MIN_DIGITS,
    max_digits: int = MOBILE_MAX_DIGITS,
) -> list[EntryError]:
    """Stricter checks applied by the admin edit dialog before it calls Update."""
    rules = rules or EditFormRules()
    name = (name or "").strip()
    mobile = (mobile or "").strip()
    address = (address or "").strip()
    errors: list[EntryError] = []

    if not name:
        errors.append(EntryError(code=VALIDATION, message="Name is required", field="name"))
    elif len(name) < rules.name_min_length:
        errors.append(
            EntryError(
                code=VALIDATION,
                message=f"Name must be at least {rules.name_min_length} characters",
                field="name",
            )
        )

    if not mobile:
        errors.append(
            EntryError(code=VALIDATION, message="Mobile number is required", field="mobile")
        )
    elif not re.match(rules.mobile_pattern, mobile):
        errors.append(
            EntryError(
                code=VALIDATION, message="Please enter a valid mobile number", field="mobile"
            )
        )
    elif not min_digits <= len(normalize_mobile(mobile)) <= max_digits:
        errors.append(
            EntryError(
                code=VALIDATION,
                message=f"Mobile number must be {min_digits}-{max_digits} digits",
                field="mobile",
            )
        )

    if not address:
        errors.append(EntryError(code=VALIDATION, message="Address is required", field="address"))
    elif len(address) < rules.address_min_length:
        errors.append(
            EntryError(
                code=VALIDATION,
                message=f"Address must be at least {rules.address_min_length} characters",
                field="address",
            )
        )

    return errors


def generate_entry_id(now: datetime) -> str:
    """Timestamp plus random suffix, e.g. ``1704067200000-9f2c41ab``."""
    return f"{int(now.timestamp() * 1000)}-{secrets.token_hex(4)}"


def sort_entries(entries: list[Entry]) -> list[Entry]:
    """Newest first; equal timestamps fall back to id so the order is stable."""
    return sorted(entries, key=lambda e: (e.date_added, e.id), reverse=True)


# --- Entry Service ---


class EntryService:
    """
    Entry service.

    Authorizes every operation against the actor's role, then reads and
    writes owner-namespaced keys.
    """

    def __init__(
        self,
        store: KeyValueStorePort,
        policy: PolicyEngine,
        time: TimePort,
        rules: EntryRules,
    ) -> None:
        self._store = store
        self._policy = policy
        self._time = time
        self._rules = rules
        self._keys = rules.keys

    # --- Keys ---

    def entry_key(self, user_id: str, entry_id: str) -> str:
        return f"{self._keys.entry_prefix}{user_id}:{entry_id}"

    def owner_prefix(self, user_id: str) -> str:
        return f"{self._keys.entry_prefix}{user_id}:"

    def index_key(self, entry_id: str) -> str:
        return f"{self._keys.index_prefix}{entry_id}"

    # --- Queries ---

    def find(self, entry_id: str) -> Entry | None:
        """Locate an entry by bare id across every owner namespace."""
        owner = self._store.get(self.index_key(entry_id))
        if owner is not None and owner.get("userId"):
            record = self._store.get(self.entry_key(owner["userId"], entry_id))
            if record is not None:
                return Entry.from_record(record)

        for record in self._store.get_by_prefix(self._keys.entry_prefix):
            if record.get("id") == entry_id:
                return Entry.from_record(record)
        return None

    def list_all(self) -> list[Entry]:
        records = self._store.get_by_prefix(self._keys.entry_prefix)
        return sort_entries([Entry.from_record(r) for r in records])

    def list_for(self, actor: User) -> list[Entry]:
        if self._policy.can_read_all_entries(actor):
            return self.list_all()

        records = self._store.get_by_prefix(self.owner_prefix(str(actor.id)))
        return sort_entries([Entry.from_record(r) for r in records])

    # --- Commands ---

    def create(
        self,
        actor: User,
        name: str,
        mobile: str,
        address: str,
        entry_id: str | None = None,
        date_added: datetime | None = None,
    ) -> tuple[Entry | None, list[EntryError]]:
        """
        Create an entry owned by ``actor``.

        Returns:
            Tuple of (entry, errors). Entry is None if the operation failed.
        """
        if not self._policy.can_create_entry(actor):
            return None, [EntryError(code=FORBIDDEN, message="Not allowed to create entries")]

        errors = validate_entry_form(
            name,
            mobile,
            address,
            min_digits=self._rules.mobile_digits.min,
            max_digits=self._rules.mobile_digits.max,
        )

        now = self._time.now_utc()
        if entry_id is not None:
            entry_id = entry_id.strip()
            if not _ENTRY_ID.fullmatch(entry_id) or entry_id in (".", ".."):
                errors.append(
                    EntryError(
                        code=VALIDATION,
                        message="Entry id may only contain letters, digits, '.', '_' and '-'",
                        field="id",
                    )
                )
        if date_added is not None and as_utc(date_added) > now:
            errors.append(
                EntryError(
                    code=VALIDATION,
                    message="Date added cannot be in the future",
                    field="dateAdded",
                )
            )
        if errors:
            return None, errors

        if entry_id is None:
            entry_id = generate_entry_id(now)
        elif self.find(entry_id) is not None:
            return None, [
                EntryError(
                    code=CONFLICT,
                    message=f"Entry with id '{entry_id}' already exists",
                    field="id",
                )
            ]

        entry = Entry(
            id=entry_id,
            name=name.strip(),
            mobile=normalize_mobile(mobile),
            address=address.strip(),
            date_added=date_added or now,
            user_id=str(actor.id),
            version=1,
        )
        self._save(entry)
        return entry, []

    def update(
        self,
        actor: User,
        entry_id: str,
        updates: dict[str, str],
        expected_version: int | None = None,
    ) -> tuple[Entry | None, list[EntryError]]:
        """
        Merge ``updates`` (any of name, mobile, address) into an entry.

        The entry keeps its id, owner and dateAdded; dateModified and version
        are always set here.
        """
        if not self._policy.can_modify_entries(actor):
            return None, [
                EntryError(code=FORBIDDEN, message="Forbidden: Super Admin access required")
            ]

        existing = self.find(entry_id)
        if existing is None:
            return None, [EntryError(code=NOT_FOUND, message="Entry not found")]

        errors = validate_entry_fields(
            updates.get("name"),
            updates.get("mobile"),
            updates.get("address"),
            min_digits=self._rules.mobile_digits.min,
            max_digits=self._rules.mobile_digits.max,
        )
        if errors:
            return None, errors

        if expected_version is not None and expected_version != existing.version:
            return None, [
                EntryError(
                    code=CONFLICT,
                    message=(
                        f"Entry was modified by someone else "
                        f"(expected version {expected_version}, found {existing.version})"
                    ),
                    field="version",
                )
            ]

        changes: dict[str, Any] = {}
        if "name" in updates:
            changes["name"] = updates["name"].strip()
        if "mobile" in updates:
            changes["mobile"] = normalize_mobile(updates["mobile"])
        if "address" in updates:
            changes["address"] = updates["address"].strip()
        # dateModified must land strictly after dateAdded, even under a frozen clock.
        changes["date_modified"] = max(
            self._time.now_utc(), existing.date_added + timedelta(microseconds=1)
        )
        changes["version"] = existing.version + 1

        updated = existing.model_copy(update=changes)
        self._save(updated)
        return updated, []

    def delete(self, actor: User, entry_id: str) -> tuple[bool, list[EntryError]]:
        if not self._policy.can_modify_entries(actor):
            return False, [
                EntryError(code=FORBIDDEN, message="Forbidden: Super Admin access required")
            ]

        existing = self.find(entry_id)
        if existing is None:
            return False, [EntryError(code=NOT_FOUND, message="Entry not found")]

        self._store.delete(self.entry_key(existing.user_id, existing.id))
        self._store.delete(self.index_key(existing.id))
        return True, []

    def _save(self, entry: Entry) -> None:
        # The key is always derived from the stored owner, never from the caller.
        self._store.set(self.entry_key(entry.user_id, entry.id), entry.to_record())
        self._store.set(self.index_key(entry.id), {"userId": entry.user_id})
