"""
Entries component - contact entry management.

Shell Layer - handles store failures, logging and output conversion.
"""

from __future__ import annotations

import logging

from contact_desk.domain.errors import StoreError

from ._impl import EntryService
from .models import (
    UPSTREAM_FAILURE,
    CreateEntryInput,
    DeleteEntryInput,
    EntryError,
    EntryListOutput,
    EntryOutput,
    ListEntriesInput,
    UpdateEntryInput,
)

logger = logging.getLogger(__name__)


def _upstream_error(action: str) -> EntryError:
    return EntryError(code=UPSTREAM_FAILURE, message=f"Failed to {action}")


def run_create(inp: CreateEntryInput, service: EntryService) -> EntryOutput:
    """Create an entry owned by the actor."""
    try:
        entry, errors = service.create(
            actor=inp.actor,
            name=inp.name,
            mobile=inp.mobile,
            address=inp.address,
            entry_id=inp.entry_id,
            date_added=inp.date_added,
        )
    except StoreError:
        logger.exception("Save entry failed for user %s", inp.actor.id)
        return EntryOutput(success=False, errors=[_upstream_error("save entry")])

    if entry is None:
        logger.warning("Create rejected for user %s: %s", inp.actor.id, errors[0].message)
        return EntryOutput(success=False, errors=errors)

    logger.info("Entry %s created by user %s", entry.id, inp.actor.id)
    return EntryOutput(entry=entry, success=True)


def run_list(inp: ListEntriesInput, service: EntryService) -> EntryListOutput:
    """List the entries visible to the actor, newest first."""
    try:
        entries = service.list_for(inp.actor)
    except StoreError:
        logger.exception("Fetch entries failed for user %s", inp.actor.id)
        return EntryListOutput(success=False, errors=[_upstream_error("fetch entries")])

    return EntryListOutput(entries=entries, success=True)


def run_update(inp: UpdateEntryInput, service: EntryService) -> EntryOutput:
    """Update an existing entry (privileged role only)."""
    # Build updates dict from non-None fields
    updates: dict[str, str] = {}
    if inp.name is not None:
        updates["name"] = inp.name
    if inp.mobile is not None:
        updates["mobile"] = inp.mobile
    if inp.address is not None:
        updates["address"] = inp.address

    try:
        entry, errors = service.update(
            inp.actor, inp.entry_id, updates, expected_version=inp.expected_version
        )
    except StoreError:
        logger.exception("Update entry %s failed", inp.entry_id)
        return EntryOutput(success=False, errors=[_upstream_error("update entry")])

    if entry is None:
        logger.warning(
            "Update of entry %s by user %s rejected: %s",
            inp.entry_id,
            inp.actor.id,
            errors[0].code,
        )
        return EntryOutput(success=False, errors=errors)

    logger.info("Entry %s updated by user %s (version %d)", entry.id, inp.actor.id, entry.version)
    return EntryOutput(entry=entry, success=True)


def run_delete(inp: DeleteEntryInput, service: EntryService) -> EntryOutput:
    """Delete an entry (privileged role only). Deleting twice yields not_found."""
    try:
        deleted, errors = service.delete(inp.actor, inp.entry_id)
    except StoreError:
        logger.exception("Delete entry %s failed", inp.entry_id)
        return EntryOutput(success=False, errors=[_upstream_error("delete entry")])

    if not deleted:
        logger.warning(
            "Delete of entry %s by user %s rejected: %s",
            inp.entry_id,
            inp.actor.id,
            errors[0].code,
        )
        return EntryOutput(success=False, errors=errors)

    logger.info("Entry %s deleted by user %s", inp.entry_id, inp.actor.id)
    return EntryOutput(success=True)


def run(
    inp: CreateEntryInput | ListEntriesInput | UpdateEntryInput | DeleteEntryInput,
    *,
    service: EntryService,
) -> EntryOutput | EntryListOutput:
    if isinstance(inp, CreateEntryInput):
        return run_create(inp, service)

    elif isinstance(inp, ListEntriesInput):
        return run_list(inp, service)

    elif isinstance(inp, UpdateEntryInput):
        return run_update(inp, service)

    elif isinstance(inp, DeleteEntryInput):
        return run_delete(inp, service)

    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
