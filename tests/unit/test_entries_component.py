"""
Tests for the entries shell layer: output conversion, store failures and logging.
"""

import logging

import pytest

from contact_desk.components.entries import (
    FORBIDDEN,
    NOT_FOUND,
    UPSTREAM_FAILURE,
    CreateEntryInput,
    DeleteEntryInput,
    EntryListOutput,
    EntryOutput,
    EntryService,
    ListEntriesInput,
    UpdateEntryInput,
    run,
    run_create,
    run_delete,
    run_list,
    run_update,
)
from contact_desk.domain.errors import StoreError


class FailingStore:
    """Store whose backend is down."""

    def get(self, key):
        raise StoreError("backend unavailable")

    def set(self, key, value):
        raise StoreError("backend unavailable")

    def delete(self, key):
        raise StoreError("backend unavailable")

    def get_by_prefix(self, prefix):
        raise StoreError("backend unavailable")


@pytest.fixture
def failing_service(policy, clock, rules):
    return EntryService(store=FailingStore(), policy=policy, time=clock, rules=rules.entries)


def _create_input(actor, **overrides):
    fields = {"name": "Ada", "mobile": "5551234567", "address": "1 Main St", "entry_id": "e1"}
    fields.update(overrides)
    return CreateEntryInput(actor=actor, **fields)


def test_run_create_success(service, owner, caplog):
    with caplog.at_level(logging.INFO):
        result = run_create(_create_input(owner), service)

    assert result.success is True
    assert result.entry is not None
    assert result.error_code is None
    assert "Entry e1 created" in caplog.text


def test_run_list_returns_entries(service, owner):
    run_create(_create_input(owner), service)

    result = run_list(ListEntriesInput(actor=owner), service)

    assert result.success is True
    assert [e.id for e in result.entries] == ["e1"]


def test_run_update_only_sends_supplied_fields(service, owner, admin, clock):
    run_create(_create_input(owner), service)
    clock.advance(5)

    result = run_update(UpdateEntryInput(actor=admin, entry_id="e1", address="9 Elm Road"), service)

    assert result.success is True
    assert result.entry is not None
    assert result.entry.address == "9 Elm Road"
    assert result.entry.name == "Ada"
    assert result.entry.mobile == "5551234567"


def test_run_update_forbidden_is_logged(service, owner, caplog):
    run_create(_create_input(owner), service)

    with caplog.at_level(logging.WARNING):
        result = run_update(UpdateEntryInput(actor=owner, entry_id="e1", name="X"), service)

    assert result.success is False
    assert result.error_code == FORBIDDEN
    assert "rejected: forbidden" in caplog.text


def test_run_delete_not_found(service, admin):
    result = run_delete(DeleteEntryInput(actor=admin, entry_id="nope"), service)

    assert result.success is False
    assert result.error_code == NOT_FOUND


def test_store_failure_becomes_upstream_failure(failing_service, owner, admin, caplog):
    with caplog.at_level(logging.ERROR):
        created = run_create(_create_input(owner), failing_service)
        listed = run_list(ListEntriesInput(actor=owner), failing_service)
        updated = run_update(
            UpdateEntryInput(actor=admin, entry_id="e1", name="X"), failing_service
        )
        deleted = run_delete(DeleteEntryInput(actor=admin, entry_id="e1"), failing_service)

    assert created.error_code == UPSTREAM_FAILURE
    assert created.errors[0].message == "Failed to save entry"
    assert listed.error_code == UPSTREAM_FAILURE
    assert listed.errors[0].message == "Failed to fetch entries"
    assert updated.error_code == UPSTREAM_FAILURE
    assert deleted.error_code == UPSTREAM_FAILURE
    assert any(r.levelno == logging.ERROR and r.exc_info for r in caplog.records)


def test_forbidden_checked_before_store_access(failing_service, owner):
    result = run_delete(DeleteEntryInput(actor=owner, entry_id="e1"), failing_service)

    assert result.error_code == FORBIDDEN


def test_run_dispatches_by_input_type(service, owner):
    assert isinstance(run(_create_input(owner), service=service), EntryOutput)
    assert isinstance(run(ListEntriesInput(actor=owner), service=service), EntryListOutput)


def test_run_unknown_input(service):
    with pytest.raises(ValueError):
        run(object(), service=service)  # type: ignore[arg-type]
