"""
Tests for the admin entries table: search over every field and the result label.
"""

from datetime import UTC, datetime

import pytest

from contact_desk.adapters.clock import SystemClock
from contact_desk.adapters.http.entries_client import SessionUser
from contact_desk.domain.entities import Entry
from contact_desk.ui.context import ClientContext
from contact_desk.ui.state import AppState
from contact_desk.ui.views.entries_table import EntriesTableView


class FakePage:
    def __init__(self):
        self.overlay = []
        self.updates = 0

    def update(self) -> None:
        self.updates += 1


class FakeApi:
    def __init__(self, entries):
        self.entries = entries

    def list_entries(self):
        return list(self.entries)


ENTRIES = [
    Entry(
        id="e1",
        name="Ada Lovelace",
        mobile="5551234567",
        address="1 Main St",
        date_added=datetime(2024, 1, 2, tzinfo=UTC),
        user_id="u1",
    ),
    Entry(
        id="e2",
        name="Alan Turing",
        mobile="4420794600",
        address="Bletchley Park",
        date_added=datetime(2024, 1, 1, tzinfo=UTC),
        user_id="u2",
    ),
]


@pytest.fixture
def view(policy, rules):
    ctx = ClientContext(api=FakeApi(ENTRIES), policy=policy, rules=rules, clock=SystemClock())
    state = AppState(
        current_user=SessionUser(id="a1", email="a@example.com", name="A", role="super_admin")
    )
    return EntriesTableView(FakePage(), ctx, state)


def test_search_hint_lists_every_searched_field(view):
    assert view.search.hint_text == "Search by name, mobile number or address"


def test_loads_entries_with_plural_summary(view):
    assert [e.id for e in view.visible_entries] == ["e1", "e2"]
    assert view.summary.value == "2 records found"


def test_search_by_address_with_singular_summary(view):
    view.search.value = "bletchley"

    view.refresh_view()

    assert [e.id for e in view.visible_entries] == ["e2"]
    assert view.summary.value == "1 record found"
    assert len(view.table.rows) == 1
