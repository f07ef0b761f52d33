from datetime import UTC, date, datetime

import pytest

from contact_desk.components.filters import (
    EntryFilter,
    apply_filters,
    date_range_filter,
    parse_date_bound,
    summarize,
    text_filter,
)
from contact_desk.domain.entities import Entry


def _entry(entry_id: str, name: str, mobile: str, address: str, added: datetime) -> Entry:
    return Entry(
        id=entry_id,
        name=name,
        mobile=mobile,
        address=address,
        date_added=added,
        user_id="u1",
    )


@pytest.fixture
def entries():
    return [
        _entry("1", "Ada Lovelace", "5551234567", "1 Main St", datetime(2024, 1, 1, 8, tzinfo=UTC)),
        _entry("2", "Grace Hopper", "5559876543", "2 Navy Yard", datetime(2024, 1, 15, tzinfo=UTC)),
        _entry("3", "Alan Turing", "4420794600", "Bletchley", datetime(2024, 2, 1, tzinfo=UTC)),
    ]


# --- Text filter ---


def test_blank_term_is_identity(entries):
    assert text_filter(entries, "") == entries
    assert text_filter(entries, "   ") == entries
    assert text_filter(entries, None) == entries


def test_text_filter_case_insensitive_name(entries):
    assert [e.id for e in text_filter(entries, "GRACE")] == ["2"]


def test_text_filter_matches_address(entries):
    assert [e.id for e in text_filter(entries, "BLETCH")] == ["3"]


def test_text_filter_matches_mobile_digits(entries):
    assert [e.id for e in text_filter(entries, "555123")] == ["1"]


def test_text_filter_dashes_do_not_match_stored_digits(entries):
    assert text_filter(entries, "555-123") == []


def test_text_filter_keeps_surrounding_whitespace(entries):
    assert text_filter(entries, "555123 ") == []
    assert [e.id for e in text_filter(entries, "Grace ")] == ["2"]


def test_text_filter_is_subset(entries):
    result = text_filter(entries, "a")

    assert all(e in entries for e in result)


# --- Date range ---


def test_date_bounds_are_inclusive(entries):
    result = date_range_filter(entries, date(2024, 1, 1), date(2024, 1, 15))

    assert [e.id for e in result] == ["1", "2"]


def test_open_ended_bounds(entries):
    assert [e.id for e in date_range_filter(entries, date_from=date(2024, 1, 2))] == ["2", "3"]
    assert [e.id for e in date_range_filter(entries, date_to=date(2024, 1, 1))] == ["1"]
    assert date_range_filter(entries) == entries


# --- Composition ---


def test_apply_filters_is_conjunction(entries):
    flt = EntryFilter(term="a", date_from=date(2024, 1, 10), date_to=date(2024, 1, 31))

    assert [e.id for e in apply_filters(entries, flt)] == ["2"]


def test_apply_filters_does_not_mutate_base(entries):
    base = list(entries)

    apply_filters(entries, EntryFilter(term="zzz"))
    result = apply_filters(entries, EntryFilter())

    assert entries == base
    assert result == base


def test_empty_filter():
    assert EntryFilter().is_empty is True
    assert EntryFilter(term=" ").is_empty is True
    assert EntryFilter(date_to=date(2024, 1, 1)).is_empty is False


# --- Helpers ---


def test_parse_date_bound():
    assert parse_date_bound("2024-03-05") == date(2024, 3, 5)
    assert parse_date_bound("") is None
    assert parse_date_bound(None) is None
    with pytest.raises(ValueError):
        parse_date_bound("03/05/2024")


def test_summarize_labels(entries):
    assert summarize(entries, 3) == "3 records found"
    assert summarize(entries[:1], 3) == "1 record found"
    assert summarize([], 0) == "No records found"
    assert summarize([], 3) == "No records match your filters"
