from datetime import UTC, datetime, timedelta
from pathlib import Path
from uuid import uuid4

import pytest

from contact_desk.adapters.kv.memory_store import InMemoryKeyValueStore
from contact_desk.components.entries import EntryService
from contact_desk.domain.entities import User
from contact_desk.domain.policy import PolicyEngine
from contact_desk.rules.loader import load_rules

RULES_PATH = Path(__file__).resolve().parent.parent / "rules.yaml"


class MockTimePort:
    """Mock time provider."""

    def __init__(self, now: datetime | None = None) -> None:
        self._now = now or datetime(2024, 6, 1, 12, 0, tzinfo=UTC)

    def now_utc(self) -> datetime:
        return self._now

    def set_now(self, now: datetime) -> None:
        self._now = now

    def advance(self, seconds: int) -> None:
        self._now += timedelta(seconds=seconds)


def make_user(email: str, role: str = "user") -> User:
    return User(
        id=uuid4(),
        email=email,
        display_name=email.split("@")[0],
        password_hash="hash",
        role=role,
    )


@pytest.fixture
def rules():
    """The real rules file from the project root."""
    return load_rules(RULES_PATH)


@pytest.fixture
def policy(rules):
    return PolicyEngine(rules)


@pytest.fixture
def clock():
    return MockTimePort()


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def service(store, policy, clock, rules):
    return EntryService(store=store, policy=policy, time=clock, rules=rules.entries)


@pytest.fixture
def owner():
    return make_user("owner@example.com")


@pytest.fixture
def other_user():
    return make_user("other@example.com")


@pytest.fixture
def admin():
    return make_user("admin@example.com", role="super_admin")
