from datetime import UTC, datetime
from typing import Any, Literal
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

# --- Enums / Literals ---
RoleType = Literal["user", "super_admin"]
UserStatus = Literal["active", "disabled"]


def _utcnow() -> datetime:
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so stored timestamps stay comparable."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


# --- User & Auth ---

class User(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    email: str
    display_name: str
    password_hash: str
    role: RoleType = "user"
    status: UserStatus = "active"
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


# --- Entries ---

class Entry(BaseModel):
    """A contact record. Serialized with the camelCase names used on the wire."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    mobile: str
    address: str
    date_added: datetime = Field(alias="dateAdded")
    date_modified: datetime | None = Field(default=None, alias="dateModified")
    user_id: str = Field(alias="userId")
    version: int = 1

    @field_validator("date_added", "date_modified")
    @classmethod
    def _normalize_tz(cls, value: datetime | None) -> datetime | None:
        return as_utc(value) if value is not None else None

    def to_record(self) -> dict[str, Any]:
        """JSON-ready dict, as persisted in the store and returned by the API."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Entry":
        return cls.model_validate(record)
