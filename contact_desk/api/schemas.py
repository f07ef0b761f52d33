from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from contact_desk.domain.entities import User

RoleType = Literal["user", "super_admin"]


# --- Auth ---
class SignupRequest(BaseModel):
    email: str
    password: str
    name: str | None = None
    role: str = "user"


class Token(BaseModel):
    access_token: str
    token_type: str


class UserResponse(BaseModel):
    id: str
    email: str
    name: str
    role: RoleType

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(id=str(user.id), email=user.email, name=user.display_name, role=user.role)


class SignupResponse(BaseModel):
    user: UserResponse


# --- Entries ---
class EntryCreateRequest(BaseModel):
    """
    New entry payload.

    ``id`` and ``dateAdded`` are optional and filled in server-side. Any
    ``userId`` sent by the client is ignored; the owner is always the caller.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    name: str | None = None
    mobile: str | None = None
    address: str | None = None
    date_added: datetime | None = Field(default=None, alias="dateAdded")


class EntryUpdateRequest(BaseModel):
    """Partial update. ``id``, ``userId`` and dates in the payload are ignored."""

    name: str | None = None
    mobile: str | None = None
    address: str | None = None
    version: int | None = None


class EntryMutationResponse(BaseModel):
    success: bool
    entry: dict[str, Any] | None = None
