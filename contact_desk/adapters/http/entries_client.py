"""
HTTP client for the Contact Desk API, used by the Flet UI and the CLI.

Every non-2xx response is raised as ``ApiError`` carrying the status code
and the server's ``{"error": ...}`` message. Transport failures are raised
as ``ApiError`` with status code 0.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import httpx

from contact_desk.domain.entities import Entry

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


def _entry_path(entry_id: str) -> str:
    return f"/user-entries/{quote(entry_id, safe='')}"


class ApiError(Exception):
    def __init__(self, status_code: int, message: str, details: list[Any] | None = None):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.details = details or []


@dataclass
class SessionUser:
    """The signed-in user as reported by ``GET /auth/me``."""

    id: str
    email: str
    name: str
    role: str

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> SessionUser:
        return cls(
            id=str(data["id"]),
            email=data["email"],
            name=data.get("name") or data["email"],
            role=data.get("role") or "user",
        )


class EntriesApiClient:
    """
    Thin synchronous wrapper over the REST API.

    Holds the bearer token after ``login``. Pass ``client`` to reuse an
    existing ``httpx.Client`` (for example a FastAPI ``TestClient``).
    """

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:8000",
        client: httpx.Client | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)
        self._token: str | None = None

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None

    def close(self) -> None:
        self._client.close()

    # --- Transport ---

    def _headers(self) -> dict[str, str]:
        if self._token:
            return {"Authorization": f"Bearer {self._token}"}
        return {}

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = self._client.request(method, path, headers=self._headers(), **kwargs)
        except httpx.TransportError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise ApiError(0, f"Could not reach the server: {e}") from e

        if response.is_success:
            return response.json()

        try:
            body = response.json()
        except ValueError:
            body = {}
        message = body.get("error") if isinstance(body, dict) else None
        details = body.get("details") if isinstance(body, dict) else None
        logger.warning("%s %s returned %d: %s", method, path, response.status_code, message)
        raise ApiError(response.status_code, message or response.reason_phrase, details)

    # --- Auth ---

    def signup(
        self, email: str, password: str, name: str | None = None, role: str = "user"
    ) -> SessionUser:
        data = self._request(
            "POST",
            "/signup",
            json={"email": email, "password": password, "name": name, "role": role},
        )
        return SessionUser.from_json(data["user"])

    def login(self, email: str, password: str) -> SessionUser:
        """Exchange credentials for a bearer token, then fetch the user's role."""
        data = self._request("POST", "/auth/login", data={"username": email, "password": password})
        self._token = data["access_token"]
        try:
            return self.me()
        except ApiError:
            self._token = None
            raise

    def me(self) -> SessionUser:
        return SessionUser.from_json(self._request("GET", "/auth/me"))

    def logout(self) -> None:
        self._token = None

    # --- Entries ---

    def list_entries(self) -> list[Entry]:
        return [Entry.from_record(record) for record in self._request("GET", "/user-entries")]

    def create_entry(
        self,
        name: str,
        mobile: str,
        address: str,
        entry_id: str | None = None,
    ) -> Entry:
        payload: dict[str, Any] = {"name": name, "mobile": mobile, "address": address}
        if entry_id is not None:
            payload["id"] = entry_id
        data = self._request("POST", "/user-entries", json=payload)
        return Entry.from_record(data["entry"])

    def update_entry(
        self,
        entry_id: str,
        name: str | None = None,
        mobile: str | None = None,
        address: str | None = None,
        version: int | None = None,
    ) -> Entry:
        fields = {"name": name, "mobile": mobile, "address": address, "version": version}
        payload = {k: v for k, v in fields.items() if v is not None}
        data = self._request("PUT", _entry_path(entry_id), json=payload)
        return Entry.from_record(data["entry"])

    def delete_entry(self, entry_id: str) -> None:
        self._request("DELETE", _entry_path(entry_id))
