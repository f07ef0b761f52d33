from datetime import datetime
from typing import Any, Protocol


class KeyValueStorePort(Protocol):
    """Prefix-queryable map from string key to JSON object.

    Implementations raise ``StoreError`` when the backend fails.
    """

    def get(self, key: str) -> dict[str, Any] | None: ...

    def set(self, key: str, value: dict[str, Any]) -> None: ...

    def delete(self, key: str) -> None: ...

    def get_by_prefix(self, prefix: str) -> list[dict[str, Any]]:
        """Values of every key starting with ``prefix``."""
        ...


class TimePort(Protocol):
    def now_utc(self) -> datetime: ...
