"""In-memory key-value store adapter.

Implements KeyValueStorePort for tests and single-process demos.
Values are deep-copied on the way in and out so callers cannot mutate
stored records by accident.
"""

import copy
from typing import Any


class InMemoryKeyValueStore:
    """Dict-backed store with the same prefix semantics as the SQLite adapter."""

    def __init__(self) -> None:
        self._data: dict[str, dict[str, Any]] = {}

    def get(self, key: str) -> dict[str, Any] | None:
        value = self._data.get(key)
        return copy.deepcopy(value) if value is not None else None

    def set(self, key: str, value: dict[str, Any]) -> None:
        self._data[key] = copy.deepcopy(value)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def get_by_prefix(self, prefix: str) -> list[dict[str, Any]]:
        return [
            copy.deepcopy(self._data[key])
            for key in sorted(self._data)
            if key.startswith(prefix)
        ]

    def keys(self) -> list[str]:
        """All stored keys, sorted - useful for testing."""
        return sorted(self._data)

    def clear(self) -> None:
        """Clear all keys - useful for testing."""
        self._data.clear()
