"""In-memory key-value store."""

from __future__ import annotations


class InMemoryStore:
    """Dict-backed store implementing the KeyValueStore protocol.

    Useful for tests and for sessions that should not persist anything.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def clear(self) -> None:
        """Remove all stored values."""
        self._data.clear()
