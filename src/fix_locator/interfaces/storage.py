"""Abstract interface for persisted key-value storage."""

from typing import Protocol


class StorageError(Exception):
    """Failed to read or write the backing storage."""


class KeyValueStore(Protocol):
    """Abstract interface for a small persisted string key-value store.

    Values are opaque strings; callers serialize their own structures.
    """

    def get(self, key: str) -> str | None:
        """
        Read the value stored under a key.

        Args:
            key: Storage key

        Returns:
            Stored value, None if the key is absent

        Raises:
            StorageError: If the backing storage cannot be read
        """
        ...

    def set(self, key: str, value: str) -> None:
        """
        Store a value under a key, replacing any previous value.

        Args:
            key: Storage key
            value: Value to store

        Raises:
            StorageError: If the backing storage cannot be written
        """
        ...
