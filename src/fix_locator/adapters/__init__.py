"""Concrete implementations of provider interfaces."""

from .storage import InMemoryStore, JsonFileStore, StorageError

__all__ = [
    "InMemoryStore",
    "JsonFileStore",
    "StorageError",
]
