"""Key-value store adapters."""

from fix_locator.interfaces.storage import StorageError

from .json_file import JsonFileStore
from .memory import InMemoryStore

__all__ = ["InMemoryStore", "JsonFileStore", "StorageError"]
