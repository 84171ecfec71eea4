"""Protocol definitions for pluggable adapters."""

from .repository import RepositoryBrowser
from .storage import KeyValueStore, StorageError

__all__ = ["KeyValueStore", "RepositoryBrowser", "StorageError"]
