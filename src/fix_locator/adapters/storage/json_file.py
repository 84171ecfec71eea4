"""JSON-file backed key-value store.

All keys live in a single JSON object on disk. Writes rewrite the whole file
through a temporary file so a crash never leaves a half-written store.
Concurrent writers are last-writer-wins.
"""

from __future__ import annotations

import contextlib
import json
import os
import tempfile
from pathlib import Path

import structlog

from fix_locator.interfaces.storage import StorageError

log = structlog.get_logger()


class JsonFileStore:
    """Key-value store persisted as a JSON object in a file.

    Implements the KeyValueStore protocol. Reading a corrupt file raises
    StorageError; writing to one replaces it with a fresh object.

    Example:
        store = JsonFileStore(Path("~/.config/fix-locator/preferences.json"))
        store.set("domain-repos", '{"example.com": {"owner": "o", "repo": "r"}}')
    """

    def __init__(self, path: Path) -> None:
        """Initialize the store.

        Args:
            path: Location of the JSON file (created on first write)
        """
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        """Location of the backing file."""
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}

        try:
            data = json.loads(self._path.read_text(encoding="utf-8") or "{}")
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Could not read store {self._path}: {e}") from e

        if not isinstance(data, dict):
            raise StorageError(f"Store {self._path} does not contain a JSON object")

        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except StorageError as e:
            log.warning("store_unreadable_overwritten", path=str(self._path), error=str(e))
            data = {}
        data[key] = value

        tmp_name: str | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
            os.replace(tmp_name, self._path)
        except OSError as e:
            if tmp_name is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
            raise StorageError(f"Could not write store {self._path}: {e}") from e

        log.debug("store_written", path=str(self._path), key=key)
