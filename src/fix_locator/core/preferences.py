"""Per-domain preferences for repository and search type selection.

Each scanned site is identified by its hostname. The repository chosen for a
domain is remembered so the next fix session can skip repository selection,
and the search type that last found the right file is suggested first.

Preferences are stored as JSON mappings inside an injected KeyValueStore.
Storage problems are logged and treated as "no preference"; they never
reach the caller.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any
from urllib.parse import urlparse

import structlog

from fix_locator.interfaces.storage import StorageError
from fix_locator.models.preference import RepoPreference
from fix_locator.models.search import SearchType

if TYPE_CHECKING:
    from fix_locator.config.schema import PreferencesConfig
    from fix_locator.interfaces.storage import KeyValueStore

log = structlog.get_logger()

DEFAULT_REPO_KEY = "domain-repos"
DEFAULT_SEARCH_TYPE_KEY = "search-types"


def get_domain_from_url(url: str) -> str:
    """Extract the hostname from a scanned URL.

    Args:
        url: Page URL reported by the scanner

    Returns:
        Hostname, or the input unchanged if it is not a URL
    """
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        return url
    return hostname or url


class RepoPreferences:
    """Remembers which repository and search type work for each domain.

    Example:
        prefs = RepoPreferences(JsonFileStore(path))
        prefs.save_repo("example.com", "acme", "website")
        saved = prefs.get_repo("example.com")
    """

    def __init__(
        self,
        store: KeyValueStore,
        repo_key: str = DEFAULT_REPO_KEY,
        search_type_key: str = DEFAULT_SEARCH_TYPE_KEY,
    ) -> None:
        """Initialize the preferences.

        Args:
            store: Key-value store backing the preferences
            repo_key: Store key for the domain -> repository mapping
            search_type_key: Store key for the domain -> search type mapping
        """
        self._store = store
        self._repo_key = repo_key
        self._search_type_key = search_type_key

    @classmethod
    def from_config(cls, config: PreferencesConfig) -> RepoPreferences:
        """Create preferences backed by the JSON file named in the configuration.

        Args:
            config: Preference storage configuration

        Returns:
            RepoPreferences using the configured file and keys
        """
        from fix_locator.adapters.storage import JsonFileStore

        return cls(
            JsonFileStore(config.path),
            repo_key=config.repo_key,
            search_type_key=config.search_type_key,
        )

    def _load_mapping(self, key: str) -> dict[str, Any]:
        try:
            saved = self._store.get(key)
            if not saved:
                return {}
            mapping = json.loads(saved)
        except (StorageError, OSError, json.JSONDecodeError) as e:
            log.error("preferences_load_failed", key=key, error=str(e))
            return {}

        if not isinstance(mapping, dict):
            log.error("preferences_load_failed", key=key, error="stored value is not a mapping")
            return {}
        return mapping

    def _save_entry(self, key: str, domain: str, value: Any) -> bool:
        mapping = self._load_mapping(key)
        mapping[domain] = value
        try:
            self._store.set(key, json.dumps(mapping))
        except (StorageError, OSError) as e:
            log.error("preferences_save_failed", key=key, domain=domain, error=str(e))
            return False
        return True

    def get_repo(self, domain: str) -> RepoPreference | None:
        """Return the repository saved for a domain.

        Args:
            domain: Hostname of the scanned site

        Returns:
            Saved repository, None if there is none or it is unreadable
        """
        entry = self._load_mapping(self._repo_key).get(domain)
        if not isinstance(entry, dict):
            return None

        owner = entry.get("owner")
        repo = entry.get("repo")
        if not isinstance(owner, str) or not isinstance(repo, str) or not owner or not repo:
            log.warning("preferences_entry_malformed", domain=domain)
            return None
        return RepoPreference(owner=owner, repo=repo)

    def save_repo(self, domain: str, owner: str, repo: str) -> None:
        """Remember the repository for a domain, keeping other domains intact.

        Args:
            domain: Hostname of the scanned site
            owner: Repository owner
            repo: Repository name
        """
        if self._save_entry(self._repo_key, domain, {"owner": owner, "repo": repo}):
            log.info("repository_preference_saved", domain=domain, repo=f"{owner}/{repo}")

    def resolve_repo(
        self,
        domain: str,
        available: Iterable[RepoPreference],
    ) -> RepoPreference | None:
        """Return the saved repository only if it is still available.

        Args:
            domain: Hostname of the scanned site
            available: Repositories the user can currently access

        Returns:
            The saved repository, None if unset or no longer available
        """
        saved = self.get_repo(domain)
        if saved is None:
            return None

        for candidate in available:
            if candidate.owner == saved.owner and candidate.repo == saved.repo:
                return candidate

        log.info("saved_repository_unavailable", domain=domain, repo=saved.full_name)
        return None

    def get_search_type(self, domain: str) -> SearchType | None:
        """Return the search type that last found a file for a domain."""
        value = self._load_mapping(self._search_type_key).get(domain)
        try:
            return SearchType(value) if value is not None else None
        except ValueError:
            log.warning("preferences_entry_malformed", domain=domain, value=value)
            return None

    def save_search_type(self, domain: str, search_type: SearchType) -> None:
        """Remember the search type that found a file for a domain."""
        self._save_entry(self._search_type_key, domain, search_type.value)
