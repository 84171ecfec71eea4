"""Data models for persisted per-domain preferences."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RepoPreference:
    """The repository remembered for a scanned domain."""

    owner: str
    repo: str

    @property
    def full_name(self) -> str:
        """Repository identifier in 'owner/repo' form."""
        return f"{self.owner}/{self.repo}"
