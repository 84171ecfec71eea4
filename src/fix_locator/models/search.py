"""Data models for repository file searches."""

from dataclasses import dataclass
from enum import Enum

from .confidence import RankedFile


class SearchType(Enum):
    """Kind of query used to find candidate files."""

    TEXT = "text"
    CLASS = "class"
    SELECTOR = "selector"
    CUSTOM = "custom"
    BROWSE = "browse"


@dataclass(frozen=True)
class SearchQuery:
    """A suggested code search query."""

    search_type: SearchType
    query: str
    label: str
    recommended: bool = False


@dataclass(frozen=True)
class CodeSearchHit:
    """A file returned by the repository's code search."""

    path: str
    matched_lines: tuple[str, ...] = ()

    @property
    def preview(self) -> str | None:
        """First matched line, if any."""
        return self.matched_lines[0] if self.matched_lines else None


@dataclass(frozen=True)
class SearchOutcome:
    """Ranked candidates for one search, plus an optional auto-selection."""

    results: tuple[RankedFile, ...]
    search_type: SearchType
    auto_selected: str | None = None
    message: str | None = None
    ranked_by_content: bool = False
