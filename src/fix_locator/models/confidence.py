"""Data models for match confidence and ranked candidate files."""

from dataclasses import dataclass
from enum import Enum


class ConfidenceLevel(Enum):
    """Coarse bucketing of a 0-100 match score."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    NONE = "none"


@dataclass(frozen=True)
class MatchConfidence:
    """How well a source fragment matches the original markup."""

    score: float  # 0 to 100
    level: ConfidenceLevel
    matched_classes: tuple[str, ...]
    matched_text: str | None
    details: str

    @classmethod
    def placeholder(cls, details: str = "") -> "MatchConfidence":
        """A zero-score confidence for candidates that were not analyzed."""
        return cls(
            score=0,
            level=ConfidenceLevel.NONE,
            matched_classes=(),
            matched_text=None,
            details=details,
        )


@dataclass(frozen=True)
class CandidateFile:
    """A candidate source file supplied by the repository browser."""

    path: str
    preview: str | None = None
    content: str | None = None

    @property
    def source_code(self) -> str:
        """Text used for scoring: full content if known, else the preview."""
        return self.content or self.preview or ""


@dataclass(frozen=True)
class RankedFile:
    """A candidate file with its computed confidence."""

    path: str
    preview: str | None
    confidence: MatchConfidence
    is_best_match: bool = False
