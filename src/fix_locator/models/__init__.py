"""Data models and transfer objects."""

from .confidence import CandidateFile, ConfidenceLevel, MatchConfidence, RankedFile
from .location import ApplyMethod, CodeLocation, FixApplication, Instance
from .preference import RepoPreference
from .search import CodeSearchHit, SearchOutcome, SearchQuery, SearchType

__all__ = [
    # Confidence models
    "ConfidenceLevel",
    "MatchConfidence",
    "CandidateFile",
    "RankedFile",
    # Location models
    "Instance",
    "CodeLocation",
    "ApplyMethod",
    "FixApplication",
    # Preference models
    "RepoPreference",
    # Search models
    "SearchType",
    "SearchQuery",
    "CodeSearchHit",
    "SearchOutcome",
]
