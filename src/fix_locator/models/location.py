"""Data models for located markup and applied fixes."""

from dataclasses import dataclass
from enum import Enum

from .confidence import ConfidenceLevel


def _check_span(line_start: int, line_end: int) -> None:
    if line_start < 1:
        raise ValueError(f"line_start must be >= 1, got {line_start}")
    if line_start > line_end:
        raise ValueError(f"line_start ({line_start}) is after line_end ({line_end})")


@dataclass(frozen=True)
class Instance:
    """One candidate line range for multi-candidate navigation."""

    line_start: int  # 1-based, inclusive
    line_end: int
    is_comment: bool

    def __post_init__(self) -> None:
        _check_span(self.line_start, self.line_end)

    @property
    def span(self) -> tuple[int, int]:
        return (self.line_start, self.line_end)


@dataclass(frozen=True)
class CodeLocation:
    """The primary region of a source file matching the original markup."""

    line_start: int  # 1-based, inclusive
    line_end: int
    confidence: ConfidenceLevel
    matched_code: str
    reason: str
    is_comment: bool = False
    # Only populated when more than one candidate region exists
    all_instances: tuple[Instance, ...] | None = None

    def __post_init__(self) -> None:
        _check_span(self.line_start, self.line_end)
        if self.confidence is ConfidenceLevel.NONE:
            raise ValueError("A located region cannot have confidence 'none'")

    @property
    def line_count(self) -> int:
        """Number of lines in the matched region."""
        return self.line_end - self.line_start + 1


class ApplyMethod(Enum):
    """How a fix ended up in the returned text."""

    DIRECT = "direct"  # original markup found verbatim
    CLASS_PATTERN = "class_pattern"  # single element matched by class pattern
    UNAPPLIED = "unapplied"  # bare converted fix, needs manual placement


@dataclass(frozen=True)
class FixApplication:
    """Result of applying a fixed snippet to a source buffer."""

    content: str
    method: ApplyMethod
    converted_fix: str
    pattern_matches: int = 0

    @property
    def applied(self) -> bool:
        """True if the fix was substituted into the source."""
        return self.method is not ApplyMethod.UNAPPLIED
