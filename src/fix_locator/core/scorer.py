"""Confidence scoring between a source fragment and the original markup.

Score composition (capped at 100):
- Up to 60 points for the share of the original's classes found in the source
- 40 points if the text anchor appears verbatim in the source
- 10 points if both fragments open with the same tag

The scorer is a pure function of its inputs, so ranking passes can call it
once per candidate and always get the same answer.
"""

from __future__ import annotations

from fix_locator.core.extraction import extract_all_classes, extract_tag_name
from fix_locator.models.confidence import ConfidenceLevel, MatchConfidence

CLASS_WEIGHT = 60.0
TEXT_WEIGHT = 40.0
TAG_BONUS = 10.0
MAX_SCORE = 100.0

HIGH_THRESHOLD = 80.0
MEDIUM_THRESHOLD = 50.0
LOW_THRESHOLD = 20.0


def level_for_score(score: float) -> ConfidenceLevel:
    """Map a 0-100 score to a confidence level."""
    if score >= HIGH_THRESHOLD:
        return ConfidenceLevel.HIGH
    if score >= MEDIUM_THRESHOLD:
        return ConfidenceLevel.MEDIUM
    if score >= LOW_THRESHOLD:
        return ConfidenceLevel.LOW
    return ConfidenceLevel.NONE


def calculate_match_confidence(
    source_code: str,
    original_html: str,
    text_content: str | None,
) -> MatchConfidence:
    """Calculate how well source code matches the original markup.

    Args:
        source_code: Candidate source fragment (or whole file)
        original_html: Original offending markup from the scanner
        text_content: Text anchor extracted from the original, if any

    Returns:
        MatchConfidence with score, level and a short justification
    """
    source_classes = extract_all_classes(source_code)
    html_classes = extract_all_classes(original_html)

    matched_classes = tuple(c for c in source_classes if c in html_classes)
    class_ratio = len(matched_classes) / len(html_classes) if html_classes else 0.0

    has_text_match = bool(text_content) and text_content in source_code

    score = min(class_ratio * CLASS_WEIGHT, CLASS_WEIGHT)
    if has_text_match:
        score += TEXT_WEIGHT

    source_tag = extract_tag_name(source_code)
    html_tag = extract_tag_name(original_html)
    if source_tag and html_tag and source_tag == html_tag:
        score += TAG_BONUS

    score = min(score, MAX_SCORE)
    level = level_for_score(score)

    text_note = " + text" if has_text_match else ""
    if level is ConfidenceLevel.HIGH:
        details = f"Strong match: {len(matched_classes)} classes{text_note}"
    elif level is ConfidenceLevel.MEDIUM:
        details = f"Likely match: {len(matched_classes)} classes{text_note}"
    elif level is ConfidenceLevel.LOW:
        details = f"Possible match: {len(matched_classes)} classes"
    else:
        details = "No significant match found"

    return MatchConfidence(
        score=score,
        level=level,
        matched_classes=matched_classes,
        matched_text=text_content if has_text_match else None,
        details=details,
    )
