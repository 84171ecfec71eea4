"""Ranking of candidate files by match confidence."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import structlog

from fix_locator.core.scorer import calculate_match_confidence
from fix_locator.models.confidence import (
    CandidateFile,
    ConfidenceLevel,
    RankedFile,
)

log = structlog.get_logger()

DEFAULT_AUTO_SELECT_MAX_RESULTS = 3


def rank_search_results(
    candidates: Iterable[CandidateFile],
    original_html: str,
    text_content: str | None,
) -> list[RankedFile]:
    """Rank candidate files by how well they match the original markup.

    Each candidate is scored on its content (or preview when no content was
    fetched). Results are sorted by score, highest first; ties keep input
    order. Only the top result is flagged as best match, and only if its
    level is not "none".

    Args:
        candidates: Files from the repository browser
        original_html: Original offending markup
        text_content: Text anchor extracted from the original, if any

    Returns:
        Ranked files, best first
    """
    scored = [
        (
            candidate,
            calculate_match_confidence(candidate.source_code, original_html, text_content),
        )
        for candidate in candidates
    ]

    # sorted() is stable, so equal scores keep their input order
    scored = sorted(scored, key=lambda item: item[1].score, reverse=True)

    ranked: list[RankedFile] = []
    for position, (candidate, confidence) in enumerate(scored):
        is_best = position == 0 and confidence.level is not ConfidenceLevel.NONE
        ranked.append(
            RankedFile(
                path=candidate.path,
                preview=candidate.preview,
                confidence=confidence,
                is_best_match=is_best,
            )
        )

    log.debug(
        "ranked_candidate_files",
        total=len(ranked),
        best_match=ranked[0].path if ranked and ranked[0].is_best_match else None,
    )
    return ranked


def select_auto_match(
    ranked: Sequence[RankedFile],
    max_results: int = DEFAULT_AUTO_SELECT_MAX_RESULTS,
) -> RankedFile | None:
    """Pick a file automatically when the choice is unambiguous.

    A file is auto-selected only when it is the single high-confidence
    result among a short list of candidates.

    Args:
        ranked: Ranked files
        max_results: Largest result list that still allows auto-selection

    Returns:
        The auto-selected file, or None if a human should choose
    """
    if len(ranked) > max_results:
        return None

    high = [r for r in ranked if r.confidence.level is ConfidenceLevel.HIGH]
    if len(high) != 1:
        return None
    return high[0]
