"""Locate scanner-reported markup in source files and apply fixes."""

from fix_locator.core import (
    CodeLocator,
    apply_fix,
    apply_fix_to_source,
    calculate_match_confidence,
    find_all_instances,
    find_code_location,
    html_to_jsx,
    rank_search_results,
)
from fix_locator.models import CodeLocation, ConfidenceLevel, Instance, MatchConfidence

__all__ = [
    "CodeLocation",
    "CodeLocator",
    "ConfidenceLevel",
    "Instance",
    "MatchConfidence",
    "apply_fix",
    "apply_fix_to_source",
    "calculate_match_confidence",
    "find_all_instances",
    "find_code_location",
    "html_to_jsx",
    "rank_search_results",
]
