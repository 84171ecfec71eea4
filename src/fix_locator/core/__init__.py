"""Core fix-location and fix-application components.

This module exports the main business logic:
- CodeLocator: Finds where original markup lives in a source file
- FileFinder: Searches a repository and ranks candidate files
- RepoPreferences: Remembers repository and search type per domain
- Scoring, ranking, extraction and dialect conversion functions
"""

from fix_locator.core.context import is_comment_line, is_non_code_context
from fix_locator.core.dialect import (
    apply_fix,
    apply_fix_to_source,
    apply_to_location,
    html_to_jsx,
    replace_lines,
)
from fix_locator.core.extraction import (
    extract_all_classes,
    extract_class_names,
    extract_significant_classes,
    extract_tag_name,
    extract_text_content,
    normalize_for_comparison,
)
from fix_locator.core.file_finder import FileFinder, FileFinderError, FileSearchError
from fix_locator.core.locator import CodeLocator, find_all_instances, find_code_location
from fix_locator.core.preferences import RepoPreferences, get_domain_from_url
from fix_locator.core.ranker import rank_search_results, select_auto_match
from fix_locator.core.scorer import calculate_match_confidence, level_for_score

__all__ = [
    "CodeLocator",
    "FileFinder",
    "FileFinderError",
    "FileSearchError",
    "RepoPreferences",
    "apply_fix",
    "apply_fix_to_source",
    "apply_to_location",
    "calculate_match_confidence",
    "extract_all_classes",
    "extract_class_names",
    "extract_significant_classes",
    "extract_tag_name",
    "extract_text_content",
    "find_all_instances",
    "find_code_location",
    "get_domain_from_url",
    "html_to_jsx",
    "is_comment_line",
    "is_non_code_context",
    "level_for_score",
    "normalize_for_comparison",
    "rank_search_results",
    "replace_lines",
    "select_auto_match",
]
