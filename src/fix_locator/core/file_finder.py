"""Candidate file discovery for a fix session.

This module implements the FileFinder class that turns a repository code
search into a ranked list of candidate files:
1. Suggest search queries from the original markup
2. Search the repository and keep only component source files
3. Fetch and score file contents (or score previews when there are many hits)
4. Auto-select the file when a single candidate is clearly right

Network access goes through the RepositoryBrowser protocol; the finder itself
only orchestrates and ranks.
"""

from __future__ import annotations

import asyncio
import re
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

import structlog

from fix_locator.config.schema import FinderConfig
from fix_locator.core.extraction import extract_all_classes, extract_class_names
from fix_locator.core.ranker import rank_search_results, select_auto_match
from fix_locator.models.confidence import CandidateFile, MatchConfidence, RankedFile
from fix_locator.models.search import CodeSearchHit, SearchOutcome, SearchQuery, SearchType

if TYPE_CHECKING:
    from fix_locator.core.preferences import RepoPreferences
    from fix_locator.interfaces.repository import RepositoryBrowser

log = structlog.get_logger()

SEARCH_CLASS_EXCLUDED_PREFIX = re.compile(r"^(sm:|md:|lg:|xl:|hover:|focus:)")
MAX_SEARCH_CLASSES = 3
TEXT_LABEL_LENGTH = 30

NO_FILES_MESSAGE = "No files found. Try browsing all files instead."
NO_COMPONENT_FILES_MESSAGE = "No component files found."
NOT_ANALYZED_DETAILS = "Could not analyze"


class FileFinderError(Exception):
    """Base exception for file finder errors."""


class FileSearchError(FileFinderError):
    """Failed to search or list repository files."""


def search_classes(original_html: str) -> list[str]:
    """Return up to three long, non-variant classes suited to code search."""
    classes = [
        c
        for c in extract_all_classes(original_html)
        if len(c) > 5 and not SEARCH_CLASS_EXCLUDED_PREFIX.match(c)
    ]
    return classes[:MAX_SEARCH_CLASSES]


def build_preview(content: str, text_content: str | None, context_lines: int = 1) -> str | None:
    """Return the lines around the first occurrence of the text anchor.

    Args:
        content: Full file content
        text_content: Text anchor, if any
        context_lines: Lines of context on each side

    Returns:
        Preview text, None if the anchor does not occur
    """
    if not text_content:
        return None

    lines = content.split("\n")
    for i, line in enumerate(lines):
        if text_content in line:
            start = max(0, i - context_lines)
            end = min(len(lines), i + context_lines + 1)
            return "\n".join(lines[start:end])
    return None


class FileFinder:
    """Finds and ranks the source files that may contain the original markup.

    Responsibilities:
    - Suggest search queries (text, class, selector) for the original markup
    - Filter search hits down to component source files
    - Rank candidates with the confidence scorer
    - Auto-select an unambiguous best match and remember what worked

    Example:
        finder = FileFinder(browser, FinderConfig(), preferences)
        outcome = await finder.search("acme", "site", '"Click Me"', original_html, "Click Me")
        if outcome.auto_selected:
            content = await browser.get_file_content("acme", "site", outcome.auto_selected)
    """

    def __init__(
        self,
        browser: RepositoryBrowser,
        config: FinderConfig | None = None,
        preferences: RepoPreferences | None = None,
    ) -> None:
        """Initialize the FileFinder.

        Args:
            browser: Repository browser for searching and reading files
            config: Finder configuration (defaults if omitted)
            preferences: Optional preference store for search type memory
        """
        self._browser = browser
        self._config = config or FinderConfig()
        self._preferences = preferences

    def is_candidate_path(self, path: str) -> bool:
        """Check if a path looks like a component source file."""
        pure = PurePosixPath(path)
        if pure.suffix.lower() not in self._config.source_extensions:
            return False
        return not any(part in self._config.excluded_paths for part in pure.parts)

    def suggest_queries(
        self,
        original_html: str,
        text_content: str | None,
        selector: str | None = None,
        domain: str | None = None,
    ) -> list[SearchQuery]:
        """Suggest code search queries for the original markup.

        The search type that last worked for the domain is recommended;
        otherwise text search is recommended when there is a text anchor,
        and class search when there is not.

        Args:
            original_html: Original offending markup
            text_content: Text anchor, if any
            selector: CSS selector reported by the scanner
            domain: Hostname of the scanned site

        Returns:
            Suggested queries in display order
        """
        last_type = None
        if domain and self._preferences is not None:
            last_type = self._preferences.get_search_type(domain)

        classes = search_classes(original_html)
        selector_classes = extract_class_names(selector) if selector else []

        def recommended(search_type: SearchType) -> bool:
            if last_type is not None:
                return last_type == search_type
            if search_type == SearchType.TEXT:
                return bool(text_content)
            if search_type == SearchType.CLASS:
                return not text_content and bool(classes)
            return False

        queries: list[SearchQuery] = []

        if text_content:
            label = text_content[:TEXT_LABEL_LENGTH]
            if len(text_content) > TEXT_LABEL_LENGTH:
                label += "..."
            queries.append(
                SearchQuery(
                    search_type=SearchType.TEXT,
                    query=f'"{text_content}"',
                    label=f'"{label}"',
                    recommended=recommended(SearchType.TEXT),
                )
            )

        if classes:
            queries.append(
                SearchQuery(
                    search_type=SearchType.CLASS,
                    query=classes[0],
                    label=", ".join(f".{c}" for c in classes),
                    recommended=recommended(SearchType.CLASS),
                )
            )

        if selector_classes and (not classes or selector_classes[0] != classes[0]):
            queries.append(
                SearchQuery(
                    search_type=SearchType.SELECTOR,
                    query=selector_classes[0],
                    label=", ".join(f".{c}" for c in selector_classes[:2]),
                    recommended=recommended(SearchType.SELECTOR),
                )
            )

        return queries

    async def search(
        self,
        owner: str,
        repo: str,
        query: str,
        original_html: str,
        text_content: str | None,
        search_type: SearchType = SearchType.CUSTOM,
        branch: str | None = None,
        domain: str | None = None,
    ) -> SearchOutcome:
        """Search the repository and rank the matching files.

        Args:
            owner: Repository owner
            repo: Repository name
            query: Code search query
            original_html: Original offending markup
            text_content: Text anchor, if any
            search_type: Kind of query, remembered when it finds the file
            branch: Branch to read file contents from
            domain: Hostname of the scanned site, for search type memory

        Returns:
            SearchOutcome with ranked files and an optional auto-selection

        Raises:
            FileSearchError: If the repository search fails
        """
        query = query.strip()
        if not query:
            return SearchOutcome(results=(), search_type=search_type)

        log.info("searching_repository_code", repo=f"{owner}/{repo}", search_type=search_type.value)

        try:
            hits = await self._browser.search_code(owner, repo, query)
        except Exception as e:
            log.error("repository_search_failed", repo=f"{owner}/{repo}", error=str(e))
            raise FileSearchError(f"Failed to search repository code: {e}") from e

        hits = [hit for hit in hits if self.is_candidate_path(hit.path)]
        if not hits:
            log.info("no_candidate_files", repo=f"{owner}/{repo}")
            return SearchOutcome(results=(), search_type=search_type, message=NO_FILES_MESSAGE)

        if len(hits) > self._config.max_ranked_files:
            candidates = [CandidateFile(path=hit.path, preview=hit.preview) for hit in hits]
            ranked = rank_search_results(candidates, original_html, text_content)
            return SearchOutcome(results=tuple(ranked), search_type=search_type)

        ranked = await self._rank_by_content(owner, repo, hits, original_html, text_content, branch)

        auto = select_auto_match(ranked, self._config.auto_select_max_results)
        if domain and (auto is not None or (ranked and ranked[0].is_best_match)):
            self._remember_search_type(domain, search_type)

        log.info(
            "candidate_files_ranked",
            total=len(ranked),
            auto_selected=auto.path if auto else None,
        )
        return SearchOutcome(
            results=tuple(ranked),
            search_type=search_type,
            auto_selected=auto.path if auto else None,
            ranked_by_content=True,
        )

    async def browse(
        self,
        owner: str,
        repo: str,
        branch: str | None = None,
    ) -> SearchOutcome:
        """List every component source file in the repository, unranked.

        Raises:
            FileSearchError: If the repository tree cannot be listed
        """
        try:
            paths = await self._browser.get_repo_tree(owner, repo, branch)
        except Exception as e:
            log.error("repository_browse_failed", repo=f"{owner}/{repo}", error=str(e))
            raise FileSearchError(f"Failed to list repository files: {e}") from e

        results = tuple(
            RankedFile(path=path, preview=None, confidence=MatchConfidence.placeholder())
            for path in paths
            if self.is_candidate_path(path)
        )
        return SearchOutcome(
            results=results,
            search_type=SearchType.BROWSE,
            message=None if results else NO_COMPONENT_FILES_MESSAGE,
        )

    async def _rank_by_content(
        self,
        owner: str,
        repo: str,
        hits: list[CodeSearchHit],
        original_html: str,
        text_content: str | None,
        branch: str | None,
    ) -> list[RankedFile]:
        contents = await asyncio.gather(
            *(self._browser.get_file_content(owner, repo, hit.path, branch) for hit in hits),
            return_exceptions=True,
        )

        candidates: list[CandidateFile] = []
        failed: list[RankedFile] = []
        for hit, content in zip(hits, contents, strict=True):
            if isinstance(content, BaseException):
                log.warning("file_content_fetch_failed", path=hit.path, error=str(content))
                failed.append(
                    RankedFile(
                        path=hit.path,
                        preview=hit.preview,
                        confidence=MatchConfidence.placeholder(NOT_ANALYZED_DETAILS),
                    )
                )
                continue

            preview = hit.preview
            if content:
                preview = (
                    build_preview(content, text_content, self._config.preview_context_lines)
                    or preview
                )
            candidates.append(CandidateFile(path=hit.path, preview=preview, content=content))

        ranked = rank_search_results(candidates, original_html, text_content)
        # Unanalyzable files score zero and sort last
        return ranked + failed

    def _remember_search_type(self, domain: str, search_type: SearchType) -> None:
        if self._preferences is not None and search_type != SearchType.BROWSE:
            self._preferences.save_search_type(domain, search_type)
