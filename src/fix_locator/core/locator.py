"""Location of original markup inside differently-dialected source files.

This module implements the CodeLocator class that finds where an HTML snippet
captured by the scanner lives in a source file (typically JSX), using ordered
strategies:
1. Text anchor - the snippet's visible text, expanded to the enclosing element
2. Class combination - lines sharing several significant classes
3. Tag + any class - same leading tag with at least one shared class

The first strategy to produce a location wins. All matching instances are
enumerated independently so a reviewer can step through alternatives.
Returning None is an expected outcome meaning "select manually".
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace

import structlog

from fix_locator.config.schema import LocatorConfig
from fix_locator.core.context import is_comment_line, is_non_code_context
from fix_locator.core.extraction import (
    extract_all_classes,
    extract_tag_name,
    extract_text_content,
)
from fix_locator.models.confidence import ConfidenceLevel
from fix_locator.models.location import CodeLocation, Instance

log = structlog.get_logger()

OPEN_TAG_PATTERN = re.compile(r"<\w+")
CLOSE_TAG_PATTERN = re.compile(r"</\w+>")
RESPONSIVE_PATTERN = re.compile(r"^(sm:|md:|lg:|xl:)")


@dataclass(frozen=True)
class SearchContext:
    """Everything a location strategy needs, computed once per search."""

    lines: Sequence[str]
    html_classes: Sequence[str]
    html_tag: str | None
    text_content: str | None
    all_instances: tuple[Instance, ...]
    config: LocatorConfig

    def is_non_code(self, index: int) -> bool:
        return is_non_code_context(self.lines, index, self.config.comment_lookback)


@dataclass(frozen=True)
class LocationStrategy:
    """A named location strategy."""

    name: str
    find: Callable[[SearchContext], CodeLocation | None]


def expand_to_element(lines: Sequence[str], index: int, window: int) -> tuple[int, int]:
    """Expand a matched line to the surrounding element.

    Looks up to ``window`` lines back for the nearest opening tag that is not
    a comment, and forward for a self-closing or closing delimiter.

    Returns:
        0-based (start, end) indices, start <= index <= end
    """
    start = index
    for j in range(index, max(0, index - window) - 1, -1):
        if OPEN_TAG_PATTERN.search(lines[j]) and not is_comment_line(lines[j]):
            start = j
            break

    end = index
    for j in range(index, min(len(lines), index + window)):
        line = lines[j]
        if ">" in line and ("/>" in line or "</" in line):
            end = j
            break

    return start, end


def expand_by_tag_depth(lines: Sequence[str], index: int, window: int) -> tuple[int, int]:
    """Expand a matched line to a full element using a naive tag depth count.

    Returns:
        0-based (start, end) indices, start <= index <= end
    """
    start = index
    for j in range(index, max(0, index - window) - 1, -1):
        if "<" in lines[j] and not lines[j].strip().startswith("//"):
            start = j
            break

    end = index
    depth = 0
    for j in range(index, min(len(lines), index + window)):
        line = lines[j]
        depth += line.count("<")
        depth -= line.count("/>")
        depth -= line.count("</")
        if depth <= 0 or "/>" in line or CLOSE_TAG_PATTERN.search(line):
            end = j
            break

    return start, end


def find_all_instances(
    file_content: str,
    original_html: str,
    text_content: str | None,
    config: LocatorConfig | None = None,
) -> list[Instance]:
    """Find every region of a file that plausibly matches the original markup.

    A line is a hit if it contains the text anchor or shares at least two
    long, non-responsive classes with the original. Comment and declaration
    hits are kept but sorted after real code.

    Args:
        file_content: Full source file text
        original_html: Original offending markup
        text_content: Text anchor, if any
        config: Locator configuration (defaults if omitted)

    Returns:
        Unique instances, non-comment first, then by line
    """
    config = config or LocatorConfig()
    lines = file_content.split("\n")
    significant = [
        c
        for c in extract_all_classes(original_html)
        if len(c) > 5 and not RESPONSIVE_PATTERN.match(c)
    ]

    instances: list[Instance] = []
    seen: set[tuple[int, int]] = set()

    for i, line in enumerate(lines):
        has_text_match = bool(text_content) and text_content in line
        if not has_text_match:
            line_classes = extract_all_classes(line)
            if sum(1 for c in significant if c in line_classes) < 2:
                continue

        start, end = expand_to_element(lines, i, config.text_window)
        span = (start + 1, end + 1)
        if span in seen:
            continue
        seen.add(span)
        instances.append(
            Instance(
                line_start=span[0],
                line_end=span[1],
                is_comment=is_non_code_context(lines, i, config.comment_lookback),
            )
        )

    instances.sort(key=lambda inst: (inst.is_comment, inst.line_start))
    return instances


def locate_by_text(ctx: SearchContext) -> CodeLocation | None:
    """Find the element whose visible text matches the anchor."""
    text = ctx.text_content
    if not text or len(text) < ctx.config.min_text_anchor_length:
        return None

    has_code_instance = any(not inst.is_comment for inst in ctx.all_instances)

    for i, line in enumerate(ctx.lines):
        if text not in line:
            continue

        is_comment = ctx.is_non_code(i)
        if is_comment and has_code_instance:
            continue

        start, end = expand_to_element(ctx.lines, i, ctx.config.text_window)
        matched_code = "\n".join(ctx.lines[start : end + 1])
        overlap = sum(1 for c in extract_all_classes(matched_code) if c in ctx.html_classes)

        # Carrying every class of the original counts as strong as carrying 3+
        covers_all = bool(ctx.html_classes) and overlap == len(ctx.html_classes)
        if overlap > 2 or (covers_all and not is_comment):
            confidence = ConfidenceLevel.HIGH
        elif is_comment:
            confidence = ConfidenceLevel.LOW
        else:
            confidence = ConfidenceLevel.MEDIUM

        return CodeLocation(
            line_start=start + 1,
            line_end=end + 1,
            confidence=confidence,
            matched_code=matched_code,
            reason=f'Text "{text}" found with {overlap} matching classes',
            is_comment=is_comment,
        )

    return None


def locate_by_class_combination(ctx: SearchContext) -> CodeLocation | None:
    """Find the first code line sharing several significant classes."""
    if len(ctx.html_classes) < 2:
        return None

    significant = [
        c for c in ctx.html_classes if not RESPONSIVE_PATTERN.match(c) and len(c) > 4
    ]
    required = min(2, len(significant))

    for i, line in enumerate(ctx.lines):
        line_classes = extract_all_classes(line)
        matches = [c for c in significant if c in line_classes]
        if len(matches) < required:
            continue

        # Class-only hits inside comments are never trusted
        if ctx.is_non_code(i):
            continue

        start, end = expand_by_tag_depth(ctx.lines, i, ctx.config.class_window)
        return CodeLocation(
            line_start=start + 1,
            line_end=end + 1,
            confidence=ConfidenceLevel.HIGH if len(matches) >= 3 else ConfidenceLevel.MEDIUM,
            matched_code="\n".join(ctx.lines[start : end + 1]),
            reason=f"{len(matches)} matching classes: {', '.join(matches[:3])}",
            is_comment=False,
        )

    return None


def locate_by_tag_and_class(ctx: SearchContext) -> CodeLocation | None:
    """Find the first line opening the same tag with any shared class.

    The match is a single line and never expanded.
    """
    if not ctx.html_tag:
        return None

    tag_pattern = re.compile(rf"<{re.escape(ctx.html_tag)}[\s>]", re.IGNORECASE)

    for i, line in enumerate(ctx.lines):
        if not tag_pattern.search(line) or ctx.is_non_code(i):
            continue

        matches = [c for c in extract_all_classes(line) if c in ctx.html_classes]
        if matches:
            return CodeLocation(
                line_start=i + 1,
                line_end=i + 1,
                confidence=ConfidenceLevel.LOW,
                matched_code=line,
                reason=f"<{ctx.html_tag}> tag with {len(matches)} matching classes",
                is_comment=False,
            )

    return None


DEFAULT_STRATEGIES: tuple[LocationStrategy, ...] = (
    LocationStrategy("text", locate_by_text),
    LocationStrategy("class_combination", locate_by_class_combination),
    LocationStrategy("tag_and_class", locate_by_tag_and_class),
)


class CodeLocator:
    """Finds where original markup lives in a source file.

    Responsibilities:
    - Extract search keys (classes, tag, text anchor) from the original
    - Try each location strategy in order
    - Attach every matching instance when there is more than one

    Example:
        locator = CodeLocator()
        location = locator.locate(file_content, original_html)
        if location is None:
            # Ask the user to pick lines manually
            pass
    """

    def __init__(
        self,
        config: LocatorConfig | None = None,
        strategies: Sequence[LocationStrategy] = DEFAULT_STRATEGIES,
    ) -> None:
        """Initialize the CodeLocator.

        Args:
            config: Locator configuration (defaults if omitted)
            strategies: Ordered location strategies
        """
        self._config = config or LocatorConfig()
        self._strategies = tuple(strategies)

    @property
    def strategy_names(self) -> list[str]:
        """Names of the configured strategies, in order."""
        return [strategy.name for strategy in self._strategies]

    def locate(
        self,
        file_content: str,
        original_html: str,
        text_content: str | None = None,
    ) -> CodeLocation | None:
        """Locate the original markup in a source file.

        Args:
            file_content: Full source file text
            original_html: Original offending markup
            text_content: Text anchor; extracted from the original when None.
                Pass an empty string to search by classes only.

        Returns:
            The best location, or None if manual selection is required
        """
        if text_content is None:
            text_content = extract_text_content(original_html)

        all_instances = tuple(
            find_all_instances(file_content, original_html, text_content, self._config)
        )
        ctx = SearchContext(
            lines=file_content.split("\n"),
            html_classes=extract_all_classes(original_html),
            html_tag=extract_tag_name(original_html),
            text_content=text_content,
            all_instances=all_instances,
            config=self._config,
        )

        for strategy in self._strategies:
            location = strategy.find(ctx)
            if location is None:
                continue

            if len(all_instances) > 1:
                location = replace(location, all_instances=all_instances)

            log.debug(
                "code_location_found",
                strategy=strategy.name,
                line_start=location.line_start,
                line_end=location.line_end,
                confidence=location.confidence.value,
                instances=len(all_instances),
            )
            return location

        log.info(
            "code_location_not_found",
            lines=len(ctx.lines),
            classes=len(ctx.html_classes),
            has_text=bool(text_content),
        )
        return None


def find_code_location(
    file_content: str,
    original_html: str,
    text_content: str | None = None,
) -> CodeLocation | None:
    """Locate original markup with the default configuration.

    See CodeLocator.locate.
    """
    return CodeLocator().locate(file_content, original_html, text_content)
