"""Conversion of fixed HTML to JSX and substitution into source files.

The applier never guesses: a fix is substituted only when the original markup
appears verbatim or when a class pattern identifies exactly one element.
Otherwise the converted fix is returned on its own for manual placement.
"""

from __future__ import annotations

import re

import structlog

from fix_locator.core.extraction import extract_all_classes
from fix_locator.models.location import ApplyMethod, CodeLocation, FixApplication

log = structlog.get_logger()

STYLE_ATTR_PATTERN = re.compile(r'style="([^"]+)"')
VOID_ELEMENT_PATTERN = re.compile(
    r"<(img|input|br|hr|meta|link)\b([^>]*)(?<!/)>",
    re.IGNORECASE,
)
MAX_PATTERN_CLASSES = 3
MIN_PATTERN_CLASS_LENGTH = 6


def _camel_case(prop: str) -> str:
    return re.sub(r"-([a-z])", lambda m: m.group(1).upper(), prop)


def _style_to_object(match: re.Match[str]) -> str:
    entries = []
    for declaration in match.group(1).split(";"):
        if not declaration.strip():
            continue
        prop, _, value = declaration.partition(":")
        entries.append(f'{_camel_case(prop.strip())}: "{value.strip()}"')
    return "style={{ " + ", ".join(entries) + " }}"


def html_to_jsx(html: str) -> str:
    """Convert a fixed HTML snippet to JSX.

    - class= becomes className=, for= becomes htmlFor=
    - Inline style strings become style objects with camelCased keys
    - Void elements (img, input, br, hr, meta, link) are self-closed

    Running it on already-converted markup changes nothing.

    Args:
        html: Fixed HTML snippet

    Returns:
        The snippet in JSX form
    """
    jsx = re.sub(r"\bclass=", "className=", html)
    jsx = re.sub(r"\bfor=", "htmlFor=", jsx)
    jsx = STYLE_ATTR_PATTERN.sub(_style_to_object, jsx)
    return VOID_ELEMENT_PATTERN.sub(r"<\1\2 />", jsx)


def build_class_pattern(original_html: str) -> re.Pattern[str] | None:
    """Build a regex matching an opening JSX tag carrying the original's classes.

    Uses up to three classes longer than 5 characters, which must appear in
    order inside a single className value.

    Args:
        original_html: Original offending markup

    Returns:
        Compiled pattern, or None if the original has no usable classes
    """
    classes = [c for c in extract_all_classes(original_html) if len(c) >= MIN_PATTERN_CLASS_LENGTH]
    classes = classes[:MAX_PATTERN_CLASSES]
    if not classes:
        return None

    class_sequence = ".*".join(re.escape(c) for c in classes)
    return re.compile(rf"""<\w+[^>]*className=["'][^"']*{class_sequence}[^"']*["'][^>]*>""")


def apply_fix(source_code: str, original_html: str, fixed_html: str) -> FixApplication:
    """Apply a fixed snippet to a source buffer.

    1. If the original markup appears verbatim, replace its first occurrence.
    2. Otherwise convert the fix to JSX and, if a class pattern matches exactly
       one element, replace that element's opening tag.
    3. Otherwise return the converted fix alone.

    Args:
        source_code: Full text of the source file
        original_html: Original offending markup
        fixed_html: Fixed markup

    Returns:
        FixApplication describing the resulting text and how it was produced
    """
    if original_html and original_html in source_code:
        log.debug("fix_applied_directly")
        return FixApplication(
            content=source_code.replace(original_html, fixed_html, 1),
            method=ApplyMethod.DIRECT,
            converted_fix=fixed_html,
        )

    fixed_jsx = html_to_jsx(fixed_html)
    pattern = build_class_pattern(original_html)
    if pattern is None:
        log.info("fix_not_applied", reason="no_pattern_classes")
        return FixApplication(
            content=fixed_jsx,
            method=ApplyMethod.UNAPPLIED,
            converted_fix=fixed_jsx,
        )

    matches = list(pattern.finditer(source_code))
    if len(matches) == 1:
        match = matches[0]
        log.debug("fix_applied_by_class_pattern", offset=match.start())
        return FixApplication(
            content=source_code[: match.start()] + fixed_jsx + source_code[match.end() :],
            method=ApplyMethod.CLASS_PATTERN,
            converted_fix=fixed_jsx,
            pattern_matches=1,
        )

    log.info(
        "fix_not_applied",
        reason="ambiguous_pattern" if matches else "pattern_not_found",
        pattern_matches=len(matches),
        suggested_jsx=fixed_jsx,
    )
    return FixApplication(
        content=fixed_jsx,
        method=ApplyMethod.UNAPPLIED,
        converted_fix=fixed_jsx,
        pattern_matches=len(matches),
    )


def apply_fix_to_source(source_code: str, original_html: str, fixed_html: str) -> str:
    """Apply a fix and return only the resulting text.

    Callers that need to know whether the fix landed in context should use
    apply_fix instead.
    """
    return apply_fix(source_code, original_html, fixed_html).content


def replace_lines(source_code: str, line_start: int, line_end: int, replacement: str) -> str:
    """Replace a 1-based inclusive line range with new text.

    Args:
        source_code: Full text of the source file
        line_start: First line to replace
        line_end: Last line to replace
        replacement: Text inserted in place of the range

    Returns:
        The updated source text

    Raises:
        ValueError: If the range is empty or outside the file
    """
    lines = source_code.split("\n")
    if line_start < 1 or line_end < line_start or line_end > len(lines):
        raise ValueError(
            f"Invalid line range {line_start}-{line_end} for a {len(lines)}-line file"
        )
    return "\n".join([*lines[: line_start - 1], replacement, *lines[line_end:]])


def apply_to_location(source_code: str, location: CodeLocation, fixed_html: str) -> str:
    """Replace a located region with the JSX form of the fix."""
    return replace_lines(
        source_code,
        location.line_start,
        location.line_end,
        html_to_jsx(fixed_html),
    )
