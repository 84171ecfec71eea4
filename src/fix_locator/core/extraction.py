"""Feature extraction from raw markup snippets.

This module pulls the comparison features used by the scorer and the locator
out of an HTML or JSX string:
- Visible text content (the most reliable search anchor)
- Class tokens from CSS selectors
- Class attribute values in either dialect (class= or className=)
- "Significant" classes that carry layout or visual meaning

Everything here is regex based. Malformed input degrades to empty results
rather than raising.
"""

from __future__ import annotations

import re

# First run of 2-50 characters between a '>' and the next '<'
TEXT_CONTENT_PATTERN = re.compile(r">([^<]{2,50})<")
# Whitespace and punctuation only, e.g. "..." or " - "
PUNCTUATION_ONLY_PATTERN = re.compile(r"^[\W_]+$")

SELECTOR_CLASS_PATTERN = re.compile(r"\.([a-zA-Z0-9_\-\[:\]]+)")
PSEUDO_CLASS_PATTERN = re.compile(r"^(hover|focus|active|group-hover)")
MAX_SELECTOR_CLASSES = 5

# class="..." / className='...' / className={`...`} / className={"..."}
CLASS_ATTR_PATTERN = re.compile(
    r"""(?:class|className)=(?:\{\s*[`"']([^`"']+)[`"']|["'{`]([^"'}`]+)["'}`])""",
    re.IGNORECASE,
)

UTILITY_CLASS_PATTERN = re.compile(
    r"^(w-|h-|p-|m-|px-|py-|mx-|my-|pt-|pb-|pl-|pr-|mt-|mb-|ml-|mr-)\d"
)
RESPONSIVE_PREFIX_PATTERN = re.compile(r"^(sm:|md:|lg:|xl:|2xl:)")

TAG_NAME_PATTERN = re.compile(r"<(\w+)")


def extract_text_content(html: str) -> str | None:
    """Extract a short visible text anchor from markup.

    Only the first text run between tags is considered. Text that is
    shorter than 2 characters once trimmed, or made of whitespace and
    punctuation only, is not a reliable anchor.

    Args:
        html: Raw markup snippet

    Returns:
        Trimmed text, or None if there is no usable anchor
    """
    match = TEXT_CONTENT_PATTERN.search(html or "")
    if not match:
        return None

    text = match.group(1).strip()
    if len(text) < 2 or PUNCTUATION_ONLY_PATTERN.match(text):
        return None
    return text


def extract_class_names(selector: str) -> list[str]:
    """Extract class tokens from a CSS selector.

    Tokens of 3 characters or fewer and interaction pseudo-classes are
    dropped. At most 5 tokens are returned, in the order they appear.

    Args:
        selector: CSS selector such as "div.card > button.btn-primary"

    Returns:
        Deduplicated list of class tokens
    """
    tokens: list[str] = []
    for token in SELECTOR_CLASS_PATTERN.findall(selector or ""):
        if len(token) <= 3 or PSEUDO_CLASS_PATTERN.match(token):
            continue
        if token not in tokens:
            tokens.append(token)
    return tokens[:MAX_SELECTOR_CLASSES]


def extract_all_classes(code: str) -> list[str]:
    """Extract every class from class-like attributes in HTML or JSX.

    Args:
        code: Markup or source fragment

    Returns:
        Deduplicated class names in order of first appearance
    """
    classes: list[str] = []
    for match in CLASS_ATTR_PATTERN.finditer(code or ""):
        value = match.group(1) or match.group(2) or ""
        classes.extend(c for c in value.split() if c)
    return list(dict.fromkeys(classes))


def is_significant_class(name: str) -> bool:
    """Check if a class looks semantically meaningful."""
    if "text-" in name or "bg-" in name:
        return True
    if "border-" in name or "rounded" in name:
        return True
    if "flex" in name or "grid" in name or "font-" in name:
        return True
    # Spacing and sizing utilities such as p-4 or mt-2
    if UTILITY_CLASS_PATTERN.match(name):
        return False
    if RESPONSIVE_PREFIX_PATTERN.match(name):
        return True
    return len(name) > 4


def extract_significant_classes(code: str) -> list[str]:
    """Extract classes that carry layout or visual meaning.

    Args:
        code: Markup or source fragment

    Returns:
        Significant classes in order of first appearance
    """
    return [c for c in extract_all_classes(code) if is_significant_class(c)]


def extract_tag_name(code: str) -> str | None:
    """Return the lowercased name of the first tag in a fragment."""
    match = TAG_NAME_PATTERN.search(code or "")
    return match.group(1).lower() if match else None


def normalize_for_comparison(code: str) -> str:
    """Normalize HTML or JSX so the two dialects compare equal.

    - Converts class= to className= and for= to htmlFor=
    - Normalizes quotes to double quotes
    - Collapses whitespace and drops it between tags

    Args:
        code: Markup fragment

    Returns:
        Normalized single-line fragment
    """
    normalized = re.sub(r"\bclass=", "className=", code, flags=re.IGNORECASE)
    normalized = re.sub(r"\bfor=", "htmlFor=", normalized, flags=re.IGNORECASE)
    normalized = normalized.replace("'", '"')
    normalized = re.sub(r"\s+", " ", normalized)
    normalized = re.sub(r">\s+<", "><", normalized)
    return normalized.strip()
