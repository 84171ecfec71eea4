"""Classification of source lines that are not executable markup.

Fix text and classes often also appear in comments, doc blocks and type
declarations. These helpers let the locator skip such false positives.
"""

from __future__ import annotations

from collections.abc import Sequence

DEFAULT_COMMENT_LOOKBACK = 10

COMMENT_PREFIXES = ("//", "/*", "{/*", "*", "<!--")


def is_comment_line(line: str) -> bool:
    """Check if a line is a comment.

    Covers line comments, block comment openers and continuations, JSX and
    HTML comment openers, and trailing "// " comments on lines without markup.

    Args:
        line: A single source line

    Returns:
        True if the line is a comment
    """
    trimmed = line.strip()
    if trimmed.startswith(COMMENT_PREFIXES):
        return True
    return "// " in trimmed and "<" not in trimmed


def is_non_code_context(
    lines: Sequence[str],
    index: int,
    lookback: int = DEFAULT_COMMENT_LOOKBACK,
) -> bool:
    """Check if a line sits in a comment or type declaration.

    Args:
        lines: All lines of the source buffer
        index: 0-based index of the line to check
        lookback: How many preceding lines to scan for an open block comment

    Returns:
        True if the line is not executable markup
    """
    line = lines[index]
    trimmed = line.strip()

    if is_comment_line(line):
        return True

    # Union type members with trailing comments, type and interface openers
    if trimmed.startswith("|") and "//" in trimmed:
        return True
    if trimmed.startswith(("type ", "interface ")):
        return True

    in_block_comment = False
    for check_line in lines[max(0, index - lookback) : index + 1]:
        if "/*" in check_line:
            in_block_comment = True
        if "*/" in check_line:
            in_block_comment = False

    return in_block_comment
