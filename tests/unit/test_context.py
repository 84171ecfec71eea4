"""Tests for comment and declaration context detection."""

import pytest

from fix_locator.core.context import is_comment_line, is_non_code_context


class TestIsCommentLine:
    """Test single-line comment detection."""

    @pytest.mark.parametrize(
        "line",
        [
            "// Click Me",
            "    // indented",
            "/* block start",
            " * continuation",
            "{/* <button>Click Me</button> */}",
            "<!-- <button>Click Me</button> -->",
            "const label = 'x'; // trailing note",
        ],
    )
    def test_comment_lines(self, line):
        """Test that comment forms are detected."""
        assert is_comment_line(line)

    @pytest.mark.parametrize(
        "line",
        [
            '<button className="btn">Click Me</button>',
            '<a href="https://example.com">Docs</a>',
            "<div>// not a comment</div>",
            "const total = a / b;",
            "",
        ],
    )
    def test_code_lines(self, line):
        """Test that markup and code lines are not comments."""
        assert not is_comment_line(line)


class TestIsNonCodeContext:
    """Test multi-line non-code context detection."""

    def test_comment_line(self):
        """Test that a comment line is non-code."""
        lines = ["// Click Me", "<button>Click Me</button>"]
        assert is_non_code_context(lines, 0)
        assert not is_non_code_context(lines, 1)

    def test_inside_block_comment(self):
        """Test that lines inside an open block comment are non-code."""
        lines = ["/**", "  Example: <button>Click Me</button>", " */", "<button>Click Me</button>"]
        assert is_non_code_context(lines, 1)
        assert not is_non_code_context(lines, 3)

    def test_union_member_with_comment(self):
        """Test that union type members with trailing comments are non-code."""
        lines = ["type Variant =", "  | 'primary' // Click Me"]
        assert is_non_code_context(lines, 1)

    @pytest.mark.parametrize("line", ["type Props = {", "interface ButtonProps {"])
    def test_type_declarations(self, line):
        """Test that type and interface openers are non-code."""
        assert is_non_code_context([line], 0)

    def test_block_comment_beyond_lookback(self):
        """Test that block openers outside the lookback window are ignored."""
        lines = ["/*"] + ["  text"] * 11 + ["<button>Click Me</button>"]
        assert not is_non_code_context(lines, 12, lookback=10)
        assert is_non_code_context(lines, 12, lookback=12)
