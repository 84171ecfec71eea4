"""Tests for match confidence scoring."""

import pytest

from fix_locator.core.scorer import calculate_match_confidence, level_for_score
from fix_locator.models import ConfidenceLevel

CARD_HTML = '<div class="card-header text-lg bg-white rounded-xl">Welcome</div>'


class TestLevelForScore:
    """Test score to level bucketing."""

    @pytest.mark.parametrize(
        "score,level",
        [
            (100, ConfidenceLevel.HIGH),
            (80, ConfidenceLevel.HIGH),
            (79.9, ConfidenceLevel.MEDIUM),
            (50, ConfidenceLevel.MEDIUM),
            (49.9, ConfidenceLevel.LOW),
            (20, ConfidenceLevel.LOW),
            (19.9, ConfidenceLevel.NONE),
            (0, ConfidenceLevel.NONE),
        ],
    )
    def test_thresholds(self, score, level):
        """Test the level boundaries."""
        assert level_for_score(score) is level


class TestCalculateMatchConfidence:
    """Test confidence calculation."""

    def test_partial_class_overlap_is_low(self):
        """Test that sharing 2 of 4 classes, no text and no tag scores 30."""
        source = '<section className="card-header text-lg">Other</section>'
        result = calculate_match_confidence(source, CARD_HTML, "Welcome")

        assert result.score == pytest.approx(30)
        assert result.level is ConfidenceLevel.LOW
        assert result.matched_classes == ("card-header", "text-lg")
        assert result.matched_text is None
        assert result.details == "Possible match: 2 classes"

    def test_full_match_is_capped(self):
        """Test that classes, text and tag together are capped at 100."""
        source = '<div className="card-header text-lg bg-white rounded-xl">Welcome</div>'
        result = calculate_match_confidence(source, CARD_HTML, "Welcome")

        assert result.score == 100
        assert result.level is ConfidenceLevel.HIGH
        assert result.matched_text == "Welcome"
        assert result.details == "Strong match: 4 classes + text"

    def test_text_and_tag_without_classes(self):
        """Test that text plus tag scores 50 when the original has no classes."""
        result = calculate_match_confidence(
            "<button onClick={go}>Submit</button>",
            "<button>Submit</button>",
            "Submit",
        )

        assert result.score == 50
        assert result.level is ConfidenceLevel.MEDIUM
        assert result.details == "Likely match: 0 classes + text"

    def test_no_overlap(self):
        """Test that unrelated source scores zero."""
        result = calculate_match_confidence(
            '<nav className="menu">Home</nav>', CARD_HTML, "Welcome"
        )

        assert result.score == 0
        assert result.level is ConfidenceLevel.NONE
        assert result.matched_classes == ()
        assert result.details == "No significant match found"

    def test_matched_classes_follow_source_order(self):
        """Test that matched classes are listed in source order."""
        source = '<p className="rounded-xl card-header">x</p>'
        result = calculate_match_confidence(source, CARD_HTML, None)
        assert result.matched_classes == ("rounded-xl", "card-header")

    def test_tag_bonus_requires_same_tag(self):
        """Test that the tag bonus applies only to the same leading tag."""
        same = calculate_match_confidence("<div>x</div>", CARD_HTML, None)
        other = calculate_match_confidence("<span>x</span>", CARD_HTML, None)
        assert same.score == 10
        assert other.score == 0

    def test_empty_inputs(self):
        """Test that empty inputs never raise."""
        result = calculate_match_confidence("", "", None)
        assert result.score == 0
        assert result.level is ConfidenceLevel.NONE

    def test_deterministic(self):
        """Test that repeated calls give equal results."""
        source = '<div className="card-header">Welcome</div>'
        assert calculate_match_confidence(source, CARD_HTML, "Welcome") == (
            calculate_match_confidence(source, CARD_HTML, "Welcome")
        )
