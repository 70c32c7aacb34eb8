"""
Tests for word-level highlighting.
"""

import pytest
from policy_diff.comparison.word_highlight import (
    WordDiffHighlighter,
    change_ratio,
    highlight_modification,
)
from policy_diff.parsing.clause_model import TaggedWord


def exclusive_words(tokens):
    return [t.word for t in tokens if t.exclusive]


class TestWordDiffHighlighter:
    """Test suite for WordDiffHighlighter."""

    @pytest.fixture
    def highlighter(self):
        return WordDiffHighlighter()

    def test_changed_amount(self, highlighter):
        """Only the changed figure is exclusive on each side."""
        result = highlighter.highlight("the room rent is 2000", "the room rent is 3500")

        assert [t.word for t in result.old_tokens] == ["the", "room", "rent", "is", "2000"]
        assert exclusive_words(result.old_tokens) == ["2000"]
        assert exclusive_words(result.new_tokens) == ["3500"]
        assert result.removed_words == ["2000"]
        assert result.added_words == ["3500"]

    @pytest.mark.parametrize("text", [
        "",
        "90 days",
        "Room rent is capped at 1% of sum insured per day.",
        "  leading and   irregular   spacing ",
        "repeat repeat repeat",
    ])
    def test_identical_text_has_no_exclusive_words(self, highlighter, text):
        """Highlighting a text against itself tags nothing."""
        result = highlighter.highlight(text, text)

        assert not exclusive_words(result.old_tokens)
        assert not exclusive_words(result.new_tokens)

    def test_punctuation_stays_attached(self, highlighter):
        """'days.' and 'days' are different tokens."""
        result = highlighter.highlight("within 30 days.", "within 30 days")

        assert exclusive_words(result.old_tokens) == ["days."]
        assert exclusive_words(result.new_tokens) == ["days"]

    def test_case_sensitive(self, highlighter):
        """No case-folding is applied."""
        result = highlighter.highlight("Covered", "covered")

        assert exclusive_words(result.old_tokens) == ["Covered"]
        assert exclusive_words(result.new_tokens) == ["covered"]

    def test_reordered_words_are_unchanged(self, highlighter):
        """Set difference ignores position."""
        result = highlighter.highlight("pre and post", "post and pre")

        assert not exclusive_words(result.old_tokens)
        assert not exclusive_words(result.new_tokens)

    def test_duplicate_count_change_not_flagged(self, highlighter):
        """Dropping a repeated word leaves both sides unflagged."""
        result = highlighter.highlight("very very high", "very high")

        assert len(result.old_tokens) == 3
        assert not exclusive_words(result.old_tokens)

    def test_empty_side(self, highlighter):
        """Everything is exclusive against an empty text."""
        result = highlighter.highlight("", "newly added benefit")

        assert result.old_tokens == ()
        assert all(t.exclusive for t in result.new_tokens)

    def test_module_function(self):
        assert highlight_modification("a b", "a c") == WordDiffHighlighter().highlight("a b", "a c")


class TestChangeRatio:
    """Tests for change_ratio."""

    def test_empty(self):
        assert change_ratio(()) == 0.0

    def test_fraction(self):
        tokens = [TaggedWord("a"), TaggedWord("b", True), TaggedWord("c"), TaggedWord("d", True)]
        assert change_ratio(tokens) == 0.5


class TestHighlightedText:
    """Tests for HighlightedText serialization."""

    def test_to_dict(self):
        data = highlight_modification("30 days", "60 days").to_dict()

        assert data['old_tokens'] == [
            {'word': "30", 'exclusive': True},
            {'word': "days", 'exclusive': False},
        ]
        assert data['new_tokens'][0] == {'word': "60", 'exclusive': True}
