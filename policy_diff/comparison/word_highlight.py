"""
Word-level highlighting of a modified clause.

Tokens are whitespace-delimited (punctuation stays attached). A token is
exclusive when the other side's set of distinct words lacks it. This is a
set difference, not a positional alignment: reordered words show as
unchanged on both sides, and changes in how often a word repeats are only
approximated.
"""

from collections.abc import Sequence

from ..parsing.clause_model import HighlightedText, TaggedWord


class WordDiffHighlighter:
    """Tags each token of a clause's old and new text."""

    def highlight(self, old_text: str, new_text: str) -> HighlightedText:
        """
        Highlight words exclusive to either side.

        Args:
            old_text: Clause text before the change
            new_text: Clause text after the change

        Returns:
            HighlightedText with one TaggedWord per token on each side
        """
        old_words = old_text.split()
        new_words = new_text.split()

        return HighlightedText(
            old_tokens=self._tag(old_words, set(new_words)),
            new_tokens=self._tag(new_words, set(old_words))
        )

    def _tag(self, words: list[str], other_side: set[str]) -> tuple[TaggedWord, ...]:
        return tuple(
            TaggedWord(word=word, exclusive=word not in other_side)
            for word in words
        )


def change_ratio(tokens: Sequence[TaggedWord]) -> float:
    """Fraction of tokens tagged exclusive; 0.0 for no tokens."""
    if not tokens:
        return 0.0
    return sum(1 for t in tokens if t.exclusive) / len(tokens)


def highlight_modification(old_text: str, new_text: str) -> HighlightedText:
    """Highlight one modified clause's old and new text."""
    return WordDiffHighlighter().highlight(old_text, new_text)
