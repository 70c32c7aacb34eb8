"""Comparison module for clause diffing, word highlighting and result assembly."""

from .version_diff import VersionDiffer, diff_versions
from .word_highlight import WordDiffHighlighter, highlight_modification, change_ratio
from .presenter import (
    ComparisonPresenter,
    VersionComparison,
    PlanComparison,
    FieldComparison,
    ClauseHighlight,
)

__all__ = [
    "VersionDiffer",
    "diff_versions",
    "WordDiffHighlighter",
    "highlight_modification",
    "change_ratio",
    "ComparisonPresenter",
    "VersionComparison",
    "PlanComparison",
    "FieldComparison",
    "ClauseHighlight",
]
