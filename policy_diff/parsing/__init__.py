"""Parsing module for the clause model and clause extraction."""

from .clause_model import (
    Clause,
    Section,
    PolicyDocument,
    ComparisonRecord,
    ModifiedClause,
    DiffResult,
    TaggedWord,
    HighlightedText,
    build_clause_index,
    ensure_unique_clause_ids,
)
from .clause_extractor import ClauseExtractor

__all__ = [
    "Clause",
    "Section",
    "PolicyDocument",
    "ComparisonRecord",
    "ModifiedClause",
    "DiffResult",
    "TaggedWord",
    "HighlightedText",
    "build_clause_index",
    "ensure_unique_clause_ids",
    "ClauseExtractor",
]
