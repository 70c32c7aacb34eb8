"""
Assembly of comparison results for the presentation layer.

Combines the clause differ, the word highlighter and the field normalizer
into result objects that callers serialize and render.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, Union

import numpy as np

from ..ingestion.field_schema import DEFAULT_FIELD_SCHEMA, FieldSchema
from ..ingestion.normalizer import FieldNormalizer
from ..parsing.clause_extractor import ClauseExtractor
from ..parsing.clause_model import (
    ClauseLike,
    ComparisonRecord,
    DiffResult,
    HighlightedText,
    ModifiedClause,
    PolicyDocument,
    build_clause_index,
    ensure_unique_clause_ids,
)
from .version_diff import VersionDiffer
from .word_highlight import WordDiffHighlighter, change_ratio

logger = logging.getLogger(__name__)

UNAVAILABLE_MESSAGE = "comparison data unavailable"


@dataclass(frozen=True)
class ClauseHighlight:
    """A modified clause with its word-level highlight."""

    clause: ModifiedClause
    highlight: HighlightedText
    old_change_ratio: float
    new_change_ratio: float

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            **self.clause.to_dict(),
            'highlight': self.highlight.to_dict(),
            'old_change_ratio': round(self.old_change_ratio, 3),
            'new_change_ratio': round(self.new_change_ratio, 3),
        }


@dataclass(frozen=True)
class VersionComparison:
    """Clause-level comparison of two versions of one policy."""

    old_label: str
    new_label: str
    diff: DiffResult
    highlights: tuple[ClauseHighlight, ...]
    summary: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'old_label': self.old_label,
            'new_label': self.new_label,
            'summary': self.summary,
            'added': [c.to_dict() for c in self.diff.added],
            'removed': [c.to_dict() for c in self.diff.removed],
            'modified': [h.to_dict() for h in self.highlights],
        }


@dataclass(frozen=True)
class FieldComparison:
    """One normalized field across two plans."""

    field_name: str
    value_a: Any
    value_b: Any

    @property
    def differs(self) -> bool:
        return self.value_a != self.value_b

    def to_dict(self) -> dict:
        return {
            'field': self.field_name,
            'value_a': self.value_a,
            'value_b': self.value_b,
            'differs': self.differs,
        }


@dataclass(frozen=True)
class PlanComparison:
    """
    Side-by-side comparison of two plans' normalized fields.

    When either plan is not comparison-ready, available is False and
    no field rows are produced.
    """

    label_a: str
    label_b: str
    record_a: Optional[ComparisonRecord]
    record_b: Optional[ComparisonRecord]
    fields: tuple[FieldComparison, ...] = ()

    @property
    def available(self) -> bool:
        return self.record_a is not None and self.record_b is not None

    @property
    def message(self) -> Optional[str]:
        return None if self.available else UNAVAILABLE_MESSAGE

    @property
    def differing_fields(self) -> list[str]:
        return [f.field_name for f in self.fields if f.differs]

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'label_a': self.label_a,
            'label_b': self.label_b,
            'available': self.available,
            'message': self.message,
            'fields': [f.to_dict() for f in self.fields],
            'differing_fields': self.differing_fields,
        }


class ComparisonPresenter:
    """
    Builds comparison results for rendering.

    All methods are pure: they construct fresh result values per call and
    keep no state between calls.
    """

    def __init__(self, schema: FieldSchema = DEFAULT_FIELD_SCHEMA):
        self.schema = schema
        self.normalizer = FieldNormalizer(schema)
        self.differ = VersionDiffer()
        self.highlighter = WordDiffHighlighter()
        self.extractor = ClauseExtractor()

    def present_versions(
        self,
        old_clauses: Iterable[ClauseLike],
        new_clauses: Iterable[ClauseLike],
        old_label: str = "old",
        new_label: str = "new"
    ) -> VersionComparison:
        """
        Compare two clause lists and highlight every modified clause.

        Args:
            old_clauses: Clauses of the earlier version
            new_clauses: Clauses of the later version
            old_label: Display label for the earlier version
            new_label: Display label for the later version

        Returns:
            VersionComparison with diff, highlights and summary counts
        """
        old_index = build_clause_index(old_clauses)
        new_index = build_clause_index(new_clauses)

        diff = self.differ.diff(old_index.values(), new_index.values())

        highlights = []
        for mod in diff.modified:
            highlight = self.highlighter.highlight(mod.old_text, mod.new_text)
            highlights.append(ClauseHighlight(
                clause=mod,
                highlight=highlight,
                old_change_ratio=change_ratio(highlight.old_tokens),
                new_change_ratio=change_ratio(highlight.new_tokens)
            ))

        summary = self._summarize(diff, highlights, len(old_index), len(new_index))
        logger.debug(
            "Compared %s -> %s: %d added, %d removed, %d modified",
            old_label, new_label,
            summary['added'], summary['removed'], summary['modified']
        )

        return VersionComparison(
            old_label=old_label,
            new_label=new_label,
            diff=diff,
            highlights=tuple(highlights),
            summary=summary
        )

    def present_documents(
        self,
        old_document: Union[Mapping, PolicyDocument],
        new_document: Union[Mapping, PolicyDocument],
        old_label: str = "old",
        new_label: str = "new"
    ) -> VersionComparison:
        """
        Compare two versions of a document tree by their numbered clauses.

        Raises:
            MalformedDocumentError: if either tree has the wrong shape
            InvalidClauseSetError: if a clause_id repeats within one version
        """
        return self.present_versions(
            ensure_unique_clause_ids(self.extractor.extract(old_document)),
            ensure_unique_clause_ids(self.extractor.extract(new_document)),
            old_label=old_label,
            new_label=new_label
        )

    def compare_plans(
        self,
        document_a: Any,
        document_b: Any,
        label_a: str = "Plan A",
        label_b: str = "Plan B"
    ) -> PlanComparison:
        """
        Compare the normalized fields of two plans side by side.

        Args:
            document_a: First policy document
            document_b: Second policy document
            label_a: Display label for the first plan
            label_b: Display label for the second plan

        Returns:
            PlanComparison; unavailable if either document is not
            comparison-ready
        """
        record_a = self.normalizer.normalize(document_a)
        record_b = self.normalizer.normalize(document_b)

        if record_a is None or record_b is None:
            logger.info("Plan comparison unavailable for %s vs %s", label_a, label_b)
            return PlanComparison(
                label_a=label_a,
                label_b=label_b,
                record_a=record_a,
                record_b=record_b
            )

        rows = tuple(
            FieldComparison(
                field_name=name,
                value_a=record_a[name],
                value_b=record_b[name]
            )
            for name in self.schema.field_names
        )

        return PlanComparison(
            label_a=label_a,
            label_b=label_b,
            record_a=record_a,
            record_b=record_b,
            fields=rows
        )

    def _summarize(
        self,
        diff: DiffResult,
        highlights: list[ClauseHighlight],
        old_count: int,
        new_count: int
    ) -> dict[str, Any]:
        """Summary counts for a version comparison."""
        counts = diff.counts()
        # ids present on both sides minus those modified
        unchanged = new_count - counts['added'] - counts['modified']

        ratios = np.array(
            [max(h.old_change_ratio, h.new_change_ratio) for h in highlights],
            dtype=float
        )
        mean_ratio = float(np.mean(ratios)) if ratios.size else 0.0

        return {
            **counts,
            'unchanged': unchanged,
            'total_changes': sum(counts.values()),
            'old_clause_count': old_count,
            'new_clause_count': new_count,
            'mean_change_ratio': round(mean_ratio, 3),
        }
