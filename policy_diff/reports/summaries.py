"""
Report generation for policy comparisons.

Renders version comparisons, plan comparisons and normalized records as
Markdown or JSON for human review.
"""

import json
from collections.abc import Sequence
from datetime import datetime
from typing import Optional

from ..comparison.presenter import PlanComparison, VersionComparison
from ..parsing.clause_model import ComparisonRecord, TaggedWord


def render_tokens(tokens: Sequence[TaggedWord], marker: str) -> str:
    """Join tokens, wrapping exclusive ones in a Markdown marker (e.g. "**")."""
    return " ".join(
        f"{marker}{t.word}{marker}" if t.exclusive else t.word
        for t in tokens
    )


def field_label(name: str) -> str:
    return name.replace('_', ' ').title()


class ReportGenerator:
    """
    Generates reports from policy comparisons.

    Reports present wording changes for human review; they do not judge
    whether a change favours the policyholder.
    """

    STANDARD_DISCLAIMERS = [
        "This report highlights wording changes only and does not interpret coverage.",
        "Word highlights mark words missing from the other version; moved words are not flagged.",
        "Refer to the issued policy document for binding terms.",
    ]

    # Markdown markers for removed/added words
    REMOVED_MARKER = "~~"
    ADDED_MARKER = "**"

    def __init__(self, report_prefix: str = "POLICY-DIFF"):
        """Initialize report generator."""
        self.report_prefix = report_prefix
        self._report_counter = 0

    def _next_report_id(self) -> str:
        self._report_counter += 1
        return f"{self.report_prefix}-{self._report_counter:05d}"

    def generate_version_report(
        self,
        comparison: VersionComparison,
        title: Optional[str] = None
    ) -> str:
        """
        Generate a Markdown report for a version comparison.

        Args:
            comparison: Result of ComparisonPresenter.present_versions
            title: Optional report title

        Returns:
            Markdown string
        """
        lines = []
        summary = comparison.summary

        lines.append(f"# {title or 'Policy Version Comparison'}")
        lines.append(f"**Report ID:** {self._next_report_id()}")
        lines.append(f"**Generated:** {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        lines.append(f"**Versions:** {comparison.old_label} → {comparison.new_label}")
        lines.append("")

        lines.append("## Summary")
        lines.append(f"- **Added Clauses:** {summary.get('added', 0)}")
        lines.append(f"- **Removed Clauses:** {summary.get('removed', 0)}")
        lines.append(f"- **Modified Clauses:** {summary.get('modified', 0)}")
        lines.append(f"- **Unchanged Clauses:** {summary.get('unchanged', 0)}")
        lines.append(f"- **Mean Change Ratio:** {summary.get('mean_change_ratio', 0.0):.3f}")
        lines.append("")

        if comparison.diff.is_empty:
            lines.append("*No clause changes between these versions.*")
            lines.append("")

        if comparison.diff.added:
            lines.append("## Added Clauses")
            for clause in comparison.diff.added:
                lines.append(f"### {clause.clause_id} {clause.title}")
                lines.append(clause.text)
                lines.append("")

        if comparison.diff.removed:
            lines.append("## Removed Clauses")
            for clause in comparison.diff.removed:
                lines.append(f"### {clause.clause_id} {clause.title}")
                lines.append(clause.text)
                lines.append("")

        if comparison.highlights:
            lines.append("## Modified Clauses")
            for item in comparison.highlights:
                lines.append(f"### {item.clause.clause_id} {item.clause.title}")
                lines.append(
                    f"- **Before:** "
                    f"{render_tokens(item.highlight.old_tokens, self.REMOVED_MARKER)}"
                )
                lines.append(
                    f"- **After:** "
                    f"{render_tokens(item.highlight.new_tokens, self.ADDED_MARKER)}"
                )
                lines.append("")

        lines.extend(self._footer())
        return "\n".join(lines)

    def generate_plan_report(self, comparison: PlanComparison) -> str:
        """
        Generate a Markdown side-by-side table for two plans.

        An unavailable comparison renders the unavailable message instead of
        a partial table.
        """
        lines = []
        lines.append(f"# Plan Comparison: {comparison.label_a} vs {comparison.label_b}")
        lines.append(f"**Report ID:** {self._next_report_id()}")
        lines.append("")

        if not comparison.available:
            lines.append(f"*{comparison.message}*")
            lines.append("")
            lines.extend(self._footer())
            return "\n".join(lines)

        lines.append(f"| Field | {comparison.label_a} | {comparison.label_b} |")
        lines.append("|---|---|---|")
        for row in comparison.fields:
            name = field_label(row.field_name)
            if row.differs:
                name = f"**{name}**"
            lines.append(f"| {name} | {row.value_a} | {row.value_b} |")
        lines.append("")
        lines.append(f"*{len(comparison.differing_fields)} field(s) differ.*")
        lines.append("")

        lines.extend(self._footer())
        return "\n".join(lines)

    def generate_record_report(
        self,
        name: str,
        record: Optional[ComparisonRecord]
    ) -> str:
        """Generate a Markdown listing of one normalized record."""
        lines = [f"## {name}"]
        if record is None:
            lines.append("*Not comparison-ready.*")
        else:
            for key, value in record.items():
                lines.append(f"- **{field_label(key)}**: {value}")
        lines.append("")
        return "\n".join(lines)

    def to_json(self, result, indent: int = 2) -> str:
        """Serialize any result exposing to_dict()."""
        return json.dumps(result.to_dict(), indent=indent, default=str)

    def _footer(self) -> list[str]:
        lines = ["## Notes"]
        for disclaimer in self.STANDARD_DISCLAIMERS:
            lines.append(f"- {disclaimer}")
        lines.append("")
        lines.append("---")
        lines.append("*Generated by policy_diff.*")
        return lines
