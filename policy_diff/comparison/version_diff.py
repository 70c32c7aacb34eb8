"""
Clause-identity comparison between two versions of a policy.

Classifies every clause_id as:
- Added (only in the new version)
- Removed (only in the old version)
- Modified (in both, with different text)

Clauses whose text is identical on both sides are unchanged and reported
in no bucket. A title-only change is therefore invisible: text equality is
the sole change predicate.
"""

from collections.abc import Iterable

from ..parsing.clause_model import (
    Clause,
    ClauseLike,
    DiffResult,
    ModifiedClause,
    build_clause_index,
)


class VersionDiffer:
    """
    Diffs two clause lists keyed by clause_id.

    Each list must be internally unique by clause_id; duplicates are not
    checked and the last clause with a given id wins.
    """

    def diff(
        self,
        old_clauses: Iterable[ClauseLike],
        new_clauses: Iterable[ClauseLike]
    ) -> DiffResult:
        """
        Compare two versions of a clause list.

        Args:
            old_clauses: Clauses of the earlier version
            new_clauses: Clauses of the later version

        Returns:
            DiffResult where added/modified follow the new version's order
            and removed follows the old version's order
        """
        old_index = build_clause_index(old_clauses)
        new_index = build_clause_index(new_clauses)

        added: list[Clause] = []
        modified: list[ModifiedClause] = []

        for clause_id, new_clause in new_index.items():
            old_clause = old_index.get(clause_id)
            if old_clause is None:
                added.append(new_clause)
            elif old_clause.text != new_clause.text:
                modified.append(ModifiedClause(
                    clause_id=clause_id,
                    title=new_clause.title,
                    old_text=old_clause.text,
                    new_text=new_clause.text
                ))

        removed = [
            old_clause for clause_id, old_clause in old_index.items()
            if clause_id not in new_index
        ]

        return DiffResult(
            added=tuple(added),
            removed=tuple(removed),
            modified=tuple(modified)
        )


def diff_versions(
    old_clauses: Iterable[ClauseLike],
    new_clauses: Iterable[ClauseLike]
) -> DiffResult:
    """Diff two clause lists by clause_id."""
    return VersionDiffer().diff(old_clauses, new_clauses)
