"""
Shared value types for policy comparison.

Every shape here is immutable and built fresh per comparison call:
- Section / PolicyDocument: the nested source document tree
- Clause: one numbered unit of policy text, keyed by clause_id
- ComparisonRecord: flat field name -> value mapping
- DiffResult / ModifiedClause: clause-level version differences
- TaggedWord / HighlightedText: word-level highlight of one modified clause
"""

from collections import Counter
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Union

from ..errors import InvalidClauseSetError, MalformedDocumentError


@dataclass(frozen=True)
class Section:
    """A titled content block; sub_sections are one level deep only."""

    title: str
    content: str = ""
    sub_sections: tuple["Section", ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping) -> "Section":
        """Build a section from a mapping, ignoring nesting below one level."""
        return cls(
            title=data.get('title') or "",
            content=data.get('content') or "",
            sub_sections=tuple(
                cls(title=sub.get('title') or "", content=sub.get('content') or "")
                for sub in data.get('sub_sections') or ()
            ),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'title': self.title,
            'content': self.content,
            'sub_sections': [s.to_dict() for s in self.sub_sections],
        }


@dataclass(frozen=True)
class PolicyDocument:
    """Root of a policy document tree."""

    policy_name: str = ""
    insurer: str = ""
    sum_insured: Union[int, float] = 0
    premium_amount: Union[int, float] = 0
    policy_type: str = ""
    network_hospitals: tuple = ()
    sections: tuple[Section, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping) -> "PolicyDocument":
        """Build a document from a mapping, unwrapping an optional "policy" key."""
        if isinstance(data.get('policy'), Mapping):
            data = data['policy']
        return cls(
            policy_name=data.get('policy_name') or "",
            insurer=data.get('insurer') or "",
            sum_insured=data.get('sum_insured') or 0,
            premium_amount=data.get('premium_amount') or 0,
            policy_type=data.get('policy_type') or "",
            network_hospitals=tuple(data.get('network_hospitals') or ()),
            sections=tuple(Section.from_dict(s) for s in data.get('sections') or ()),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'policy_name': self.policy_name,
            'insurer': self.insurer,
            'sum_insured': self.sum_insured,
            'premium_amount': self.premium_amount,
            'policy_type': self.policy_type,
            'network_hospitals': list(self.network_hospitals),
            'sections': [s.to_dict() for s in self.sections],
        }


@dataclass(frozen=True)
class Clause:
    """An identifiable, numbered unit of policy text."""

    clause_id: str
    title: str
    text: str

    @classmethod
    def from_dict(cls, data: Mapping) -> "Clause":
        return cls(
            clause_id=str(data['clause_id']),
            title=as_text(data.get('title'), 'title'),
            text=as_text(data.get('text'), 'text'),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'clause_id': self.clause_id,
            'title': self.title,
            'text': self.text,
        }


class ComparisonRecord(Mapping):
    """
    Read-only mapping of canonical comparison fields.

    A document that cannot be normalized has no record at all (None);
    a ComparisonRecord is always fully populated.
    """

    __slots__ = ('_values',)

    def __init__(self, values: Mapping[str, Any]):
        self._values = MappingProxyType(dict(values))

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ComparisonRecord({dict(self._values)!r})"

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return dict(self._values)


@dataclass(frozen=True)
class ModifiedClause:
    """A clause present in both versions whose text differs."""

    clause_id: str
    title: str
    old_text: str
    new_text: str

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'clause_id': self.clause_id,
            'title': self.title,
            'old_text': self.old_text,
            'new_text': self.new_text,
        }


@dataclass(frozen=True)
class DiffResult:
    """
    Clause-level differences between two versions.

    A clause_id lands in at most one bucket; ids whose text is identical
    on both sides appear in none.
    """

    added: tuple[Clause, ...] = ()
    removed: tuple[Clause, ...] = ()
    modified: tuple[ModifiedClause, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.modified)

    def counts(self) -> dict[str, int]:
        return {
            'added': len(self.added),
            'removed': len(self.removed),
            'modified': len(self.modified),
        }

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'added': [c.to_dict() for c in self.added],
            'removed': [c.to_dict() for c in self.removed],
            'modified': [m.to_dict() for m in self.modified],
        }


@dataclass(frozen=True)
class TaggedWord:
    """One whitespace-delimited token and whether the other side lacks it."""

    word: str
    exclusive: bool = False

    def to_dict(self) -> dict:
        return {'word': self.word, 'exclusive': self.exclusive}


@dataclass(frozen=True)
class HighlightedText:
    """Parallel token sequences for the old and new text of one clause."""

    old_tokens: tuple[TaggedWord, ...] = ()
    new_tokens: tuple[TaggedWord, ...] = ()

    @property
    def removed_words(self) -> list[str]:
        return [t.word for t in self.old_tokens if t.exclusive]

    @property
    def added_words(self) -> list[str]:
        return [t.word for t in self.new_tokens if t.exclusive]

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'old_tokens': [t.to_dict() for t in self.old_tokens],
            'new_tokens': [t.to_dict() for t in self.new_tokens],
        }


ClauseLike = Union[Clause, Mapping]


def as_text(value: Any, field_name: str) -> str:
    """
    Coerce a scalar title or text value to str; None becomes "".

    Raises:
        MalformedDocumentError: for lists, mappings and other non-scalars
    """
    if value is None:
        return ""
    if isinstance(value, (str, int, float)):
        return str(value)
    raise MalformedDocumentError(
        f"{field_name} must be a string, got {type(value).__name__}"
    )


def as_clause(item: ClauseLike) -> Clause:
    """Coerce a clause-shaped mapping into a Clause."""
    if isinstance(item, Clause):
        return item
    return Clause.from_dict(item)


def build_clause_index(clauses: Iterable[ClauseLike]) -> dict[str, Clause]:
    """
    Build a clause_id -> Clause lookup in declaration order.

    Uniqueness of clause_id is a precondition; on duplicates the last
    clause wins. Use ensure_unique_clause_ids upstream to reject them.
    """
    index: dict[str, Clause] = {}
    for item in clauses:
        clause = as_clause(item)
        index[clause.clause_id] = clause
    return index


def ensure_unique_clause_ids(clauses: Iterable[ClauseLike]) -> list[Clause]:
    """
    Validate that no clause_id repeats within one version.

    Returns:
        The clauses as a list of Clause objects

    Raises:
        InvalidClauseSetError: listing every duplicated id
    """
    coerced = [as_clause(c) for c in clauses]
    counts = Counter(c.clause_id for c in coerced)
    duplicates = [clause_id for clause_id, n in counts.items() if n > 1]
    if duplicates:
        raise InvalidClauseSetError(duplicates)
    return coerced
