"""
Exception taxonomy for policy comparison.
"""


class PolicyDiffError(Exception):
    """Base class for policy comparison errors."""


class MalformedDocumentError(PolicyDiffError, ValueError):
    """A policy document does not have the expected nested shape."""


class InvalidClauseSetError(PolicyDiffError, ValueError):
    """A clause list contains the same clause_id more than once."""

    def __init__(self, duplicate_ids: list[str]):
        self.duplicate_ids = duplicate_ids
        super().__init__(
            f"Duplicate clause_id(s) in one version: {', '.join(duplicate_ids)}"
        )
