"""
policy_diff - Structured comparison of insurance policy documents.

Surfaces clause wording changes between policy versions and normalized
comparison fields across competing plans, for human review.
"""

__version__ = "0.1.0"
__author__ = "policy_diff Team"

from .comparison import diff_versions, highlight_modification
from .ingestion import normalize_fields

__all__ = [
    "diff_versions",
    "highlight_modification",
    "normalize_fields",
]
