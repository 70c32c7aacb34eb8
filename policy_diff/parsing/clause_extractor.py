"""
Clause extraction from policy document trees.

Flattens sections and their direct sub-sections into numbered clauses so
two versions of the same document can be diffed by clause_id. A clause_id
comes from an explicit "clause_id" key or from a leading dotted number in
the section title ("4.2 Hospitalization Coverage").
"""

import logging
import re
from collections.abc import Mapping, Sequence
from typing import Any, Optional, Union

from ..errors import MalformedDocumentError
from .clause_model import Clause, PolicyDocument, as_text

logger = logging.getLogger(__name__)


class ClauseExtractor:
    """
    Extracts numbered clauses from a policy document.

    Sections without a recognisable clause number are skipped.
    """

    # Leading numbers that are quantities, as in "30 Day Pre-Hospitalization"
    QUANTITY_UNITS = ('days?', 'weeks?', 'months?', 'years?', 'hours?', 'lakhs?', 'percent')

    # "4.2 Title", "4.2. Title", "Section 4.2 - Title", "4.2: Title"
    CLAUSE_ID_PATTERN = re.compile(
        r'^\s*(?:(?:section|clause)\s+)?'
        r'(\d+(?:\.\d+)*)'
        r'(?:\.?\s*[-:–—]'
        r'|\.(?=\s|$)'
        r'|(?=\s|$)(?!\s+(?:' + '|'.join(QUANTITY_UNITS) + r')\b))'
        r'\s*(.*)$',
        re.IGNORECASE
    )

    def extract(self, document: Union[Mapping, PolicyDocument]) -> list[Clause]:
        """
        Extract clauses from a document.

        Args:
            document: Document mapping (optionally wrapped under "policy")
                or a PolicyDocument

        Returns:
            Clauses in document order

        Raises:
            MalformedDocumentError: if the document tree has the wrong shape
        """
        if isinstance(document, PolicyDocument):
            document = document.to_dict()
        if not isinstance(document, Mapping):
            raise MalformedDocumentError(
                f"expected a mapping, got {type(document).__name__}"
            )
        if isinstance(document.get('policy'), Mapping):
            document = document['policy']

        clauses = []
        for section in self._as_list(document.get('sections')):
            clause = self._to_clause(section)
            if clause:
                clauses.append(clause)
            for sub in self._as_list(section.get('sub_sections')):
                clause = self._to_clause(sub)
                if clause:
                    clauses.append(clause)

        return clauses

    def _as_list(self, value: Any) -> Sequence:
        if value is None:
            return ()
        if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
            raise MalformedDocumentError("sections must be a list")
        return value

    def _to_clause(self, section: Any) -> Optional[Clause]:
        """Convert one section into a clause, or None if it has no number."""
        if not isinstance(section, Mapping):
            raise MalformedDocumentError(
                f"section must be a mapping, got {type(section).__name__}"
            )

        title = as_text(section.get('title'), 'title')
        text = as_text(section.get('content'), 'content')

        if section.get('clause_id') is not None:
            return Clause(clause_id=str(section['clause_id']), title=title, text=text)

        clause_id, bare_title = self.split_title(title)
        if clause_id is None:
            logger.debug("Skipping unnumbered section %r", title)
            return None

        return Clause(clause_id=clause_id, title=bare_title, text=text)

    def split_title(self, title: str) -> tuple[Optional[str], str]:
        """Split "4.2 Hospitalization Coverage" into ("4.2", "Hospitalization Coverage")."""
        match = self.CLAUSE_ID_PATTERN.match(title)
        if not match:
            return None, title
        return match.group(1), match.group(2).strip()
