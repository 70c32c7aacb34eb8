"""
Field normalization for policy documents.

Extracts a flat ComparisonRecord from a nested policy document by matching
section titles against configured keyword phrases.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Iterator, Optional, Union

from ..errors import MalformedDocumentError
from ..parsing.clause_model import ComparisonRecord, PolicyDocument
from .field_schema import DEFAULT_FIELD_SCHEMA, FieldRule, FieldSchema

logger = logging.getLogger(__name__)


class FieldNormalizer:
    """
    Normalizes policy documents into comparison records.

    Handles:
    - Optional "policy" wrapper around the document root
    - Metadata scalars with documented defaults
    - Keyword search over sections and their direct sub-sections
    - Null record for structurally malformed input
    """

    def __init__(self, schema: FieldSchema = DEFAULT_FIELD_SCHEMA):
        """Initialize the FieldNormalizer.

        Args:
            schema: Keyword, default and duration configuration.
        """
        self.schema = schema

    def normalize(self, document: Union[Mapping, PolicyDocument, Any]) -> Optional[ComparisonRecord]:
        """
        Normalize a policy document.

        Args:
            document: Document mapping (optionally wrapped under "policy")
                or a PolicyDocument

        Returns:
            A fully populated ComparisonRecord, or None when the document
            is not comparison-ready
        """
        if isinstance(document, PolicyDocument):
            document = document.to_dict()

        try:
            root = self._unwrap(document)
            values = self._extract_metadata(root)
            sections = list(self._iter_sections(root))
            for rule in self.schema.section_rules:
                values[rule.name] = self._match_rule(rule, sections, values)
        except MalformedDocumentError as e:
            logger.warning("Document is not comparison-ready: %s", e)
            return None

        return ComparisonRecord(values)

    def _unwrap(self, document: Any) -> Mapping:
        """Return the document root, unwrapping one "policy" level."""
        if not isinstance(document, Mapping):
            raise MalformedDocumentError(
                f"expected a mapping, got {type(document).__name__}"
            )
        if isinstance(document.get('policy'), Mapping):
            return document['policy']
        return document

    def _extract_metadata(self, root: Mapping) -> dict[str, Any]:
        """Read root-level scalars, counting the hospital list."""
        values = {}
        for name, default in self.schema.metadata_defaults.items():
            value = root.get(name)
            if name == 'network_hospitals':
                values[name] = self._count_hospitals(value)
            else:
                values[name] = default if value is None else value
        return values

    def _count_hospitals(self, hospitals: Any) -> int:
        if hospitals is None:
            return 0
        if isinstance(hospitals, (str, bytes)) or not isinstance(hospitals, Sequence):
            raise MalformedDocumentError("'network_hospitals' must be a list")
        return len(hospitals)

    def _iter_sections(self, root: Mapping) -> Iterator[tuple[str, Any]]:
        """Yield (title, content) for sections and their direct sub-sections."""
        for section in self._as_list(root.get('sections'), 'sections'):
            yield self._title_and_content(section)
            # sub_sections of sub_sections are not traversed
            for sub in self._as_list(section.get('sub_sections'), 'sub_sections'):
                yield self._title_and_content(sub)

    def _as_list(self, value: Any, key: str) -> Sequence:
        if value is None:
            return ()
        if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
            raise MalformedDocumentError(f"'{key}' must be a list")
        return value

    def _title_and_content(self, section: Any) -> tuple[str, Any]:
        if not isinstance(section, Mapping):
            raise MalformedDocumentError(
                f"section must be a mapping, got {type(section).__name__}"
            )
        title = section.get('title')
        if title is None:
            title = ""
        elif not isinstance(title, str):
            raise MalformedDocumentError("section 'title' must be a string")
        return title, section.get('content')

    def _match_rule(
        self,
        rule: FieldRule,
        sections: list[tuple[str, Any]],
        metadata: dict[str, Any]
    ) -> Any:
        """First section whose title contains a keyword wins."""
        for title, content in sections:
            if rule.matches(title):
                if content is None:
                    break
                return content

        if rule.default_template is not None:
            return rule.default_template.format(**metadata)
        return rule.default


_default_normalizer = FieldNormalizer()


def normalize_fields(document: Any) -> Optional[ComparisonRecord]:
    """Normalize a document with the default field schema."""
    return _default_normalizer.normalize(document)
