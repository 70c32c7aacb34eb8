"""
Loaders for policy documents and clause lists stored as JSON.
"""

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from ..errors import MalformedDocumentError
from ..parsing.clause_extractor import ClauseExtractor
from ..parsing.clause_model import Clause, ensure_unique_clause_ids

logger = logging.getLogger(__name__)


class DocumentLoader(ABC):
    """Abstract base class for policy document loaders."""

    @abstractmethod
    def load(self, path: str) -> Any:
        """Load a document from the given path."""
        pass

    @abstractmethod
    def supports(self, path: str) -> bool:
        """Check if this loader supports the given file type."""
        pass


class JSONLoader(DocumentLoader):
    """Loader for JSON policy documents."""

    def supports(self, path: str) -> bool:
        return path.lower().endswith('.json')

    def load(self, path: str) -> Any:
        """
        Load a JSON document.

        The payload is returned as parsed; shape validation is left to the
        normalizer so a malformed document yields a null record rather
        than a load failure.

        Args:
            path: Path to the JSON file

        Returns:
            Parsed JSON payload

        Raises:
            FileNotFoundError: if the path does not exist
            ValueError: if the file is not valid JSON
        """
        if not os.path.exists(path):
            raise FileNotFoundError(f"JSON file not found: {path}")

        with open(path, 'r', encoding='utf-8') as f:
            try:
                return json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in {path}: {e}") from e


class PolicyLoader:
    """Selects a loader by file type and turns payloads into clause lists."""

    def __init__(self):
        self.loaders = [
            JSONLoader(),
        ]
        self.extractor = ClauseExtractor()

    def load(self, path: str) -> Any:
        """Load a document using the appropriate loader."""
        for loader in self.loaders:
            if loader.supports(path):
                return loader.load(path)

        raise ValueError(f"Unsupported file type: {path}")

    def load_clauses(self, path: str) -> list[Clause]:
        """
        Load a clause list for version diffing.

        Accepts either a JSON list of clause objects or a policy document
        whose numbered sections become clauses.

        Raises:
            InvalidClauseSetError: if a clause_id repeats within the file
            MalformedDocumentError: if the payload is neither shape
        """
        payload = self.load(path)

        if isinstance(payload, list):
            try:
                clauses = [Clause.from_dict(item) for item in payload]
            except (KeyError, AttributeError, TypeError) as e:
                raise MalformedDocumentError(f"Invalid clause list in {path}: {e}") from e
        else:
            clauses = self.extractor.extract(payload)

        logger.debug("Loaded %d clauses from %s", len(clauses), path)
        return ensure_unique_clause_ids(clauses)

    def load_directory(self, directory: str) -> dict[str, Any]:
        """Load all supported documents from a directory, keyed by file stem."""
        documents = {}
        path = Path(directory)

        for file_path in sorted(path.rglob("*")):
            if file_path.is_file():
                for loader in self.loaders:
                    if loader.supports(str(file_path)):
                        try:
                            documents[file_path.stem] = loader.load(str(file_path))
                        except ValueError as e:
                            logger.warning("Failed to load %s: %s", file_path, e)
                        break

        return documents
