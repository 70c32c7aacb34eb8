"""Ingestion module for loading and normalizing policy documents."""

from .loaders import DocumentLoader, JSONLoader, PolicyLoader
from .normalizer import FieldNormalizer, normalize_fields
from .field_schema import FieldSchema, FieldRule, DEFAULT_FIELD_SCHEMA

__all__ = [
    "DocumentLoader",
    "JSONLoader",
    "PolicyLoader",
    "FieldNormalizer",
    "normalize_fields",
    "FieldSchema",
    "FieldRule",
    "DEFAULT_FIELD_SCHEMA",
]
