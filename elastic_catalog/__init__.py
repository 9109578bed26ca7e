"""Relational catalog over Elasticsearch document mappings."""

from .catalog import Catalog, CatalogSnapshot, Column, Schema, Table, TableSource
from .errors import (
    CatalogError,
    CatalogLoadError,
    MalformedMappingError,
    SourceError,
    SourceUnavailableError,
)
from .mapping.types import DataType

__version__ = "0.1.0"

__all__ = [
    "Catalog",
    "CatalogSnapshot",
    "Column",
    "Schema",
    "Table",
    "TableSource",
    "DataType",
    "CatalogError",
    "CatalogLoadError",
    "SourceError",
    "SourceUnavailableError",
    "MalformedMappingError",
]
