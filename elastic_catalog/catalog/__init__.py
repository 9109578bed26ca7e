"""Catalog system resolving Elasticsearch mappings into relational metadata."""

from .schema import Schema, Table, TableSource, Column
from .loader import CatalogLoader
from .merger import SourceOutcome, TableColumnMerger, TableResolution
from .catalog import Catalog, CatalogSnapshot

__all__ = [
    "Catalog",
    "CatalogSnapshot",
    "CatalogLoader",
    "TableColumnMerger",
    "TableResolution",
    "SourceOutcome",
    "Schema",
    "Table",
    "TableSource",
    "Column",
]
