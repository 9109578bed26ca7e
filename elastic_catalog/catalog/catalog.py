"""Catalog exposing Elasticsearch document types as relational tables."""

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Optional, Set

from ..config import Config
from ..errors import CatalogLoadError
from .loader import CatalogLoader
from .merger import TableColumnMerger
from .schema import Schema, Table

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogSnapshot:
    """Fully resolved schema -> table -> columns map.

    Never modified after the cache installs it; a refresh builds a new one.
    """

    schemas: Dict[str, Schema]
    built_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def get_schema(self, name: str) -> Optional[Schema]:
        return self.schemas.get(name.lower())

    def get_table(self, schema_name: str, table_name: str) -> Optional[Table]:
        schema = self.get_schema(schema_name)
        if schema is None:
            return None
        return schema.get_table(table_name)

    def __repr__(self) -> str:
        return f"CatalogSnapshot(schemas={len(self.schemas)}, built_at={self.built_at.isoformat()})"


class Catalog:
    """Central catalog caching the resolved schemas.

    The snapshot is built lazily on first access and rebuilt from scratch
    by ``refresh``. ``get_table`` always refreshes before the lookup, so
    each call re-fetches every table's mappings.
    """

    def __init__(
        self,
        catalog_uri: str,
        loader: Optional[CatalogLoader] = None,
        merger: Optional[TableColumnMerger] = None,
    ):
        """Initialize catalog.

        Args:
            catalog_uri: Location of the catalog document
            loader: Catalog document loader
            merger: Resolves table columns from their sources
        """
        self.catalog_uri = catalog_uri
        self.loader = loader or CatalogLoader()
        self.merger = merger or TableColumnMerger()
        self._snapshot: Optional[CatalogSnapshot] = None
        self._build_lock = threading.Lock()

    @classmethod
    def from_config(cls, config: Config) -> "Catalog":
        """Create a catalog wired from configuration."""
        if not config.catalog.uri:
            raise ValueError("catalog.uri is not configured")
        loader = CatalogLoader(timeout_seconds=config.fetch.timeout_seconds)
        merger = TableColumnMerger(fetch_config=config.fetch)
        return cls(config.catalog.uri, loader=loader, merger=merger)

    @property
    def snapshot(self) -> CatalogSnapshot:
        """Get the current snapshot, building it on first access."""
        snapshot = self._snapshot
        if snapshot is not None:
            return snapshot

        with self._build_lock:
            if self._snapshot is None:
                self._snapshot = self._build()
            return self._snapshot

    def list_schema_names(self) -> Set[str]:
        """Get the names of all schemas."""
        return set(self.snapshot.schemas.keys())

    def list_table_names(self, schema_name: str) -> Set[str]:
        """Get the table names of a schema.

        Returns:
            Table names, or an empty set if the schema does not exist
        """
        schema = self.snapshot.get_schema(schema_name)
        if schema is None:
            return set()
        return set(schema.tables.keys())

    def get_schema(self, schema_name: str) -> Optional[Schema]:
        """Get schema by name from the current snapshot."""
        return self.snapshot.get_schema(schema_name)

    def get_table(self, schema_name: str, table_name: str) -> Optional[Table]:
        """Refresh the catalog, then get a table by name.

        A catalog document that fails to load during the refresh is logged
        and the previous snapshot is used.

        Args:
            schema_name: Schema name (case-insensitive)
            table_name: Table name (case-insensitive)

        Returns:
            Table if found, None otherwise
        """
        try:
            self.refresh()
        except CatalogLoadError as e:
            logger.error(f"Catalog refresh failed, using previous snapshot: {e}")

        return self.snapshot.get_table(schema_name, table_name)

    def refresh(self) -> CatalogSnapshot:
        """Reload the catalog document and re-resolve every table.

        The new snapshot replaces the old one only once it is complete.

        Raises:
            CatalogLoadError: If the catalog document cannot be loaded; the
                previous snapshot stays installed
        """
        with self._build_lock:
            snapshot = self._build()
            self._snapshot = snapshot
        return snapshot

    def _build(self) -> CatalogSnapshot:
        schemas = self.loader.load(self.catalog_uri)

        tables = []
        for schema in schemas.values():
            for table in schema.tables.values():
                tables.append(table)
        self.merger.merge_all(tables)

        snapshot = CatalogSnapshot(schemas=schemas)
        logger.info(f"Catalog built: {len(schemas)} schemas, {len(tables)} tables")
        return snapshot

    def __repr__(self) -> str:
        return f"Catalog(uri={self.catalog_uri}, loaded={self._snapshot is not None})"
