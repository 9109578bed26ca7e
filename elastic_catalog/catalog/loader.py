"""Catalog loader - reads the declarative catalog document.

Document format (JSON)::

    {
      "logs": [
        {
          "name": "events",
          "sources": [
            {
              "hostAddress": "es1.internal",
              "port": 9200,
              "clusterName": "logging",
              "index": "events-2016",
              "documentType": "event"
            }
          ]
        }
      ]
    }

``index`` may be omitted or null to cover every index hosting the
document type. ``hostaddress`` and ``type`` are accepted as aliases of
``hostAddress`` and ``documentType``.
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import urlparse
from urllib.request import url2pathname

import httpx

from ..errors import CatalogLoadError
from .schema import Schema, Table, TableSource

logger = logging.getLogger(__name__)

Decoder = Callable[[str], Any]


class CatalogLoader:
    """Loads the schema -> table -> sources skeleton of the catalog."""

    def __init__(
        self,
        decoder: Decoder = json.loads,
        timeout_seconds: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initialize loader.

        Args:
            decoder: Turns document text into plain Python values
            timeout_seconds: Timeout for documents fetched over HTTP
            transport: Optional httpx transport for HTTP locations
        """
        self.decoder = decoder
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    def load(self, location: str) -> Dict[str, Schema]:
        """Load and parse the catalog document.

        Args:
            location: Local path, file:// URI or http(s):// URL

        Returns:
            Schemas keyed by lower-cased name; every table has no columns

        Raises:
            CatalogLoadError: If the document cannot be read or parsed
        """
        text = self.read(location)
        try:
            document = self.decoder(text)
        except (ValueError, TypeError) as e:
            raise CatalogLoadError(f"Catalog document {location} is not valid: {e}") from e
        return self.parse(document)

    def read(self, location: str) -> str:
        """Read the document at ``location`` as UTF-8 text."""
        logger.info(f"Loading catalog document from {location}")
        parsed = urlparse(location)
        try:
            if parsed.scheme in ("http", "https"):
                return self._read_url(location)
            if parsed.scheme == "file":
                return Path(url2pathname(parsed.path)).read_text(encoding="utf-8")
            return Path(location).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError, httpx.HTTPError) as e:
            raise CatalogLoadError(f"Cannot read catalog document {location}: {e}") from e

    def _read_url(self, url: str) -> str:
        with httpx.Client(timeout=self.timeout_seconds, transport=self.transport) as client:
            response = client.get(url)
            response.raise_for_status()
            return response.content.decode("utf-8")

    def parse(self, document: Any) -> Dict[str, Schema]:
        """Build schemas from a decoded catalog document.

        Names are lower-cased. When two tables (or schemas) share a name,
        the first one wins and later ones are dropped.
        """
        if not isinstance(document, dict):
            raise CatalogLoadError("Catalog document must map schema names to table lists")

        schemas: Dict[str, Schema] = {}
        for schema_name, descriptors in document.items():
            if not isinstance(descriptors, list):
                raise CatalogLoadError(f"Schema '{schema_name}' must be a list of tables")

            key = schema_name.lower()
            schema = schemas.get(key)
            if schema is None:
                schema = Schema(name=key)
                schemas[key] = schema

            for descriptor in descriptors:
                table = self._parse_table(schema_name, descriptor)
                if not schema.add_table(table):
                    logger.debug(f"Duplicate table {key}.{table.name} dropped")

        return schemas

    def _parse_table(self, schema_name: str, descriptor: Any) -> Table:
        if not isinstance(descriptor, dict):
            raise CatalogLoadError(f"Table entry in schema '{schema_name}' must be an object")

        name = descriptor.get("name")
        if not isinstance(name, str) or not name:
            raise CatalogLoadError(f"Table in schema '{schema_name}' has no name")

        raw_sources = descriptor.get("sources")
        if not isinstance(raw_sources, list) or not raw_sources:
            raise CatalogLoadError(f"Table '{schema_name}.{name}' has no sources")

        sources: List[TableSource] = []
        for raw in raw_sources:
            sources.append(self._parse_source(f"{schema_name}.{name}", raw))

        # columns are always recomputed from the remote mappings
        return Table(name=name, sources=tuple(sources))

    def _parse_source(self, table_name: str, raw: Any) -> TableSource:
        if not isinstance(raw, dict):
            raise CatalogLoadError(f"Source of table '{table_name}' must be an object")

        host = _first_present(raw, "hostAddress", "hostaddress")
        document_type = _first_present(raw, "documentType", "type")
        port = raw.get("port")
        cluster_name = raw.get("clusterName") or ""
        index = raw.get("index") or None

        if not isinstance(host, str) or not host:
            raise CatalogLoadError(f"Source of table '{table_name}' has no host address")
        if not isinstance(document_type, str) or not document_type:
            raise CatalogLoadError(f"Source of table '{table_name}' has no document type")
        if isinstance(port, bool) or not isinstance(port, int):
            raise CatalogLoadError(f"Source of table '{table_name}' has an invalid port: {port!r}")
        if not isinstance(cluster_name, str) or (index is not None and not isinstance(index, str)):
            raise CatalogLoadError(f"Source of table '{table_name}' has invalid cluster or index")

        return TableSource(
            host_address=host,
            port=port,
            cluster_name=cluster_name,
            document_type=document_type,
            index=index,
        )


def _first_present(raw: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if raw.get(key) is not None:
            return raw[key]
    return None
