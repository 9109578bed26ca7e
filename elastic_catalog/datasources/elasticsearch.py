"""Elasticsearch data source implementation."""

from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from ..catalog.schema import TableSource
from ..errors import MalformedMappingError, SourceError, SourceUnavailableError
from ..utils.logging import get_contextual_logger
from .base import DataSource, Mappings

ALL_INDICES = "_all"


class ElasticsearchDataSource(DataSource):
    """Reads field mappings over the Elasticsearch REST API."""

    def __init__(self, source: TableSource, config: Optional[Dict[str, Any]] = None):
        """Initialize Elasticsearch data source.

        Config may include:
            - scheme: http or https (default: http)
            - timeout_seconds: Request timeout (default: 10)
            - verify_certs: Verify TLS certificates (default: True)
            - transport: httpx transport to use instead of the network
        """
        super().__init__(source, config or {})
        self.scheme = self.config.get("scheme", "http")
        self.timeout = self.config.get("timeout_seconds", 10.0)
        self.verify_certs = self.config.get("verify_certs", True)
        self._transport = self.config.get("transport")
        self._log = get_contextual_logger(__name__, {"source": self.name})

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.source.host_address}:{self.source.port}"

    def connect(self) -> None:
        """Open an HTTP client and check the cluster name."""
        self._log.info(f"Connecting to Elasticsearch at {self.base_url}")
        options: Dict[str, Any] = {
            "base_url": self.base_url,
            "timeout": self.timeout,
            "verify": self.verify_certs,
        }
        if self._transport is not None:
            options["transport"] = self._transport
        self.connection = httpx.Client(**options)

        try:
            self._check_cluster_name()
        except SourceError:
            self.disconnect()
            raise
        self._connected = True

    def disconnect(self) -> None:
        """Close the HTTP client."""
        if self.connection:
            self.connection.close()
            self._log.debug(f"Disconnected from Elasticsearch: {self.name}")
            self.connection = None
            self._connected = False

    def get_mappings(self) -> Mappings:
        """Fetch mappings for the document type, optionally scoped to one index."""
        if self.connection is None:
            raise RuntimeError(f"Not connected to {self.name}")

        # without an index the request covers every index hosting the type
        index = self.source.index or ALL_INDICES
        path = f"/{quote(index, safe=',*')}/_mapping/{quote(self.source.document_type, safe='')}"
        body = self._get_json(path)
        return self._parse_mappings(body)

    def _check_cluster_name(self) -> None:
        expected = self.source.cluster_name
        if not expected:
            return

        info = self._get_json("/")
        actual = info.get("cluster_name") if isinstance(info, dict) else None
        if actual != expected:
            self._log.error(f"Cluster name mismatch: expected {expected}, got {actual}")
            raise SourceUnavailableError(
                f"{self.base_url} belongs to cluster '{actual}', expected '{expected}'",
                self.source,
            )

    def _get_json(self, path: str) -> Any:
        try:
            response = self.connection.get(path)
            response.raise_for_status()
        except httpx.HTTPError as e:
            self._log.error(f"Request {path} failed on {self.name}: {e}")
            raise SourceUnavailableError(
                f"Request to {self.base_url}{path} failed: {e}", self.source
            ) from e

        try:
            return response.json()
        except ValueError as e:
            raise MalformedMappingError(
                f"Response from {self.base_url}{path} is not JSON", self.source
            ) from e

    def _parse_mappings(self, body: Any) -> Mappings:
        """Convert a get-mapping response into index -> type -> mapping tree."""
        if not isinstance(body, dict):
            raise MalformedMappingError("Mapping response is not an object", self.source)

        result: Mappings = {}
        for index_name, index_body in body.items():
            mappings = index_body.get("mappings") if isinstance(index_body, dict) else None
            if not isinstance(mappings, dict):
                raise MalformedMappingError(
                    f"Index {index_name} has no mappings object", self.source
                )

            types: Dict[str, Dict[str, Any]] = {}
            for type_name, type_mapping in mappings.items():
                # keep the document type as the root, like the mapping source
                types[type_name] = {type_name: type_mapping}
            result[index_name] = types

        return result


def fetch_mappings(source: TableSource, config: Optional[Dict[str, Any]] = None) -> Mappings:
    """Fetch the mappings of one source over a connection scoped to this call.

    Args:
        source: Physical binding to query
        config: Data source configuration

    Returns:
        index -> (document type -> mapping tree)
    """
    with ElasticsearchDataSource(source, config) as datasource:
        return datasource.get_mappings()
