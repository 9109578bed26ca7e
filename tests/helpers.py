"""Fake Elasticsearch servers and catalog document builders for tests."""

from __future__ import annotations

from typing import Any, Dict, List

import httpx

from elastic_catalog.datasources import fetch_mappings


class FakeElasticsearch:
    """Answers the cluster info and get-mapping endpoints from memory."""

    def __init__(self, cluster_name: str = "es-test"):
        self.cluster_name = cluster_name
        self.indices: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self.requests: List[str] = []
        self.down = False

    def add_mapping(self, index: str, doc_type: str, properties: Dict[str, Any]) -> None:
        self.indices.setdefault(index, {})[doc_type] = {"properties": properties}

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.requests.append(path)
        if self.down:
            raise httpx.ConnectError("connection refused", request=request)

        if path == "/":
            return httpx.Response(200, json={"cluster_name": self.cluster_name})

        parts = path.strip("/").split("/")
        if len(parts) == 3 and parts[1] == "_mapping":
            return self._mappings(parts[0], parts[2])
        return httpx.Response(404, json={"error": "not found"})

    def _mappings(self, index: str, doc_type: str) -> httpx.Response:
        if index == "_all":
            names = list(self.indices)
        else:
            names = index.split(",")

        body = {}
        for name in names:
            if name not in self.indices:
                return httpx.Response(404, json={"error": "index_not_found_exception"})
            types = self.indices[name]
            if doc_type in types:
                body[name] = {"mappings": {doc_type: types[doc_type]}}
        return httpx.Response(200, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


class FakeNetwork:
    """Routes each source to the fake server registered for its host."""

    def __init__(self):
        self.servers: Dict[str, FakeElasticsearch] = {}

    def server(self, host: str, cluster_name: str = "es-test") -> FakeElasticsearch:
        if host not in self.servers:
            self.servers[host] = FakeElasticsearch(cluster_name)
        return self.servers[host]

    def fetch(self, source, options):
        server = self.servers.get(source.host_address)
        if server is None:
            transport = httpx.MockTransport(_refuse)
        else:
            transport = server.transport
        merged = dict(options)
        merged["transport"] = transport
        return fetch_mappings(source, merged)


def _refuse(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("unknown host", request=request)


def source_entry(host: str, doc_type: str, index=None, cluster: str = "es-test") -> Dict[str, Any]:
    """Build a catalog document source descriptor."""
    return {
        "hostAddress": host,
        "port": 9200,
        "clusterName": cluster,
        "index": index,
        "documentType": doc_type,
    }
