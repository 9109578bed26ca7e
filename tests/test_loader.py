"""Tests for catalog document loading."""

import json
from pathlib import Path

import httpx
import pytest

from elastic_catalog.catalog import CatalogLoader, TableSource
from elastic_catalog.errors import CatalogLoadError
from tests.helpers import source_entry


@pytest.fixture
def loader():
    return CatalogLoader()


def test_load_schemas_and_tables(loader, write_catalog):
    """Schemas and tables are indexed by lower-cased name."""
    path = write_catalog(
        {
            "Logs": [
                {"name": "Events", "sources": [source_entry("es1", "event", "events-2016")]},
                {"name": "audit", "sources": [source_entry("es2", "record")]},
            ],
            "metrics": [],
        }
    )

    schemas = loader.load(path)

    assert set(schemas) == {"logs", "metrics"}
    assert schemas["logs"].table_names() == ["events", "audit"]
    assert schemas["metrics"].tables == {}

    events = schemas["logs"].get_table("EVENTS")
    assert events.sources == (
        TableSource(
            host_address="es1",
            port=9200,
            cluster_name="es-test",
            document_type="event",
            index="events-2016",
        ),
    )
    assert events.columns == []
    assert events.schema is schemas["logs"]


def test_columns_in_document_are_ignored(loader, write_catalog):
    """Columns are always recomputed, never read from the document."""
    path = write_catalog(
        {
            "logs": [
                {
                    "name": "events",
                    "sources": [source_entry("es1", "event")],
                    "columns": [{"name": "stale", "type": "varchar"}],
                }
            ]
        }
    )

    assert loader.load(path)["logs"].get_table("events").columns == []


def test_duplicate_tables_first_wins(loader, write_catalog):
    """The first table with a given name is kept."""
    path = write_catalog(
        {
            "logs": [
                {"name": "events", "sources": [source_entry("first", "event")]},
                {"name": "EVENTS", "sources": [source_entry("second", "event")]},
            ]
        }
    )

    table = loader.load(path)["logs"].get_table("events")

    assert len(table.sources) == 1
    assert table.sources[0].host_address == "first"


def test_source_aliases_and_optional_index(loader):
    """hostaddress/type aliases are accepted and a null index means all indices."""
    schemas = loader.parse(
        {
            "logs": [
                {
                    "name": "events",
                    "sources": [
                        {"hostaddress": "es1", "port": 9300, "clusterName": "c", "type": "event"},
                        {"hostAddress": "es2", "port": 9200, "index": "", "documentType": "event"},
                    ],
                }
            ]
        }
    )

    first, second = schemas["logs"].get_table("events").sources
    assert first.host_address == "es1"
    assert first.port == 9300
    assert first.document_type == "event"
    assert first.index is None
    assert second.cluster_name == ""
    assert second.index is None


def test_file_uri(loader, write_catalog):
    """file:// URIs are read like paths."""
    path = write_catalog({"logs": []})

    schemas = loader.load(f"file://{path}")

    assert set(schemas) == {"logs"}


def test_http_location():
    """Documents can be fetched over HTTP."""
    document = {"logs": [{"name": "events", "sources": [source_entry("es1", "event")]}]}

    def handler(request):
        return httpx.Response(200, content=json.dumps(document).encode("utf-8"))

    loader = CatalogLoader(transport=httpx.MockTransport(handler))
    schemas = loader.load("http://config.internal/catalog.json")

    assert schemas["logs"].get_table("events") is not None


def test_http_error():
    """HTTP failures are load errors."""
    loader = CatalogLoader(transport=httpx.MockTransport(lambda request: httpx.Response(503)))

    with pytest.raises(CatalogLoadError):
        loader.load("http://config.internal/catalog.json")


def test_missing_file(loader, tmp_path):
    """An unreachable location is a load error."""
    with pytest.raises(CatalogLoadError):
        loader.load(str(tmp_path / "missing.json"))


def test_invalid_json(loader, tmp_path):
    """Unparsable text is a load error."""
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(CatalogLoadError):
        loader.load(str(path))


@pytest.mark.parametrize(
    "document",
    [
        [],
        {"logs": {"name": "events"}},
        {"logs": ["events"]},
        {"logs": [{"sources": [source_entry("es1", "event")]}]},
        {"logs": [{"name": "events", "sources": []}]},
        {"logs": [{"name": "events"}]},
        {"logs": [{"name": "events", "sources": [{"port": 9200, "documentType": "event"}]}]},
        {"logs": [{"name": "events", "sources": [{"hostAddress": "es1", "port": 9200}]}]},
        {"logs": [{"name": "events", "sources": [{"hostAddress": "es1", "port": "9200", "documentType": "e"}]}]},
        {"logs": [{"name": "events", "sources": [{"hostAddress": "es1", "port": True, "documentType": "e"}]}]},
    ],
)
def test_bad_shapes(loader, document):
    """Documents not matching the declared shape fail the whole load."""
    with pytest.raises(CatalogLoadError):
        loader.parse(document)


def test_custom_decoder(tmp_path):
    """The decoder is pluggable."""
    path = tmp_path / "catalog.txt"
    path.write_text("ignored", encoding="utf-8")

    loader = CatalogLoader(decoder=lambda text: {"custom": []})

    assert set(loader.load(str(path))) == {"custom"}


def test_example_catalog(loader):
    """The shipped example document parses."""
    path = Path(__file__).parent.parent / "config" / "example_catalog.json"

    schemas = loader.load(str(path))

    assert set(schemas) == {"logs", "audit"}
    assert len(schemas["logs"].get_table("events").sources) == 2
    assert schemas["audit"].get_table("records").sources[0].index is None
