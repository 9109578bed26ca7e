"""Shared fixtures."""

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from tests.helpers import FakeNetwork


@pytest.fixture
def network():
    """Fake network of Elasticsearch servers."""
    return FakeNetwork()


@pytest.fixture
def write_catalog(tmp_path: Path):
    """Write a catalog document and return its path."""

    def _write(document: Dict[str, Any], name: str = "catalog.json") -> str:
        path = tmp_path / name
        path.write_text(json.dumps(document), encoding="utf-8")
        return str(path)

    return _write
