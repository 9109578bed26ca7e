"""Data source connectors."""

from .base import DataSource, Mappings
from .elasticsearch import ElasticsearchDataSource, fetch_mappings

__all__ = [
    "DataSource",
    "Mappings",
    "ElasticsearchDataSource",
    "fetch_mappings",
]
