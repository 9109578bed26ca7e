"""Configuration management."""

from .config import (
    Config,
    CatalogConfig,
    FetchConfig,
    LoggingConfig,
    load_config,
)

__all__ = [
    "Config",
    "CatalogConfig",
    "FetchConfig",
    "LoggingConfig",
    "load_config",
]
