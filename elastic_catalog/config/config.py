"""Configuration management for the Elasticsearch catalog."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


@dataclass
class CatalogConfig:
    """Where the catalog document lives."""

    uri: Optional[str] = None


@dataclass
class FetchConfig:
    """Configuration for remote mapping fetches."""

    scheme: str = "http"
    timeout_seconds: float = 10.0
    verify_certs: bool = True
    max_threads: int = 4
    enable_parallel_fetch: bool = True

    def datasource_options(self) -> Dict[str, Any]:
        """Options passed to each data source."""
        return {
            "scheme": self.scheme,
            "timeout_seconds": self.timeout_seconds,
            "verify_certs": self.verify_certs,
        }


@dataclass
class LoggingConfig:
    """Configuration for log output."""

    level: str = "INFO"
    structured: bool = False
    log_file: Optional[str] = None


@dataclass
class Config:
    """Main configuration class."""

    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(config_path: str) -> Config:
    """Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Parsed configuration

    Example YAML format:
        catalog:
          uri: file:///etc/escat/catalog.json

        fetch:
          scheme: http
          timeout_seconds: 10
          max_threads: 8
          enable_parallel_fetch: true

        logging:
          level: INFO
          structured: false
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    catalog = CatalogConfig(**(data.get("catalog") or {}))
    fetch = FetchConfig(**(data.get("fetch") or {}))
    logging_config = LoggingConfig(**(data.get("logging") or {}))

    return Config(catalog=catalog, fetch=fetch, logging=logging_config)
