"""Base data source interface."""

from abc import ABC, abstractmethod
from typing import Any, Dict

from ..catalog.schema import TableSource

# index -> (document type -> mapping tree rooted at the document type)
Mappings = Dict[str, Dict[str, Dict[str, Any]]]


class DataSource(ABC):
    """Abstract base class for field mapping sources.

    A data source is bound to one TableSource and holds a connection only
    between ``connect`` and ``disconnect``. Use it as a context manager to
    scope the connection to a single fetch.
    """

    def __init__(self, source: TableSource, config: Dict[str, Any]):
        """Initialize data source.

        Args:
            source: Physical binding to fetch mappings for
            config: Configuration dictionary
        """
        self.source = source
        self.config = config
        self.connection = None
        self._connected = False

    @property
    def name(self) -> str:
        """Get a display name for logs."""
        return self.source.describe()

    @abstractmethod
    def connect(self) -> None:
        """Establish connection to the data source."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Close connection to the data source."""
        pass

    @abstractmethod
    def get_mappings(self) -> Mappings:
        """Fetch the field mappings of the source's document type.

        Returns:
            index -> (document type -> mapping tree)

        Raises:
            SourceUnavailableError: If the request fails
            MalformedMappingError: If the response has an unexpected shape
        """
        pass

    def is_connected(self) -> bool:
        """Check if data source is connected.

        Returns:
            True if connected, False otherwise
        """
        return self._connected

    def ensure_connected(self) -> None:
        """Ensure data source is connected.

        Raises:
            SourceUnavailableError: If connection cannot be established
        """
        if not self.is_connected():
            self.connect()
            self._connected = True

    def __enter__(self):
        """Context manager entry."""
        self.ensure_connected()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.disconnect()
        self._connected = False
        return False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(source={self.name})"
