"""Exceptions raised while building the catalog."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .catalog.schema import TableSource


class CatalogError(RuntimeError):
    """Base class for catalog errors."""


class CatalogLoadError(CatalogError):
    """The catalog document could not be read or parsed."""


class SourceError(CatalogError):
    """A single table source could not contribute columns."""

    def __init__(self, message: str, source: Optional["TableSource"] = None):
        super().__init__(message)
        self.source = source


class SourceUnavailableError(SourceError):
    """Connection to the source or the mapping request failed."""


class MalformedMappingError(SourceError):
    """The mapping returned by the source has an unexpected shape."""
