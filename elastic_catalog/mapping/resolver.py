"""Turns flattened mapping leaves into typed columns."""

import logging
from typing import Any, Dict, List, Optional, Set

from ..catalog.schema import Column
from ..errors import MalformedMappingError
from .flattener import flatten_mapping
from .types import map_remote_type

logger = logging.getLogger(__name__)

TYPE_SUFFIX = ".type"
NESTED_MARKER = ".properties."


def resolve_column(descriptor: str) -> Optional[Column]:
    """Build a column from a ``path:type`` leaf descriptor.

    Only ``.type`` leaves of top-level or object fields produce columns.
    Everything else (analyzer settings, nested ``properties`` leftovers,
    unsupported types) is dropped.

    Args:
        descriptor: Leaf produced by flatten_mapping

    Returns:
        Column, or None if the descriptor does not denote a supported field
    """
    items = descriptor.split(":")
    if len(items) != 2:
        logger.debug(f"Invalid column path format, ignoring: {descriptor}")
        return None

    path, remote_type = items
    if not path.endswith(TYPE_SUFFIX):
        logger.debug(f"Leaf carries no type info, ignoring: {descriptor}")
        return None

    if NESTED_MARKER in path:
        logger.debug(f"Complex column, ignoring: {descriptor}")
        return None

    data_type = map_remote_type(remote_type)
    if data_type is None:
        logger.warning(f"Unsupported column type '{remote_type}' for {path}, ignoring")
        return None

    field_path = path[: -len(TYPE_SUFFIX)]
    return Column(
        name=field_path.replace(".", "_"),
        data_type=data_type,
        field_path=field_path,
        remote_type=remote_type,
    )


def extract_properties(mapping: Dict[str, Any], document_type: str) -> Dict[str, Any]:
    """Get the ``<document_type>.properties`` object of a mapping tree.

    Raises:
        MalformedMappingError: If the tree does not have that nesting
    """
    type_mapping = mapping.get(document_type) if isinstance(mapping, dict) else None
    if not isinstance(type_mapping, dict):
        raise MalformedMappingError(f"Mapping has no entry for type '{document_type}'")

    properties = type_mapping.get("properties")
    if not isinstance(properties, dict):
        raise MalformedMappingError(f"Mapping for type '{document_type}' has no properties")
    return properties


def resolve_columns(
    mappings: Dict[str, Dict[str, Any]], document_type: str
) -> List[Column]:
    """Resolve the columns of a document type across all returned indices.

    Args:
        mappings: index -> (document type -> mapping tree)
        document_type: Document type the columns belong to

    Returns:
        Union of the columns found in every index, in first-seen order
    """
    result: List[Column] = []
    seen: Set[Column] = set()
    for index_name, type_mappings in mappings.items():
        if document_type not in type_mappings:
            logger.debug(f"Index {index_name} has no mapping for type {document_type}")
            continue

        properties = extract_properties(type_mappings[document_type], document_type)
        for descriptor in flatten_mapping(properties):
            column = resolve_column(descriptor)
            if column is not None and column not in seen:
                seen.add(column)
                result.append(column)

    return result
