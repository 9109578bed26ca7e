"""Relational types and the Elasticsearch field type mapping."""

from enum import Enum
from typing import Dict, Optional

import pyarrow as pa


class DataType(Enum):
    """Relational types a column can be coerced to."""

    BIGINT = "BIGINT"
    DOUBLE = "DOUBLE"
    VARCHAR = "VARCHAR"

    def to_arrow(self) -> pa.DataType:
        """Get the Arrow type used for values of this type."""
        return _ARROW_TYPES[self]


_ARROW_TYPES = {
    DataType.BIGINT: pa.int64(),
    DataType.DOUBLE: pa.float64(),
    DataType.VARCHAR: pa.string(),
}

REMOTE_TYPES: Dict[str, DataType] = {
    "double": DataType.DOUBLE,
    "float": DataType.DOUBLE,
    "integer": DataType.BIGINT,
    "long": DataType.BIGINT,
    "string": DataType.VARCHAR,
}


def map_remote_type(type_name: str) -> Optional[DataType]:
    """Map an Elasticsearch field type name to a relational type.

    Args:
        type_name: Native field type, e.g. ``long`` or ``string``

    Returns:
        Mapped DataType, or None when the type is not supported
    """
    return REMOTE_TYPES.get(type_name)
