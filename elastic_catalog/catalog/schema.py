"""Schema metadata classes."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import pyarrow as pa

from ..mapping.types import DataType


@dataclass(frozen=True)
class TableSource:
    """One physical Elasticsearch binding contributing columns to a table.

    An empty ``index`` means every index hosting ``document_type``.
    """

    host_address: str
    port: int
    cluster_name: str
    document_type: str
    index: Optional[str] = None

    def describe(self) -> str:
        """Get a short human-readable description of the source."""
        index = self.index or "_all"
        return f"{self.host_address}:{self.port}/{index}/{self.document_type}"

    def __repr__(self) -> str:
        return f"TableSource({self.describe()})"


@dataclass(frozen=True)
class Column:
    """Column metadata.

    ``field_path`` is the dotted path of the field inside the remote
    document; ``name`` is derived from it.
    """

    name: str
    data_type: DataType
    field_path: str
    remote_type: str

    def to_arrow_field(self) -> pa.Field:
        """Get the Arrow field for this column."""
        return pa.field(self.name, self.data_type.to_arrow())

    def __repr__(self) -> str:
        return f"Column({self.name}, {self.data_type.value})"


@dataclass
class Table:
    """Table metadata."""

    name: str
    sources: Tuple[TableSource, ...] = ()
    columns: List[Column] = field(default_factory=list)
    schema: Optional["Schema"] = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        self.name = self.name.lower()
        self.sources = tuple(self.sources)

    def get_column(self, name: str) -> Optional[Column]:
        """Get column by name."""
        for col in self.columns:
            if col.name.lower() == name.lower():
                return col
        return None

    def set_columns(self, columns: List[Column]) -> None:
        """Replace the resolved columns of this table."""
        self.columns = list(columns)

    def arrow_schema(self) -> pa.Schema:
        """Get the Arrow schema of the resolved columns."""
        fields = []
        for col in self.columns:
            fields.append(col.to_arrow_field())
        return pa.schema(fields)

    def fully_qualified_name(self) -> str:
        """Get fully qualified table name."""
        if self.schema:
            return f"{self.schema.name}.{self.name}"
        return self.name

    def __repr__(self) -> str:
        return f"Table({self.name}, cols={len(self.columns)})"


@dataclass
class Schema:
    """Schema metadata."""

    name: str
    tables: Dict[str, Table] = None

    def __post_init__(self):
        self.name = self.name.lower()
        if self.tables is None:
            self.tables = {}
        # Set back-reference to schema
        for table in self.tables.values():
            table.schema = self

    def get_table(self, name: str) -> Optional[Table]:
        """Get table by name."""
        return self.tables.get(name.lower())

    def add_table(self, table: Table) -> bool:
        """Add a table to this schema.

        Returns:
            False if a table with the same name already exists; the
            existing table is kept
        """
        key = table.name.lower()
        if key in self.tables:
            return False
        table.schema = self
        self.tables[key] = table
        return True

    def table_names(self) -> List[str]:
        """Get table names in insertion order."""
        return list(self.tables.keys())

    def __repr__(self) -> str:
        return f"Schema({self.name}, tables={len(self.tables)})"
