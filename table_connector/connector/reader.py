"""Catalog reads scoped to one database."""

from typing import List, Optional

from ..catalog.names import QualifiedName
from ..datasources.base import (
    MULTI_CHARACTER_SEARCH,
    TABLE_TYPES,
    ColumnRow,
    DatabaseMetadata,
    TableRow,
)
from .identifiers import IdentifierPolicy


class CatalogReader:
    """Issues table and column enumeration against one connection's metadata."""

    def __init__(self, metadata: DatabaseMetadata, policy: IdentifierPolicy):
        """Initialize reader.

        Args:
            metadata: Catalog introspection of the connection
            policy: Case policy resolved from the same metadata
        """
        self.metadata = metadata
        self.policy = policy

    def list_tables(
        self, name: QualifiedName, prefix: Optional[QualifiedName] = None
    ) -> List[TableRow]:
        """Enumerate tables and views of a database.

        Args:
            name: Qualified name of the database
            prefix: Optional name whose table component is a name prefix

        Returns:
            Table rows in catalog order
        """
        schema = self.policy.normalize(name.database_name)
        pattern = None
        if prefix is not None and prefix.table_name:
            pattern = self.policy.normalize(prefix.table_name) + MULTI_CHARACTER_SEARCH
        return self.metadata.get_tables(schema, pattern, TABLE_TYPES)

    def list_columns(self, name: QualifiedName) -> List[ColumnRow]:
        """Enumerate all columns of a table in ordinal order."""
        schema = self.policy.normalize(name.database_name)
        table = self.policy.normalize(name.table_name)
        return self.metadata.get_columns(schema, table, MULTI_CHARACTER_SEARCH)
