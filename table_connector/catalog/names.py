"""Qualified names identifying databases and tables."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class QualifiedName:
    """Immutable catalog/database/table identity.

    A database-level name leaves ``table_name`` unset. Prefix filters for
    listing reuse this type with the table component holding the prefix.
    """

    catalog_name: str
    database_name: str
    table_name: Optional[str] = None

    @classmethod
    def of_database(cls, catalog_name: str, database_name: str) -> "QualifiedName":
        """Create a database-level qualified name."""
        return cls(catalog_name, database_name)

    @classmethod
    def of_table(
        cls, catalog_name: str, database_name: str, table_name: str
    ) -> "QualifiedName":
        """Create a table-level qualified name."""
        return cls(catalog_name, database_name, table_name)

    def __str__(self) -> str:
        if self.table_name is None:
            return f"{self.catalog_name}/{self.database_name}"
        return f"{self.catalog_name}/{self.database_name}/{self.table_name}"
