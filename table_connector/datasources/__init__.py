"""Connection providers for relational backends."""

from .base import (
    DataSource,
    Connection,
    DatabaseMetadata,
    TableRow,
    ColumnRow,
    TABLE_TYPES,
    MULTI_CHARACTER_SEARCH,
)
from .postgresql import PostgreSQLDataSource
from .duckdb import DuckDBDataSource

__all__ = [
    "DataSource",
    "Connection",
    "DatabaseMetadata",
    "TableRow",
    "ColumnRow",
    "TABLE_TYPES",
    "MULTI_CHARACTER_SEARCH",
    "PostgreSQLDataSource",
    "DuckDBDataSource",
]
