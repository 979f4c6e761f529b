"""DuckDB data source implementation."""

from typing import Any, Dict, List, Optional, Sequence
import logging

import duckdb
from sqlglot import exp

from .base import (
    TABLE_TYPES,
    ColumnRow,
    Connection,
    DatabaseMetadata,
    DataSource,
    TableRow,
    build_like_filters,
)

logger = logging.getLogger(__name__)

# Catalog table types as reported by information_schema
_INFORMATION_SCHEMA_TYPES = {"TABLE": "BASE TABLE", "VIEW": "VIEW"}


class DuckDBMetadata(DatabaseMetadata):
    """Catalog introspection over DuckDB's information_schema and duckdb_columns().

    Patterns match case-insensitively, the same way DuckDB resolves names
    when a connection is scoped or a statement runs.
    """

    def __init__(self, connection: duckdb.DuckDBPyConnection):
        self.connection = connection

    def stores_upper_case_identifiers(self) -> bool:
        """DuckDB preserves identifier case."""
        return False

    def get_tables(
        self,
        schema_pattern: Optional[str],
        table_pattern: Optional[str],
        types: Sequence[str] = TABLE_TYPES,
    ) -> List[TableRow]:
        """Enumerate tables and views of the current database."""
        clauses, params = build_like_filters(
            [("table_schema", schema_pattern), ("table_name", table_pattern)],
            "?",
            "ILIKE",
        )
        type_names = []
        for table_type in types:
            type_names.append(_INFORMATION_SCHEMA_TYPES.get(table_type, table_type))
        placeholders = ", ".join("?" for _ in type_names)
        clauses.append(f"table_type IN ({placeholders})")
        params.extend(type_names)

        result = self.connection.execute(
            f"""
            SELECT table_catalog, table_schema, table_name, table_type
            FROM information_schema.tables
            WHERE table_catalog = current_database() AND {" AND ".join(clauses)}
            ORDER BY table_type, table_schema, table_name
            """,
            params,
        ).fetchall()

        rows = []
        for row in result:
            rows.append(
                TableRow(
                    table_catalog=row[0],
                    table_schema=row[1],
                    table_name=row[2],
                    table_type="TABLE" if row[3] == "BASE TABLE" else row[3],
                )
            )
        return rows

    def get_columns(
        self,
        schema_pattern: Optional[str],
        table_pattern: Optional[str],
        column_pattern: Optional[str],
    ) -> List[ColumnRow]:
        """Enumerate columns of the current database in ordinal order."""
        clauses, params = build_like_filters(
            [
                ("schema_name", schema_pattern),
                ("table_name", table_pattern),
                ("column_name", column_pattern),
            ],
            "?",
            "ILIKE",
        )
        clauses.insert(0, "database_name = current_database()")

        # Size is the length for character types and the precision for
        # decimals; integer precision is reported in bits and is dropped.
        result = self.connection.execute(
            f"""
            SELECT
                table_name,
                column_name,
                data_type,
                CAST(
                    CASE WHEN data_type LIKE 'DECIMAL%'
                        THEN numeric_precision
                        ELSE character_maximum_length
                    END AS VARCHAR
                ) AS column_size,
                CAST(
                    CASE WHEN data_type LIKE 'DECIMAL%' THEN numeric_scale END
                    AS VARCHAR
                ) AS decimal_digits,
                CASE WHEN is_nullable THEN 'YES' ELSE 'NO' END AS is_nullable,
                column_default,
                comment
            FROM duckdb_columns()
            WHERE {" AND ".join(clauses)}
            ORDER BY schema_name, table_name, column_index
            """,
            params,
        ).fetchall()

        rows = []
        for row in result:
            rows.append(
                ColumnRow(
                    table_name=row[0],
                    column_name=row[1],
                    type_name=self._base_type_name(row[2]),
                    column_size=row[3],
                    decimal_digits=row[4],
                    is_nullable=row[5],
                    column_default=row[6],
                    remarks=row[7],
                )
            )
        return rows

    def _base_type_name(self, data_type: str) -> str:
        """Strip type parameters, e.g. DECIMAL(20,10) -> DECIMAL."""
        return data_type.split("(", 1)[0].strip()


class DuckDBConnection(Connection):
    """Cursor-scoped connection onto a shared DuckDB database."""

    def __init__(self, connection: duckdb.DuckDBPyConnection):
        self.connection = connection

    def get_metadata(self) -> DuckDBMetadata:
        return DuckDBMetadata(self.connection)

    def set_schema(self, schema: str) -> None:
        found = self.connection.execute(
            """
            SELECT 1 FROM information_schema.schemata
            WHERE catalog_name = current_database() AND lower(schema_name) = lower(?)
            """,
            [schema],
        ).fetchone()
        if found is None:
            raise duckdb.CatalogException(f"Schema with name {schema} does not exist!")
        identifier = exp.to_identifier(schema, quoted=True).sql(dialect="duckdb")
        self.connection.execute(f"USE {identifier}")

    def execute_update(self, sql: str) -> None:
        logger.debug(f"Executing statement: {sql}")
        self.connection.execute(sql)

    def close(self) -> None:
        self.connection.close()


class DuckDBDataSource(DataSource):
    """DuckDB data source connector."""

    def __init__(self, name: str, config: Dict[str, Any]):
        """Initialize DuckDB data source.

        Config should include:
            - path: Path to DuckDB database file (or :memory: for in-memory)
            - read_only: Whether to open in read-only mode (default: True)
        """
        super().__init__(name, config)
        self.connection = None
        self.db_path = config.get("path", ":memory:")
        self.read_only = config.get("read_only", True)

    @property
    def dialect(self) -> str:
        return "duckdb"

    def connect(self) -> None:
        """Establish connection to DuckDB."""
        logger.info(f"Connecting to DuckDB at '{self.db_path}'")
        try:
            self.connection = duckdb.connect(self.db_path, read_only=self.read_only)
        except duckdb.Error as e:
            logger.error(f"Failed to connect to DuckDB {self.name}: {e}")
            raise ConnectionError(f"DuckDB connection failed: {e}") from e
        self._connected = True
        logger.info(f"Successfully connected to DuckDB: {self.name}")

    def disconnect(self) -> None:
        """Close DuckDB connection."""
        if self.connection:
            self.connection.close()
            logger.info(f"Disconnected from DuckDB: {self.name}")
            self.connection = None
            self._connected = False

    def get_connection(self) -> DuckDBConnection:
        """Open a cursor on the shared database."""
        if self.connection is None:
            raise ConnectionError(f"Not connected to {self.name}")
        return DuckDBConnection(self.connection.cursor())
