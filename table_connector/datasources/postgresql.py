"""PostgreSQL data source implementation."""

from typing import Any, Dict, List, Optional, Sequence
import logging

import psycopg2
from psycopg2 import pool, sql

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

_INFORMATION_SCHEMA_TYPES = {"TABLE": "BASE TABLE", "VIEW": "VIEW"}


class PostgreSQLMetadata(DatabaseMetadata):
    """Catalog introspection over PostgreSQL's information_schema."""

    def __init__(self, connection):
        self.connection = connection

    def stores_upper_case_identifiers(self) -> bool:
        """PostgreSQL folds unquoted identifiers to lower case."""
        return False

    def get_tables(
        self,
        schema_pattern: Optional[str],
        table_pattern: Optional[str],
        types: Sequence[str] = TABLE_TYPES,
    ) -> List[TableRow]:
        """Enumerate tables and views of the connected database."""
        clauses, params = build_like_filters(
            [("t.table_schema", schema_pattern), ("t.table_name", table_pattern)],
            "%s",
        )
        type_names = []
        for table_type in types:
            type_names.append(_INFORMATION_SCHEMA_TYPES.get(table_type, table_type))
        clauses.append("t.table_type IN %s")
        params.append(tuple(type_names))

        with self.connection.cursor() as cursor:
            cursor.execute(
                f"""
                SELECT
                    t.table_catalog,
                    t.table_schema,
                    t.table_name,
                    t.table_type,
                    obj_description(cls.oid, 'pg_class') AS remarks
                FROM information_schema.tables t
                JOIN pg_catalog.pg_namespace n ON n.nspname = t.table_schema
                JOIN pg_catalog.pg_class cls
                    ON cls.relnamespace = n.oid AND cls.relname = t.table_name
                WHERE {" AND ".join(clauses)}
                ORDER BY t.table_type, t.table_schema, t.table_name
                """,
                params,
            )
            rows = []
            for row in cursor.fetchall():
                rows.append(
                    TableRow(
                        table_catalog=row[0],
                        table_schema=row[1],
                        table_name=row[2],
                        table_type="TABLE" if row[3] == "BASE TABLE" else row[3],
                        remarks=row[4],
                    )
                )
            return rows

    def get_columns(
        self,
        schema_pattern: Optional[str],
        table_pattern: Optional[str],
        column_pattern: Optional[str],
    ) -> List[ColumnRow]:
        """Enumerate columns of the connected database in ordinal order."""
        clauses, params = build_like_filters(
            [
                ("c.table_schema", schema_pattern),
                ("c.table_name", table_pattern),
                ("c.column_name", column_pattern),
            ],
            "%s",
        )
        where = ""
        if clauses:
            where = "WHERE " + " AND ".join(clauses)

        # numeric_precision is reported in bits for binary types, so only
        # exact numerics use it as the size.
        with self.connection.cursor() as cursor:
            cursor.execute(
                f"""
                SELECT
                    c.table_name,
                    c.column_name,
                    c.udt_name,
                    CASE WHEN c.data_type = 'numeric'
                        THEN c.numeric_precision
                        ELSE c.character_maximum_length
                    END::text AS column_size,
                    CASE WHEN c.data_type = 'numeric'
                        THEN c.numeric_scale
                    END::text AS decimal_digits,
                    c.is_nullable,
                    c.column_default,
                    col_description(cls.oid, att.attnum) AS remarks
                FROM information_schema.columns c
                JOIN pg_catalog.pg_namespace n ON n.nspname = c.table_schema
                JOIN pg_catalog.pg_class cls
                    ON cls.relnamespace = n.oid AND cls.relname = c.table_name
                JOIN pg_catalog.pg_attribute att
                    ON att.attrelid = cls.oid AND att.attname = c.column_name
                {where}
                ORDER BY c.table_schema, c.table_name, c.ordinal_position
                """,
                params,
            )
            rows = []
            for row in cursor.fetchall():
                rows.append(
                    ColumnRow(
                        table_name=row[0],
                        column_name=row[1],
                        type_name=row[2],
                        column_size=row[3],
                        decimal_digits=row[4],
                        is_nullable=row[5],
                        column_default=row[6],
                        remarks=row[7],
                    )
                )
            return rows


class PostgreSQLConnection(Connection):
    """Pooled PostgreSQL connection; closing returns it to the pool."""

    def __init__(self, connection_pool: pool.ThreadedConnectionPool, connection):
        self._pool = connection_pool
        self.connection = connection
        self.connection.autocommit = True
        self._schema_changed = False

    def get_metadata(self) -> PostgreSQLMetadata:
        return PostgreSQLMetadata(self.connection)

    def set_schema(self, schema: str) -> None:
        with self.connection.cursor() as cursor:
            cursor.execute(
                sql.SQL("SET search_path TO {}").format(sql.Identifier(schema))
            )
        self._schema_changed = True

    def execute_update(self, statement: str) -> None:
        logger.debug(f"Executing statement: {statement}")
        with self.connection.cursor() as cursor:
            cursor.execute(statement)

    def close(self) -> None:
        discard = False
        if self._schema_changed and not self.connection.closed:
            try:
                with self.connection.cursor() as cursor:
                    cursor.execute("RESET search_path")
            except psycopg2.Error as e:
                logger.warning(f"Could not reset search_path, discarding connection: {e}")
                discard = True
        self._pool.putconn(self.connection, close=discard or bool(self.connection.closed))


class PostgreSQLDataSource(DataSource):
    """PostgreSQL data source connector with connection pooling."""

    def __init__(self, name: str, config: Dict[str, Any]):
        """Initialize PostgreSQL data source.

        Config should include:
            - host: Database host
            - port: Database port
            - database: Database name
            - user: Username
            - password: Password
            - min_connections: Minimum connections in pool (default: 1)
            - max_connections: Maximum connections in pool (default: 5)
        """
        super().__init__(name, config)
        self._pool = None
        self._min_connections = config.get("min_connections", 1)
        self._max_connections = config.get("max_connections", 5)

    @property
    def dialect(self) -> str:
        return "postgres"

    def connect(self) -> None:
        """Establish connection pool to PostgreSQL."""
        try:
            logger.info(f"Connecting to PostgreSQL database '{self.config['database']}' at {self.config['host']}")
            self._pool = pool.ThreadedConnectionPool(
                self._min_connections,
                self._max_connections,
                host=self.config["host"],
                port=self.config.get("port", 5432),
                database=self.config["database"],
                user=self.config["user"],
                password=self.config["password"],
            )
            self._connected = True
            logger.info(f"Successfully connected to PostgreSQL: {self.name}")
        except psycopg2.Error as e:
            logger.error(f"Failed to connect to PostgreSQL {self.name}: {e}")
            raise ConnectionError(f"PostgreSQL connection failed: {e}") from e

    def disconnect(self) -> None:
        """Close all connections in the pool."""
        if self._pool:
            self._pool.closeall()
            logger.info(f"Disconnected from PostgreSQL: {self.name}")
            self._pool = None
            self._connected = False

    def get_connection(self) -> PostgreSQLConnection:
        """Get a connection from the pool."""
        if not self._pool:
            raise ConnectionError(f"Not connected to {self.name}")
        try:
            conn = self._pool.getconn()
        except pool.PoolError as e:
            raise ConnectionError(f"No connection available from {self.name}: {e}") from e
        return PostgreSQLConnection(self._pool, conn)
