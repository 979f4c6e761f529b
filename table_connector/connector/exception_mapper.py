"""Translation of low-level failures into connector errors."""

from typing import Optional
import logging

import duckdb
from psycopg2 import errors as pg_errors

from ..catalog.names import QualifiedName
from .errors import (
    ConnectorError,
    ConnectorPermissionError,
    DatabaseNotFoundError,
    TableAlreadyExistsError,
    TableNotFoundError,
)

logger = logging.getLogger(__name__)


class ExceptionMapper:
    """Maps a caught failure to a ConnectorError for a qualified name.

    Backends refine the mapping by overriding ``map_error``; anything not
    recognized becomes a plain ConnectorError.
    """

    def to_connector_error(
        self, error: BaseException, name: QualifiedName
    ) -> ConnectorError:
        """Translate a failure.

        Args:
            error: The caught failure
            name: Qualified name under operation

        Returns:
            Connector error carrying the name and the original failure
        """
        mapped = self.map_error(error, name)
        if mapped is None:
            mapped = ConnectorError(name, cause=error)
        logger.error(f"{type(mapped).__name__} for {name}: {error}")
        return mapped

    def map_error(
        self, error: BaseException, name: QualifiedName
    ) -> Optional[ConnectorError]:
        """Return a specific connector error, or None to use the generic one."""
        return None


class PostgreSQLExceptionMapper(ExceptionMapper):
    """Maps psycopg2 SQLSTATE error classes."""

    def map_error(
        self, error: BaseException, name: QualifiedName
    ) -> Optional[ConnectorError]:
        if isinstance(error, pg_errors.UndefinedTable):
            return TableNotFoundError(name, cause=error)
        if isinstance(error, pg_errors.InvalidSchemaName):
            return DatabaseNotFoundError(name, cause=error)
        if isinstance(error, pg_errors.DuplicateTable):
            return TableAlreadyExistsError(name, cause=error)
        if isinstance(error, pg_errors.InsufficientPrivilege):
            return ConnectorPermissionError(name, cause=error)
        return None


class DuckDBExceptionMapper(ExceptionMapper):
    """Maps DuckDB catalog and permission errors.

    DuckDB reports catalog failures through one exception class, so the
    message decides which error applies.
    """

    def map_error(
        self, error: BaseException, name: QualifiedName
    ) -> Optional[ConnectorError]:
        if isinstance(error, duckdb.PermissionException):
            return ConnectorPermissionError(name, cause=error)
        if not isinstance(error, duckdb.CatalogException):
            return None

        message = str(error).lower()
        if "already exists" in message:
            return TableAlreadyExistsError(name, cause=error)
        if "does not exist" in message or "no catalog + schema" in message:
            if "schema" in message and "table" not in message:
                return DatabaseNotFoundError(name, cause=error)
            return TableNotFoundError(name, cause=error)
        return None


def mapper_for_dialect(dialect: str) -> ExceptionMapper:
    """Return the exception mapper for a sqlglot dialect name."""
    if dialect == "postgres":
        return PostgreSQLExceptionMapper()
    if dialect == "duckdb":
        return DuckDBExceptionMapper()
    return ExceptionMapper()
