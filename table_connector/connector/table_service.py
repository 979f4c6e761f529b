"""Generic relational implementation of the table service."""

from typing import List, Optional, Tuple, Type
import logging

import duckdb
import psycopg2

from ..catalog.names import QualifiedName
from ..catalog.schema import FieldInfo, TableInfo
from ..catalog.types import TypeConverter
from ..datasources.base import Connection, DatabaseMetadata, DataSource
from . import paging
from .base import ConnectorContext, TableService
from .errors import MetadataFormatError
from .exception_mapper import ExceptionMapper
from .identifiers import IdentifierPolicy
from .paging import Pageable, Sort
from .projector import to_field_info, to_qualified_name
from .reader import CatalogReader
from .source_type import build_source_type

logger = logging.getLogger(__name__)

# Failures translated into connector errors
DRIVER_ERRORS: Tuple[Type[BaseException], ...] = (
    ConnectionError,
    MetadataFormatError,
    duckdb.Error,
    psycopg2.Error,
)


class RelationalTableService(TableService):
    """Table service that introspects and alters a relational backend.

    Every operation checks out one connection, resolves the backend's
    identifier case policy on it, scopes it to the database and releases it
    before returning. Nothing is cached between operations.
    """

    def __init__(
        self,
        datasource: DataSource,
        type_converter: TypeConverter,
        exception_mapper: ExceptionMapper,
        driver_errors: Tuple[Type[BaseException], ...] = DRIVER_ERRORS,
    ):
        """Initialize table service.

        Args:
            datasource: Provider of live connections
            type_converter: Converter from source types to canonical types
            exception_mapper: Translator of caught failures
            driver_errors: Failure types that are translated
        """
        self.datasource = datasource
        self.type_converter = type_converter
        self.exception_mapper = exception_mapper
        self.driver_errors = driver_errors

    def delete(self, context: ConnectorContext, name: QualifiedName) -> None:
        """Drop a table."""
        database_name = name.database_name
        table_name = name.table_name
        logger.debug(
            f"Attempting to delete table {table_name} from database {database_name} for {context}"
        )
        try:
            with self.datasource.get_connection() as connection:
                policy, _ = self._scope_connection(connection, database_name)
                final_table_name = policy.normalize(table_name)
                connection.execute_update(self.get_drop_table_sql(name, final_table_name))
        except self.driver_errors as e:
            raise self.exception_mapper.to_connector_error(e, name) from e
        logger.debug(
            f"Deleted table {table_name} from database {database_name} for {context}"
        )

    def get(self, context: ConnectorContext, name: QualifiedName) -> TableInfo:
        """Describe one table from its live column metadata."""
        logger.debug(f"Beginning to get table metadata for {name} for {context}")
        try:
            with self.datasource.get_connection() as connection:
                policy, metadata = self._scope_connection(connection, name.database_name)
                reader = CatalogReader(metadata, policy)
                fields: List[FieldInfo] = []
                for row in reader.list_columns(name):
                    fields.append(
                        to_field_info(row, self.type_converter, self.build_source_type)
                    )
        except self.driver_errors as e:
            raise self.exception_mapper.to_connector_error(e, name) from e
        logger.debug(f"Finished getting table metadata for {name} for {context}")
        return TableInfo(name=name, fields=fields)

    def list(
        self,
        context: ConnectorContext,
        name: QualifiedName,
        prefix: Optional[QualifiedName] = None,
        sort: Optional[Sort] = None,
        pageable: Optional[Pageable] = None,
    ) -> List[TableInfo]:
        """Describe the tables of a database.

        Names are sorted and paged first, then each table is fetched with
        ``get``. Any failing fetch aborts the whole listing.
        """
        logger.debug(f"Beginning to list table metadata for {name} for {context}")
        tables: List[TableInfo] = []
        for table_name in self.list_names(context, name, prefix, sort, pageable):
            tables.append(self.get(context, table_name))
        logger.debug(f"Finished listing table metadata for {name} for {context}")
        return tables

    def list_names(
        self,
        context: ConnectorContext,
        name: QualifiedName,
        prefix: Optional[QualifiedName] = None,
        sort: Optional[Sort] = None,
        pageable: Optional[Pageable] = None,
    ) -> List[QualifiedName]:
        """Enumerate table and view names of a database."""
        logger.debug(f"Beginning to list table names for {name} for {context}")
        try:
            with self.datasource.get_connection() as connection:
                policy, metadata = self._scope_connection(connection, name.database_name)
                reader = CatalogReader(metadata, policy)
                names: List[QualifiedName] = []
                for row in reader.list_tables(name, prefix):
                    names.append(to_qualified_name(name, row))
        except self.driver_errors as e:
            raise self.exception_mapper.to_connector_error(e, name) from e

        if sort is not None:
            names = paging.sort(names, sort, key=lambda qualified: qualified.table_name)
        results = paging.paginate(names, pageable)
        logger.debug(f"Finished listing table names for {name} for {context}")
        return results

    def rename(
        self,
        context: ConnectorContext,
        old_name: QualifiedName,
        new_name: QualifiedName,
    ) -> None:
        """Rename a table within its database.

        Raises:
            ValueError: If the names are in different databases
        """
        old_database_name = old_name.database_name
        new_database_name = new_name.database_name
        old_table_name = old_name.table_name
        new_table_name = new_name.table_name
        logger.debug(
            f"Attempting to re-name table {old_database_name}/{old_table_name} "
            f"to {new_database_name}/{new_table_name} for {context}"
        )

        if old_database_name != new_database_name:
            raise ValueError(
                f"Database names must match and they are {old_database_name} and {new_database_name}"
            )
        try:
            with self.datasource.get_connection() as connection:
                policy, _ = self._scope_connection(connection, old_database_name)
                final_old_table_name = policy.normalize(old_table_name)
                final_new_table_name = policy.normalize(new_table_name)
                connection.execute_update(
                    self.get_rename_table_sql(
                        old_name, final_old_table_name, final_new_table_name
                    )
                )
        except self.driver_errors as e:
            raise self.exception_mapper.to_connector_error(e, old_name) from e
        logger.debug(
            f"Renamed table {old_database_name}/{old_table_name} "
            f"to {new_database_name}/{new_table_name} for {context}"
        )

    def build_source_type(
        self, type_name: str, size: Optional[str], precision: Optional[str]
    ) -> str:
        """Rebuild a source type, e.g. DECIMAL(20, 10)."""
        return build_source_type(type_name, size, precision)

    def get_rename_table_sql(
        self,
        old_name: QualifiedName,
        final_old_table_name: str,
        final_new_table_name: str,
    ) -> str:
        """Build the statement renaming a table.

        Identifiers are concatenated as given; callers pass validated names.
        """
        return f"ALTER TABLE {final_old_table_name} RENAME TO {final_new_table_name}"

    def get_drop_table_sql(self, name: QualifiedName, final_table_name: str) -> str:
        """Build the statement dropping a table."""
        return f"DROP TABLE {final_table_name}"

    def _scope_connection(
        self, connection: Connection, database_name: str
    ) -> Tuple[IdentifierPolicy, DatabaseMetadata]:
        """Resolve the case policy and scope the connection to the database."""
        metadata = connection.get_metadata()
        policy = IdentifierPolicy.for_metadata(metadata)
        connection.set_schema(policy.normalize(database_name))
        return policy, metadata

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(datasource={self.datasource.name})"
