"""Table-level connector operations."""

from .base import ConnectorContext, TableService
from .errors import (
    ConnectorError,
    ConnectorPermissionError,
    DatabaseNotFoundError,
    MetadataFormatError,
    TableAlreadyExistsError,
    TableNotFoundError,
)
from .exception_mapper import (
    ExceptionMapper,
    DuckDBExceptionMapper,
    PostgreSQLExceptionMapper,
)
from .identifiers import IdentifierPolicy
from .paging import Pageable, Sort, SortOrder
from .source_type import build_source_type
from .table_service import RelationalTableService
from .factory import create_datasource, create_table_service

__all__ = [
    "ConnectorContext",
    "TableService",
    "ConnectorError",
    "ConnectorPermissionError",
    "DatabaseNotFoundError",
    "MetadataFormatError",
    "TableAlreadyExistsError",
    "TableNotFoundError",
    "ExceptionMapper",
    "DuckDBExceptionMapper",
    "PostgreSQLExceptionMapper",
    "IdentifierPolicy",
    "Pageable",
    "Sort",
    "SortOrder",
    "build_source_type",
    "RelationalTableService",
    "create_datasource",
    "create_table_service",
]
