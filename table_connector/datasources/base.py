"""Base connection provider interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

# Table types enumerated by the catalog reader
TABLE_TYPES = ("TABLE", "VIEW")

# Pattern token matching zero or more characters
MULTI_CHARACTER_SEARCH = "%"


@dataclass(frozen=True)
class TableRow:
    """One row of table enumeration output."""

    table_catalog: Optional[str]
    table_schema: Optional[str]
    table_name: str
    table_type: str
    remarks: Optional[str] = None


@dataclass(frozen=True)
class ColumnRow:
    """One row of column enumeration output.

    Size and digits are kept as the text the backend reported so that the
    caller decides how to interpret them.
    """

    table_name: str
    column_name: str
    type_name: str
    column_size: Optional[str]
    decimal_digits: Optional[str]
    is_nullable: Optional[str]
    column_default: Optional[str] = None
    remarks: Optional[str] = None


class DatabaseMetadata(ABC):
    """Catalog introspection for one live connection."""

    @abstractmethod
    def stores_upper_case_identifiers(self) -> bool:
        """Return True if the backend stores unquoted identifiers upper-cased."""
        pass

    @abstractmethod
    def get_tables(
        self,
        schema_pattern: Optional[str],
        table_pattern: Optional[str],
        types: Sequence[str] = TABLE_TYPES,
    ) -> List[TableRow]:
        """Enumerate tables and views.

        Args:
            schema_pattern: Schema name pattern, None for all schemas
            table_pattern: Table name pattern, None for all tables
            types: Table types to include

        Returns:
            Rows ordered by table type and name
        """
        pass

    @abstractmethod
    def get_columns(
        self,
        schema_pattern: Optional[str],
        table_pattern: Optional[str],
        column_pattern: Optional[str],
    ) -> List[ColumnRow]:
        """Enumerate columns.

        Args:
            schema_pattern: Schema name pattern, None for all schemas
            table_pattern: Table name pattern, None for all tables
            column_pattern: Column name pattern, None for all columns

        Returns:
            Rows ordered by table and ordinal position
        """
        pass


class Connection(ABC):
    """A live connection checked out from a data source.

    Closing the connection hands it back to its data source. Use it as a
    context manager so that it is released on every path.
    """

    @abstractmethod
    def get_metadata(self) -> DatabaseMetadata:
        """Return catalog introspection bound to this connection."""
        pass

    @abstractmethod
    def set_schema(self, schema: str) -> None:
        """Scope subsequent unqualified names to a schema."""
        pass

    @abstractmethod
    def execute_update(self, sql: str) -> None:
        """Execute a data definition statement."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the connection."""
        pass

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False


class DataSource(ABC):
    """Abstract base class for connection providers."""

    def __init__(self, name: str, config: Dict[str, Any]):
        """Initialize data source.

        Args:
            name: Unique name for this data source
            config: Configuration dictionary
        """
        self.name = name
        self.config = config
        self._connected = False

    @property
    @abstractmethod
    def dialect(self) -> str:
        """sqlglot dialect name of the backend."""
        pass

    @abstractmethod
    def connect(self) -> None:
        """Establish connection to the data source."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Close connection to the data source."""
        pass

    @abstractmethod
    def get_connection(self) -> Connection:
        """Check out a connection.

        Raises:
            ConnectionError: If no connection can be acquired
        """
        pass

    def is_connected(self) -> bool:
        """Check if data source is connected.

        Returns:
            True if connected, False otherwise
        """
        return self._connected

    def ensure_connected(self) -> None:
        """Ensure data source is connected.

        Raises:
            ConnectionError: If connection cannot be established
        """
        if not self.is_connected():
            self.connect()
            self._connected = True

    def __enter__(self):
        """Context manager entry."""
        self.ensure_connected()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.disconnect()
        self._connected = False
        return False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name})"


def build_like_filters(
    filters: Sequence[Any], placeholder: str, operator: str = "LIKE"
) -> Tuple[List[str], List[str]]:
    """Build LIKE clauses for the patterns that are set.

    Args:
        filters: Pairs of (column expression, pattern or None)
        placeholder: Parameter placeholder of the driver, e.g. ``?`` or ``%s``
        operator: Pattern operator, ``LIKE`` or a case-insensitive ``ILIKE``

    Returns:
        Tuple of (clauses, parameters)
    """
    clauses: List[str] = []
    params: List[str] = []
    for column, pattern in filters:
        if pattern is None:
            continue
        clauses.append(f"{column} {operator} {placeholder}")
        params.append(pattern)
    return clauses, params
