"""Canonical type model and the default source type converter."""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple
import logging

from sqlglot import exp
from sqlglot.errors import ParseError

logger = logging.getLogger(__name__)


class DataType(Enum):
    """Catalog-wide canonical data types."""

    BOOLEAN = "boolean"
    TINYINT = "tinyint"
    SMALLINT = "smallint"
    INTEGER = "int"
    BIGINT = "bigint"
    FLOAT = "float"
    DOUBLE = "double"
    DECIMAL = "decimal"
    CHAR = "char"
    VARCHAR = "varchar"
    STRING = "string"
    BINARY = "binary"
    DATE = "date"
    TIME = "time"
    TIMESTAMP = "timestamp"
    JSON = "json"
    UNKNOWN = "unknown"


# sqlglot type names -> canonical types
_SQLGLOT_TYPE_MAP = {
    "BOOLEAN": DataType.BOOLEAN,
    "TINYINT": DataType.TINYINT,
    "UTINYINT": DataType.TINYINT,
    "SMALLINT": DataType.SMALLINT,
    "USMALLINT": DataType.SMALLINT,
    "INT": DataType.INTEGER,
    "UINT": DataType.INTEGER,
    "MEDIUMINT": DataType.INTEGER,
    "BIGINT": DataType.BIGINT,
    "UBIGINT": DataType.BIGINT,
    "INT128": DataType.DECIMAL,
    "UINT128": DataType.DECIMAL,
    "FLOAT": DataType.FLOAT,
    "DOUBLE": DataType.DOUBLE,
    "DECIMAL": DataType.DECIMAL,
    "MONEY": DataType.DECIMAL,
    "CHAR": DataType.CHAR,
    "NCHAR": DataType.CHAR,
    "BPCHAR": DataType.CHAR,
    "VARCHAR": DataType.VARCHAR,
    "NVARCHAR": DataType.VARCHAR,
    "TEXT": DataType.STRING,
    "MEDIUMTEXT": DataType.STRING,
    "LONGTEXT": DataType.STRING,
    "UUID": DataType.STRING,
    "BINARY": DataType.BINARY,
    "VARBINARY": DataType.BINARY,
    "DATE": DataType.DATE,
    "TIME": DataType.TIME,
    "TIMETZ": DataType.TIME,
    "TIMESTAMP": DataType.TIMESTAMP,
    "TIMESTAMPTZ": DataType.TIMESTAMP,
    "TIMESTAMPLTZ": DataType.TIMESTAMP,
    "DATETIME": DataType.TIMESTAMP,
    "JSON": DataType.JSON,
    "JSONB": DataType.JSON,
}

# Source spellings a dialect folds into a broader sqlglot type. These are
# parsed without the dialect so that they keep their own canonical type.
_DIALECT_PRESERVED_TYPES = {
    "duckdb": frozenset({"VARCHAR"}),
}


@dataclass(frozen=True)
class CanonicalType:
    """Canonical type with optional numeric parameters, e.g. decimal(20,10)."""

    base: DataType
    parameters: Tuple[int, ...] = ()

    def __str__(self) -> str:
        if not self.parameters:
            return self.base.value
        params = ",".join(str(param) for param in self.parameters)
        return f"{self.base.value}({params})"


class TypeConverter:
    """Converts backend source type strings into canonical types.

    Source types are parsed with sqlglot in the backend's dialect so that
    aliases such as ``int4`` or ``float8`` resolve to the same canonical type
    as their standard spellings.
    """

    def __init__(self, dialect: Optional[str] = None):
        """Initialize converter.

        Args:
            dialect: sqlglot dialect used to parse source types
        """
        self.dialect = dialect

    def to_canonical_type(self, source_type: str) -> CanonicalType:
        """Convert a reconstructed source type to a canonical type.

        Args:
            source_type: Source type such as ``DECIMAL(20, 10)``

        Returns:
            Canonical type, ``UNKNOWN`` if the source type cannot be mapped
        """
        dialect = self.dialect
        if self._base_name(source_type) in _DIALECT_PRESERVED_TYPES.get(dialect, ()):
            dialect = None
        try:
            parsed = exp.DataType.build(source_type, dialect=dialect, udt=True)
        except (ParseError, ValueError) as e:
            logger.debug(f"Could not parse source type '{source_type}': {e}")
            return CanonicalType(DataType.UNKNOWN)

        base = _SQLGLOT_TYPE_MAP.get(parsed.this.name, DataType.UNKNOWN)
        if base == DataType.UNKNOWN:
            return CanonicalType(base)
        return CanonicalType(base, self._extract_parameters(parsed))

    def _base_name(self, source_type: str) -> str:
        return source_type.split("(", 1)[0].strip().upper()

    def _extract_parameters(self, parsed: exp.DataType) -> Tuple[int, ...]:
        """Collect integer type parameters in declaration order."""
        parameters: List[int] = []
        for param in parsed.expressions:
            text = param.name
            if text.isdigit():
                parameters.append(int(text))
        return tuple(parameters)
