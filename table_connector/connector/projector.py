"""Projection of catalog rows into catalog model objects."""

from ..catalog.names import QualifiedName
from ..catalog.schema import FieldInfo
from ..catalog.types import TypeConverter
from ..datasources.base import ColumnRow, TableRow
from .source_type import build_source_type, parse_metadata_int


def to_field_info(
    row: ColumnRow, type_converter: TypeConverter, build=build_source_type
) -> FieldInfo:
    """Build a field from one column row.

    Args:
        row: Column row as reported by the catalog
        type_converter: Converter from source type to canonical type
        build: Source type reconstruction, overridable per backend

    Returns:
        Field metadata

    Raises:
        MetadataFormatError: If size or precision is not an integer
    """
    source_type = build(row.type_name, row.column_size, row.decimal_digits)
    return FieldInfo(
        name=row.column_name,
        type=type_converter.to_canonical_type(source_type),
        source_type=source_type,
        is_nullable=row.is_nullable == "YES",
        size=parse_metadata_int(row.column_size, "Size"),
        default_value=row.column_default,
        comment=row.remarks,
    )


def to_qualified_name(name: QualifiedName, row: TableRow) -> QualifiedName:
    """Name a listed table under the requested catalog and database.

    The table component keeps the case the catalog reported.
    """
    return QualifiedName.of_table(name.catalog_name, name.database_name, row.table_name)
