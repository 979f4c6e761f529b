"""Catalog model: qualified names, table and field metadata, canonical types."""

from .names import QualifiedName
from .schema import TableInfo, FieldInfo
from .types import CanonicalType, DataType, TypeConverter

__all__ = [
    "QualifiedName",
    "TableInfo",
    "FieldInfo",
    "CanonicalType",
    "DataType",
    "TypeConverter",
]
