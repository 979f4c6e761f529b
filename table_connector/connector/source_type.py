"""Reconstruction of source type strings from catalog metadata."""

from typing import Optional

from .errors import MetadataFormatError


def parse_metadata_int(value: Optional[str], field: str) -> Optional[int]:
    """Parse a reported size or precision.

    Backends report 0 (or less) for fields that do not apply to a type, so
    such values are treated as absent.

    Args:
        value: Text reported by the catalog, or None
        field: Field name used in the error message

    Returns:
        Positive integer, or None if absent

    Raises:
        MetadataFormatError: If the value is not an integer
    """
    if value is None:
        return None
    try:
        parsed = int(value)
    except (TypeError, ValueError) as e:
        raise MetadataFormatError(
            f"{field} field could not be converted to integer: {value!r}"
        ) from e
    if parsed < 1:
        return None
    return parsed


def build_source_type(
    type_name: str, size: Optional[str], precision: Optional[str]
) -> str:
    """Rebuild a source type definition.

    Args:
        type_name: The base type, e.g. VARCHAR
        size: The size if applicable to the type
        precision: The precision (scale) if applicable, e.g. for DECIMAL

    Returns:
        The source type, e.g. INTEGER, VARCHAR(50) or DECIMAL(20, 10).
        A precision without a size is dropped.

    Raises:
        MetadataFormatError: If size or precision is set but not an integer
    """
    size_int = parse_metadata_int(size, "Size")
    precision_int = parse_metadata_int(precision, "Precision")
    if size_int is not None and precision_int is not None:
        return f"{type_name}({size_int}, {precision_int})"
    if size_int is not None:
        return f"{type_name}({size_int})"
    return type_name
