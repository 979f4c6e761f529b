"""Table and field metadata classes."""

from dataclasses import dataclass, field
from typing import List, Optional

from .names import QualifiedName
from .types import CanonicalType


@dataclass(frozen=True)
class FieldInfo:
    """Column metadata projected from one catalog row."""

    name: str
    type: CanonicalType
    source_type: str
    is_nullable: bool
    size: Optional[int] = None
    default_value: Optional[str] = None
    comment: Optional[str] = None

    def __repr__(self) -> str:
        return f"FieldInfo({self.name}, {self.source_type})"


@dataclass(frozen=True)
class TableInfo:
    """Table metadata: a name plus its fields in catalog order."""

    name: QualifiedName
    fields: List[FieldInfo] = field(default_factory=list)

    def get_field(self, name: str) -> Optional[FieldInfo]:
        """Get field by name."""
        for info in self.fields:
            if info.name.lower() == name.lower():
                return info
        return None

    def __repr__(self) -> str:
        return f"TableInfo({self.name}, fields={len(self.fields)})"
