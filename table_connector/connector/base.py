"""Table service contract used by the owning catalog service."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional
import uuid

from ..catalog.names import QualifiedName
from ..catalog.schema import TableInfo
from .paging import Pageable, Sort


@dataclass(frozen=True)
class ConnectorContext:
    """Request context passed with every operation; used for logging."""

    request_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    user_name: Optional[str] = None

    def __str__(self) -> str:
        return f"request={self.request_id} user={self.user_name}"


class TableService(ABC):
    """Table-level operations of a connector."""

    @abstractmethod
    def get(self, context: ConnectorContext, name: QualifiedName) -> TableInfo:
        """Describe one table."""
        pass

    @abstractmethod
    def list(
        self,
        context: ConnectorContext,
        name: QualifiedName,
        prefix: Optional[QualifiedName] = None,
        sort: Optional[Sort] = None,
        pageable: Optional[Pageable] = None,
    ) -> List[TableInfo]:
        """Describe the tables of a database."""
        pass

    @abstractmethod
    def list_names(
        self,
        context: ConnectorContext,
        name: QualifiedName,
        prefix: Optional[QualifiedName] = None,
        sort: Optional[Sort] = None,
        pageable: Optional[Pageable] = None,
    ) -> List[QualifiedName]:
        """Enumerate the table names of a database."""
        pass

    @abstractmethod
    def delete(self, context: ConnectorContext, name: QualifiedName) -> None:
        """Drop a table."""
        pass

    @abstractmethod
    def rename(
        self,
        context: ConnectorContext,
        old_name: QualifiedName,
        new_name: QualifiedName,
    ) -> None:
        """Rename a table within its database."""
        pass
