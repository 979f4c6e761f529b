"""Structured connector errors."""

from typing import Optional

from ..catalog.names import QualifiedName


class ConnectorError(Exception):
    """A backend failure tagged with the qualified name it concerns."""

    def __init__(
        self,
        name: QualifiedName,
        message: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        self.name = name
        self.cause = cause
        if message is None:
            message = str(cause) if cause is not None else "connector failure"
        self.message = message
        super().__init__(f"{message} ({name})")


class DatabaseNotFoundError(ConnectorError):
    """The database (schema) does not exist."""

    pass


class TableNotFoundError(ConnectorError):
    """The table does not exist."""

    pass


class TableAlreadyExistsError(ConnectorError):
    """A table with the target name already exists."""

    pass


class ConnectorPermissionError(ConnectorError):
    """The backend refused the operation for lack of privileges."""

    pass


class MetadataFormatError(ValueError):
    """Catalog metadata could not be interpreted, e.g. a non-numeric size."""

    pass
