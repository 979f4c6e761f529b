"""Identifier case policy for catalog queries and generated statements."""

from dataclasses import dataclass

from ..datasources.base import DatabaseMetadata


@dataclass(frozen=True)
class IdentifierPolicy:
    """Case policy of one connection.

    Resolved once per connection and passed to every call that puts an
    identifier into a catalog query or a statement, so reads and writes of
    the same operation always agree on case.
    """

    upper_case: bool = False

    @classmethod
    def for_metadata(cls, metadata: DatabaseMetadata) -> "IdentifierPolicy":
        """Resolve the policy from the backend's identifier storage."""
        return cls(upper_case=metadata.stores_upper_case_identifiers())

    def normalize(self, identifier: str) -> str:
        """Apply the policy to one identifier.

        ``str.upper`` does not depend on the process locale.
        """
        if self.upper_case:
            return identifier.upper()
        return identifier
