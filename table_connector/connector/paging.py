"""Sort and pagination directives for listing operations."""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence, TypeVar

T = TypeVar("T")


class SortOrder(Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class Sort:
    """Sort directive. ``sort_by`` names the attribute; listings sort by name."""

    sort_by: Optional[str] = None
    order: SortOrder = SortOrder.ASC


@dataclass(frozen=True)
class Pageable:
    """Offset/limit directive. Without a limit nothing is paged."""

    limit: Optional[int] = None
    offset: int = 0

    def __post_init__(self):
        if self.offset < 0:
            raise ValueError(f"Offset must not be negative: {self.offset}")
        if self.limit is not None and self.limit < 0:
            raise ValueError(f"Limit must not be negative: {self.limit}")

    def is_pageable(self) -> bool:
        return self.limit is not None


def sort(items: Sequence[T], directive: Sort, key: Callable[[T], object]) -> List[T]:
    """Stable sort by key in the directive's order."""
    return sorted(items, key=key, reverse=directive.order == SortOrder.DESC)


def paginate(items: Sequence[T], pageable: Optional[Pageable]) -> List[T]:
    """Apply offset/limit; an offset past the end yields an empty list."""
    if pageable is None or not pageable.is_pageable():
        return list(items)
    end = pageable.offset + pageable.limit
    return list(items[pageable.offset:end])
