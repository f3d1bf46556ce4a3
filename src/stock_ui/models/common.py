"""
Shared list and notification models for the Stock UI.

ListQuery describes what a list view is asking for, ListResult holds the
page the server answered with, and Notice carries a transient message
for the user. All of them are immutable snapshots; controllers replace
them rather than mutate them.
"""

import math
from dataclasses import dataclass, field
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class ListMetadata:
    """
    Pagination metadata reported by the back end.

    Attributes:
        total_records: Number of records matching the search.
        current_page: Page number of this result (1-indexed).
        page_size: Number of items per page.
        total_pages: Number of pages available.
    """

    total_records: int = 0
    current_page: int = 1
    page_size: int = 10
    total_pages: int = 0

    @classmethod
    def for_slice(cls, total_records: int, page: int, page_size: int) -> "ListMetadata":
        """Build metadata for a locally paginated collection."""
        page_size = max(page_size, 1)
        return cls(
            total_records=total_records,
            current_page=page,
            page_size=page_size,
            total_pages=math.ceil(total_records / page_size),
        )


@dataclass(frozen=True, slots=True)
class ListResult(Generic[T]):
    """One page of entities together with its metadata."""

    items: tuple[T, ...] = ()
    metadata: ListMetadata = field(default_factory=ListMetadata)

    @classmethod
    def of(cls, items: Sequence[T], metadata: ListMetadata) -> "ListResult[T]":
        return cls(items=tuple(items), metadata=metadata)


@dataclass(frozen=True, slots=True)
class ListQuery:
    """
    Query state of a list view.

    Attributes:
        page: Requested page (1-indexed).
        page_size: Fixed number of items per page.
        raw_search_term: Search box contents, updated on every keystroke.
        committed_search_term: Search term actually sent to the server.
    """

    page: int = 1
    page_size: int = 10
    raw_search_term: str = ""
    committed_search_term: str = ""

    @property
    def key(self) -> tuple[int, str]:
        """The part of the query whose change triggers a fetch."""
        return (self.page, self.committed_search_term)


@dataclass(frozen=True, slots=True)
class Notice:
    """A transient notification for the user."""

    level: str
    message: str

    @classmethod
    def success(cls, message: str) -> "Notice":
        return cls(level="success", message=message)

    @classmethod
    def error(cls, message: str) -> "Notice":
        return cls(level="error", message=message)
