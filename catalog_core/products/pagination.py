"""Offset/limit pagination over ordered sequences."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from catalog_core.products.schemas import PagingSchema

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """Slice of an ordered sequence with its navigation metadata.

    Attributes:
        items: Items in the window.
        paging: Totals and next/previous offsets.
    """

    items: list[T]
    paging: PagingSchema

    @property
    def total(self) -> int:
        """Length of the sequence before slicing."""
        return self.paging.total

    @property
    def has_next(self) -> bool:
        """Check if there's a next page."""
        return self.paging.has_next_page

    @property
    def has_prev(self) -> bool:
        """Check if there's a previous page."""
        return self.paging.has_previous_page


def paginate(items: Sequence[T], offset: int, limit: int) -> Page[T]:
    """Take the window ``[offset, offset + limit)`` of ``items``.

    Bounds are expected to be validated by the caller.

    Args:
        items: Ordered sequence.
        offset: Index of the first item.
        limit: Maximum number of items.

    Returns:
        Page with up to ``limit`` items; empty if ``offset`` is past the end.
    """
    return Page(
        items=list(items[offset:offset + limit]),
        paging=PagingSchema.from_window(total=len(items), offset=offset, limit=limit),
    )
