"""Data models for the Pagination Model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from studentdir.gateway.models import Student

# Page sizes the table offers
PAGE_SIZE_OPTIONS = (5, 10, 25, 50)


@dataclass(frozen=True)
class PageResult:
    """One page of students as reported by the store.

    Attributes:
        items: Students on this page, in store order.
        page: 1-based page number; 1 whenever total_records is 0.
        page_size: Requested page size.
        total_pages: Number of pages, never less than 1.
        total_records: Number of records across all pages.
    """

    items: tuple[Student, ...] = field(default_factory=tuple)
    page: int = 1
    page_size: int = 10
    total_pages: int = 1
    total_records: int = 0
