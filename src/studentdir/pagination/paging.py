"""Pure pagination arithmetic."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from studentdir.pagination.models import PAGE_SIZE_OPTIONS, PageResult

if TYPE_CHECKING:
    from studentdir.gateway.models import Student


def clamp_page(requested: int, total_pages: int) -> int:
    """Clamp a requested page into [1, total_pages].

    Args:
        requested: Page the operator asked for.
        total_pages: Pages currently available; 0 is treated as a single page.

    Returns:
        requested if in range, otherwise the nearer bound.
    """
    if total_pages < 1:
        return 1
    if requested < 1:
        return 1
    if requested > total_pages:
        return total_pages
    return requested


def display_range(page: int, page_size: int, total_records: int, row_count: int) -> tuple[int, int]:
    """Compute the "Showing X to Y" bounds for the table footer."""
    first = 0 if row_count == 0 else (page - 1) * page_size + 1
    last = min(page * page_size, total_records)
    return first, last


def validate_page_size(page_size: int) -> int:
    """Return page_size unchanged if the table offers it.

    Raises:
        ValueError: If page_size is not one of PAGE_SIZE_OPTIONS.
    """
    if page_size not in PAGE_SIZE_OPTIONS:
        raise ValueError(f"Page size must be one of {list(PAGE_SIZE_OPTIONS)}, got {page_size}")
    return page_size


def page_numbers(total_pages: int) -> list[int]:
    """Page links rendered between Previous and Next."""
    return list(range(1, max(total_pages, 1) + 1))


def normalize_page_result(
    items: Iterable[Student],
    page: int,
    page_size: int,
    total_pages: int | None,
    total_records: int | None,
) -> PageResult:
    """Build a PageResult that honors the page invariants.

    Missing or non-positive totals are floored (total_pages to 1,
    total_records to 0). The page is clamped into range, and forced to 1
    when the store is empty.
    """
    rows = tuple(items)
    records = max(total_records or 0, 0)
    pages = max(total_pages or 1, 1)
    current = 1 if records == 0 else clamp_page(page, pages)
    return PageResult(
        items=rows,
        page=current,
        page_size=page_size,
        total_pages=pages,
        total_records=records,
    )
