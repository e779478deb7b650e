"""Pagination Model - page state and the arithmetic that keeps it consistent."""

from studentdir.pagination.models import PAGE_SIZE_OPTIONS, PageResult
from studentdir.pagination.paging import (
    clamp_page,
    display_range,
    normalize_page_result,
    page_numbers,
    validate_page_size,
)

__all__ = [
    "PAGE_SIZE_OPTIONS",
    "PageResult",
    "clamp_page",
    "display_range",
    "normalize_page_result",
    "page_numbers",
    "validate_page_size",
]
