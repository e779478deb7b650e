"""Data models for the Directory Controller."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from studentdir.pagination import PageResult, display_range

if TYPE_CHECKING:
    from studentdir.gateway import ErrorKind, Student


class DirectoryMode(StrEnum):
    """What the rows currently represent."""

    LISTING = "listing"
    SEARCHING_BY_ID = "searching_by_id"
    SEARCHING_BY_NAME = "searching_by_name"


@dataclass(frozen=True)
class DirectoryState:
    """Snapshot of what the directory shows.

    Instances are immutable; the controller publishes a new snapshot for
    every transition.

    Attributes:
        mode: Listing, or one of the search modes.
        rows: Students currently shown.
        pagination: Page numbers and totals for the rows.
        loading: True while a remote call for the latest command is pending.
        last_error: Kind of the most recent failure, cleared on success.
    """

    mode: DirectoryMode = DirectoryMode.LISTING
    rows: tuple[Student, ...] = field(default_factory=tuple)
    pagination: PageResult = field(default_factory=PageResult)
    loading: bool = False
    last_error: ErrorKind | None = None

    @property
    def is_searching(self) -> bool:
        return self.mode is not DirectoryMode.LISTING

    @property
    def is_empty(self) -> bool:
        return not self.rows

    @property
    def shown_range(self) -> tuple[int, int]:
        """First and last row numbers for "Showing X to Y of Z entries"."""
        if self.is_searching:
            # Search results are a single unpaged list
            return (1 if self.rows else 0), len(self.rows)
        p = self.pagination
        return display_range(p.page, p.page_size, p.total_records, len(self.rows))

    @property
    def first_shown(self) -> int:
        return self.shown_range[0]

    @property
    def last_shown(self) -> int:
        return self.shown_range[1]
