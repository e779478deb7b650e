"""Data models for the Search Resolver."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from studentdir.gateway import Student


class SearchKind(StrEnum):
    """How a query is resolved."""

    BY_ID = "by_id"
    BY_NAME = "by_name"


@dataclass(frozen=True)
class SearchOutcome:
    """Result of resolving one query.

    Attributes:
        kind: Whether the query was an ID lookup or a name filter.
        query: The trimmed query string.
        rows: Matching students, in store order.
        not_found: True when an ID lookup found no student.
    """

    kind: SearchKind
    query: str
    rows: tuple[Student, ...] = field(default_factory=tuple)
    not_found: bool = False

    @property
    def total_records(self) -> int:
        return len(self.rows)
