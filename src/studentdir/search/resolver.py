"""Search Resolver - Turns a query into an ID lookup or a name filter."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from studentdir.gateway import NotFoundError
from studentdir.logging import get_logger
from studentdir.search.models import SearchKind, SearchOutcome

if TYPE_CHECKING:
    from studentdir.gateway import RecordGateway

logger = get_logger("search")

# Records fetched for a name search before filtering locally
BULK_SEARCH_SIZE = 100

_INTEGER_QUERY = re.compile(r"[+-]?[0-9]+")


def classify_query(query: str) -> SearchKind | None:
    """Decide how a query will be resolved.

    A query that is entirely an integer is always an ID lookup, even if some
    student's name is that same number.

    Returns:
        None for a blank query, otherwise the SearchKind.
    """
    q = query.strip()
    if not q:
        return None
    if _INTEGER_QUERY.fullmatch(q):
        return SearchKind.BY_ID
    return SearchKind.BY_NAME


def name_matches(name: str, query: str) -> bool:
    """Case-insensitive substring match."""
    return query.casefold() in name.casefold()


class SearchResolver:
    """Resolves search queries against the Record Gateway."""

    def __init__(self, gateway: RecordGateway, bulk_size: int = BULK_SEARCH_SIZE) -> None:
        """Initialize the Search Resolver.

        Args:
            gateway: Gateway used for lookups.
            bulk_size: Number of records fetched for a name search.
        """
        self.gateway = gateway
        self.bulk_size = bulk_size

    async def resolve(self, query: str) -> SearchOutcome:
        """Resolve a query.

        Args:
            query: Raw query; surrounding whitespace is ignored.

        Returns:
            SearchOutcome with the matching rows. A missing ID is reported via
            ``not_found`` rather than raised.

        Raises:
            ValueError: If the query is blank.
            GatewayError: For any failure other than a missing ID.
        """
        q = query.strip()
        match classify_query(q):
            case SearchKind.BY_ID:
                return await self._by_id(q)
            case SearchKind.BY_NAME:
                return await self._by_name(q)
            case _:
                raise ValueError("Cannot resolve a blank query")

    async def _by_id(self, q: str) -> SearchOutcome:
        try:
            student_id = int(q)
        except ValueError:
            # Too many digits to convert; no store can hold such an ID
            logger.info("ID query of %d digit(s) is out of range", len(q))
            return SearchOutcome(kind=SearchKind.BY_ID, query=q, not_found=True)
        logger.info("Searching by ID %d", student_id)
        try:
            student = await self.gateway.get_by_id(student_id)
        except NotFoundError:
            logger.info("No student with ID %d", student_id)
            return SearchOutcome(kind=SearchKind.BY_ID, query=q, not_found=True)
        return SearchOutcome(kind=SearchKind.BY_ID, query=q, rows=(student,))

    async def _by_name(self, q: str) -> SearchOutcome:
        logger.info("Searching by name %r over the first %d record(s)", q, self.bulk_size)
        page = await self.gateway.list_page(1, self.bulk_size)
        rows = tuple(student for student in page.items if name_matches(student.name, q))
        logger.info("Name search %r matched %d record(s)", q, len(rows))
        return SearchOutcome(kind=SearchKind.BY_NAME, query=q, rows=rows)
