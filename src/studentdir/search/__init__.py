"""Search Resolver - ID lookup or client-side name filtering."""

from studentdir.search.models import SearchKind, SearchOutcome
from studentdir.search.resolver import (
    BULK_SEARCH_SIZE,
    SearchResolver,
    classify_query,
    name_matches,
)

__all__ = [
    "BULK_SEARCH_SIZE",
    "SearchKind",
    "SearchOutcome",
    "SearchResolver",
    "classify_query",
    "name_matches",
]
