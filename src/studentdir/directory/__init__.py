"""Directory Controller - Paginated, searchable view over the record store."""

from studentdir.directory.controller import DEFAULT_PAGE_SIZE, DirectoryController
from studentdir.directory.models import DirectoryMode, DirectoryState
from studentdir.directory.observers import StateObservers

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "DirectoryController",
    "DirectoryMode",
    "DirectoryState",
    "StateObservers",
]
