"""Interfaces the directory expects from the presentation layer."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from studentdir.gateway import Student


class NoticeKind(StrEnum):
    """Kind of transient operator feedback."""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


class Notifier(Protocol):
    """Shows transient feedback (toasts, alerts) to the operator."""

    def notify(self, kind: NoticeKind, message: str) -> None:
        """Show a notice."""
        ...


class Confirmer(Protocol):
    """Asks the operator a yes/no question before a destructive action."""

    async def request_confirmation(self, message: str) -> bool:
        """Return True if the operator confirmed, False if they cancelled."""
        ...


class RecordViewer(Protocol):
    """Displays a single student's details."""

    def show_record(self, student: Student) -> None:
        """Present the student read-only."""
        ...
