"""DirectoryController - Owns the directory state and its commands."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Any

from studentdir.collaborators import NoticeKind
from studentdir.directory.models import DirectoryMode, DirectoryState
from studentdir.directory.observers import StateCallback, StateObservers
from studentdir.forms import CreateStudentDialog, EditStudentDialog
from studentdir.gateway import GatewayError
from studentdir.logging import get_logger
from studentdir.pagination import PageResult, clamp_page, validate_page_size
from studentdir.search import BULK_SEARCH_SIZE, SearchKind, SearchResolver

if TYPE_CHECKING:
    from studentdir.collaborators import Confirmer, Notifier, RecordViewer
    from studentdir.gateway import RecordGateway, Student

logger = get_logger("directory")

DEFAULT_PAGE_SIZE = 10

_SEARCH_MODES = {
    SearchKind.BY_ID: DirectoryMode.SEARCHING_BY_ID,
    SearchKind.BY_NAME: DirectoryMode.SEARCHING_BY_NAME,
}


class DirectoryController:
    """Single source of truth for the rows the directory shows.

    Every command that calls the store takes a new sequence number before
    its first await. A response is applied only if its sequence number is
    still the latest, so the operator always ends up seeing the result of
    their last command even when responses arrive out of order.

    State is never mutated in place: each transition publishes a new
    immutable DirectoryState to subscribers.
    """

    def __init__(
        self,
        gateway: RecordGateway,
        notifier: Notifier,
        confirmer: Confirmer,
        viewer: RecordViewer | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        bulk_search_size: int = BULK_SEARCH_SIZE,
    ) -> None:
        """Initialize the Directory Controller.

        Args:
            gateway: Record Gateway for all remote calls.
            notifier: Receives success/error/info notices.
            confirmer: Asked before a record is deleted.
            viewer: Receives records opened with view_record().
            page_size: Initial page size; one of PAGE_SIZE_OPTIONS.
            bulk_search_size: Records fetched for a name search.
        """
        self.gateway = gateway
        self.notifier = notifier
        self.confirmer = confirmer
        self.viewer = viewer
        self.resolver = SearchResolver(gateway, bulk_size=bulk_search_size)

        self._page = 1
        self._limit = validate_page_size(page_size)
        self._seq = 0
        self._observers = StateObservers()
        self._state = DirectoryState(pagination=PageResult(page_size=self._limit))

    @property
    def state(self) -> DirectoryState:
        """Current state snapshot."""
        return self._state

    @property
    def page(self) -> int:
        """Page the next listing refresh will request."""
        return self._page

    @property
    def limit(self) -> int:
        """Page size the next listing refresh will request."""
        return self._limit

    def subscribe(self, callback: StateCallback) -> str:
        """Register for state snapshots; returns a subscriber ID."""
        return self._observers.subscribe(callback)

    def unsubscribe(self, subscriber_id: str) -> None:
        self._observers.unsubscribe(subscriber_id)

    def _set_state(self, **changes: Any) -> None:
        self._state = replace(self._state, **changes)
        self._observers.publish(self._state)

    def _begin(self, command: str) -> int:
        """Start a command: take the next sequence number and mark loading."""
        self._seq += 1
        logger.debug("Command %s issued (seq=%d)", command, self._seq)
        self._set_state(loading=True)
        return self._seq

    def _is_current(self, seq: int, command: str) -> bool:
        if seq == self._seq:
            return True
        logger.debug("Discarding stale %s response (seq=%d, latest=%d)", command, seq, self._seq)
        return False

    async def refresh(self) -> None:
        """Return to listing mode and reload the current page."""
        seq = self._begin("refresh")
        page, limit = self._page, self._limit

        try:
            result = await self.gateway.list_page(page, limit)
            if result.total_records > 0 and page > result.total_pages:
                # The page no longer exists (e.g. its last record was deleted)
                if not self._is_current(seq, "refresh"):
                    return
                logger.info("Page %d out of range, clamping to %d", page, result.total_pages)
                page = result.total_pages
                self._page = page
                result = await self.gateway.list_page(page, limit)
        except GatewayError as e:
            if not self._is_current(seq, "refresh"):
                return
            logger.warning("Failed to fetch students: %s", e)
            self._set_state(
                mode=DirectoryMode.LISTING,
                rows=(),
                loading=False,
                last_error=e.kind,
            )
            self.notifier.notify(NoticeKind.ERROR, "Failed to fetch students")
            return

        if not self._is_current(seq, "refresh"):
            return

        self._page = result.page
        self._set_state(
            mode=DirectoryMode.LISTING,
            rows=result.items,
            pagination=result,
            loading=False,
            last_error=None,
        )

    async def change_page(self, page: int) -> None:
        """Go to another page of the listing.

        Only meaningful in listing mode; ignored while search results are shown.
        """
        if self._state.mode is not DirectoryMode.LISTING:
            logger.warning("Ignoring page change to %d in %s mode", page, self._state.mode)
            return

        self._page = clamp_page(page, self._state.pagination.total_pages)
        await self.refresh()

    async def change_limit(self, page_size: int) -> None:
        """Change the page size; always restarts from page 1.

        Raises:
            ValueError: If page_size is not one of PAGE_SIZE_OPTIONS.
        """
        self._limit = validate_page_size(page_size)
        self._page = 1
        await self.refresh()

    async def search(self, query: str) -> None:
        """Search by ID (integer query) or by name (anything else).

        A blank query is a plain refresh.
        """
        q = query.strip()
        if not q:
            await self.refresh()
            return

        seq = self._begin("search")
        try:
            outcome = await self.resolver.resolve(q)
        except GatewayError as e:
            if not self._is_current(seq, "search"):
                return
            logger.warning("Search %r failed: %s", q, e)
            self._set_state(loading=False, last_error=e.kind)
            self.notifier.notify(NoticeKind.ERROR, "Search failed")
            return

        if not self._is_current(seq, "search"):
            return

        pagination = PageResult(
            items=outcome.rows,
            page=1,
            page_size=self._limit,
            total_pages=1,
            total_records=outcome.total_records,
        )
        self._set_state(
            mode=_SEARCH_MODES[outcome.kind],
            rows=outcome.rows,
            pagination=pagination,
            loading=False,
            last_error=None,
        )
        if outcome.not_found:
            self.notifier.notify(NoticeKind.INFO, f"No student found with ID {q}")

    async def delete_record(self, student_id: int, name: str | None = None) -> bool:
        """Delete a student after the operator confirms.

        Returns:
            True if the student was deleted; False if the operator cancelled
            or the store refused.
        """
        label = name or f"student #{student_id}"
        confirmed = await self.confirmer.request_confirmation(f"You are about to delete {label}.")
        if not confirmed:
            logger.info("Delete of student #%d cancelled", student_id)
            return False

        seq = self._begin("delete")
        try:
            await self.gateway.delete(student_id)
        except GatewayError as e:
            logger.warning("Failed to delete student #%d: %s", student_id, e)
            if self._is_current(seq, "delete"):
                self._set_state(loading=False, last_error=e.kind)
            self.notifier.notify(NoticeKind.ERROR, "Failed to delete student")
            return False

        self.notifier.notify(NoticeKind.SUCCESS, "Student deleted successfully.")
        # Skipped once a newer command has taken over; it reads the store itself
        if self._is_current(seq, "delete"):
            await self.refresh()
        return True

    async def view_record(self, student_id: int) -> Student | None:
        """Fetch one student and hand it to the viewer. State is not touched."""
        try:
            student = await self.gateway.get_by_id(student_id)
        except GatewayError as e:
            logger.warning("Failed to fetch student #%d: %s", student_id, e)
            self.notifier.notify(NoticeKind.ERROR, "Failed to fetch student details")
            return None

        if self.viewer is not None:
            self.viewer.show_record(student)
        return student

    def request_create(self) -> CreateStudentDialog:
        """Open an empty create dialog that refreshes the directory on success."""
        dialog = CreateStudentDialog(self.gateway, self.notifier, on_success=self.refresh)
        dialog.open()
        return dialog

    def request_edit(self, student: Student) -> EditStudentDialog:
        """Open an edit dialog pre-populated from student."""
        dialog = EditStudentDialog(
            self.gateway, self.notifier, on_success=self.refresh, student=student
        )
        dialog.open()
        return dialog
