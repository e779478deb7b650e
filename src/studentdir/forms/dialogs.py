"""Create and edit dialogs - collect a draft, validate, and save it."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from studentdir.collaborators import NoticeKind
from studentdir.forms.models import StudentForm
from studentdir.gateway import GatewayError, ValidationError
from studentdir.logging import get_logger

if TYPE_CHECKING:
    from studentdir.collaborators import Notifier
    from studentdir.gateway import RecordGateway, Student, StudentDraft

logger = get_logger("forms")

OnSuccess = Callable[[], Awaitable[None]]


class StudentDialog(ABC):
    """Shared submit flow for the create and edit dialogs.

    The draft is owned by the dialog, not by the directory. A failed
    submission leaves the dialog open with the draft untouched; a successful
    one closes the dialog and awaits ``on_success`` (normally the directory
    refresh).
    """

    success_message = "Student saved successfully"
    failure_message = "Failed to save student"

    def __init__(
        self,
        gateway: RecordGateway,
        notifier: Notifier,
        on_success: OnSuccess,
        form: StudentForm | None = None,
    ) -> None:
        self.gateway = gateway
        self.notifier = notifier
        self.on_success = on_success
        self.form = form if form is not None else StudentForm()
        self.is_open = False
        self.last_error: GatewayError | None = None

    def open(self) -> None:
        self.is_open = True

    def close(self) -> None:
        self.is_open = False

    @abstractmethod
    async def _save(self, draft: StudentDraft) -> Student:
        """Send the draft to the store and return the stored record."""

    def _after_save(self) -> None:
        """Hook run after a successful save, before the dialog closes."""

    async def submit(self) -> bool:
        """Validate the draft and send it to the store.

        Returns:
            True if the record was saved, False if validation or the store
            rejected it.
        """
        try:
            draft = self.form.to_draft()
        except ValidationError as e:
            logger.info("Draft rejected locally: %s", e.fields)
            self.last_error = e
            self.notifier.notify(NoticeKind.ERROR, str(e))
            return False

        try:
            student = await self._save(draft)
        except GatewayError as e:
            logger.warning("%s: %s", self.failure_message, e)
            self.last_error = e
            message = str(e) if isinstance(e, ValidationError) else self.failure_message
            self.notifier.notify(NoticeKind.ERROR, message)
            return False

        self.last_error = None
        logger.info("Saved student #%d", student.id)
        self.notifier.notify(NoticeKind.SUCCESS, self.success_message)
        self._after_save()
        self.close()
        await self.on_success()
        return True


class CreateStudentDialog(StudentDialog):
    """Dialog for adding a new student."""

    success_message = "Student added successfully"
    failure_message = "Failed to add student"

    async def _save(self, draft: StudentDraft) -> Student:
        return await self.gateway.create(draft)

    def _after_save(self) -> None:
        self.form.reset()


class EditStudentDialog(StudentDialog):
    """Dialog for updating an existing student."""

    success_message = "Student updated successfully"
    failure_message = "Failed to update student"

    def __init__(
        self,
        gateway: RecordGateway,
        notifier: Notifier,
        on_success: OnSuccess,
        student: Student,
    ) -> None:
        super().__init__(gateway, notifier, on_success, form=StudentForm.from_student(student))
        self.student = student

    async def _save(self, draft: StudentDraft) -> Student:
        return await self.gateway.update(self.student.id, draft)
