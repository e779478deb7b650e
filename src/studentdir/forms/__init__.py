"""Mutation Orchestrators - create and edit dialogs for students."""

from studentdir.forms.dialogs import CreateStudentDialog, EditStudentDialog, StudentDialog
from studentdir.forms.models import FIELD_LABELS, StudentForm

__all__ = [
    "FIELD_LABELS",
    "CreateStudentDialog",
    "EditStudentDialog",
    "StudentDialog",
    "StudentForm",
]
