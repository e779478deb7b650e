"""Draft model shared by the create and edit dialogs."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import TYPE_CHECKING

from pydantic import ValidationError as PydanticValidationError

from studentdir.gateway import StudentDraft, ValidationError

if TYPE_CHECKING:
    from studentdir.gateway import Student

# Form field -> label shown to the operator
FIELD_LABELS = {
    "name": "Student Name",
    "email": "Email",
    "age": "Age",
    "average_marks": "Average Marks",
}


@dataclass
class StudentForm:
    """In-progress edit of a student, as typed by the operator.

    Values are kept as text so a rejected submission leaves exactly what the
    operator entered.
    """

    name: str = ""
    email: str = ""
    age: str = ""
    average_marks: str = ""

    @classmethod
    def from_student(cls, student: Student) -> StudentForm:
        """Pre-populate from an existing record; absent fields become blank."""
        return cls(
            name=student.name or "",
            email=student.email or "",
            age="" if student.age is None else str(student.age),
            average_marks=_format_number(student.average_score),
        )

    def update(self, **values: str) -> None:
        """Set one or more fields.

        Raises:
            KeyError: If a field name is unknown.
        """
        for key, value in values.items():
            if key not in FIELD_LABELS:
                raise KeyError(f"Unknown form field: {key}")
            setattr(self, key, value)

    def reset(self) -> None:
        """Clear every field."""
        for f in fields(self):
            setattr(self, f.name, "")

    def missing_fields(self) -> list[str]:
        """Names of required fields left blank."""
        return [f.name for f in fields(self) if not getattr(self, f.name).strip()]

    def to_draft(self) -> StudentDraft:
        """Validate the form and convert it for the gateway.

        Raises:
            ValidationError: With a per-field map when any field is blank or invalid.
        """
        missing = self.missing_fields()
        if missing:
            labels = ", ".join(FIELD_LABELS[name] for name in missing)
            raise ValidationError(
                f"Required field(s) missing: {labels}",
                fields={name: "required" for name in missing},
            )

        try:
            return StudentDraft(
                name=self.name,
                email=self.email,
                age=self.age.strip(),
                average_marks=self.average_marks.strip(),
            )
        except PydanticValidationError as e:
            problems = {str(err["loc"][0]): err["msg"] for err in e.errors() if err["loc"]}
            labels = ", ".join(FIELD_LABELS.get(name, name) for name in problems)
            raise ValidationError(f"Invalid value for: {labels}", fields=problems) from e


def _format_number(value: float | None) -> str:
    if value is None:
        return ""
    if float(value).is_integer():
        return str(int(value))
    return str(value)
