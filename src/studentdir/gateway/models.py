"""Wire models for the Record Gateway.

The store returns records with ``average_score`` but expects ``averageMarks``
when creating or updating; both names are confined to this module.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Student(BaseModel):
    """Read-only copy of a student record owned by the store."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int = Field(..., gt=0)
    name: str
    email: str = ""
    age: int | None = None
    average_score: float | None = None

    @field_validator("email", mode="before")
    @classmethod
    def _email_or_blank(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def display_score(self) -> float:
        """Average score as shown in the table; a missing score shows as 0."""
        return self.average_score if self.average_score is not None else 0


class StudentDraft(BaseModel):
    """Unsaved student fields sent on create and update."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    age: int = Field(..., ge=1)
    average_marks: float = Field(..., ge=0, le=100, serialization_alias="averageMarks")

    @field_validator("name", "email", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the request body the store expects."""
        return self.model_dump(by_alias=True)
