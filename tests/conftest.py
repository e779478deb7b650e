"""Shared pytest fixtures and configuration."""

from __future__ import annotations

import math
from typing import Any

import httpx
import pytest
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from studentdir.gateway import RecordGateway, Student


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


@pytest.fixture(autouse=True)
def _log_dir(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep log files out of the working tree."""
    monkeypatch.setenv("STUDENTDIR_LOG_DIR", str(tmp_path / "logs"))


def make_student(student_id: int, name: str | None = None, **overrides: Any) -> Student:
    """Build a Student with plausible defaults."""
    data: dict[str, Any] = {
        "id": student_id,
        "name": name or f"Student {student_id}",
        "email": f"student{student_id}@example.com",
        "age": 20,
        "average_score": 75.0,
    }
    data.update(overrides)
    return Student.model_validate(data)


@pytest.fixture
def student_factory():
    """Factory fixture for Student records."""
    return make_student


# In-memory record store speaking the /students REST contract


class StudentIn(BaseModel):
    name: str
    email: str
    age: int
    averageMarks: float  # noqa: N815 - wire name


class FakeRecordStore:
    """Record store backed by a dict, served as a FastAPI app."""

    def __init__(self) -> None:
        self.students: dict[int, dict[str, Any]] = {}
        self.requests: list[tuple[str, str]] = []
        self._next_id = 1

    def add(self, name: str, email: str | None = None, age: int = 20, score: float = 75.0) -> int:
        student_id = self._next_id
        self._next_id += 1
        self.students[student_id] = {
            "id": student_id,
            "name": name,
            "email": email or f"{name.lower().replace(' ', '.')}@example.com",
            "age": age,
            "average_score": score,
        }
        return student_id

    def seed(self, count: int) -> None:
        for i in range(count):
            self.add(f"Student {i + 1}")

    def _not_found(self) -> JSONResponse:
        return JSONResponse(status_code=404, content={"message": "Student not found"})

    def _store(self, student_id: int, body: StudentIn) -> dict[str, Any] | JSONResponse:
        if not body.name.strip():
            return JSONResponse(status_code=400, content={"message": "Name is required"})
        if any(
            s["email"] == body.email and s["id"] != student_id for s in self.students.values()
        ):
            return JSONResponse(
                status_code=400,
                content={"message": "Email already exists", "errors": {"email": "taken"}},
            )
        record = {
            "id": student_id,
            "name": body.name,
            "email": body.email,
            "age": body.age,
            "average_score": body.averageMarks,
        }
        self.students[student_id] = record
        return {"data": record}

    def build_app(self) -> FastAPI:
        app = FastAPI()
        store = self

        @app.middleware("http")
        async def record_request(request, call_next):  # type: ignore[no-untyped-def]
            store.requests.append((request.method, str(request.url.path)))
            return await call_next(request)

        @app.get("/api/students")
        async def list_students(page: int = 1, limit: int = 10) -> dict[str, Any]:
            ordered = [store.students[k] for k in sorted(store.students)]
            start = (page - 1) * limit
            return {
                "data": ordered[start : start + limit],
                "totalPages": math.ceil(len(ordered) / limit),
                "totalRecords": len(ordered),
            }

        @app.get("/api/students/{student_id}", response_model=None)
        async def get_student(student_id: int) -> dict[str, Any] | JSONResponse:
            if student_id not in store.students:
                return store._not_found()
            return {"data": store.students[student_id]}

        @app.post("/api/students", status_code=201, response_model=None)
        async def create_student(body: StudentIn) -> dict[str, Any] | JSONResponse:
            student_id = store._next_id
            result = store._store(student_id, body)
            if not isinstance(result, JSONResponse):
                store._next_id += 1
            return result

        @app.put("/api/students/{student_id}", response_model=None)
        async def update_student(student_id: int, body: StudentIn) -> dict[str, Any] | JSONResponse:
            if student_id not in store.students:
                return store._not_found()
            return store._store(student_id, body)

        @app.delete("/api/students/{student_id}", response_model=None)
        async def delete_student(student_id: int) -> dict[str, Any] | JSONResponse:
            if store.students.pop(student_id, None) is None:
                return store._not_found()
            return {}

        return app

    def gateway(self) -> RecordGateway:
        """A RecordGateway wired to this store without a network."""
        transport = httpx.ASGITransport(app=self.build_app())
        return RecordGateway(base_url="http://testserver/api", transport=transport)

    def count(self, method: str, path: str) -> int:
        return sum(1 for m, p in self.requests if m == method and p == path)


@pytest.fixture
def record_store() -> FakeRecordStore:
    """Empty in-memory record store."""
    return FakeRecordStore()
