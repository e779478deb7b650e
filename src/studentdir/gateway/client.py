"""RecordGateway - Typed client for the remote student record store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from studentdir.gateway.exceptions import (
    NetworkError,
    NotFoundError,
    ServerError,
    ValidationError,
)
from studentdir.gateway.models import Student, StudentDraft
from studentdir.logging import get_logger, sanitize_for_log
from studentdir.pagination import PageResult, normalize_page_result

if TYPE_CHECKING:
    from types import TracebackType

logger = get_logger("gateway")

DEFAULT_BASE_URL = "http://localhost:5000/api"

# Status codes the store uses to reject specific fields
_VALIDATION_STATUSES = (400, 422)


class RecordGateway:
    """Client for the /students REST resource.

    Each method is a single round trip. Nothing is retried; callers decide
    whether to re-issue a failed operation.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the Record Gateway.

        Args:
            base_url: Base API URL; student paths are resolved below it.
            timeout: Per-request timeout in seconds.
            transport: Optional httpx transport (for testing).
        """
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> RecordGateway:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send one request and map failures onto the gateway taxonomy.

        Returns:
            Decoded JSON body (an empty dict for an empty body).

        Raises:
            NetworkError: If no response was received.
            NotFoundError: On 404.
            ValidationError: On 400 or 422.
            ServerError: On any other non-2xx status or a non-JSON body.
        """
        logger.debug("%s %s params=%s", method, path, params)
        try:
            response = await self.client.request(method, path, params=params, json=json)
        except httpx.TransportError as e:
            logger.warning(
                "%s %s failed: %s", method, path, sanitize_for_log(f"{type(e).__name__}: {e}")
            )
            raise NetworkError(f"Could not reach the record store: {e}") from e

        if response.status_code == 404:
            raise NotFoundError(_error_message(response, "Student not found"))
        if response.status_code in _VALIDATION_STATUSES:
            raise ValidationError(
                _error_message(response, "Student was rejected by the store"),
                fields=_error_fields(response),
            )
        if not response.is_success:
            logger.warning("%s %s returned %d", method, path, response.status_code)
            raise ServerError(
                _error_message(response, f"Record store returned {response.status_code}"),
                status_code=response.status_code,
            )

        if not response.content:
            return {}
        try:
            body = response.json()
        except ValueError as e:
            raise ServerError("Record store returned a non-JSON body", response.status_code) from e
        if not isinstance(body, dict):
            raise ServerError("Record store returned an unexpected body", response.status_code)
        return body

    async def list_page(self, page: int, page_size: int) -> PageResult:
        """Fetch one page of students.

        Args:
            page: 1-based page number.
            page_size: Records per page.

        Returns:
            PageResult with totals as reported by the store.
        """
        body = await self._request("GET", "/students", params={"page": page, "limit": page_size})
        items = body.get("data") or []
        if not isinstance(items, list):
            raise ServerError("Record store returned a malformed page")

        result = normalize_page_result(
            (_parse_student(item) for item in items),
            page=page,
            page_size=page_size,
            total_pages=_as_int(body.get("totalPages")),
            total_records=_as_int(body.get("totalRecords")),
        )
        logger.info(
            "Listed page %d/%d (%d of %d record(s))",
            result.page,
            result.total_pages,
            len(result.items),
            result.total_records,
        )
        return result

    async def get_by_id(self, student_id: int) -> Student:
        """Fetch a single student.

        Raises:
            NotFoundError: If the store has no student with that ID.
        """
        body = await self._request("GET", f"/students/{student_id}")
        data = body.get("data")
        if not data:
            raise NotFoundError(f"Student #{student_id} not found")
        return _parse_student(data)

    async def create(self, draft: StudentDraft) -> Student:
        """Create a student and return the stored record."""
        body = await self._request("POST", "/students", json=draft.to_payload())
        student = _parse_student(body.get("data"))
        logger.info("Created student #%d", student.id)
        return student

    async def update(self, student_id: int, draft: StudentDraft) -> Student:
        """Replace a student's fields and return the stored record."""
        body = await self._request("PUT", f"/students/{student_id}", json=draft.to_payload())
        student = _parse_student(body.get("data"))
        logger.info("Updated student #%d", student_id)
        return student

    async def delete(self, student_id: int) -> None:
        """Delete a student."""
        await self._request("DELETE", f"/students/{student_id}")
        logger.info("Deleted student #%d", student_id)


def _parse_student(data: Any) -> Student:
    """Validate one inbound record."""
    try:
        return Student.model_validate(data)
    except PydanticValidationError as e:
        raise ServerError(f"Record store returned an invalid student: {e}") from e


def _as_int(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _json_or_none(response: httpx.Response) -> dict[str, Any] | None:
    try:
        body = response.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


def _error_message(response: httpx.Response, default: str) -> str:
    """Pull the store's human-readable message out of an error body."""
    body = _json_or_none(response)
    if body is None:
        return default
    for key in ("message", "error", "detail"):
        value = body.get(key)
        if isinstance(value, str) and value:
            return value
    return default


def _error_fields(response: httpx.Response) -> dict[str, str]:
    """Per-field rejection reasons, accepting either a mapping or a FastAPI-style list."""
    body = _json_or_none(response)
    if body is None:
        return {}

    errors = body.get("errors")
    if isinstance(errors, dict):
        return {str(k): str(v) for k, v in errors.items()}

    detail = body.get("detail")
    if isinstance(detail, list):
        fields: dict[str, str] = {}
        for entry in detail:
            if not isinstance(entry, dict):
                continue
            loc = entry.get("loc") or []
            name = str(loc[-1]) if loc else "body"
            fields[name] = str(entry.get("msg", "invalid"))
        return fields

    return {}

