"""Custom exceptions for the Record Gateway."""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Category of a failed remote operation."""

    NETWORK = "network"
    SERVER = "server"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"


class GatewayError(Exception):
    """Base exception for Record Gateway errors."""

    kind: ErrorKind = ErrorKind.SERVER


class NetworkError(GatewayError):
    """Transport or connectivity failure; no response was received."""

    kind = ErrorKind.NETWORK


class ServerError(GatewayError):
    """Non-2xx response without field detail, or a malformed response body."""

    kind = ErrorKind.SERVER

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ValidationError(GatewayError):
    """Student fields were rejected, by the store or by local checks."""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, fields: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.fields = fields or {}


class NotFoundError(GatewayError):
    """Student with given ID does not exist."""

    kind = ErrorKind.NOT_FOUND
