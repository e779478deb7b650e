"""Record Gateway - Typed client for the remote student record store."""

from studentdir.gateway.client import DEFAULT_BASE_URL, RecordGateway
from studentdir.gateway.exceptions import (
    ErrorKind,
    GatewayError,
    NetworkError,
    NotFoundError,
    ServerError,
    ValidationError,
)
from studentdir.gateway.models import Student, StudentDraft

__all__ = [
    "DEFAULT_BASE_URL",
    "ErrorKind",
    "GatewayError",
    "NetworkError",
    "NotFoundError",
    "RecordGateway",
    "ServerError",
    "Student",
    "StudentDraft",
    "ValidationError",
]
