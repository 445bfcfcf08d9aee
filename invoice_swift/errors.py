from __future__ import annotations

from typing import Any


class InvoiceSwiftError(Exception):
    """Base class for errors raised by this package."""


class DocumentValidationError(InvoiceSwiftError, ValueError):
    """Input rejected before anything is sent to the backend."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


class ApiError(InvoiceSwiftError):
    """The backend answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str, payload: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.payload = payload


class ApiConnectionError(InvoiceSwiftError):
    """The request never produced a response."""
