"""
estate_cms.errors

API error taxonomy.

Responsibilities:
- Give services/routers typed exceptions that map 1:1 onto the error envelope
  `{success: false, message, reason?, errors?}` and an HTTP status.
"""

from __future__ import annotations

from typing import Any

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)


class ApiError(Exception):
    status_code: int = HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, errors: list[Any] | None = None, reason: str | None = None):
        super().__init__(message)
        self.message = message
        self.errors = errors
        self.reason = reason


class BadRequestError(ApiError):
    status_code = HTTP_400_BAD_REQUEST


class ConflictError(BadRequestError):
    """Duplicate unique field or a referenced record; the frontend expects 400 here."""


class UnauthorizedError(ApiError):
    status_code = HTTP_401_UNAUTHORIZED


class ForbiddenError(ApiError):
    status_code = HTTP_403_FORBIDDEN


class NotFoundError(ApiError):
    status_code = HTTP_404_NOT_FOUND


# --- Module Notes -----------------------------------------------------------
# Handlers live in `api.errors`; raising these from services keeps them HTTP-agnostic
# apart from the status code attribute.
