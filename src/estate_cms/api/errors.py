"""
estate_cms.api.errors

Exception handlers that render every failure as the error envelope
`{success: false, message, reason?, errors?}`.

Responsibilities:
- Map `ApiError` subclasses to their status codes, keeping the failure reason.
- Report request validation failures (bodies, query values, path ids) as 400.
- Turn unique-constraint violations that slipped past the pre-checks into 400.
- Log unexpected exceptions and hide their details from clients.
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_500_INTERNAL_SERVER_ERROR

from estate_cms.errors import ApiError
from estate_cms.observability.logging import get_logger
from estate_cms.query.filters import InvalidFilterValue

log = get_logger(__name__)


def envelope(
    status_code: int,
    message: str,
    errors: list[Any] | None = None,
    *,
    reason: str | None = None,
) -> JSONResponse:
    body: dict[str, Any] = {"success": False, "message": message}
    if reason:
        body["reason"] = reason
    if errors:
        body["errors"] = errors
    return JSONResponse(status_code=status_code, content=body)


def _field_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    # Only loc/msg are kept; pydantic's ctx may hold exception objects.
    return [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", "Invalid value"),
        }
        for err in exc.errors()
    ]


async def _api_error(request: Request, exc: ApiError) -> JSONResponse:
    return envelope(exc.status_code, exc.message, exc.errors, reason=exc.reason)


async def _invalid_filter(request: Request, exc: InvalidFilterValue) -> JSONResponse:
    return envelope(HTTP_400_BAD_REQUEST, str(exc))


async def _validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    return envelope(HTTP_400_BAD_REQUEST, "Validation errors", _field_errors(exc))


async def _http(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return envelope(exc.status_code, str(exc.detail))


async def _integrity(request: Request, exc: IntegrityError) -> JSONResponse:
    log.warning("db.integrity_error", error=str(exc.orig))
    return envelope(HTTP_400_BAD_REQUEST, "A record with these details already exists")


async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
    log.exception("request.unexpected_error", error_type=type(exc).__name__)
    return envelope(HTTP_500_INTERNAL_SERVER_ERROR, "Server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, _api_error)
    app.add_exception_handler(InvalidFilterValue, _invalid_filter)
    app.add_exception_handler(RequestValidationError, _validation)
    app.add_exception_handler(StarletteHTTPException, _http)
    app.add_exception_handler(IntegrityError, _integrity)
    app.add_exception_handler(Exception, _unexpected)


# --- Module Notes -----------------------------------------------------------
# Starlette routes `Exception` handlers through ServerErrorMiddleware, which re-raises
# after responding; the client still receives the 500 envelope.
