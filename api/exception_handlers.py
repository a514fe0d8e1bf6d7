"""Exception handlers mapping domain errors to HTTP responses.

Every error leaves the API in one shape::

    {"statusCode": 400, "message": "Email already in use", "error": "Bad Request"}

``message`` is a list of strings for request-body validation failures.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any, List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from utils.exceptions import (
    AuthenticationError,
    UserNotFoundError,
    UserServiceError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _status_for(exc: UserServiceError) -> int:
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, AuthenticationError):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(exc, UserNotFoundError):
        return status.HTTP_404_NOT_FOUND
    return status.HTTP_400_BAD_REQUEST


def error_response(status_code: int, message: Any, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "statusCode": status_code,
            "message": message,
            "error": HTTPStatus(status_code).phrase,
        },
        headers=headers,
    )


def _format_validation_errors(exc: RequestValidationError) -> List[str]:
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{location}: {err.get('msg')}" if location else err.get("msg"))
    return messages


async def domain_exception_handler(request: Request, exc: UserServiceError) -> JSONResponse:
    status_code = _status_for(exc)
    if status_code == status.HTTP_401_UNAUTHORIZED:
        return error_response(status_code, exc.message, {"WWW-Authenticate": "Bearer"})
    return error_response(status_code, exc.message)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return error_response(exc.status_code, exc.detail, getattr(exc, "headers", None))


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, _format_validation_errors(exc))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"
    )


def setup_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(UserServiceError, domain_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
