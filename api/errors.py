"""
Error mapping for the HTTP layer.

Domain errors are translated 1:1 to status codes here; handlers never expose
internal details for unexpected failures.
"""

from __future__ import annotations

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.models import ErrorResponse
from domain.errors import ErrorCode, TicketingError

logger = logging.getLogger(__name__)

STATUS_BY_CODE: dict[ErrorCode, HTTPStatus] = {
    ErrorCode.NO_AVAILABLE_SEATS: HTTPStatus.CONFLICT,
    ErrorCode.RECEIPT_NOT_FOUND: HTTPStatus.NOT_FOUND,
    ErrorCode.RECEIPT_NOT_FOUND_BY_ID: HTTPStatus.NOT_FOUND,
    ErrorCode.SEAT_ALREADY_OCCUPIED: HTTPStatus.CONFLICT,
    ErrorCode.NO_RECEIPTS_FOUND: HTTPStatus.NOT_FOUND,
    ErrorCode.VALIDATION_ERROR: HTTPStatus.BAD_REQUEST,
    ErrorCode.UNEXPECTED: HTTPStatus.INTERNAL_SERVER_ERROR,
}

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


def error_response(code: ErrorCode, message: str) -> JSONResponse:
    """Build the failure envelope for an error kind."""

    status = STATUS_BY_CODE[code]
    body = ErrorResponse(
        status=status.phrase,
        status_code=status.value,
        message=message,
        success=False,
        data=None,
        error=code.value,
    )
    return JSONResponse(status_code=status.value, content=body.model_dump(mode="json", by_alias=True))


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    message = str(first.get("msg", "Invalid request"))
    # Custom validators surface as "Value error, <message>".
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"{location}: {message}" if location else message


async def handle_ticketing_error(request: Request, exc: TicketingError) -> JSONResponse:
    logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
    return error_response(exc.code, exc.message)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _validation_message(exc)
    logger.warning("%s %s rejected: %s", request.method, request.url.path, message)
    return error_response(ErrorCode.VALIDATION_ERROR, message)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected error on %s %s", request.method, request.url.path)
    return error_response(ErrorCode.UNEXPECTED, UNEXPECTED_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TicketingError, handle_ticketing_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


__all__ = ["STATUS_BY_CODE", "error_response", "register_exception_handlers"]
