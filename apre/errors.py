"""
API Errors

Typed errors raised by report routes and the data-access helper, and the
exception handlers that turn every failure into the same JSON envelope:

    {"message": str, "status": int, "type": "error"}
"""

from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR
import structlog

logger = structlog.get_logger(__name__)

GENERIC_ERROR_MESSAGE = "Internal Server Error"


class ReportError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status: int = HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = GENERIC_ERROR_MESSAGE

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ReportError):
    """A required request parameter is missing or malformed."""

    status = 400
    default_message = "Bad Request"


class NotFoundError(ReportError):
    """No route matches the request."""

    status = 404
    default_message = "Not Found"


class UpstreamError(ReportError):
    """The report store failed while answering a query."""

    status = 500
    default_message = GENERIC_ERROR_MESSAGE


def error_body(message: str, status: int) -> Dict[str, Any]:
    """Build the error envelope shared by all error responses."""
    return {"message": message, "status": status, "type": "error"}


def error_response(message: str, status: int) -> JSONResponse:
    return JSONResponse(status_code=status, content=error_body(message, status))


async def report_error_handler(request: Request, exc: ReportError) -> JSONResponse:
    if exc.status >= 500:
        logger.error(
            "Report request failed",
            path=request.url.path,
            error=exc.message,
            error_type=type(exc).__name__,
            cause=repr(exc.__cause__) if exc.__cause__ else None,
        )
        # Store details stay in the server log
        return error_response(GENERIC_ERROR_MESSAGE, exc.status)

    logger.info(
        "Report request rejected",
        path=request.url.path,
        status=exc.status,
        error=exc.message,
    )
    return error_response(exc.message, exc.status)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        message = NotFoundError.default_message
    else:
        message = str(exc.detail)
    response = error_response(message, exc.status_code)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ())[1:])
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = ValidationError.default_message

    logger.info("Request validation failed", path=request.url.path, error=message)
    return error_response(message, ValidationError.status)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error",
        path=request.url.path,
        error_type=type(exc).__name__,
    )
    return error_response(GENERIC_ERROR_MESSAGE, HTTP_500_INTERNAL_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error envelope handlers on an application."""
    app.add_exception_handler(ReportError, report_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
