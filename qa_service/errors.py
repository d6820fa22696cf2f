# qa_service/errors.py

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from .logging_config import get_logger

logger = get_logger(__name__)


class QAServiceError(Exception):
    """Base class for errors surfaced to the caller as the JSON error envelope."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(QAServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class UnauthorizedError(QAServiceError):
    """Missing or invalid credentials, or the caller does not own the resource."""

    status_code = status.HTTP_401_UNAUTHORIZED


class ValidationError(QAServiceError):
    status_code = status.HTTP_400_BAD_REQUEST


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        field = ".".join(loc)
        msg = err.get("msg", "Invalid value")
        parts.append(f"{field}: {msg}" if field else msg)
    return "; ".join(parts) or "Invalid request"


async def _handle_service_error(request: Request, exc: QAServiceError) -> JSONResponse:
    logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    headers = None
    if isinstance(exc, UnauthorizedError):
        headers = {"WWW-Authenticate": "Bearer"}
    response = error_response(exc.status_code, exc.message)
    if headers:
        response.headers.update(headers)
    return response


async def _handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _format_validation_errors(exc)
    logger.warning("%s %s -> 400: %s", request.method, request.url.path, message)
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def _handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def install_error_handlers(app: FastAPI) -> None:
    """Render every error as ``{"success": false, "error": message}``."""
    app.add_exception_handler(QAServiceError, _handle_service_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
    app.add_exception_handler(HTTPException, _handle_http_exception)
    app.add_exception_handler(Exception, _handle_unexpected)


__all__ = [
    "QAServiceError",
    "NotFoundError",
    "UnauthorizedError",
    "ValidationError",
    "error_response",
    "install_error_handlers",
]
