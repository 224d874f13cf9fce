"""
Error taxonomy and the handlers that turn it into response envelopes.

Every failure leaves the API as ``{"message": ..., "details": ...}`` with a
status code chosen by the kind of failure.
"""
import logging
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger("kgl.errors")


class KGLError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Server error"

    def __init__(self, message: Optional[str] = None, details: Any = None):
        self.message = message or self.message
        self.details = details
        super().__init__(self.message)


class EntityValidationError(KGLError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Validation failed"


class InvalidIdentifier(KGLError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid record id"


class RecordNotFound(KGLError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Record not found"


class AuthError(KGLError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Could not validate credentials"


class AuthorizationError(KGLError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Not enough permissions"


def error_envelope(message: str, details: Any = None) -> dict:
    body = {"message": message}
    if details is not None:
        body["details"] = details
    return body


def _field_errors(exc: RequestValidationError) -> list:
    errors = []
    for err in exc.errors():
        # loc is ("body", "tonnage") for body fields, ("path", "id") for params
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        errors.append({"field": ".".join(loc), "error": err.get("msg", "")})
    return errors


async def kgl_error_handler(request: Request, exc: KGLError) -> JSONResponse:
    headers = None
    if isinstance(exc, AuthError):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(exc.message, exc.details),
        headers=headers,
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_envelope("Validation failed", _field_errors(exc)),
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(str(exc.detail), f"{request.method} {request.url.path}"),
        headers=getattr(exc, "headers", None),
    )


async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Storage failure on %s %s", request.method, request.url.path)
    # str(exc) embeds the SQL and its bound parameters, which may include password hashes
    orig = getattr(exc, "orig", None)
    details = str(orig) if orig is not None else type(exc).__name__
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_envelope("Server error", details),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_envelope("Server error", str(exc)),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(KGLError, kgl_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(SQLAlchemyError, storage_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
