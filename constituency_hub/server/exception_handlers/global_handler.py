"""
Global Exception Handlers for FastAPI Application.

Every failure leaves the server in the same ``{success, data, error}``
envelope that successful responses use:

- domain errors (``ConstituencyHubError``) keep their status and message and
  put their details under ``data``;
- ``HTTPException`` keeps its status and detail;
- request validation failures become 400 with the first readable message;
- anything else is logged with an error ID and answered with a 500.
"""

import traceback
import uuid
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from constituency_hub.core.exceptions import ConstituencyHubError
from constituency_hub.core.logging_config import get_logger
from constituency_hub.core.monitoring import log_error

logger = get_logger(__name__)

VALUE_ERROR_PREFIX = "Value error, "
_LOCATION_ROOTS = {"body", "query", "path", "header", "cookie"}


def error_envelope(status_code: int, message: str, data: Optional[Any] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "data": data, "error": message, "pagination": None},
    )


def describe_validation_error(error: Dict[str, Any]) -> str:
    """
    Human readable text for one pydantic error.

    Messages raised by our own validators are shown as written; built-in
    constraint messages are prefixed with the offending field.
    """
    message = str(error.get("msg", "Invalid request"))
    if message.startswith(VALUE_ERROR_PREFIX):
        return message[len(VALUE_ERROR_PREFIX) :]
    location = [str(part) for part in error.get("loc", ()) if part not in _LOCATION_ROOTS]
    if location:
        return f"{'.'.join(location)}: {message}"
    return message


async def domain_exception_handler(request: Request, exc: ConstituencyHubError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} in {request.method} {request.url.path}: {exc.message}")
        log_error(type(exc).__name__, exc.message, {"path": request.url.path})
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}: {exc.message}")
    data = {"code": exc.code, **exc.details} if exc.details else None
    return error_envelope(exc.status_code, exc.message, data)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    response = error_envelope(exc.status_code, message)
    if getattr(exc, "headers", None):
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors: List[str] = [describe_validation_error(error) for error in exc.errors()]
    logger.debug(f"Validation failed for {request.method} {request.url.path}: {errors}")
    return error_envelope(400, errors[0] if errors else "Invalid request", {"errors": errors})


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler to log detailed error information.

    This handler is called for any unhandled exception in the application.
    It logs the full error context and returns the error envelope with an
    error ID that clients can quote when reporting issues.

    Args:
        request: The HTTP request that caused the exception
        exc: The exception that was raised

    Returns:
        JSONResponse with status 500 and the error ID under ``data``
    """
    error_id = uuid.uuid4().hex[:12]

    logger.error(
        f"Unhandled exception [{error_id}] in {request.method} {request.url.path}: {str(exc)}",
        exc_info=True,
        extra={
            "error_id": error_id,
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client": request.client.host if request.client else "unknown",
            "error_type": type(exc).__name__,
            "traceback": traceback.format_exc(),
        },
    )
    log_error(type(exc).__name__, str(exc), {"error_id": error_id, "path": request.url.path})

    return error_envelope(
        500,
        "Internal server error",
        {"error_id": error_id, "error_type": type(exc).__name__},
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    This function should be called during application initialization to set up
    all custom exception handlers.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(ConstituencyHubError, domain_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")
