#!/usr/bin/env python3
"""
Error handlers for the web application.

Domain errors from core.errors are mapped to HTTP status codes here; every
error response has the shape ``{"success": false, "error", "type"}``, plus
``detail`` when the domain error carries one.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.errors import ThesisMatchError, NotFoundError, ConflictError, ValidationError

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = (
    (NotFoundError, 404),
    (ConflictError, 409),
    (ValidationError, 400),
)


def status_for(exc: ThesisMatchError) -> int:
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 500


def error_response(status_code: int, error: str, error_type: str, detail: Optional[str] = None) -> JSONResponse:
    content = {"success": False, "error": error, "type": error_type}
    if detail:
        content["detail"] = detail
    return JSONResponse(status_code=status_code, content=content)


async def domain_exception_handler(request: Request, exc: ThesisMatchError) -> JSONResponse:
    """
    Handle business-rule failures raised by services and the coordinator.

    Rule violations are expected traffic and logged at INFO; anything that
    maps to 500 is logged with its traceback.
    """
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"Unmapped domain error in {request.url.path}: {exc.message}", exc_info=exc)
    else:
        logger.info(f"{request.method} {request.url.path} -> {status_code} {exc.__class__.__name__}: {exc.message}")

    return error_response(status_code, exc.message, exc.__class__.__name__, exc.detail)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), "HTTPException")


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies and query parameters are reported as 400 ValidationError."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")

    return error_response(400, f"{location}: {message}" if location else message, "ValidationError")


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(500, "Internal server error", "InternalError")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ThesisMatchError, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
