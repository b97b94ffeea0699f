"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to JSON bodies of the form {"error": code, "message": text}.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from compliancedocs.core.config import get_settings
from compliancedocs.domain.exceptions import ComplianceDocsException
from compliancedocs.shared.context import get_current_user_id

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status; unknown codes fall back to 400.
_ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "DUPLICATE_USER": 400,
    "INVALID_CREDENTIALS": 400,
    "CONFLICT": 400,
    "INVALID_CATEGORY": 400,
    "INVALID_SUBCATEGORY": 400,
    "UNSUPPORTED_FILE_TYPE": 400,
    "UNAUTHENTICATED": 401,
    "INVALID_TOKEN": 401,
    "ACCOUNT_DISABLED": 401,
    "PERMISSION_DENIED": 403,
    "RESOURCE_NOT_FOUND": 404,
    "FILE_NOT_FOUND": 404,
    "STORAGE_NOT_FOUND": 404,
    "VERSION_CONFLICT": 409,
    "PAYLOAD_TOO_LARGE": 413,
    "STORAGE_PERMISSION_ERROR": 500,
    "STORAGE_UPLOAD_ERROR": 500,
    "STORAGE_DOWNLOAD_ERROR": 500,
    "STORAGE_DELETE_ERROR": 500,
    "SQL_NOT_CONFIGURED": 503,
}


def status_for_error_code(error_code: str) -> int:
    """Return the HTTP status for a domain error code (400 when unmapped)."""
    return _ERROR_CODE_STATUS.get(error_code, 400)


def _domain_exception_handler(
    request: Request, exc: ComplianceDocsException
) -> JSONResponse:
    """Return JSON from ComplianceDocsException.to_dict() with the mapped status code."""
    status = status_for_error_code(exc.error_code)
    if status >= 500:
        logger.error(
            "Request %s %s failed (%s) user=%s: %s",
            request.method,
            request.url.path,
            exc.error_code,
            get_current_user_id(),
            exc.details,
        )
    return JSONResponse(status_code=status, content=exc.to_dict())


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 400 with validation error details."""
    errors = jsonable_encoder(exc.errors())
    first = errors[0] if errors else {}
    loc = [str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path")]
    message = first.get("msg", "Request validation failed")
    if loc:
        message = f"{'.'.join(loc)}: {message}"
    return JSONResponse(
        status_code=400,
        content={
            "error": "VALIDATION_ERROR",
            "message": message,
            "details": errors,
        },
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def _rate_limit_exceeded_handler(
    request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """Return 429 in the standard error body; slowapi adds the Retry-After headers."""
    logger.info("Rate limit exceeded on %s %s: %s", request.method, request.url.path, exc.detail)
    response = JSONResponse(
        status_code=429,
        content={"error": "RATE_LIMITED", "message": f"Rate limit exceeded: {exc.detail}"},
    )
    return request.app.state.limiter._inject_headers(
        response, getattr(request.state, "view_rate_limit", None)
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception(
        "Unhandled exception on %s %s (user=%s): %s",
        request.method,
        request.url.path,
        get_current_user_id(),
        exc,
    )
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Handlers: ComplianceDocsException (and subclasses, including storage
    errors), RequestValidationError, StarletteHTTPException, slowapi
    RateLimitExceeded, generic Exception.
    """
    app.add_exception_handler(ComplianceDocsException, _domain_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
