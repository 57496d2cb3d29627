"""
API Error Handling

Error kinds raised by pipeline stages and handlers, and the converters that
turn them into JSON responses of the form
{"ok": false, "error": {"code": ..., "message": ..., "details": {...}}}.
"""

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.models.responses import ErrorResponse, ErrorDetail


logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base API error with structured response."""
    
    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)
    
    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=self.code,
                message=self.message,
                details=self.details,
            ),
        )


class MalformedBodyError(APIError):
    """Request body does not conform to its declared content type."""
    
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            code="MALFORMED_BODY",
            message=message,
            status_code=400,
            details=details,
        )


class PayloadTooLargeError(APIError):
    """Request body exceeds the configured size limit."""
    
    def __init__(self, limit: int):
        super().__init__(
            code="PAYLOAD_TOO_LARGE",
            message=f"Request body exceeds {limit} bytes",
            status_code=413,
            details={"limit": limit},
        )


class NotFoundError(APIError):
    """No route matched the request."""
    
    def __init__(self, method: str, path: str):
        super().__init__(
            code="NOT_FOUND",
            message=f"Not Found: {method}:{path}",
            status_code=404,
        )


class InternalError(APIError):
    """Internal server error."""
    
    def __init__(self, message: str = "Internal server error", details: dict[str, Any] | None = None):
        super().__init__(
            code="INTERNAL_ERROR",
            message=message,
            status_code=500,
            details=details,
        )


def error_response(exc: APIError) -> JSONResponse:
    """Render an APIError with its status code."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
    )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return error_response(exc)


async def not_found_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Fallback for requests the router could not dispatch.

    Starlette reports an unknown path as 404 and a known path with an
    unregistered method as 405; both mean no route matched.
    """
    if exc.status_code in (404, 405):
        logger.info(f"No route for {request.method} {request.url.path}")
        return error_response(NotFoundError(request.method, request.url.path))
    
    return error_response(
        APIError(
            code="HTTP_ERROR",
            message=str(exc.detail),
            status_code=exc.status_code,
        )
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}",
        exc_info=exc,
    )
    return error_response(
        InternalError(
            message="An unexpected error occurred",
            details={"type": type(exc).__name__},
        )
    )
