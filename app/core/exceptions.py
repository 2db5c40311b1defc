"""
Application Exception Handling

Single AppException class for all application errors with FastAPI integration.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


logger = logging.getLogger(__name__)


class AppException(Exception):
    """
    Unified application exception for all error scenarios.

    Provides consistent error response format across the entire API.

    Usage:
        raise AppException("Image not found", "IMAGE_NOT_FOUND", 404)
        raise AppException("Missing pid1", "MISSING_PARAMETER", 400, {"parameter": "pid1"})

    Error Codes:
        Storage:
            - STORAGE_READ_ERROR (500)
            - STORAGE_WRITE_ERROR (500)
            - CATALOG_NOT_LOADED (500)

        Catalogue:
            - PRODUCT_NOT_FOUND (404)
            - IMAGE_NOT_FOUND (404)

        Request:
            - MISSING_PARAMETER (400)
            - INVALID_PARAMETER (400)
            - VALIDATION_ERROR (422)
            - NOT_FOUND (404)

        General:
            - INTERNAL_ERROR (500)
    """

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize application exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "IMAGE_NOT_FOUND")
            status_code: HTTP status code (default: 400)
            details: Additional error context (optional)
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        error_dict = {
            "success": False,
            "error": {
                "code": self.code,
                "message": self.message,
                "timestamp": self.timestamp
            }
        }

        if self.details:
            error_dict["error"]["details"] = self.details

        return error_dict


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Convert AppException to consistent JSON error response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Wrap framework HTTP errors (unmatched routes etc.) in the error envelope."""
    if exc.status_code == 404:
        error = not_found()
    else:
        error = AppException(str(exc.detail), "HTTP_ERROR", exc.status_code)
    return JSONResponse(
        status_code=error.status_code,
        content=error.to_dict(),
        headers=getattr(exc, "headers", None)
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request payloads."""
    error = AppException(
        "Request validation failed",
        "VALIDATION_ERROR",
        422,
        {"errors": jsonable_errors(exc)}
    )
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler that never leaks internals to the client."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    error = internal_error()
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def jsonable_errors(exc: RequestValidationError) -> list:
    """Reduce validation errors to their location and message."""
    return [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


# ============================================
# CONVENIENCE FACTORY FUNCTIONS
# ============================================

def storage_read_error(path: str, reason: str) -> AppException:
    """Create unreadable or malformed catalogue file exception."""
    return AppException(
        f"Could not read catalogue file: {reason}",
        "STORAGE_READ_ERROR",
        500,
        {"path": path}
    )


def storage_write_error(path: str, reason: str) -> AppException:
    """Create catalogue persistence failure exception."""
    return AppException(
        f"Could not write catalogue file: {reason}",
        "STORAGE_WRITE_ERROR",
        500,
        {"path": path}
    )


def product_not_found(pid: Optional[str] = None) -> AppException:
    """
    Create product not found exception.

    Not raised by image assignment, which tolerates unknown pids and
    reports success.
    """
    details = {"pid": pid} if pid else {}
    return AppException("Product not found", "PRODUCT_NOT_FOUND", 404, details)


def image_not_found(filename: str) -> AppException:
    """Create image not found exception."""
    return AppException("Image not found", "IMAGE_NOT_FOUND", 404, {"filename": filename})


def invalid_parameter(name: str, reason: str) -> AppException:
    """Create malformed request parameter exception."""
    return AppException(
        f"Invalid parameter {name}: {reason}",
        "INVALID_PARAMETER",
        400,
        {"parameter": name, "reason": reason}
    )


def missing_parameter(name: str) -> AppException:
    """Create missing request parameter exception."""
    return AppException(
        f"Missing required parameter: {name}",
        "MISSING_PARAMETER",
        400,
        {"parameter": name}
    )


def not_found() -> AppException:
    """Create unmatched route exception."""
    return AppException("Resource not found", "NOT_FOUND", 404)


def catalog_not_loaded() -> AppException:
    """Create catalog not loaded exception."""
    return AppException(
        "Product catalog not loaded",
        "CATALOG_NOT_LOADED",
        500
    )


def internal_error(message: str = "Internal server error") -> AppException:
    """Create internal server error exception."""
    return AppException(message, "INTERNAL_ERROR", 500)
