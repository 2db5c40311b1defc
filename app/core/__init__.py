"""
==============================================================================
Core Package
==============================================================================

Core infrastructure for the application.

Modules:
--------
- exceptions: AppException class and error factory functions
- dependencies: FastAPI dependency injection functions

Usage:
------
    from app.core import AppException

    # Or use exception factory functions via module
    from app.core import exceptions
    raise exceptions.image_not_found("missing.png")

    # Dependencies are imported from their module directly
    from app.core.dependencies import get_catalogue_service

==============================================================================
"""

from .exceptions import (
    AppException,
    register_exception_handlers,
)

__all__ = [
    "AppException",
    "register_exception_handlers",
]
