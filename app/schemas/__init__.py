"""
==============================================================================
Schemas Package - Pydantic Models
==============================================================================

Request and response schemas using Pydantic for validation.

==============================================================================
"""

from .catalogue import (
    SearchRequest,
    ProductResponse,
    AssignImageResponse,
    ProductSummary,
    CompareResponse,
)

__all__ = [
    "SearchRequest",
    "ProductResponse",
    "AssignImageResponse",
    "ProductSummary",
    "CompareResponse",
]
