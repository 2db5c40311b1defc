"""
==============================================================================
API Endpoints
==============================================================================

Routers:
--------
- health: Health check endpoints
- products: Search, upload and compare
- images: Stored image retrieval

==============================================================================
"""

from . import health, products, images

__all__ = ["health", "products", "images"]
