"""
==============================================================================
Catalog Package - Product Management
==============================================================================

Flat product catalogue persisted as a single JSON file, with images stored
in a flat directory keyed by filename.

Classes:
--------
- Product: Pydantic model for products
- ProductStore: Load/seed/save and lookup for the product list

==============================================================================
"""

from .models import Product
from .store import DEFAULT_PRODUCTS, ProductStore

__all__ = [
    "Product",
    "ProductStore",
    "DEFAULT_PRODUCTS",
]
