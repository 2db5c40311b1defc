"""
==============================================================================
Catalogue Schemas Module
==============================================================================

Request and response schemas for the catalogue endpoints.

==============================================================================
"""

from typing import Any, List, Optional
from pydantic import BaseModel, Field

from app.catalog.models import Product


class SearchRequest(BaseModel):
    """Search payload; a missing pids list matches nothing. Ids are compared as sent."""
    pids: Optional[List[Any]] = Field(default=None)


class ProductResponse(BaseModel):
    """Product as returned by search."""
    pid: str
    name: str
    image: Optional[str] = None

    @classmethod
    def from_product(cls, product: Product) -> "ProductResponse":
        """Create response from Product model."""
        return cls(pid=product.pid, name=product.name, image=product.image)


class AssignImageResponse(BaseModel):
    """Acknowledgement for an image upload."""
    message: str
    filename: str


class ProductSummary(BaseModel):
    """Product with a fully qualified image URL."""
    pid: str
    name: str
    image_url: Optional[str] = None

    @classmethod
    def from_product(cls, product: Product, base_url: str) -> "ProductSummary":
        """Create summary, building the URL from base_url when an image is set."""
        image_url = f"{base_url}/images/{product.image}" if product.image else None
        return cls(pid=product.pid, name=product.name, image_url=image_url)


class CompareResponse(BaseModel):
    """Two-slot product comparison."""
    product1: Optional[ProductSummary] = None
    product2: Optional[ProductSummary] = None
