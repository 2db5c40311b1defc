"""
==============================================================================
Product Models Module
==============================================================================

Pydantic models for catalogue entries.

==============================================================================
"""

from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class Product(BaseModel):
    """
    Product model for catalogue items.

    Attributes:
        pid: Opaque product identifier
        name: Product display name
        image: Filename of the assigned image in the upload directory,
            or None when no image is set
    """

    model_config = ConfigDict(from_attributes=True)

    pid: str = Field(..., description="Product identifier")
    name: str = Field(..., description="Product name")
    image: Optional[str] = Field(default=None, description="Stored image filename")
