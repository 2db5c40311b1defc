"""
==============================================================================
Image Endpoints
==============================================================================

Serves stored product images by filename.

==============================================================================
"""

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from app.core.dependencies import get_catalogue_service
from app.services.catalogue_service import CatalogueService


router = APIRouter(prefix="/images", tags=["Images"])


@router.get("/{filename}")
def get_image(
    filename: str,
    service: CatalogueService = Depends(get_catalogue_service)
):
    """Return the image file, or 404 if it is not stored."""
    return FileResponse(service.resolve_image(filename))
