"""
==============================================================================
Product Catalogue Endpoints
==============================================================================

Search, image upload and two-product comparison.

==============================================================================
"""

from typing import Any, List, Optional
from fastapi import APIRouter, Body, Depends, File, Form, Query, UploadFile

from app.config import Settings
from app.core import exceptions
from app.core.dependencies import (
    get_app_settings,
    get_catalogue_service,
    get_upload_intake,
)
from app.schemas.catalogue import (
    AssignImageResponse,
    CompareResponse,
    ProductResponse,
    ProductSummary,
    SearchRequest,
)
from app.services.catalogue_service import CatalogueService
from app.utils.uploads import UploadIntake


router = APIRouter(tags=["Products"])


class ProductController:
    """Controller for catalogue operations."""

    def __init__(self, service: CatalogueService):
        self._service = service

    def search(self, pids: Optional[List[Any]]) -> List[ProductResponse]:
        """Search products by id set."""
        return [ProductResponse.from_product(p) for p in self._service.search(pids)]

    def upload(
        self,
        intake: UploadIntake,
        pid: Optional[str],
        image: Optional[UploadFile]
    ) -> AssignImageResponse:
        """Store the upload, then assign it to the product."""
        if image is None:
            raise exceptions.missing_parameter("image")

        filename = intake.save(pid, image.filename, image.file)
        result = self._service.assign_image(pid, filename)
        return AssignImageResponse(**result)

    def compare(
        self,
        pid1: Optional[str],
        pid2: Optional[str],
        base_url: str
    ) -> CompareResponse:
        """Look up two products side by side."""
        if not pid1:
            raise exceptions.missing_parameter("pid1")
        if not pid2:
            raise exceptions.missing_parameter("pid2")

        first, second = self._service.lookup_pair(pid1, pid2)
        return CompareResponse(
            product1=ProductSummary.from_product(first, base_url) if first else None,
            product2=ProductSummary.from_product(second, base_url) if second else None,
        )


@router.post("/search", response_model=List[ProductResponse])
def search_products(
    payload: Optional[SearchRequest] = Body(None),
    service: CatalogueService = Depends(get_catalogue_service)
):
    """Return catalogue entries whose pid is in the submitted list."""
    controller = ProductController(service)
    return controller.search(payload.pids if payload else None)


@router.post("/upload", response_model=AssignImageResponse)
def upload_image(
    pid: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    service: CatalogueService = Depends(get_catalogue_service),
    intake: UploadIntake = Depends(get_upload_intake)
):
    """Upload an image and assign it to a product."""
    controller = ProductController(service)
    return controller.upload(intake, pid, image)


@router.get("/compare", response_model=CompareResponse)
def compare_products(
    pid1: Optional[str] = Query(None),
    pid2: Optional[str] = Query(None),
    service: CatalogueService = Depends(get_catalogue_service),
    settings: Settings = Depends(get_app_settings)
):
    """Fetch two products with absolute image URLs."""
    controller = ProductController(service)
    return controller.compare(pid1, pid2, settings.public_base_url)
