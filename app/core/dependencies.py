"""
==============================================================================
FastAPI Dependencies Module
==============================================================================

Dependency injection for the catalogue components.

The Application lifespan builds one ProductStore, one CatalogueService and
one UploadIntake and attaches them to ``app.state``. These dependencies
hand them to route handlers, so handlers never touch module globals.

Dependency Hierarchy:
--------------------
            ┌──────────────────┐
            │    app.state     │
            └────────┬─────────┘
                     │
     ┌───────────────┼────────────────┐
     │               │                │
┌────▼─────┐  ┌──────▼───────┐  ┌─────▼──────┐
│ settings │  │  catalogue   │  │  upload    │
│          │  │  service     │  │  intake    │
└──────────┘  └──────────────┘  └────────────┘

Usage Examples:
--------------
    @router.post("/search")
    def search(service: CatalogueService = Depends(get_catalogue_service)):
        ...

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Request

from app.config import Settings, get_settings
from app.core import exceptions
from app.services.catalogue_service import CatalogueService
from app.utils.uploads import UploadIntake


# Module logger
logger = logging.getLogger(__name__)


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    settings: Optional[Settings] = getattr(request.app.state, "settings", None)
    return settings or get_settings()


def get_catalogue_service(request: Request) -> CatalogueService:
    """The application's CatalogueService."""
    service = getattr(request.app.state, "catalogue_service", None)
    if service is None:
        raise exceptions.catalog_not_loaded()
    return service


def get_upload_intake(request: Request) -> UploadIntake:
    """The application's UploadIntake."""
    intake = getattr(request.app.state, "upload_intake", None)
    if intake is None:
        raise exceptions.catalog_not_loaded()
    return intake
