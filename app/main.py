"""
==============================================================================
Product Image Catalogue - Application Entry Point
==============================================================================

FastAPI application with:
- Product search by id set
- Image upload and assignment
- Image retrieval by filename
- Two-product comparison

Usage:
------
    # Development
    uvicorn app.main:app --reload --port 5000

    # Production
    uvicorn app.main:app --host 0.0.0.0 --port 5000

==============================================================================
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import Settings, get_settings
from app.core.exceptions import register_exception_handlers
from app.api.router import api_router
from app.catalog.store import ProductStore
from app.services.catalogue_service import CatalogueService
from app.utils.uploads import UploadIntake


# ============================================================================
# LOGGING SETUP
# ============================================================================

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)

logger = logging.getLogger(__name__)


# ============================================================================
# APPLICATION FACTORY
# ============================================================================

class Application:
    """
    FastAPI application factory and manager.

    Owns the lifetime of the catalogue components: the lifespan creates a
    single ProductStore, loads it, and exposes it together with the
    CatalogueService and UploadIntake on ``app.state``. Shutdown detaches
    them again.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize the application."""
        self._settings = settings or get_settings()
        self._app = self._create_app()

    def _create_app(self) -> FastAPI:
        """Create and configure the FastAPI application."""
        app = FastAPI(
            title=self._settings.app_name,
            version="1.0.0",
            description="Product catalogue with image upload and retrieval",
            lifespan=self._lifespan,
            docs_url="/docs",
            redoc_url="/redoc",
        )
        app.state.settings = self._settings

        self._configure_middleware(app)
        register_exception_handlers(app)
        app.include_router(api_router)

        return app

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        """Application lifespan manager."""
        self._startup(app)
        try:
            yield
        finally:
            self._shutdown(app)

    def _startup(self, app: FastAPI) -> None:
        """Application startup tasks."""
        logger.info("=" * 60)
        logger.info(f"🚀 Starting {self._settings.app_name}")
        logger.info("=" * 60)

        self._settings.ensure_directories()

        # A malformed catalogue file aborts startup
        store = ProductStore(self._settings.products_path, self._settings.upload_path)
        products = store.load()

        app.state.product_store = store
        app.state.catalogue_service = CatalogueService(store)
        app.state.upload_intake = UploadIntake(self._settings.upload_path)

        logger.info(f"✅ Catalogue ready with {len(products)} products")
        logger.info(f"🖼️ Images served from {self._settings.upload_path.resolve()}")
        logger.info(f"📍 Running on http://{self._settings.host}:{self._settings.port}")
        logger.info("=" * 60)

    def _shutdown(self, app: FastAPI) -> None:
        """Application shutdown tasks."""
        logger.info("🛑 Shutting down...")
        app.state.catalogue_service = None
        app.state.upload_intake = None
        app.state.product_store = None
        logger.info("✅ Shutdown complete")

    def _configure_middleware(self, app: FastAPI) -> None:
        """Configure application middleware."""
        app.add_middleware(
            CORSMiddleware,
            allow_origins=self._settings.cors_origins_list,
            allow_methods=self._settings.cors_methods_list,
            allow_headers=["Content-Type"],
        )

    @property
    def app(self) -> FastAPI:
        """Get the FastAPI application instance."""
        return self._app


# ============================================================================
# APPLICATION INSTANCE
# ============================================================================

application = Application()
app = application.app


# ============================================================================
# ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info"
    )
