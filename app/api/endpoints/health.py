"""
==============================================================================
Health Check Endpoints
==============================================================================

System health status endpoints for monitoring and orchestration.

==============================================================================
"""

from fastapi import APIRouter, Request


router = APIRouter(prefix="/health", tags=["Health"])


class HealthController:
    """Controller for health check operations."""

    def __init__(self, request: Request):
        self._state = request.app.state

    def check_catalog(self) -> dict:
        """Check catalogue status."""
        store = getattr(self._state, "product_store", None)
        if store is None:
            return {"status": "not_loaded", "products": 0}
        return {"status": "healthy", "products": len(store.products)}

    def check_image_storage(self) -> str:
        """Check the image directory is present."""
        store = getattr(self._state, "product_store", None)
        if store is not None and store.image_dir.is_dir():
            return "healthy"
        return "unhealthy"

    def get_health(self) -> dict:
        """Get full health status."""
        catalog_info = self.check_catalog()
        storage_status = self.check_image_storage()

        healthy = catalog_info["status"] == "healthy" and storage_status == "healthy"

        return {
            "status": "healthy" if healthy else "degraded",
            "components": {
                "api": "healthy",
                "catalog": catalog_info["status"],
                "image_storage": storage_status
            },
            "details": {
                "products_loaded": catalog_info["products"]
            }
        }


@router.get("")
async def health_check(request: Request):
    """
    Health check endpoint.

    Returns system status including catalogue and image storage.
    """
    controller = HealthController(request)
    return controller.get_health()


@router.get("/ready")
async def readiness_check(request: Request):
    """Readiness probe for container orchestration."""
    return {"ready": getattr(request.app.state, "catalogue_service", None) is not None}


@router.get("/live")
async def liveness_check():
    """Liveness probe for container orchestration."""
    return {"alive": True}
