"""
==============================================================================
Main API Router
==============================================================================

Routes are mounted at the application root so image URLs take the form
{base_url}/images/{filename}.

==============================================================================
"""

from fastapi import APIRouter

from app.api.endpoints import health, products, images


api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(products.router)
api_router.include_router(images.router)
