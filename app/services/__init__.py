"""
==============================================================================
Services Package - Business Logic Layer
==============================================================================

Service classes implementing the catalogue's business rules.

Architecture Pattern: Service Layer
----------------------------------
    ┌─────────────────┐
    │   API Router    │
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │CatalogueService │  ← Business Logic
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │  ProductStore   │  ← JSON file + image directory
    └─────────────────┘

Services receive their store via the constructor; the application owns a
single store instance for its lifetime.

==============================================================================
"""

from .catalogue_service import CatalogueService

__all__ = [
    "CatalogueService",
]
