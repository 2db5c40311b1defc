"""
==============================================================================
Catalogue Service Module
==============================================================================

Business operations over the product store:

- search: filter the catalogue by a set of product ids
- assign_image: point a product at a newly uploaded image, deleting the
  file it referenced before
- resolve_image: locate a stored image by filename
- lookup_pair: fetch two products for side-by-side display

Image states per product:
------------------------
    Unset ──assign_image──▶ Set(a) ──assign_image──▶ Set(b)

There is no transition back to Unset.

==============================================================================
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePath
from typing import Any, Dict, Iterable, List, Optional, Tuple

from app.catalog.models import Product
from app.catalog.store import ProductStore
from app.core import exceptions


# Module logger
logger = logging.getLogger(__name__)


ASSIGN_SUCCESS_MESSAGE = "Image assigned successfully"


class CatalogueService:
    """
    Service for catalogue queries and image assignment.

    Attributes:
        _store: ProductStore owning the product list

    Example:
        >>> service = CatalogueService(store)
        >>> [p.pid for p in service.search(["491772", "999999"])]
        ['491772']
    """

    def __init__(self, store: ProductStore) -> None:
        """
        Initialize catalogue service.

        Args:
            store: Loaded ProductStore instance
        """
        self._store = store

    # =========================================================================
    # QUERY OPERATIONS
    # =========================================================================

    def search(self, pids: Optional[Iterable[Any]]) -> List[Product]:
        """
        Get products whose id is in the given set.

        Results keep catalogue order. Unknown ids are ignored, and a
        missing or empty input yields an empty list.

        Args:
            pids: Product ids to match

        Returns:
            Matching products
        """
        # Plain equality, so non-string ids never match
        wanted = list(pids or ())
        results = [p for p in self._store.products if p.pid in wanted]

        logger.info(f"🔍 Search for {len(wanted)} ids matched {len(results)} products")
        return results

    def lookup_pair(
        self,
        pid1: str,
        pid2: str
    ) -> Tuple[Optional[Product], Optional[Product]]:
        """Find two products by id; either slot is None when unmatched."""
        return self._store.find_by_pid(pid1), self._store.find_by_pid(pid2)

    # =========================================================================
    # IMAGE OPERATIONS
    # =========================================================================

    def assign_image(self, pid: Optional[str], filename: str) -> Dict[str, str]:
        """
        Associate an already-stored image file with a product.

        An unknown pid is not an error: the upload stays on disk
        unreferenced and success is still reported.

        Args:
            pid: Target product id
            filename: Name of the stored upload in the image directory

        Returns:
            Acknowledgement with message and filename

        Raises:
            AppException: STORAGE_WRITE_ERROR if the catalogue cannot be saved
        """
        product = self._store.find_by_pid(pid)

        if product is None:
            logger.warning(f"⚠️ No product with pid {pid!r}; {filename} left unassigned")
            return {"message": ASSIGN_SUCCESS_MESSAGE, "filename": filename}

        previous = product.image
        if previous and previous != filename:
            self._store.delete_image(previous)

        product.image = filename
        self._store.save()

        logger.info(f"✅ Assigned {filename} to product {product.pid} ({product.name})")
        return {"message": ASSIGN_SUCCESS_MESSAGE, "filename": filename}

    def resolve_image(self, filename: str) -> Path:
        """
        Locate a stored image by filename.

        Any file in the image directory is servable regardless of which
        product references it.

        Raises:
            AppException: IMAGE_NOT_FOUND if no such file exists
        """
        # Flat directory: names with path components never match
        if not filename or PurePath(filename).name != filename or filename in (".", ".."):
            raise exceptions.image_not_found(filename)

        path = self._store.image_path(filename)
        if not path.is_file():
            raise exceptions.image_not_found(filename)

        return path
