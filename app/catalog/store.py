"""
==============================================================================
Product Store Module
==============================================================================

JSON-file backed product catalogue with a flat image directory.

Features:
---------
- Load-or-seed on startup (default product list when no file exists)
- Whole-file rewrite after every mutation
- First-match lookup by product id
- Image file path resolution and deletion

JSON Structure:
--------------
[
  {"pid": "491772", "name": "Big Cap", "image": null},
  {"pid": "444799", "name": "Long Bottle", "image": "444799_1700000000000.png"},
  ...
]

Writes are neither locked nor atomic: two overlapping mutations may
overwrite each other, and a crash mid-write can leave a truncated file.

==============================================================================
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import ValidationError

from app.core import exceptions
from .models import Product


# Module logger
logger = logging.getLogger(__name__)


DEFAULT_PRODUCTS: List[Dict[str, Optional[str]]] = [
    {"pid": "491772", "name": "Big Cap", "image": None},
    {"pid": "444799", "name": "Long Bottle", "image": None},
    {"pid": "783984", "name": "Oil", "image": None},
    {"pid": "594032", "name": "Nuts", "image": None},
    {"pid": "364839", "name": "Ghee", "image": None},
    {"pid": "494034", "name": "Brown Sugar", "image": None},
    {"pid": "784839", "name": "Sun Lotion", "image": None},
    {"pid": "483805", "name": "Gentle Wash", "image": None},
]


class ProductStore:
    """
    Owner of the in-memory product list and its mirror on disk.

    Attributes:
        products: Copy of the ordered product list
        products_file: Path of the catalogue JSON file
        image_dir: Directory holding stored image files

    Example:
        >>> store = ProductStore(Path("products.json"), Path("uploads"))
        >>> store.load()
        >>> store.find_by_pid("491772").name
        'Big Cap'
    """

    def __init__(self, products_file: Path, image_dir: Path) -> None:
        """
        Initialize an empty store. Call load() before use.

        Args:
            products_file: Path to the catalogue JSON file
            image_dir: Directory holding stored image files
        """
        self._products_file = Path(products_file)
        self._image_dir = Path(image_dir)
        self._products: List[Product] = []

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def products(self) -> List[Product]:
        """Get all products in catalogue order."""
        return self._products.copy()

    @property
    def products_file(self) -> Path:
        return self._products_file

    @property
    def image_dir(self) -> Path:
        return self._image_dir

    # =========================================================================
    # PERSISTENCE
    # =========================================================================

    def load(self) -> List[Product]:
        """
        Load the catalogue from disk, seeding it when the file is absent.

        Returns:
            The loaded product list

        Raises:
            AppException: STORAGE_READ_ERROR if the file is unreadable or
                malformed; STORAGE_WRITE_ERROR if seeding fails
        """
        if not self._products_file.exists():
            logger.info(f"Catalogue file not found, seeding defaults: {self._products_file}")
            self._products = [Product(**item) for item in DEFAULT_PRODUCTS]
            self.save()
            return self.products

        try:
            with self._products_file.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in {self._products_file}: {e}")
            raise exceptions.storage_read_error(str(self._products_file), str(e)) from e
        except OSError as e:
            logger.error(f"Cannot read {self._products_file}: {e}")
            raise exceptions.storage_read_error(str(self._products_file), str(e)) from e

        self._products = self._parse(data)
        logger.info(f"✅ Loaded {len(self._products)} products from {self._products_file}")
        return self.products

    def _parse(self, data) -> List[Product]:
        """Build products from decoded JSON, checking required keys only."""
        path = str(self._products_file)

        if not isinstance(data, list):
            raise exceptions.storage_read_error(path, "expected a list of products")

        products = []
        for index, item in enumerate(data):
            if not isinstance(item, dict) or "pid" not in item or "name" not in item:
                raise exceptions.storage_read_error(
                    path, f"record {index} is missing 'pid' or 'name'"
                )
            try:
                products.append(Product(
                    pid=str(item["pid"]),
                    name=str(item["name"]),
                    image=item.get("image")
                ))
            except ValidationError as e:
                raise exceptions.storage_read_error(path, f"record {index}: {e}") from e

        return products

    def save(self) -> None:
        """
        Rewrite the whole catalogue file from the in-memory list.

        Raises:
            AppException: STORAGE_WRITE_ERROR on any I/O failure. The
                in-memory list is left as it is.
        """
        payload = [product.model_dump() for product in self._products]
        try:
            with self._products_file.open("w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
        except OSError as e:
            logger.error(f"❌ Failed to save catalogue to {self._products_file}: {e}")
            raise exceptions.storage_write_error(str(self._products_file), str(e)) from e

        logger.debug(f"Saved {len(payload)} products to {self._products_file}")

    # =========================================================================
    # LOOKUP
    # =========================================================================

    def find_by_pid(self, pid: Optional[str]) -> Optional[Product]:
        """Find the first product with the given id (linear scan)."""
        for product in self._products:
            if product.pid == pid:
                return product
        return None

    # =========================================================================
    # IMAGE FILES
    # =========================================================================

    def image_path(self, filename: str) -> Path:
        """Path a stored image with this filename would have."""
        return self._image_dir / filename

    def delete_image(self, filename: str) -> bool:
        """
        Delete a stored image.

        Returns:
            True if a file was removed, False if it did not exist
        """
        path = self.image_path(filename)
        try:
            path.unlink()
        except FileNotFoundError:
            logger.debug(f"Image already gone: {path}")
            return False

        logger.info(f"🗑️ Deleted image {path}")
        return True
