"""
==============================================================================
Pytest Configuration and Fixtures
==============================================================================

Provides temporary catalogue storage, store/service instances and an
HTTP test client bound to them.

==============================================================================
"""

import pytest
from pathlib import Path
from typing import Generator
from fastapi.testclient import TestClient

from app.config import Settings
from app.catalog.store import ProductStore
from app.main import Application
from app.services.catalogue_service import CatalogueService


# ============================================================================
# STORAGE FIXTURES
# ============================================================================

@pytest.fixture
def products_file(tmp_path: Path) -> Path:
    """Location of the catalogue file for one test."""
    return tmp_path / "products.json"


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    """Empty image directory for one test."""
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def store(products_file: Path, upload_dir: Path) -> ProductStore:
    """Store seeded with the default catalogue."""
    product_store = ProductStore(products_file, upload_dir)
    product_store.load()
    return product_store


@pytest.fixture
def service(store: ProductStore) -> CatalogueService:
    """Catalogue service over the seeded store."""
    return CatalogueService(store)


@pytest.fixture
def write_image(upload_dir: Path):
    """Factory placing an image file in the upload directory."""
    def _write(filename: str, content: bytes = b"\x89PNG fake") -> Path:
        path = upload_dir / filename
        path.write_bytes(content)
        return path
    return _write


# ============================================================================
# CLIENT FIXTURES
# ============================================================================

@pytest.fixture
def settings(products_file: Path, upload_dir: Path) -> Settings:
    """Settings pointing at the temporary storage."""
    return Settings(
        products_file=str(products_file),
        upload_directory=str(upload_dir),
        public_base_url="http://testserver.local/",
    )


@pytest.fixture
def client(settings: Settings) -> Generator[TestClient, None, None]:
    """Test client running the full application lifespan."""
    app = Application(settings).app
    with TestClient(app) as test_client:
        yield test_client
