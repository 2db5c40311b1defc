"""
==============================================================================
API Integration Tests
==============================================================================

Tests for REST API endpoints.

==============================================================================
"""

import itertools
import json
import pytest
from pathlib import Path

from fastapi.testclient import TestClient

from app.config import Settings
from app.core.dependencies import get_catalogue_service
from app.core.exceptions import AppException
from app.main import Application
from app.utils.uploads import UploadIntake


def upload(client: TestClient, pid, filename: str = "cap.png", content: bytes = b"pixels"):
    """Post a multipart upload."""
    data = {"pid": pid} if pid is not None else {}
    return client.post(
        "/upload",
        data=data,
        files={"image": (filename, content, "image/png")}
    )


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_check(self, client: TestClient):
        """Test health check reports the loaded catalogue."""
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["details"]["products_loaded"] == 8

    def test_readiness_probe(self, client: TestClient):
        """Test readiness probe."""
        response = client.get("/health/ready")
        assert response.status_code == 200
        assert response.json()["ready"] is True

    def test_liveness_probe(self, client: TestClient):
        """Test liveness probe."""
        response = client.get("/health/live")
        assert response.status_code == 200
        assert response.json()["alive"] is True


class TestSearchEndpoint:
    """Tests for POST /search."""

    def test_search_known_and_unknown(self, client: TestClient):
        """Test unknown ids are dropped."""
        response = client.post("/search", json={"pids": ["491772", "999999"]})
        assert response.status_code == 200
        assert response.json() == [{"pid": "491772", "name": "Big Cap", "image": None}]

    def test_search_catalogue_order(self, client: TestClient):
        """Test results follow catalogue order."""
        response = client.post("/search", json={"pids": ["483805", "444799"]})
        assert [p["pid"] for p in response.json()] == ["444799", "483805"]

    def test_search_without_pids(self, client: TestClient):
        """Test missing pids yields an empty list."""
        assert client.post("/search", json={}).json() == []
        assert client.post("/search").json() == []

    def test_search_numeric_ids_match_nothing(self, client: TestClient):
        """Test ids are compared as sent, so numbers never equal string pids."""
        response = client.post("/search", json={"pids": [491772]})
        assert response.status_code == 200
        assert response.json() == []

    def test_search_rejects_non_list(self, client: TestClient):
        """Test a malformed payload is a validation error."""
        response = client.post("/search", json={"pids": 5})
        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"


class TestUploadEndpoint:
    """Tests for POST /upload and image retrieval."""

    def test_upload_assigns_and_serves(self, client: TestClient):
        """Test an uploaded image is referenced and retrievable."""
        response = upload(client, "491772", content=b"first")
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Image assigned successfully"
        assert data["filename"].startswith("491772_")
        assert data["filename"].endswith(".png")

        found = client.post("/search", json={"pids": ["491772"]}).json()
        assert found[0]["image"] == data["filename"]

        image = client.get(f"/images/{data['filename']}")
        assert image.status_code == 200
        assert image.content == b"first"

    def test_reupload_replaces_old_image(self, client: TestClient, upload_dir: Path):
        """Test a second upload deletes the first file."""
        ticks = itertools.count(1700000000000, 50000)
        client.app.state.upload_intake = UploadIntake(upload_dir, clock=lambda: next(ticks))

        first = upload(client, "491772").json()["filename"]
        second = upload(client, "491772").json()["filename"]

        assert first == "491772_1700000000000.png"
        assert second == "491772_1700000050000.png"
        assert client.get(f"/images/{first}").status_code == 404
        assert client.get(f"/images/{second}").status_code == 200

    def test_upload_persists_catalogue(self, client: TestClient, products_file: Path):
        """Test the catalogue file records the new filename."""
        filename = upload(client, "594032").json()["filename"]

        data = json.loads(products_file.read_text(encoding="utf-8"))
        entry = next(item for item in data if item["pid"] == "594032")
        assert entry["image"] == filename

    def test_upload_unknown_pid_still_succeeds(self, client: TestClient, upload_dir: Path):
        """Test an unknown pid is acknowledged and the file kept."""
        response = upload(client, "999999")
        assert response.status_code == 200
        assert (upload_dir / response.json()["filename"]).exists()

    def test_upload_without_pid_uses_fallback_name(self, client: TestClient):
        """Test the image_{timestamp} fallback name."""
        response = upload(client, None, filename="photo.jpg")
        assert response.status_code == 200
        assert response.json()["filename"].startswith("image_")
        assert response.json()["filename"].endswith(".jpg")

    @pytest.mark.parametrize("pid", ["../escaped", "a/b"])
    def test_upload_pid_with_path_rejected(
        self,
        client: TestClient,
        tmp_path: Path,
        upload_dir: Path,
        pid: str
    ):
        """Test a pid with path components is a client error and writes nothing."""
        response = upload(client, pid)
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_PARAMETER"
        assert list(upload_dir.iterdir()) == []
        assert not any(p.name.startswith("escaped_") for p in tmp_path.iterdir())

    def test_upload_without_file(self, client: TestClient):
        """Test a missing file is a client error."""
        response = client.post("/upload", data={"pid": "491772"})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MISSING_PARAMETER"

    def test_image_not_found(self, client: TestClient):
        """Test unknown filenames return 404."""
        response = client.get("/images/nonexistent.png")
        assert response.status_code == 404
        data = response.json()
        assert data["success"] is False
        assert data["error"]["code"] == "IMAGE_NOT_FOUND"


class TestCompareEndpoint:
    """Tests for GET /compare."""

    def test_one_valid_one_invalid(self, client: TestClient):
        """Test the unmatched slot is null."""
        response = client.get("/compare", params={"pid1": "491772", "pid2": "999999"})
        assert response.status_code == 200
        assert response.json() == {
            "product1": {"pid": "491772", "name": "Big Cap", "image_url": None},
            "product2": None,
        }

    def test_image_url_uses_base_address(self, client: TestClient):
        """Test image_url is absolute once an image is assigned."""
        filename = upload(client, "444799").json()["filename"]

        response = client.get("/compare", params={"pid1": "491772", "pid2": "444799"})
        product2 = response.json()["product2"]
        assert product2["image_url"] == f"http://testserver.local/images/{filename}"

    def test_missing_parameter(self, client: TestClient):
        """Test omitting either pid is a client error."""
        response = client.get("/compare", params={"pid1": "491772"})
        assert response.status_code == 400
        assert response.json()["error"]["details"] == {"parameter": "pid2"}

        response = client.get("/compare", params={"pid2": "491772"})
        assert response.status_code == 400
        assert response.json()["error"]["details"] == {"parameter": "pid1"}


class TestGeneralBehaviour:
    """Tests for routing, errors and CORS."""

    def test_unknown_route(self, client: TestClient):
        """Test unmatched routes return the not-found envelope."""
        response = client.get("/does-not-exist")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    def test_cors_allows_frontend_origin(self, client: TestClient):
        """Test the configured frontend origin is allowed."""
        response = client.get("/health/live", headers={"Origin": "http://localhost:3000"})
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"

    def test_uncaught_error_is_generic(self, settings: Settings):
        """Test unexpected failures return a bare 500 without internals."""
        def broken_service():
            raise RuntimeError("disk controller exploded")

        app = Application(settings).app
        app.dependency_overrides[get_catalogue_service] = broken_service

        with TestClient(app, raise_server_exceptions=False) as test_client:
            response = test_client.post("/search", json={"pids": ["491772"]})

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "INTERNAL_ERROR"
        assert "exploded" not in response.text
        assert "RuntimeError" not in response.text

    def test_malformed_catalogue_aborts_startup(self, settings: Settings, products_file: Path):
        """Test an unreadable catalogue file stops the application starting."""
        products_file.write_text("[{bad", encoding="utf-8")
        app = Application(settings).app

        with pytest.raises(AppException) as exc_info:
            with TestClient(app):
                pass

        assert exc_info.value.code == "STORAGE_READ_ERROR"
