"""
Tests for template endpoints, export/import and the app-wide middleware.
"""
import io
import zipfile

import pytest
from fastapi import status

from template_builder.config import settings


@pytest.mark.unit
class TestTemplateCrud:
    def test_create_template(self, client):
        response = client.post("/api/templates", json={"name": "  Acme  ", "tags": ["business"]})
        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["name"] == "Acme"
        assert data["version"] == "1.0.0"
        assert data["tags"] == ["business"]
        assert data["description"] is None

    def test_create_template_blank_name(self, client):
        response = client.post("/api/templates", json={"name": "   "})
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["details"]["errors"][0]["field"] == "name"

    def test_create_template_missing_name(self, client):
        response = client.post("/api/templates", json={})
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        error = response.json()["details"]["errors"][0]
        assert error["field"] == "name"
        assert error["type"] == "missing"

    def test_metadata_round_trip(self, client):
        metadata = {
            "name": "Acme Theme",
            "description": 'Landing pages for "Acme" <products>',
            "author": "Acme Ltd.",
            "version": "2.1.0-beta",
            "tags": ["business", "one-page"],
        }
        created = client.post("/api/templates", json=metadata).json()
        fetched = client.get(f"/api/templates/{created['id']}").json()
        for field, value in metadata.items():
            assert fetched[field] == value

    def test_list_templates(self, client):
        assert client.get("/api/templates").json() == []
        client.post("/api/templates", json={"name": "One"})
        client.post("/api/templates", json={"name": "Two"})
        assert [t["name"] for t in client.get("/api/templates").json()] == ["One", "Two"]

    def test_get_template_not_found(self, client):
        response = client.get("/api/templates/999")
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {
            "error_code": "NOT_FOUND",
            "message": "Template not found: 999",
            "details": {"resource": "Template", "identifier": "999"},
        }

    def test_update_template(self, client, template):
        response = client.put(f"/api/templates/{template['id']}", json={"description": "Landing pages"})
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["description"] == "Landing pages"
        assert data["name"] == "Acme Theme"
        assert data["tags"] == ["business", "one-page"]

    def test_update_missing_template(self, client):
        response = client.put("/api/templates/999", json={"name": "x"})
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_template_cascades(self, client, template, page):
        response = client.delete(f"/api/templates/{template['id']}")
        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert client.get(f"/api/templates/{template['id']}").status_code == status.HTTP_404_NOT_FOUND
        assert client.get(f"/api/pages/{page['id']}").status_code == status.HTTP_404_NOT_FOUND
        assert client.delete(f"/api/templates/{template['id']}").status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.unit
class TestTemplatePages:
    def test_create_and_list_pages(self, client, template):
        url = f"/api/templates/{template['id']}/pages"
        response = client.post(url, json={"name": "About Us"})
        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["slug"] == "about-us"
        assert [p["name"] for p in client.get(url).json()] == ["About Us"]

    def test_pages_of_missing_template(self, client):
        assert client.get("/api/templates/999/pages").status_code == status.HTTP_404_NOT_FOUND
        response = client.post("/api/templates/999/pages", json={"name": "Home"})
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_template_files(self, client, template, page):
        client.post(f"/api/pages/{page['id']}/components", json={"type": "hero", "properties": {"title": "Hi"}})
        response = client.get(f"/api/templates/{template['id']}/files")
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["file_count"] == 6
        assert "esc_html('Hi')" in data["files"]["index.php"]
        assert "Theme Name: Acme Theme" in data["files"]["style.css"]

    def test_files_of_missing_template(self, client):
        assert client.get("/api/templates/999/files").status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.unit
class TestExportImport:
    def test_export_zip(self, client, template, page):
        client.post(f"/api/pages/{page['id']}/components", json={"type": "navbar"})
        response = client.post(f"/api/templates/{template['id']}/export")
        assert response.status_code == status.HTTP_200_OK
        assert response.headers["content-type"] == "application/zip"
        assert response.headers["content-disposition"] == 'attachment; filename="Acme Theme.zip"'
        assert response.headers["cache-control"] == "no-store"
        with zipfile.ZipFile(io.BytesIO(response.content)) as archive:
            names = archive.namelist()
        assert "acme-theme/index.php" in names
        assert "acme-theme/template.json" in names

    def test_export_missing_template(self, client):
        response = client.post("/api/templates/999/export")
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error_code"] == "NOT_FOUND"

    def test_import_manifest(self, client):
        manifest = {
            "format_version": 1,
            "template": {"name": "Imported", "version": "3.1.0"},
            "pages": [
                {"name": "Home", "is_home_page": True, "components": [{"id": "hero-1", "type": "hero"}]},
            ],
        }
        response = client.post("/api/templates/import", json=manifest)
        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["name"] == "Imported"
        assert data["version"] == "3.1.0"
        pages = client.get(f"/api/templates/{data['id']}/pages").json()
        assert pages[0]["components"][0]["id"] == "hero-1"

    def test_import_manifest_rejects_unknown_version(self, client):
        response = client.post("/api/templates/import", json={"format_version": 2, "template": {"name": "x"}})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_import_exported_archive(self, client, template, page):
        client.post(f"/api/pages/{page['id']}/components", json={"type": "faq"})
        exported = client.post(f"/api/templates/{template['id']}/export").content

        response = client.post(
            "/api/templates/import/archive",
            files={"file": ("Acme Theme.zip", exported, "application/zip")},
        )
        assert response.status_code == status.HTTP_201_CREATED
        imported = response.json()
        assert imported["name"] == "Acme Theme"
        assert imported["id"] != template["id"]

        original_files = client.get(f"/api/templates/{template['id']}/files").json()["files"]
        imported_files = client.get(f"/api/templates/{imported['id']}/files").json()["files"]
        assert imported_files == original_files

    def test_import_archive_rejects_non_zip(self, client):
        response = client.post(
            "/api/templates/import/archive",
            files={"file": ("notes.txt", b"not a zip", "text/plain")},
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "Archive does not contain a valid template.json"

    def test_import_archive_rejects_oversized_manifest(self, client):
        padded = '{"template": {"name": "Big"}, "pad": "' + " " * (settings.MAX_REQUEST_SIZE + 1) + '"}'
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            archive.writestr("big/template.json", padded)

        response = client.post(
            "/api/templates/import/archive",
            files={"file": ("big.zip", buffer.getvalue(), "application/zip")},
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["details"] == {"max_bytes": settings.MAX_REQUEST_SIZE}
        assert client.get("/api/templates").json() == []


@pytest.mark.unit
class TestMiddleware:
    def test_healthz(self, client):
        assert client.get("/healthz").json() == {"status": "ok"}

    def test_request_id_echoed(self, client):
        response = client.get("/healthz", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"
        assert client.get("/healthz").headers["X-Request-ID"]

    def test_unsafe_request_id_replaced(self, client):
        response = client.get("/healthz", headers={"X-Request-ID": "bad id with spaces"})
        assert response.headers["X-Request-ID"] != "bad id with spaces"
        assert len(response.headers["X-Request-ID"]) == 36

    def test_security_headers(self, client):
        response = client.get("/api/templates")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert "default-src 'none'" in response.headers["Content-Security-Policy"]

    def test_unknown_route_uses_error_format(self, client):
        response = client.get("/api/nothing-here")
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error_code"] == "HTTP_ERROR"

    def test_oversized_body_rejected(self, client):
        response = client.post(
            "/api/generate",
            content=b"x" * (settings.MAX_REQUEST_SIZE + 1),
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
        assert response.json()["error_code"] == "PAYLOAD_TOO_LARGE"
