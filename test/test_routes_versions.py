"""
Tests for export, version listing, download and stats routes
"""

from utils.mock_utils import create_test_node, create_test_translation, create_test_version


class TestExportRoute:
    async def test_admin_export_download(self, client, store, admin_auth_headers):
        root = await create_test_node(store, "book")
        await create_test_translation(store, root, "en", title="O'Brien")

        response = await client.post(
            "/api/export-db", json={"version_number": 1, "notes": "initial"}, headers=admin_auth_headers
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/sql")
        assert response.headers["content-disposition"] == 'attachment; filename="content-export-v1.sql"'
        assert "'O''Brien'" in response.text

        listing = await client.get("/api/versions-list", headers=admin_auth_headers)
        data = listing.json()
        assert data["count"] == 1
        assert data["versions"][0]["version_number"] == "1"
        assert data["versions"][0]["content_count"] == 1

    async def test_duplicate_version(self, client, admin_auth_headers):
        await client.post("/api/export-db", json={"version_number": "2"}, headers=admin_auth_headers)

        response = await client.post("/api/export-db", json={"version_number": "2"}, headers=admin_auth_headers)

        assert response.status_code == 409

    async def test_missing_version_number(self, client, admin_auth_headers):
        response = await client.post("/api/export-db", json={}, headers=admin_auth_headers)

        assert response.status_code == 400

    async def test_non_ascii_version_number(self, client, admin_auth_headers):
        response = await client.post("/api/export-db", json={"version_number": "1.0 ✓"}, headers=admin_auth_headers)

        assert response.status_code == 200
        assert response.headers["content-disposition"] == (
            "attachment; filename=\"content-export-v1.0 _.sql\"; filename*=UTF-8''content-export-v1.0%20%E2%9C%93.sql"
        )

        listing = await client.get("/api/versions-list", headers=admin_auth_headers)
        assert [v["version_number"] for v in listing.json()["versions"]] == ["1.0 ✓"]

    async def test_quote_in_version_number_rejected_before_recording(self, client, admin_auth_headers):
        response = await client.post(
            "/api/export-db", json={"version_number": 'a"; filename="evil.exe'}, headers=admin_auth_headers
        )

        assert response.status_code == 400
        assert response.json()["error"]["error_code"] == "VALIDATION_FAILED"

        listing = await client.get("/api/versions-list", headers=admin_auth_headers)
        assert listing.json()["count"] == 0

    async def test_non_admin_forbidden(self, client, auth_headers):
        response = await client.post("/api/export-db", json={"version_number": "3"}, headers=auth_headers)

        assert response.status_code == 403
        assert response.json()["error"]["error_code"] == "AUTH_PERMISSION_DENIED"


class TestDownloadRoute:
    async def test_redirects_to_stored_file(self, client, store, auth_headers):
        version_id = await create_test_version(store, "7", file_url="https://files.example.com/v7.sql")

        response = await client.get(f"/api/versions-download?id={version_id}", headers=auth_headers)

        assert response.status_code == 302
        assert response.headers["location"] == "https://files.example.com/v7.sql"

    async def test_regenerates_without_file(self, client, store, auth_headers):
        version_id = await create_test_version(store, "8")
        await create_test_node(store, "book")

        response = await client.get(f"/api/versions-download?id={version_id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.text.startswith("-- Content Admin Export v8\n-- Regenerated: ")
        assert response.headers["content-disposition"] == 'attachment; filename="content-export-v8.sql"'

    async def test_unknown_version(self, client, auth_headers):
        response = await client.get("/api/versions-download?id=404", headers=auth_headers)

        assert response.status_code == 404

    async def test_missing_id(self, client, auth_headers):
        response = await client.get("/api/versions-download", headers=auth_headers)

        assert response.status_code == 400


async def test_stats_route(client, store, auth_headers):
    await create_test_node(store, "book")

    response = await client.get("/api/stats", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["content_count"] == 1
    assert data["root_count"] == 1
    assert data["type_breakdown"] == [{"type": "book", "count": 1}]
    assert data["latest_version"] is None
