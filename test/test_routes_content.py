"""
Tests for content routes

Tests the content tree endpoints end to end, including authentication and
the error envelope.
"""

import pytest
from utils.mock_utils import create_test_node, create_test_translation, fetch_node


class TestAuthentication:
    async def test_missing_token(self, client):
        response = await client.get("/api/content-children")

        assert response.status_code == 401
        assert response.json()["error"]["error_code"] == "AUTH_FAILED"

    async def test_malformed_token(self, client):
        response = await client.get("/api/content-children", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 401
        assert response.json()["error"]["error_code"] == "AUTH_TOKEN_INVALID"

    async def test_non_bearer_scheme(self, client):
        response = await client.get("/api/content-children", headers={"Authorization": "Basic abc"})

        assert response.status_code == 401


class TestContentChildren:
    @pytest.mark.parametrize("query", ["", "?parent_id=", "?parent_id=null", "?parent_id=undefined"])
    async def test_root_markers(self, client, store, auth_headers, query):
        root = await create_test_node(store, "book")
        await create_test_node(store, "chapter", parent_id=root)

        response = await client.get(f"/api/content-children{query}", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        assert data["rows"][0]["id"] == root
        assert data["rows"][0]["child_count"] == 1
        assert data["rows"][0]["has_children"] is True

    async def test_children_of_parent(self, client, store, auth_headers):
        root = await create_test_node(store, "book")
        child = await create_test_node(store, "chapter", parent_id=root)

        response = await client.get(f"/api/content-children?parent_id={root}", headers=auth_headers)

        assert [row["id"] for row in response.json()["rows"]] == [child]

    async def test_non_numeric_parent(self, client, auth_headers):
        response = await client.get("/api/content-children?parent_id=abc", headers=auth_headers)

        assert response.status_code == 400


class TestContentTree:
    async def test_structure_mode(self, client, store, auth_headers):
        root = await create_test_node(store, "book")
        await create_test_translation(store, root, "en", title="Book")

        response = await client.get("/api/content-tree", headers=auth_headers)

        data = response.json()
        assert response.status_code == 200
        assert data["count"] == 1
        assert "title" not in data["rows"][0]

    async def test_with_language_mode(self, client, store, auth_headers):
        root = await create_test_node(store, "book")
        await create_test_node(store, "chapter", parent_id=root)
        await create_test_translation(store, root, "en", title="Book")

        response = await client.get("/api/content-tree?mode=with-language&language_code=en", headers=auth_headers)

        rows = response.json()["rows"]
        assert rows[0]["title"] == "Book"
        assert rows[1]["title"] is None
        assert "translation_updated_at" in rows[1]

    async def test_unknown_mode(self, client, auth_headers):
        response = await client.get("/api/content-tree?mode=flat", headers=auth_headers)

        assert response.status_code == 400


class TestCreateUpdateDelete:
    async def test_create(self, client, store, auth_headers):
        parent = await create_test_node(store, "book")

        response = await client.post(
            "/api/content-create", json={"parent_id": parent, "type": "chapter"}, headers=auth_headers
        )

        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert data["row"]["id"] == data["id"]
        assert data["row"]["sequence"] == 0

    async def test_create_without_type(self, client, auth_headers):
        response = await client.post("/api/content-create", json={}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error"]["details"]["field"] == "type"

    async def test_update_explicit_null(self, client, store, auth_headers):
        node = await create_test_node(store, "verse", audio_url="a.mp3", css="x")

        response = await client.post(
            "/api/content-update", json={"id": node, "audio_url": None}, headers=auth_headers
        )

        assert response.status_code == 200
        row = response.json()["row"]
        assert row["audio_url"] is None
        assert row["css"] == "x"

    async def test_update_self_parent(self, client, store, auth_headers):
        node = await create_test_node(store, "verse")

        response = await client.post(
            "/api/content-update", json={"id": node, "parent_id": node}, headers=auth_headers
        )

        assert response.status_code == 400

    async def test_update_only_id(self, client, store, auth_headers):
        node = await create_test_node(store, "verse")

        response = await client.post("/api/content-update", json={"id": node}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "No fields to update."

    async def test_update_missing_node(self, client, auth_headers):
        response = await client.post("/api/content-update", json={"id": 55, "type": "x"}, headers=auth_headers)

        assert response.status_code == 404

    async def test_delete_cascade(self, client, store, auth_headers):
        a = await create_test_node(store, "book")
        b = await create_test_node(store, "chapter", parent_id=a)
        c = await create_test_node(store, "verse", parent_id=b)

        response = await client.post("/api/content-delete", json={"id": b}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True, "deleted_count": 2, "deleted_ids": [b, c]}
        assert (await fetch_node(store, a))["is_deleted"] is False

        again = await client.post("/api/content-delete", json={"id": b}, headers=auth_headers)
        assert again.status_code == 404

    async def test_reorder(self, client, store, auth_headers):
        parent = await create_test_node(store, "book")
        x = await create_test_node(store, "chapter", parent_id=parent, sequence=0)
        y = await create_test_node(store, "chapter", parent_id=parent, sequence=1)

        response = await client.post(
            "/api/content-reorder", json={"parent_id": parent, "ordered_ids": [y, x]}, headers=auth_headers
        )

        assert response.json() == {"success": True, "reordered_count": 2}
        assert (await fetch_node(store, y))["sequence"] == 0

    async def test_reorder_wrong_parent(self, client, store, auth_headers):
        parent = await create_test_node(store, "book")
        outsider = await create_test_node(store, "book")

        response = await client.post(
            "/api/content-reorder", json={"parent_id": parent, "ordered_ids": [outsider]}, headers=auth_headers
        )

        assert response.status_code == 400
        assert str(outsider) in response.json()["error"]["message"]

    async def test_malformed_body(self, client, auth_headers):
        response = await client.post("/api/content-reorder", json={"ordered_ids": "abc"}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error"]["error_code"] == "VALIDATION_FAILED"

    async def test_create_with_non_integer_parent(self, client, auth_headers):
        response = await client.post(
            "/api/content-create", json={"parent_id": "abc", "type": "verse"}, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json()["error"]["error_code"] == "VALIDATION_FAILED"

    async def test_create_without_body(self, client, auth_headers):
        response = await client.post("/api/content-create", headers=auth_headers)

        assert response.status_code == 400
