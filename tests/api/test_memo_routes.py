"""Integration tests for memo routes (/api/places/{id}/memos, /api/memos/{id})."""
import pytest


@pytest.fixture
def place_id(client, admin_headers):
    resp = client.post(
        "/api/places",
        json={"name": "Tea Room", "type": "RESTAURANT", "address": "Seoul", "latitude": 37.5, "longitude": 127.0},
        headers=admin_headers,
    )
    return resp.json()["data"]["id"]


def add_memo(client, place_id, headers, **overrides):
    body = {"item_name": "Green tea", "rating": "GOOD", "comment": "fresh", **overrides}
    return client.post(f"/api/places/{place_id}/memos", json=body, headers=headers)


class TestMemos:
    def test_create_and_list(self, client, admin_headers, place_id):
        resp = add_memo(client, place_id, admin_headers)
        assert resp.status_code == 201
        assert resp.json()["data"]["rating"] == "GOOD"
        data = client.get(f"/api/places/{place_id}/memos").json()["data"]
        assert [m["item_name"] for m in data] == ["Green tea"]

    def test_create_requires_admin(self, client, place_id):
        assert add_memo(client, place_id, {}).status_code == 401
        assert client.get(f"/api/places/{place_id}/memos").json()["data"] == []

    def test_memos_of_missing_place(self, client, admin_headers):
        assert client.get("/api/places/999/memos").status_code == 404
        assert add_memo(client, 999, admin_headers).status_code == 404

    def test_invalid_rating_is_400(self, client, admin_headers, place_id):
        resp = add_memo(client, place_id, admin_headers, rating="AMAZING")
        assert resp.status_code == 400
        assert resp.json()["kind"] == "invalid_request"

    def test_update(self, client, admin_headers, place_id):
        memo_id = add_memo(client, place_id, admin_headers).json()["data"]["id"]
        resp = client.put(f"/api/memos/{memo_id}", json={"rating": "BAD"}, headers=admin_headers)
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["rating"] == "BAD"
        assert data["comment"] == "fresh"

    def test_update_requires_admin(self, client, admin_headers, place_id):
        memo_id = add_memo(client, place_id, admin_headers).json()["data"]["id"]
        assert client.put(f"/api/memos/{memo_id}", json={"rating": "BAD"}).status_code == 401

    def test_delete(self, client, admin_headers, place_id):
        memo_id = add_memo(client, place_id, admin_headers).json()["data"]["id"]
        assert client.delete(f"/api/memos/{memo_id}").status_code == 401
        assert client.delete(f"/api/memos/{memo_id}", headers=admin_headers).status_code == 204
        assert client.delete(f"/api/memos/{memo_id}", headers=admin_headers).status_code == 404
