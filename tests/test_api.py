"""
Tests for the FastAPI endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from linkshelf.main import app, get_fetcher, get_store
from linkshelf.metadata import RESTRICTED_ERROR

from .conftest import FakeFetcher


@pytest.fixture
def fetcher(article_html):
    return FakeFetcher(html=article_html)


@pytest.fixture
def client(store, fetcher):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_fetcher] = lambda: fetcher
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestLinksEndpoints:
    """Tests for /api/links."""

    def test_empty_list(self, client):
        response = client.get("/api/links")
        assert response.status_code == 200
        assert response.json() == {"links": [], "count": 0}

    def test_add_link(self, client, store):
        response = client.post(
            "/api/links",
            json={"url": "github.com/foo/bar", "title": " Repo ", "description": ""},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["url"] == "https://github.com/foo/bar"
        assert data["title"] == "Repo"
        assert data["description"] is None
        assert "addedAt" in data
        assert store.links[0].id == data["id"]

    def test_add_without_title_uses_url(self, client):
        data = client.post("/api/links", json={"url": "https://example.com"}).json()
        assert data["title"] == "https://example.com"

    def test_add_blank_url(self, client):
        response = client.post("/api/links", json={"url": "   "})
        assert response.status_code == 400

    def test_list_is_newest_first(self, client):
        client.post("/api/links", json={"url": "https://one.example"})
        client.post("/api/links", json={"url": "https://www.github.com/two"})
        data = client.get("/api/links").json()
        assert data["count"] == 2
        first, second = data["links"]
        assert first["domain"] == "github.com"
        assert first["added_label"] == "just now"
        assert first["thumbnail"]
        assert second["url"] == "https://one.example"

    def test_delete(self, client, store):
        keep = client.post("/api/links", json={"url": "https://keep.example"}).json()
        drop = client.post("/api/links", json={"url": "https://drop.example"}).json()
        response = client.delete(f"/api/links/{drop['id']}")
        assert response.status_code == 200
        assert [l.id for l in store.links] == [keep["id"]]

    def test_delete_unknown(self, client):
        assert client.delete("/api/links/nope").status_code == 404


class TestMetadataEndpoints:
    """Tests for /api/metadata and /api/metadata/quick."""

    def test_quick(self, client, fetcher):
        data = client.get("/api/metadata/quick", params={"url": "https://youtu.be/abc123"}).json()
        assert data["title"] == "YouTube Video"
        assert data["thumbnail"].endswith("/abc123/hqdefault.jpg")
        assert fetcher.calls == []

    def test_full(self, client, fetcher):
        data = client.get("/api/metadata", params={"url": "example.com/post"}).json()
        assert fetcher.calls == ["https://example.com/post"]
        assert data["title"] == "Open Graph Title"
        assert data["error"] is None

    def test_full_when_relays_fail(self, client, failing_fetcher):
        app.dependency_overrides[get_fetcher] = lambda: failing_fetcher
        response = client.get("/api/metadata", params={"url": "https://example.com/post"})
        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "example.com - post"
        assert data["error"] == RESTRICTED_ERROR

    def test_missing_url(self, client):
        assert client.get("/api/metadata").status_code == 422


class TestConfigEndpoint:
    def test_reports_relays(self, client):
        data = client.get("/api/config").json()
        assert len(data["relays"]) == 3
        assert data["debounce_seconds"] == 0.5
