"""
Tests for main.py
"""
from fastapi.testclient import TestClient

from app.db.memory import MemoryStore
from app.db.store import MongoStore
from main import connect_store, create_app


class TestAppFactory:
    """Test the root and health endpoints."""

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["docs"] == "/api/docs"

    def test_health_with_store(self, client):
        body = client.get("/health").json()

        assert body["status"] == "healthy"
        assert body["database"] == "available"
        assert body["timestamp"].endswith("Z")

    def test_health_degraded_without_database(self, test_settings):
        app = create_app(settings=test_settings, store=MongoStore(None))

        with TestClient(app) as client:
            body = client.get("/health").json()

        assert body["status"] == "degraded"
        assert body["database"] == "not available"

    def test_routes_report_unavailable_store(self, test_settings, admin_headers):
        """Requests fail with 503 rather than an unhandled error."""
        app = create_app(settings=test_settings, store=MongoStore(None))

        with TestClient(app) as client:
            response = client.get("/api/announcements/", headers=admin_headers)

        # The caller still gets a minimal profile; the list read is what fails
        assert response.status_code == 503
        assert response.json()["detail"] == "Database not available"

    def test_lifespan_builds_memory_store(self, test_settings):
        app = create_app(settings=test_settings)

        with TestClient(app) as client:
            assert isinstance(app.state.services.store, MemoryStore)
            assert client.get("/health").json()["status"] == "healthy"


class TestConnectStore:

    def test_memory_backend(self, test_settings):
        store, client = connect_store(test_settings)
        assert isinstance(store, MemoryStore)
        assert client is None

    def test_missing_url_is_unavailable(self, test_settings):
        settings = test_settings.model_copy(update={"STORE_BACKEND": "mongodb", "MONGODB_URL": None})

        store, client = connect_store(settings)

        assert isinstance(store, MongoStore)
        assert store.available is False
        assert client is None
