"""
Shared test fixtures and configuration for the HR portal backend tests.
"""
import asyncio
import os
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

# Set test environment before importing app modules
os.environ["ENVIRONMENT"] = "test"
os.environ["STORE_BACKEND"] = "memory"
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["LOG_LEVEL"] = "WARNING"

from app.config import Settings  # noqa: E402
from app.core import clock  # noqa: E402
from app.core.security import Principal, token_for  # noqa: E402
from app.db.memory import MemoryStore  # noqa: E402
from app.services.container import build_services  # noqa: E402

NOW = datetime(2026, 10, 19, 12, 0, 0)


class TickingClock:
    """Deterministic clock; every reading is one second after the previous."""

    def __init__(self, start: datetime = NOW):
        self.current = start

    def __call__(self) -> datetime:
        self.current = self.current + timedelta(seconds=1)
        return self.current


@pytest.fixture
def ticking_clock(monkeypatch):
    """Patch the service clock; 'today' starts at midnight of NOW."""
    fake = TickingClock()
    monkeypatch.setattr(clock, "utcnow", fake)
    monkeypatch.setattr(clock, "start_of_local_day", lambda: NOW.replace(hour=0))
    return fake


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def services(store):
    return build_services(store)


@pytest.fixture
def test_settings():
    return Settings(
        STORE_BACKEND="memory",
        SECRET_KEY="test-secret-key-for-testing-only",
        MONGODB_URL=None,
        LOG_LEVEL="WARNING",
        DEFAULT_PAGE_SIZE=10,
    )


@pytest.fixture
def client(store, test_settings):
    """TestClient over an app wired to the in-memory store."""
    from main import create_app

    app = create_app(settings=test_settings, store=store)
    with TestClient(app) as test_client:
        yield test_client


def _profile(role: str, first_name: str) -> dict:
    return {
        "first_name": first_name,
        "last_name": "Tester",
        "email": f"{first_name.lower()}@company.com",
        "role": role,
        "status": "active",
        "is_active": True,
        "created_at": NOW,
        "updated_at": NOW,
    }


@pytest.fixture
def admin_headers(store, test_settings):
    """Bearer headers for a pre-provisioned admin profile."""
    asyncio.run(store.set_document("users", "admin-1", _profile("admin", "Ada")))
    token = token_for(Principal(uid="admin-1", email="ada@company.com"), settings=test_settings)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def employee_headers(store, test_settings):
    """Bearer headers for a regular employee profile."""
    asyncio.run(store.set_document("users", "emp-1", _profile("employee", "Eve")))
    token = token_for(Principal(uid="emp-1", email="eve@company.com"), settings=test_settings)
    return {"Authorization": f"Bearer {token}"}
