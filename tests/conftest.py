"""Pytest fixtures for backend tests."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from unittest.mock import MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient


def _set_default_env() -> None:
    os.environ.setdefault("STORAGE_BACKEND", "memory")
    os.environ.setdefault("ENABLE_SCHEDULER", "false")
    os.environ.setdefault("SESSION_CACHE_TTL_SECONDS", "0")
    os.environ.setdefault("GEMINI_API_KEY", "test-key")
    os.environ.setdefault("TIMEZONE", "America/Sao_Paulo")


_set_default_env()

from app.schemas.user import UserResponse  # noqa: E402
from app.services.common import MemoryRecordStore  # noqa: E402
from app.services.repositories import UserRepository  # noqa: E402


@pytest.fixture()
def store() -> MemoryRecordStore:
    """Fresh in-memory record store for each test."""
    return MemoryRecordStore()


@pytest.fixture()
def resident(store: MemoryRecordStore) -> UserResponse:
    """Seeded resident of Centro."""
    return UserRepository(store).get("user-1").public()


@pytest.fixture()
def admin(store: MemoryRecordStore) -> UserResponse:
    """Seeded organization administrator of Centro."""
    return UserRepository(store).get("org-1").public()


@pytest.fixture()
def make_user() -> Callable[..., UserResponse]:
    """Build ad-hoc users without touching the store."""

    def _make(
        user_id: str,
        role: str = "resident",
        region: str = "Centro",
        name: str | None = None,
    ) -> UserResponse:
        return UserResponse(
            id=user_id,
            name=name or f"Usuario {user_id}",
            email=f"{user_id}@example.com",
            role=role,
            region=region,
        )

    return _make


def mock_http(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
    """Return an httpx client whose requests are answered by ``handler``."""
    return httpx.Client(transport=httpx.MockTransport(handler))


@pytest.fixture()
def offline_http() -> httpx.Client:
    """HTTP client where every upstream call fails with 503."""
    return mock_http(lambda request: httpx.Response(503, json={"error": "unavailable"}))


@pytest.fixture()
def offline_genai() -> MagicMock:
    """Gemini client whose every call fails to connect."""
    client = MagicMock()
    client.models.generate_content.side_effect = httpx.ConnectError("offline")
    return client


@pytest.fixture()
def client(
    store: MemoryRecordStore, offline_http: httpx.Client, offline_genai: MagicMock
) -> Iterator[TestClient]:
    """FastAPI test client bound to the per-test store and an offline network."""
    from app.dependencies import get_genai, get_http, get_store
    from app.main import app

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_http] = lambda: offline_http
    app.dependency_overrides[get_genai] = lambda: offline_genai
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def login(client: TestClient) -> Callable[[str, str], dict[str, str]]:
    """Sign in through the API and return bearer headers."""

    def _login(email: str, password: str = "123456") -> dict[str, str]:
        response = client.post("/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _login
