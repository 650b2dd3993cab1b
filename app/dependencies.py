"""FastAPI dependency injection helpers."""

from __future__ import annotations

import threading
import time
from typing import Any

import httpx
from fastapi import Depends, Header
from google import genai

from app.config import settings
from app.schemas.user import UserResponse
from app.services.auth_service import AuthService
from app.services.common import RecordStore
from app.utils.errors import UnauthorizedError
from app.utils.genai_client import get_genai_client
from app.utils.http_client import get_http_client
from app.utils.supabase_client import get_record_store

_session_cache: dict[str, tuple[float, Any]] = {}
_cache_lock = threading.Lock()


def _cache_get(cache: dict[Any, tuple[float, Any]], key: Any) -> Any | None:
    """Return a cache value when present and not expired."""
    now = time.monotonic()
    with _cache_lock:
        entry = cache.get(key)
        if not entry:
            return None
        expires_at, value = entry
        if expires_at <= now:
            cache.pop(key, None)
            return None
        return value


def _cache_set(
    cache: dict[Any, tuple[float, Any]],
    key: Any,
    value: Any,
    ttl_seconds: int,
    max_entries: int,
) -> None:
    """Store a bounded cache value with TTL."""
    if ttl_seconds <= 0:
        return

    with _cache_lock:
        bounded_max_entries = max(1, max_entries)
        if len(cache) >= bounded_max_entries:
            oldest_key = next(iter(cache))
            cache.pop(oldest_key, None)
        cache[key] = (time.monotonic() + ttl_seconds, value)


def forget_session(token: str) -> None:
    """Drop a cached session so logout takes effect immediately."""
    with _cache_lock:
        _session_cache.pop(token, None)


def get_store() -> RecordStore:
    """Return the record store backing every service."""
    return get_record_store()


def get_http() -> httpx.Client:
    """Return the outbound HTTP client for third-party services."""
    return get_http_client()


def get_genai() -> genai.Client | None:
    """Return the Gemini client, or None when no API key is configured."""
    return get_genai_client()


def get_session_token(authorization: str = Header(None)) -> str:
    """Extract the bearer token from the Authorization header.

    Raises:
        UnauthorizedError: 401 if the header is missing or malformed.
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise UnauthorizedError("Missing authorization header")
    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise UnauthorizedError("Missing authorization header")
    return token


def get_current_user(
    token: str = Depends(get_session_token),
    store: RecordStore = Depends(get_store),
) -> UserResponse:
    """Resolve the session token into the signed-in user.

    Resolved users are cached for ``session_cache_ttl_seconds``; an expired
    session is removed from the store on the first uncached lookup.
    """
    cached_user = _cache_get(_session_cache, token)
    if cached_user is not None:
        return cached_user

    user = AuthService(store).resolve_session(token)
    _cache_set(
        _session_cache,
        token,
        user,
        settings.session_cache_ttl_seconds,
        settings.session_cache_max_entries,
    )
    return user
