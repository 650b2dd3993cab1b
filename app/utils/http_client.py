"""Shared httpx client for outbound calls to third-party services."""

from functools import lru_cache

import httpx

from app.config import settings


def build_http_client() -> httpx.Client:
    timeout_seconds = max(1, settings.external_timeout_seconds)
    return httpx.Client(
        timeout=httpx.Timeout(timeout_seconds),
        limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
        headers={"User-Agent": f"{settings.app_name}/{settings.app_version}"},
    )


@lru_cache(maxsize=1)
def get_http_client() -> httpx.Client:
    """Return the process-wide client used by postal code lookups."""
    return build_http_client()
