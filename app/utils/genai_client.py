"""Shared Gemini SDK client."""

from functools import lru_cache

from google import genai
from google.genai import types

from app.config import settings


def build_genai_client() -> genai.Client | None:
    """Return a configured client, or None when no API key is set."""
    if not settings.gemini_api_key:
        return None
    timeout_seconds = max(1, settings.external_timeout_seconds)
    return genai.Client(
        api_key=settings.gemini_api_key,
        http_options=types.HttpOptions(timeout=timeout_seconds * 1000),
    )


@lru_cache(maxsize=1)
def get_genai_client() -> genai.Client | None:
    """Return the process-wide client used by the assistant."""
    return build_genai_client()
