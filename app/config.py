"""Application settings loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration.

    Values are read from environment variables (or a `.env` file).
    """

    # Storage
    storage_backend: str = "supabase"
    record_table: str = "record_collections"

    # Supabase
    supabase_url: str = ""
    supabase_service_key: str = ""
    supabase_http_max_connections: int = 100
    supabase_http_max_keepalive_connections: int = 50
    supabase_postgrest_timeout_seconds: int = 30

    # App
    app_name: str = "reColeta API"
    app_version: str = "1.0.0"
    environment: str = "development"
    log_level: str = "INFO"
    allowed_origins: str = "http://localhost:5173"
    enable_scheduler: bool = True

    # Scheduling and calendar
    timezone: str = "America/Sao_Paulo"

    # Sessions and points
    session_duration_minutes: int = 30
    default_points: int = 10450

    # External services
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    viacep_base_url: str = "https://viacep.com.br/ws"
    external_timeout_seconds: int = 15

    # Performance tuning
    session_cache_ttl_seconds: int = 15
    session_cache_max_entries: int = 1024
    slow_request_log_threshold_ms: int = 0

    @property
    def is_production(self) -> bool:
        """Return True when running in production."""
        return self.environment == "production"

    @property
    def origins_list(self) -> list[str]:
        """Parse comma-separated ALLOWED_ORIGINS into a list."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
