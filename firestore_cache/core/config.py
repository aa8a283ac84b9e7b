"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Cache budget and TTL are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment and .env.

    Everything has a default; Firestore credentials are only needed when
    building the Firestore-backed service (see core.lifespan).
    """

    # App
    app_name: str = "firestore-cache"
    app_version: str = "1.0.0"
    debug: bool = False

    # In-memory document cache
    cache_ttl_seconds: int = 3600
    cache_max_megabytes: float = 64
    # Sort query filters by field name before building the cache key.
    # Off by default: {a, b} and {b, a} map to different keys.
    cache_sort_query_filters: bool = False

    # Firebase / Firestore: use key (env) or path (file).
    firebase_project_id: str | None = None
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None  # Path to JSON file
    firestore_timeout_seconds: float = 30.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_cache_limits(self) -> "Settings":
        """Reject non-positive TTL, memory budget and HTTP timeout."""
        if self.cache_ttl_seconds <= 0:
            raise ValueError(
                f"CACHE_TTL_SECONDS must be positive, got: {self.cache_ttl_seconds}"
            )
        if self.cache_max_megabytes <= 0:
            raise ValueError(
                f"CACHE_MAX_MEGABYTES must be positive, got: {self.cache_max_megabytes}"
            )
        if self.firestore_timeout_seconds <= 0:
            raise ValueError(
                "FIRESTORE_TIMEOUT_SECONDS must be positive, "
                f"got: {self.firestore_timeout_seconds}"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
