"""Runtime configuration for the Reliva API.

Values come from the environment (or a local ``.env``); provider keys that are
absent or blank leave the matching source unconfigured.
"""

import json
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]
PROVIDER_KEY_FIELDS = (
    "tmdb_api_key",
    "nytimes_api_key",
    "google_books_api_key",
    "musicapi_client_id",
    "musicapi_client_secret",
    "youtube_api_key",
)


def split_list(value: object) -> list[str]:
    """Read a JSON array, a comma-separated string or a list into clean strings."""
    if isinstance(value, str):
        text = value.strip()
        if text.startswith("["):
            try:
                value = json.loads(text)
            except json.JSONDecodeError:
                value = text.strip("[]").split(",")
        else:
            value = text.split(",")
    if not isinstance(value, (list, tuple)):
        return []
    return [str(item).strip() for item in value if item is not None and str(item).strip()]


class Settings(BaseSettings):
    """Environment-backed settings shared by routes, services and source adapters."""

    app_name: str = "Reliva API"
    environment: str = "development"
    api_prefix: str = "/api"
    log_level: str = "INFO"

    database_url: str = "sqlite+aiosqlite:///./reliva.db"
    preferences_database_url: Optional[str] = None

    # Outbound calls: one attempt each unless raised here.
    http_timeout_seconds: float = 10.0
    upstream_max_attempts: int = 1

    saavn_primary_base_url: str = "https://saavn.dev/api"
    saavn_mirror_base_url: str = "https://jiosavan-api-with-playlist.vercel.app/api"
    saavn_legacy_base_url: str = "https://saavn.me"

    tmdb_api_key: Optional[str] = None
    nytimes_api_key: Optional[str] = None
    google_books_api_key: Optional[str] = None
    musicapi_client_id: Optional[str] = None
    musicapi_client_secret: Optional[str] = None
    youtube_api_key: Optional[str] = None

    cors_origins: list[str] | str = Field(default_factory=lambda: DEFAULT_CORS_ORIGINS.copy())
    health_allowlist: list[str] | str = Field(default_factory=list)

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _parse_cors_origins(cls, value: object) -> list[str]:
        return split_list(value) or DEFAULT_CORS_ORIGINS.copy()

    @field_validator("health_allowlist", mode="before")
    @classmethod
    def _parse_health_allowlist(cls, value: object) -> list[str]:
        """Hostnames, IPs or CIDR ranges allowed to see source telemetry."""
        return split_list(value)

    @field_validator(*PROVIDER_KEY_FIELDS, mode="before")
    @classmethod
    def _blank_key_is_unset(cls, value: Optional[str]) -> Optional[str]:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def effective_preferences_database_url(self) -> str:
        """Preferences share the main database unless pointed elsewhere."""
        return self.preferences_database_url or self.database_url


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
