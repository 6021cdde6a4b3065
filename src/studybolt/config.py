"""Application configuration using Pydantic Settings."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_REDIS_URL = "redis://localhost:6379"
DEFAULT_SERPAPI_BASE_URL = "https://serpapi.com/search.json"
SECRET_FILE_ENV_VARS = (
    "MISTRAL_API_KEY",
    "SERPAPI_API_KEY",
    "REDIS_URL",
)


def _load_secret_file_env_vars() -> None:
    """Allow secrets to be sourced from *_FILE env vars (Docker secrets)."""
    for env_var in SECRET_FILE_ENV_VARS:
        file_var = f"{env_var}_FILE"
        file_path = os.getenv(file_var)
        if not file_path:
            continue
        try:
            value = Path(file_path).read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise RuntimeError(f"Failed to read {file_var} at {file_path}") from exc
        if not value:
            raise ValueError(f"{file_var} is empty")
        os.environ[env_var] = value


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # ----- Application -----
    app_env: Literal["development", "staging", "production"] = "development"
    app_debug: bool = False
    port: int = 3000
    max_request_body_bytes: int = 1024 * 1024

    # ----- Mistral agent -----
    mistral_api_key: str = ""
    mistral_agent_id: str = ""
    mistral_server_url: str | None = None
    completion_timeout_seconds: float = 60.0
    # Attempts for the one-shot summary completion; streaming is never retried
    completion_max_attempts: int = Field(default=1, ge=1, le=5)

    # ----- SerpAPI -----
    serpapi_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("serpapi_api_key", "serp_api_key"),
    )
    serpapi_base_url: str = DEFAULT_SERPAPI_BASE_URL
    search_timeout_seconds: float = 15.0
    search_default_results: int = Field(default=5, ge=1)
    search_max_results: int = Field(default=20, ge=1)

    # ----- Cache -----
    cache_backend: Literal["redis", "memory"] = "redis"
    redis_url: str = DEFAULT_REDIS_URL
    redis_socket_timeout_seconds: float = 5.0
    cache_ttl_seconds: int = Field(default=3600, ge=1)

    # ----- CORS -----
    # Can be set as JSON list or comma-separated string
    cors_origins_str: str = Field(default="*", alias="cors_origins")

    @property
    def cors_origins(self) -> list[str]:
        """Parse cors_origins from comma-separated string or JSON list."""
        v = self.cors_origins_str
        if not v:
            return ["*"]
        if v.startswith("["):
            import json

            raw = json.loads(v)
            if not isinstance(raw, list) or not all(isinstance(origin, str) for origin in raw):
                raise ValueError("CORS_ORIGINS must be a JSON list of strings")
            return raw
        return [origin.strip() for origin in v.split(",") if origin.strip()]

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Ensure real collaborators are configured in production."""
        if self.search_default_results > self.search_max_results:
            raise ValueError("SEARCH_DEFAULT_RESULTS must not exceed SEARCH_MAX_RESULTS")
        if self.is_production:
            if self.app_debug:
                raise ValueError("APP_DEBUG must be false in production!")
            if not self.mistral_api_key:
                raise ValueError("MISTRAL_API_KEY must be set in production!")
            if not self.mistral_agent_id:
                raise ValueError("MISTRAL_AGENT_ID must be set in production!")
            if not self.serpapi_api_key:
                raise ValueError("SERPAPI_API_KEY must be set in production!")
            if self.cache_backend == "memory":
                raise ValueError("CACHE_BACKEND=memory is not allowed in production!")
            if "*" in self.cors_origins:
                raise ValueError("CORS_ORIGINS must be restricted in production!")
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    _load_secret_file_env_vars()
    return Settings()
