# app/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - DATABASE_URL (Postgres connection string, or sqlite:// for local dev)
      - AUTH_JWT_SECRET (HS256 secret shared with the identity provider)
      - WEBHOOK_SECRET (shared secret sent by the identity provider webhook)

    Optional:
      - SLUG_MAX_ATTEMPTS (upper bound on suffixed slug candidates)
      - CORS_ORIGINS (JSON list of allowed frontend origins)
    """

    PROJECT_NAME: str = "Storefront Backend"
    API_V1_STR: str = "/api/v1"

    DATABASE_URL: str

    # JWT verification (backend-side)
    AUTH_JWT_SECRET: str
    AUTH_JWT_ALG: str = "HS256"

    # Identity provider -> backend user sync
    WEBHOOK_SECRET: str

    SLUG_MAX_ATTEMPTS: int = 1000

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
