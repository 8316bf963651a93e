"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded in callers)
    - get_settings() is cached (lru_cache): single instance per process

Design Decisions:
    - Server and client settings share one Settings class: the client session only
      reads api_base_url and credential_path
    - Defaults work out-of-the-box with docker-compose
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://crowdfund:crowdfund@db:5432/crowdfund"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Auth
    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    token_ttl_hours: int = 24 * 7
    bcrypt_rounds: int = 12

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Client session
    api_base_url: str = "http://localhost:3000/api"
    credential_path: str = ".crowdfund/credential"

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
