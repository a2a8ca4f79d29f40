"""Application configuration using Pydantic Settings with multi-file support."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Priority (lowest to highest):
    1. .env (base defaults)
    2. env-files/dev.env (development overrides)
    3. OS environment variables (highest priority)
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "env-files/dev.env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "SQL Quest"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # API Configuration
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    CORS_ORIGINS: list[str] = Field(default_factory=lambda: ["*"])

    # Query Engine
    QUERY_MAX_LENGTH: int = Field(
        default=2000,
        ge=16,
        le=100000,
        description="Maximum accepted query text length",
    )
    QUERY_DEFAULT_MAX_ROWS: int | None = Field(
        default=None,
        ge=1,
        description="Row cap applied when a request does not pass one (unset = no cap)",
    )

    # Quiz
    QUIZ_TIME_LIMIT_SECONDS: int = Field(default=300, ge=10, le=7200)
    QUIZ_QUESTIONS_PER_QUIZ: int = Field(default=10, ge=1, le=100)
    QUIZ_PASSING_SCORE: int = Field(default=70, ge=0, le=100, description="Percent needed to pass")
    QUIZ_MAX_SESSIONS: int = Field(default=1000, ge=1, description="Quiz sessions kept in memory")
    QUIZ_SESSION_TTL_SECONDS: int = Field(
        default=3600, ge=60, description="Idle time before a quiz session expires"
    )

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = Field(default=True, description="Enable rate limiting")
    RATE_LIMIT_DEFAULT: str = Field(default="120/minute", description="Default rate limit")
    RATE_LIMIT_QUERY: str = Field(default="60/minute", description="Rate limit for query endpoint")

    # Security
    SECURITY_HEADERS_ENABLED: bool = Field(default=True, description="Enable security headers")

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Parse CORS origins from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == "production"

    @property
    def query_cap_configured(self) -> bool:
        """Check if a default row cap is configured."""
        return self.QUERY_DEFAULT_MAX_ROWS is not None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
