"""
Application configuration.

Centralized configuration management with environment variables.
Every setting can be overridden with an ``EXPROC_`` prefixed variable,
e.g. ``EXPROC_LOG_LEVEL=DEBUG``.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_prefix="EXPROC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "exproc"

    # Logging
    LOG_LEVEL: str = "WARNING"
    LOG_FORMAT: str = "text"  # json or text
    LOG_FILE: Optional[str] = None

    # Taylor expansion: simplify each derivative before differentiating again
    TAYLOR_SIMPLIFY_STEPS: bool = True

    # Rendering
    TEX_PRECISION: int = 6

    # Parser context loaded by the command line front end
    CONTEXT_FILE: Optional[str] = None


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Global settings instance
settings = get_settings()
