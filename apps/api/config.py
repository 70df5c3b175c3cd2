"""
Application configuration using Pydantic Settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
import logging


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    APP_NAME: str = "PetraPanel Workflow API"
    APP_VERSION: str = "0.1.0"

    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_AUTHORIZATION_DENIALS: bool = True

    # Workflow
    VALIDATE_POLICY_ON_STARTUP: bool = True

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)


settings = Settings()


def configure_logging() -> None:
    """Apply LOG_LEVEL to the root logger once at startup."""
    level = getattr(logging, (settings.LOG_LEVEL or "INFO").strip().upper(), None)
    if not isinstance(level, int):
        raise ValueError(f"LOG_LEVEL is invalid: {settings.LOG_LEVEL!r}")
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger().setLevel(level)
