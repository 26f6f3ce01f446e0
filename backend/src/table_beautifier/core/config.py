"""Configuration settings for the application.

This module defines the configuration settings using Pydantic's
SettingsConfigDict to load environment variables from a .env file.
"""

import logging
from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("uvicorn")


class Settings(BaseSettings):
    """Settings class for the application."""

    # ENVIRONMENT CONFIG
    environment: str = "development"
    testing: bool = bool(0)

    # API CONFIG
    project_name: str = "Table Beautifier API"
    api_prefix: str = "/api"
    backend_cors_origins: List[str] = [
        "http://localhost:3000",
        "http://localhost:5000",
        "http://localhost:5173",
        "http://localhost:8000",
    ]

    # STORAGE CONFIG
    storage_backend: str = "sqlite"
    database_url: Optional[str] = None
    dev_database_url: Optional[str] = "sqlite:///data/table_beautifier.db"
    prod_database_url: Optional[str] = None

    # LLM CONFIG
    llm_provider: str = "openai"
    llm_model: str = "gpt-4o"
    openai_api_key: Optional[str] = None
    ai_fallback_enabled: bool = True

    # LANGSMITH CONFIG
    langsmith_tracing: bool = False
    langsmith_endpoint: str = "https://api.smith.langchain.com"
    langsmith_project: str = "table-beautifier"
    langsmith_api_key: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=["../../.env", "../.env", ".env"],
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        """Whether the service runs in production mode."""
        return self.environment == "production"

    def get_database_url(self) -> Optional[str]:
        """Select the connection string for the current deployment mode."""
        if self.is_production:
            return self.prod_database_url or self.database_url
        return self.dev_database_url or self.database_url


@lru_cache()
def get_settings() -> Settings:
    """Get the settings for the application."""
    logger.info("Loading config settings from the environment...")

    settings = Settings()

    if settings.openai_api_key:
        logger.info("OpenAI API key is set")
    else:
        logger.warning("OpenAI API key is not set")

    if settings.is_production:
        logger.info("Using production database")
    else:
        logger.info("Using development database")

    return settings
