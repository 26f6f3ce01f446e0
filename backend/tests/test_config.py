"""Test the configuration settings."""

from unittest.mock import patch

from table_beautifier.core.config import Settings
from table_beautifier.services.llm.factory import CompletionServiceFactory
from table_beautifier.services.llm.openai_llm_service import OpenAICompletionService


def test_defaults():
    """Defaults describe a development deployment on SQLite."""
    settings = Settings(_env_file=None)

    assert settings.api_prefix == "/api"
    assert settings.storage_backend == "sqlite"
    assert settings.llm_model == "gpt-4o"
    assert settings.ai_fallback_enabled is True
    assert settings.is_production is False


def test_database_url_by_environment():
    """Production and development pick their own URLs, falling back to database_url."""
    dev = Settings(_env_file=None, dev_database_url="sqlite:///dev.db", prod_database_url="postgresql://prod")
    prod = Settings(_env_file=None, environment="production", prod_database_url="postgresql://prod")
    prod_fallback = Settings(
        _env_file=None, environment="production", database_url="postgresql://shared"
    )

    assert dev.get_database_url() == "sqlite:///dev.db"
    assert prod.get_database_url() == "postgresql://prod"
    assert prod_fallback.get_database_url() == "postgresql://shared"


def test_settings_from_environment():
    """Environment variables override defaults."""
    with patch.dict(
        "os.environ", {"STORAGE_BACKEND": "sqlalchemy", "AI_FALLBACK_ENABLED": "false"}
    ):
        settings = Settings(_env_file=None)

    assert settings.storage_backend == "sqlalchemy"
    assert settings.ai_fallback_enabled is False


def test_completion_service_factory():
    """Known providers get a service; unknown providers get None."""
    openai = CompletionServiceFactory.create_service(Settings(_env_file=None, openai_api_key=None))
    unknown = CompletionServiceFactory.create_service(Settings(_env_file=None, llm_provider="other"))

    assert isinstance(openai, OpenAICompletionService)
    assert openai.client is None
    assert unknown is None
