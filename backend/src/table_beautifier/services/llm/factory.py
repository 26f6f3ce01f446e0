"""Completion service factory."""

import logging
from typing import Optional

from table_beautifier.core.config import Settings
from table_beautifier.services.llm.base import CompletionService
from table_beautifier.services.llm.openai_llm_service import OpenAICompletionService

logger = logging.getLogger(__name__)


class CompletionServiceFactory:
    """The factory for the completion services."""

    @staticmethod
    def create_service(settings: Settings) -> Optional[CompletionService]:
        """Create a completion service for the configured provider."""
        provider = settings.llm_provider
        logger.info(f"Creating completion service for provider: {provider}")

        if provider == "openai":
            return OpenAICompletionService(settings)
        else:
            logger.warning(f"No completion service found for provider: {provider}")
            return None
