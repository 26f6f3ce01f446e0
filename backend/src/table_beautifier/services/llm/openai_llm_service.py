"""OpenAI completion service implementation."""

import asyncio
import json
import logging
import time
from typing import Any, Dict

from langsmith import traceable
from openai import OpenAI

from table_beautifier.core.config import Settings
from table_beautifier.services.llm.base import CompletionService

logger = logging.getLogger(__name__)


class CompletionError(Exception):
    """Raised when the language model returns no usable JSON."""


class OpenAICompletionService(CompletionService):
    """OpenAI completion service implementation."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        if settings.openai_api_key:
            self.client = OpenAI(api_key=settings.openai_api_key)
        else:
            self.client = None  # type: ignore
            logger.warning(
                "OpenAI API key is not set. AI suggestions will use local heuristics."
            )

    @traceable(run_type="llm")
    async def generate_json(
        self,
        system_prompt: str,
        prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ) -> Dict[str, Any]:
        """Generate a JSON object completion. Failures raise; there is no retry."""
        if self.client is None:
            raise CompletionError("OpenAI client is not initialized")

        start_time = time.time()
        response = await self._make_api_call(system_prompt, prompt, temperature, max_tokens)
        elapsed_time = time.time() - start_time
        logger.info(f"API call completed in {elapsed_time:.2f} seconds")

        content = response.choices[0].message.content
        if not content:
            raise CompletionError("Empty response from language model")
        try:
            result = json.loads(content)
        except json.JSONDecodeError as e:
            raise CompletionError(f"Language model returned invalid JSON: {e}") from e
        if not isinstance(result, dict):
            raise CompletionError("Language model returned a non-object JSON value")
        return result

    @traceable(name="llm_api_call", run_type="llm")
    async def _make_api_call(
        self, system_prompt: str, prompt: str, temperature: float, max_tokens: int
    ) -> Any:
        """Make the actual API call to OpenAI off the event loop."""
        return await asyncio.to_thread(
            self.client.chat.completions.create,
            model=self.settings.llm_model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt},
            ],
            response_format={"type": "json_object"},
            temperature=temperature,
            max_tokens=max_tokens,
        )
