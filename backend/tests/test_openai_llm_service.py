"""Test the OpenAI completion service."""

import json
from unittest.mock import MagicMock, patch

import pytest

from table_beautifier.core.config import Settings
from table_beautifier.services.llm.openai_llm_service import (
    CompletionError,
    OpenAICompletionService,
)


@pytest.fixture
def settings():
    """Create a settings object for testing."""
    return Settings(_env_file=None, openai_api_key="test-key", llm_model="gpt-4o")


def _response(content):
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    return response


@pytest.mark.asyncio
@patch("table_beautifier.services.llm.openai_llm_service.OpenAI")
async def test_generate_json(mock_openai, settings):
    """JSON object responses are decoded and returned."""
    client = mock_openai.return_value
    client.chat.completions.create.return_value = _response(json.dumps({"purpose": "x"}))
    service = OpenAICompletionService(settings)

    result = await service.generate_json("system", "prompt", temperature=0.3, max_tokens=800)

    assert result == {"purpose": "x"}
    kwargs = client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-4o"
    assert kwargs["response_format"] == {"type": "json_object"}
    assert kwargs["temperature"] == 0.3
    assert kwargs["max_tokens"] == 800
    assert kwargs["messages"][0] == {"role": "system", "content": "system"}
    assert kwargs["messages"][1] == {"role": "user", "content": "prompt"}


@pytest.mark.asyncio
@pytest.mark.parametrize("content", [None, "", "not json", "[1, 2]"])
@patch("table_beautifier.services.llm.openai_llm_service.OpenAI")
async def test_generate_json_unusable_content(mock_openai, content, settings):
    """Empty, malformed or non-object responses raise CompletionError."""
    mock_openai.return_value.chat.completions.create.return_value = _response(content)
    service = OpenAICompletionService(settings)

    with pytest.raises(CompletionError):
        await service.generate_json("system", "prompt")


@pytest.mark.asyncio
async def test_generate_json_without_key():
    """Without an API key no client exists and calls fail fast."""
    service = OpenAICompletionService(Settings(_env_file=None, openai_api_key=None))

    with pytest.raises(CompletionError, match="not initialized"):
        await service.generate_json("system", "prompt")
