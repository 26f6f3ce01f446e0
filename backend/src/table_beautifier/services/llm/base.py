"""Abstract base class for language model completion services."""

from abc import ABC, abstractmethod
from typing import Any, Dict


class CompletionService(ABC):
    """Abstract base class for language model completion services."""

    @abstractmethod
    async def generate_json(
        self,
        system_prompt: str,
        prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ) -> Dict[str, Any]:
        """Generate a JSON object completion from the language model."""
        pass
