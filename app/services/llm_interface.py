"""
Abstract interface for the text-generation providers behind report summaries.

A provider accepts a prompt string and returns prose, or raises. Callers
translate provider exceptions into `SummaryGenerationError`.
"""

from abc import ABC, abstractmethod
from typing import Any


class LLMInterface(ABC):
    """
    Abstract Base Class for Large Language Model services.
    """

    provider_name: str = "unknown"

    @abstractmethod
    async def generate_text(
        self,
        prompt: str,
        temperature: float = 0.4,
        max_tokens: int | None = None,
        **kwargs: Any,
    ) -> str:
        """Generates text based on a given prompt."""

    async def close(self):
        """
        Optional method to close any underlying connections or clients.
        Providers that don't need explicit closing can keep this default.
        """
        return
