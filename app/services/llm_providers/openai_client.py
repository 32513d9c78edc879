import time
from typing import Any

from openai import AsyncOpenAI, OpenAIError

from app.config import settings
from app.services.llm_interface import LLMInterface
from app.utils.logger import setup_logger

logger = setup_logger("openai_client")


class OpenAIClient(LLMInterface):
    """
    LLM Client implementation for OpenAI API (or any compatible endpoint).
    """

    provider_name = "openai"

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        default_model: str = settings.default_openai_model,
    ):
        if not api_key:
            logger.error("OpenAI API key is required but not provided")
            raise ValueError("OpenAI API key is required.")

        self.api_key = api_key
        self.base_url = base_url
        self.default_model = default_model

        client_args = {"api_key": self.api_key}
        if self.base_url:
            client_args["base_url"] = self.base_url

        try:
            self._client = AsyncOpenAI(**client_args)
            logger.info(
                f"OpenAI client initialized successfully. Base URL: {self.base_url or 'Default'}, Default Model: {self.default_model}"
            )
        except Exception as e:
            logger.error(f"Failed to initialize OpenAI client: {e}", exc_info=True)
            raise

    async def generate_text(
        self,
        prompt: str,
        temperature: float = 0.4,
        max_tokens: int | None = None,
        **kwargs: Any,
    ) -> str:
        if not prompt or not prompt.strip():
            logger.warning("Empty or whitespace-only prompt provided to generate_text")
            return ""

        if max_tokens is None:
            max_tokens = settings.llm_summary_max_tokens

        effective_model = self.default_model
        start_time = time.perf_counter()
        try:
            response = await self._client.chat.completions.create(
                model=effective_model,
                messages=[{"role": "user", "content": prompt}],
                temperature=temperature,
                max_tokens=max_tokens,
                **kwargs,
            )
        except OpenAIError as e:
            duration = time.perf_counter() - start_time
            logger.error(
                f"OpenAI API error during text generation for model {effective_model} after {duration:.4f}s: "
                f"{type(e).__name__}: {e}",
                exc_info=True,
            )
            raise

        if not response.choices:
            logger.error("No choices returned in OpenAI chat completion response")
            result_text = ""
        else:
            result_text = (response.choices[0].message.content or "").strip()

        duration = time.perf_counter() - start_time
        logger.info(
            f"OpenAI generate_text completed for model {effective_model} in {duration:.4f}s, "
            f"output: {len(result_text)} chars"
        )
        if duration > 30:
            logger.warning(f"Slow API response: {duration:.4f}s for generate_text")

        return result_text

    async def close(self):
        await self._client.close()
