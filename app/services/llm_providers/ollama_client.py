import time
from typing import Any

import httpx

from app.config import settings
from app.services.llm_interface import LLMInterface
from app.utils.logger import setup_logger

logger = setup_logger("ollama_client")


class OllamaClient(LLMInterface):
    """
    LLM Client implementation for a local Ollama API.
    """

    provider_name = "ollama"

    def __init__(
        self,
        base_url: str = "http://localhost:11434",
        default_model: str = settings.default_ollama_model,
        request_timeout: float = settings.llm_timeout_seconds,
    ):
        self.base_url = base_url.rstrip("/")
        self.default_model = default_model
        self.request_timeout = request_timeout

        self._client = httpx.AsyncClient(
            base_url=self.base_url, timeout=self.request_timeout
        )
        logger.info(
            f"Ollama client initialized. Base URL: {self.base_url}, Default Model: {self.default_model}, Timeout: {self.request_timeout}s"
        )

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

        payload = {
            "model": self.default_model,
            "prompt": prompt,
            "stream": False,
            "options": {"temperature": temperature, "num_predict": max_tokens, **kwargs},
        }

        start_time = time.perf_counter()
        try:
            response = await self._client.post("/api/generate", json=payload)
            if response.status_code != 200:
                logger.error(
                    f"Ollama API error ({response.status_code}) for model {self.default_model}: {response.text}"
                )
                response.raise_for_status()
            response_json = response.json()
        except httpx.HTTPError as e:
            duration = time.perf_counter() - start_time
            logger.error(
                f"Ollama request failed for model {self.default_model} after {duration:.4f}s: "
                f"{type(e).__name__}: {e}",
                exc_info=True,
            )
            raise

        result_text = (response_json.get("response") or "").strip()
        duration = time.perf_counter() - start_time
        logger.info(
            f"Ollama generate_text completed for model {self.default_model} in {duration:.4f}s, "
            f"output: {len(result_text)} chars"
        )
        return result_text

    async def close(self):
        await self._client.aclose()
