"""
LLM Service Manager - Centralized management of the summary providers.

Clients for every configured provider are created once at startup and cached;
`get_llm_client` hands out the cached instance or initializes it on demand.
"""

from typing import Any

from app.config import settings
from app.services.llm_interface import LLMInterface
from app.services.llm_providers.gemini_client import GeminiClient
from app.services.llm_providers.ollama_client import OllamaClient
from app.services.llm_providers.openai_client import OpenAIClient
from app.utils.logger import setup_logger

logger = setup_logger("llm_service_manager")

# Client instances cache
_initialized_clients: dict[str, LLMInterface] = {}

# Mapping of provider names to their constructor classes
_client_constructors: dict[str, type[LLMInterface]] = {
    "openai": OpenAIClient,
    "gemini": GeminiClient,
    "ollama": OllamaClient,
}

# Setting that must be present before a provider can be constructed
_required_setting: dict[str, str] = {
    "openai": "api_key",
    "gemini": "api_key",
    "ollama": "base_url",
}


def _get_client_config(provider_name: str) -> dict[str, Any]:
    if provider_name == "openai":
        return {
            "api_key": settings.openai_api_key,
            "base_url": settings.openai_base_url,
            "default_model": settings.default_openai_model,
        }
    if provider_name == "gemini":
        return {
            "api_key": settings.gemini_api_key,
            "default_model": settings.default_gemini_model,
        }
    if provider_name == "ollama":
        return {
            "base_url": settings.ollama_base_url,
            "default_model": settings.default_ollama_model,
            "request_timeout": settings.llm_timeout_seconds,
        }
    logger.warning(f"Unknown provider name: {provider_name}")
    return {}


def _construct_client(provider_name: str) -> LLMInterface | None:
    config = _get_client_config(provider_name)
    required = _required_setting[provider_name]
    if not config.get(required):
        logger.warning(
            f"{provider_name.capitalize()} {required} not configured. Skipping client initialization."
        )
        return None

    constructor_args = {k: v for k, v in config.items() if v is not None}
    logger.debug(
        f"Constructor args for {provider_name}: {list(constructor_args.keys())}"
    )
    return _client_constructors[provider_name](**constructor_args)


def initialize_all_llm_clients():
    """Initialize all LLM clients based on available configuration."""
    logger.info("Initializing LLM clients based on available configuration...")

    initialization_results = {"successful": [], "failed": [], "skipped": []}

    for provider_name in _client_constructors:
        if provider_name in _initialized_clients:
            initialization_results["skipped"].append(provider_name)
            continue

        try:
            client = _construct_client(provider_name)
        except ValueError as ve:
            logger.error(
                f"Configuration error initializing {provider_name} client: {ve}"
            )
            initialization_results["failed"].append(provider_name)
            continue
        except Exception as e:
            # Summaries are optional; a broken provider must not block startup.
            logger.error(
                f"Failed to initialize {provider_name} client: {e}", exc_info=True
            )
            initialization_results["failed"].append(provider_name)
            continue

        if client is None:
            initialization_results["skipped"].append(provider_name)
            continue

        _initialized_clients[provider_name] = client
        initialization_results["successful"].append(provider_name)

    logger.info(
        f"LLM client initialization complete. "
        f"Successful: {initialization_results['successful']}, "
        f"Failed: {initialization_results['failed']}, "
        f"Skipped: {initialization_results['skipped']}"
    )


async def close_all_llm_clients():
    """Close all initialized LLM clients."""
    if not _initialized_clients:
        logger.info("No LLM clients to close.")
        return

    for provider_name, client_instance in _initialized_clients.items():
        try:
            await client_instance.close()
            logger.info(f"{provider_name.capitalize()} client closed successfully.")
        except Exception as e:
            logger.error(f"Error closing {provider_name} client: {e}", exc_info=True)

    _initialized_clients.clear()
    logger.info("All LLM clients cleared from cache.")


def get_llm_client(provider_name: str | None = None) -> LLMInterface | None:
    """
    Get an initialized LLM client for the specified provider.

    Defaults to DEFAULT_LLM_PROVIDER. Returns None if the provider is unknown
    or not configured.
    """
    provider_name = (provider_name or settings.default_llm_provider).lower()
    client = _initialized_clients.get(provider_name)
    if client:
        return client

    if provider_name not in _client_constructors:
        logger.error(
            f"Unknown provider name: {provider_name}. Available providers: {list(_client_constructors.keys())}"
        )
        return None

    logger.info(
        f"{provider_name.capitalize()} client not pre-initialized. Attempting on-demand initialization."
    )
    try:
        instance = _construct_client(provider_name)
    except ValueError as ve:
        logger.error(
            f"Configuration error initializing {provider_name} client on demand: {ve}"
        )
        return None

    if instance is not None:
        _initialized_clients[provider_name] = instance
    return instance
