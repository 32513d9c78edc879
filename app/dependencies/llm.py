from fastapi import HTTPException, status

from app.config import settings
from app.services.llm_interface import LLMInterface
from app.services.llm_service import get_llm_client as get_shared_llm_instance
from app.utils.logger import setup_logger

logger = setup_logger("dependencies")


def get_llm_client() -> LLMInterface:
    """FastAPI dependency to get the shared LLM client used for summaries."""
    client = get_shared_llm_instance(settings.default_llm_provider)
    if client is None:
        logger.error(
            f"LLM client requested, but provider '{settings.default_llm_provider}' is not configured."
        )
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Summary service is not available: no LLM provider is configured.",
        )
    return client
