from app.dependencies.auth import get_admin_session, get_current_session
from app.dependencies.llm import get_llm_client

__all__ = [
    "get_current_session",
    "get_admin_session",
    "get_llm_client",
]
