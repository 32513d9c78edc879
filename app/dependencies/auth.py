"""
Authentication dependencies for FastAPI route protection.
"""


from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.services.access_control import require_admin
from app.utils.auth import SessionContext, validate_token

# Missing credentials are reported by validate_token as 401, not by FastAPI as 403.
security = HTTPBearer(auto_error=False)


async def get_current_session(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> SessionContext:
    """
    Dependency to get the session context from the bearer token.

    Identity comes only from the verified token claims; no database lookup.
    """
    token = credentials.credentials if credentials else None
    return validate_token(token)


async def get_admin_session(
    session: SessionContext = Depends(get_current_session),
) -> SessionContext:
    """Dependency for admin-only routes."""
    require_admin(session)
    return session
