# Authentication API routes for login and session identity

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_app_db
from app.db_handlers import UserDBHandler
from app.dependencies.auth import get_current_session
from app.exceptions import UnauthenticatedError
from app.schemas import LoginRequest, LoginResponse, UserPublic
from app.services.authenticator import authenticate
from app.utils.auth import SessionContext

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post("/login", response_model=LoginResponse)
async def login_user(
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_app_db),
):
    """Authenticate user and return a session token plus the public profile."""
    token, user = await authenticate(credentials.username, credentials.password, db=db)
    return LoginResponse(token=token, user=UserPublic.model_validate(user))


@router.get("/me", response_model=UserPublic)
async def get_current_user_info(
    session: SessionContext = Depends(get_current_session),
    db: AsyncSession = Depends(get_app_db),
    user_db_handler: UserDBHandler = Depends(),
):
    """Retrieve the profile of the user the session token belongs to."""
    user = await user_db_handler.get(session.user_id, db=db)
    if user is None:
        raise UnauthenticatedError("User no longer exists")
    return UserPublic.model_validate(user)
