"""
User Management API Routes - Account administration and report-subject lookup.

Registration, listing and deletion are admin-only. Any signed-in user may ask
which users' reports they can view.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_app_db
from app.db_handlers import PermissionDBHandler, UserDBHandler
from app.dependencies.auth import get_admin_session, get_current_session
from app.schemas import MessageResponse, UserPublic, UserRegister
from app.services.permission_graph import viewable_user_ids
from app.services.user_service import delete_user, register_user
from app.utils.auth import SessionContext

router = APIRouter(prefix="/api/users", tags=["User Management"])


@router.post(
    "/register", response_model=UserPublic, status_code=status.HTTP_201_CREATED
)
async def register(
    user_data: UserRegister,
    _admin: SessionContext = Depends(get_admin_session),
    db: AsyncSession = Depends(get_app_db),
):
    """Create a new account. Passwords are bcrypt-hashed before storage."""
    user = await register_user(user_data, db=db)
    return UserPublic.model_validate(user)


@router.get("", response_model=list[UserPublic])
async def list_all_users(
    _admin: SessionContext = Depends(get_admin_session),
    db: AsyncSession = Depends(get_app_db),
    user_db_handler: UserDBHandler = Depends(),
):
    """List every account, without password hashes."""
    users = await user_db_handler.list_users(db=db)
    return [UserPublic.model_validate(u) for u in users]


@router.get("/viewable", response_model=list[UserPublic])
async def list_viewable_users(
    session: SessionContext = Depends(get_current_session),
    db: AsyncSession = Depends(get_app_db),
    user_db_handler: UserDBHandler = Depends(),
    permission_db_handler: PermissionDBHandler = Depends(),
):
    """
    Users whose reports the caller may read.

    Admins get every `User`-role account; everyone else gets themselves plus
    the users they have been granted access to.
    """
    users = await user_db_handler.list_users(db=db)
    permissions = []
    if not session.is_admin:
        permissions = await permission_db_handler.list_for_viewer(
            session.user_id, db=db
        )
    visible = viewable_user_ids(session, users, permissions)
    return [UserPublic.model_validate(u) for u in users if u.id in visible]


@router.delete("/{user_id}", response_model=MessageResponse)
async def remove_user(
    user_id: UUID,
    _admin: SessionContext = Depends(get_admin_session),
    db: AsyncSession = Depends(get_app_db),
):
    """Delete an account together with its permissions and reports."""
    await delete_user(user_id, db=db)
    return MessageResponse(
        message="User and all associated data deleted successfully."
    )
