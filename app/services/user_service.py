"""
User account management: registration, cascading deletion and orphan cleanup.
"""

import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db_handlers import UserDBHandler
from app.exceptions import BadRequestError, ConflictError, NotFoundError
from app.models import User, UserRole
from app.schemas import UserRegister
from app.utils.auth import get_password_hash
from app.utils.logger import setup_logger

logger = setup_logger("user_service")

DUPLICATE_USERNAME_MESSAGE = "Username already exists."


async def register_user(payload: UserRegister, db: AsyncSession | None = None) -> User:
    """Create a user; the username must not already be taken."""
    user_handler = UserDBHandler()

    if await user_handler.get_user_by_username(payload.username, db=db):
        logger.warning(f"Registration rejected: username '{payload.username}' taken")
        raise ConflictError(DUPLICATE_USERNAME_MESSAGE)

    try:
        user = await user_handler.create(
            {
                "full_name": payload.full_name,
                "username": payload.username,
                "hashed_password": get_password_hash(payload.password),
                "role": payload.role,
            },
            db=db,
        )
    except IntegrityError as e:
        # Lost a race with a concurrent registration of the same username.
        raise ConflictError(DUPLICATE_USERNAME_MESSAGE) from e

    logger.info(f"Registered user {user.id} ('{user.username}') as {user.role.value}")
    return user


async def delete_user(user_id: uuid.UUID, db: AsyncSession | None = None) -> dict[str, int]:
    """
    Delete a user with its permission edges and reports.

    The last remaining admin cannot be deleted.
    """
    user_handler = UserDBHandler()
    user = await user_handler.get(user_id, db=db)
    if user is None:
        raise NotFoundError("User not found")

    if user.role == UserRole.ADMIN and await user_handler.count_admins(db=db) <= 1:
        logger.warning(f"Refusing to delete the last admin {user_id}")
        raise BadRequestError("Cannot delete the last remaining admin")

    counts = await user_handler.delete_user_cascade(user_id, db=db)
    if counts is None:
        raise NotFoundError("User not found")
    return counts


async def reconcile_orphans(db: AsyncSession | None = None) -> dict[str, int]:
    """Remove permission edges and reports that reference missing users."""
    removed = await UserDBHandler().delete_orphans(db=db)
    if any(removed.values()):
        logger.warning(f"Reconciliation removed orphaned rows: {removed}")
    else:
        logger.info("Reconciliation found no orphaned rows")
    return removed
