"""
Credential verification, token issuance and initial admin provisioning.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.db_handlers import UserDBHandler
from app.exceptions import InvalidCredentialsError
from app.models import User, UserRole
from app.utils.auth import create_access_token, get_password_hash, verify_password
from app.utils.logger import setup_logger

logger = setup_logger("authenticator")

# Verified against when the username is unknown so both failure paths run bcrypt.
_DUMMY_PASSWORD_HASH = get_password_hash("not-a-real-password")


async def authenticate(
    username: str, password: str, db: AsyncSession | None = None
) -> tuple[str, User]:
    """
    Verify a username/password pair and issue a session token.

    Unknown usernames and wrong passwords raise the same
    InvalidCredentialsError so callers cannot tell them apart.
    """
    user_handler = UserDBHandler()
    user = await user_handler.get_user_by_username(username, db=db)

    if user is None:
        verify_password(password, _DUMMY_PASSWORD_HASH)
        logger.warning("Login failed: unknown username")
        raise InvalidCredentialsError()

    if not verify_password(password, user.hashed_password):
        logger.warning(f"Login failed: wrong password for user {user.id}")
        raise InvalidCredentialsError()

    token = create_access_token(user.id, user.role)
    logger.info(f"User {user.id} logged in with role {user.role.value}")
    return token, user


async def ensure_initial_admin(db: AsyncSession | None = None) -> User | None:
    """
    Provision the configured admin account if no admin exists.

    Returns the created user, or None when an admin is already present.
    """
    user_handler = UserDBHandler()
    if await user_handler.count_admins(db=db) > 0:
        logger.debug("Admin account present; skipping provisioning")
        return None

    existing = await user_handler.get_user_by_username(
        settings.initial_admin_username, db=db
    )
    if existing is not None:
        # Never escalate an existing account; an operator has to resolve this.
        logger.error(
            f"No admin exists and username '{existing.username}' is taken by a "
            "non-admin user; set INITIAL_ADMIN_USERNAME to a free username."
        )
        return None

    admin = await user_handler.create(
        {
            "full_name": settings.initial_admin_full_name,
            "username": settings.initial_admin_username,
            "hashed_password": get_password_hash(settings.initial_admin_password),
            "role": UserRole.ADMIN,
        },
        db=db,
    )
    logger.info(f"Initial admin user '{admin.username}' created")
    return admin
