"""
Authentication utilities with JWT tokens and bcrypt password hashing.

- bcrypt with per-hash salt for stored passwords
- HS256-signed session tokens carrying {sub, role, iat, exp}
- Token validation is pure: signature, expiry and claim shape, no I/O
"""

import base64
import hashlib
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import bcrypt
from jose import JWTError, jwt

from app.config import settings
from app.exceptions import UnauthenticatedError
from app.models.user import UserRole
from app.utils.logger import setup_logger

logger = setup_logger("auth_utils")


@dataclass(frozen=True)
class SessionContext:
    """Identity extracted from a validated session token."""

    user_id: uuid.UUID
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


def _pre_hash_password(password: str) -> bytes:
    # bcrypt only reads 72 bytes; a base64 SHA-256 digest is 44 bytes and NUL-free.
    digest = hashlib.sha256(password.encode("utf-8")).digest()
    return base64.b64encode(digest)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain text password against a hashed password."""
    try:
        return bcrypt.checkpw(
            _pre_hash_password(plain_password), hashed_password.encode("utf-8")
        )
    except ValueError:
        # Stored value is not a bcrypt hash.
        logger.warning("Stored password hash has an unrecognized format")
        return False


def get_password_hash(password: str) -> str:
    """Hash a plain text password using bcrypt."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    hashed_password = bcrypt.hashpw(_pre_hash_password(password), salt)
    return hashed_password.decode("utf-8")


def create_access_token(
    user_id: uuid.UUID, role: UserRole, expires_delta: timedelta | None = None
) -> str:
    """Create a signed session token for the given identity."""
    issued_at = datetime.now(UTC)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)

    to_encode = {
        "sub": str(user_id),
        "role": role.value,
        "iat": issued_at,
        "exp": issued_at + expires_delta,
    }
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict | None:
    """Decode and verify a JWT access token."""
    try:
        return jwt.decode(
            token, settings.secret_key, algorithms=[settings.jwt_algorithm]
        )
    except JWTError as e:
        logger.debug(f"Rejected session token: {e}")
        return None


def validate_token(token: str | None) -> SessionContext:
    """
    Validate a bearer token and return the session it encodes.

    Raises UnauthenticatedError when the token is missing, malformed, has an
    invalid signature, is expired, or carries claims of the wrong shape.
    """
    if not token:
        raise UnauthenticatedError("Not authenticated")

    payload = decode_access_token(token)
    if payload is None:
        raise UnauthenticatedError("Token is not valid")

    try:
        user_id = uuid.UUID(str(payload["sub"]))
        role = UserRole(payload["role"])
    except (KeyError, ValueError) as e:
        logger.warning(f"Session token carries invalid claims: {e}")
        raise UnauthenticatedError("Token is not valid") from e

    return SessionContext(user_id=user_id, role=role)
