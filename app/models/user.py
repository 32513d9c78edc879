"""
User model for authentication and report ownership.

Users are either regular sales staff (`User`), who log daily activities and
weekly plans, or administrators (`Admin`), who manage accounts and grant
cross-user viewing permissions.

Architecture:
    User → DailyActivity / WeeklyPlan
    User (viewer) → Permission → User (viewee)
"""

import enum

from sqlalchemy import Column, Enum, Index, String

from app.models.base import Base, TimestampMixin, UUIDMixin, table_args


class UserRole(str, enum.Enum):
    """Closed set of roles; authorization code compares against these members."""

    USER = "User"
    ADMIN = "Admin"


class User(Base, UUIDMixin, TimestampMixin):
    """
    Registered account with a bcrypt-hashed password and a role.

    Created and deleted by admins only. Deleting a user cascades to its
    permission edges and report records (see `UserDBHandler.delete_user_cascade`).
    """

    __tablename__ = "users"
    __table_args__ = table_args(
        Index("ix_users_username", "username", unique=True),
        Index("ix_users_role", "role"),
    )

    full_name = Column(
        String(100),
        nullable=False,
        comment="Display name shown in report headers and selectors",
    )

    username = Column(
        String(50),
        nullable=False,
        comment="Unique, case-sensitive login handle",
    )

    hashed_password = Column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password; never serialized",
    )

    role = Column(
        Enum(
            UserRole,
            name="user_role",
            native_enum=False,
            values_callable=lambda roles: [r.value for r in roles],
            validate_strings=True,
        ),
        nullable=False,
        default=UserRole.USER,
        comment="User or Admin",
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}', role='{self.role.value}')>"
