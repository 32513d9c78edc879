from __future__ import annotations

import uuid

from sqlalchemy import Delete, delete, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db_handlers.base import BaseDBHandler, check_local_db
from app.models import DailyActivity, Permission, User, UserRole, WeeklyPlan
from app.utils.logger import setup_logger

logger = setup_logger("db_handlers.user")


class UserDBHandler(BaseDBHandler[User]):
    def __init__(self):
        super().__init__(User)

    @check_local_db
    async def get_user_by_username(
        self, username: str, *, db: AsyncSession = None
    ) -> User | None:
        """Get a user by username."""
        try:
            stmt = select(User).filter(User.username == username)
            result = await db.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving user by username '{username}': {e}")
            raise

    @check_local_db
    async def list_users(
        self, role: UserRole | None = None, *, db: AsyncSession = None
    ) -> list[User]:
        """List users in creation order, optionally restricted to one role."""
        stmt = select(User).order_by(User.created_at, User.username)
        if role is not None:
            stmt = stmt.where(User.role == role)
        result = await db.execute(stmt)
        return list(result.scalars().all())

    @check_local_db
    async def count_admins(self, *, db: AsyncSession = None) -> int:
        stmt = select(func.count()).select_from(User).where(User.role == UserRole.ADMIN)
        result = await db.execute(stmt)
        return result.scalar_one()

    @check_local_db
    async def delete_user_cascade(
        self, user_id: uuid.UUID, *, db: AsyncSession = None
    ) -> dict[str, int] | None:
        """
        Delete a user together with everything that references it.

        Runs as one ordered batch: permission edges touching the user, the
        user's daily activities, the user's weekly plans, then the user row.
        The batch is committed once; any failure rolls the whole batch back.

        Returns per-table deletion counts, or None if the user does not exist.
        """
        user = await self.get(user_id, db=db)
        if user is None:
            return None

        try:
            counts = await _bulk_delete(
                db,
                permissions=delete(Permission).where(
                    or_(Permission.viewer_id == user_id, Permission.viewee_id == user_id)
                ),
                daily_activities=delete(DailyActivity).where(
                    DailyActivity.owner_id == user_id
                ),
                weekly_plans=delete(WeeklyPlan).where(WeeklyPlan.owner_id == user_id),
            )
            await db.delete(user)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(
                f"Cascade delete of user {user_id} rolled back: {e}", exc_info=True
            )
            raise

        counts["users"] = 1
        logger.info(f"Cascade delete of user {user_id} committed: {counts}")
        return counts

    @check_local_db
    async def delete_orphans(self, *, db: AsyncSession = None) -> dict[str, int]:
        """Delete permission edges and reports whose users no longer exist."""
        existing_ids = select(User.id)
        try:
            counts = await _bulk_delete(
                db,
                permissions=delete(Permission).where(
                    or_(
                        Permission.viewer_id.not_in(existing_ids),
                        Permission.viewee_id.not_in(existing_ids),
                    )
                ),
                daily_activities=delete(DailyActivity).where(
                    DailyActivity.owner_id.not_in(existing_ids)
                ),
                weekly_plans=delete(WeeklyPlan).where(
                    WeeklyPlan.owner_id.not_in(existing_ids)
                ),
            )
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Orphan reconciliation rolled back: {e}", exc_info=True)
            raise

        return counts


async def _bulk_delete(db: AsyncSession, **statements: Delete) -> dict[str, int]:
    # Executed in keyword order; the session holds no instances of these rows.
    counts = {}
    for name, stmt in statements.items():
        result = await db.execute(stmt.execution_options(synchronize_session=False))
        counts[name] = result.rowcount
    return counts
