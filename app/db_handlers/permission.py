from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db_handlers.base import BaseDBHandler, check_local_db
from app.models import Permission
from app.utils.logger import setup_logger

logger = setup_logger("db_handlers.permission")


class PermissionDBHandler(BaseDBHandler[Permission]):
    def __init__(self):
        super().__init__(Permission)

    @check_local_db
    async def list_permissions(self, *, db: AsyncSession = None) -> list[Permission]:
        stmt = select(Permission).order_by(Permission.created_at)
        result = await db.execute(stmt)
        return list(result.scalars().all())

    @check_local_db
    async def list_for_viewer(
        self, viewer_id: uuid.UUID, *, db: AsyncSession = None
    ) -> list[Permission]:
        """Edges granting `viewer_id` access to other users' reports."""
        return await self.get_multi_by_attributes(db=db, viewer_id=viewer_id)

    @check_local_db
    async def get_edge(
        self, viewer_id: uuid.UUID, viewee_id: uuid.UUID, *, db: AsyncSession = None
    ) -> Permission | None:
        return await self.get_by_attributes(
            db=db, viewer_id=viewer_id, viewee_id=viewee_id
        )
