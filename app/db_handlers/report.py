from __future__ import annotations

import uuid
from typing import TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db_handlers.base import BaseDBHandler, check_local_db
from app.models import DailyActivity, WeeklyPlan
from app.utils.logger import setup_logger

logger = setup_logger("db_handlers.report")

ReportType = TypeVar("ReportType", DailyActivity, WeeklyPlan)


class ReportDBHandler(BaseDBHandler[ReportType]):
    """Handler shared by both report collections; the model picks the table."""

    @check_local_db
    async def list_for_owner(
        self, owner_id: uuid.UUID, *, db: AsyncSession = None
    ) -> list[ReportType]:
        """All records owned by `owner_id`, oldest first."""
        stmt = (
            select(self.model)
            .where(self.model.owner_id == owner_id)
            .order_by(self.model.created_at, self.model.date)
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())


class DailyActivityDBHandler(ReportDBHandler[DailyActivity]):
    def __init__(self):
        super().__init__(DailyActivity)


class WeeklyPlanDBHandler(ReportDBHandler[WeeklyPlan]):
    def __init__(self):
        super().__init__(WeeklyPlan)
