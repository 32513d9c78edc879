from app.db_handlers.base import BaseDBHandler, check_local_db
from app.db_handlers.permission import PermissionDBHandler
from app.db_handlers.report import (
    DailyActivityDBHandler,
    ReportDBHandler,
    WeeklyPlanDBHandler,
)
from app.db_handlers.user import UserDBHandler

__all__ = [
    "BaseDBHandler",
    "check_local_db",
    "UserDBHandler",
    "PermissionDBHandler",
    "ReportDBHandler",
    "DailyActivityDBHandler",
    "WeeklyPlanDBHandler",
]
