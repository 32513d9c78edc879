"""
Database models for the sales activity reporting service.

Architecture: User → (DailyActivity, WeeklyPlan); User → Permission → User.
"""

from app.models.permission import Permission
from app.models.report import (
    DAILY_DEFAULT_REMARKS,
    WEEKLY_DEFAULT_REMARKS,
    DailyActivity,
    WeeklyPlan,
)
from app.models.user import User, UserRole

__all__ = [
    # Accounts and access
    "User",
    "UserRole",
    "Permission",
    # Report collections
    "DailyActivity",
    "WeeklyPlan",
    "DAILY_DEFAULT_REMARKS",
    "WEEKLY_DEFAULT_REMARKS",
]
