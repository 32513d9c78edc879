"""
Report models: daily activity entries and weekly plan entries.

Both collections are keyed independently and every record is owned by
exactly one user. Field values are free text as entered by sales staff; the
manager remarks column is defaulted at construction time and is not part of
the owner's create payload.
"""

from datetime import date as date_type

from sqlalchemy import Column, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import declared_attr

from app.models.base import Base, TimestampMixin, UUIDMixin, fk_target, table_args

DAILY_DEFAULT_REMARKS = "No remarks"
WEEKLY_DEFAULT_REMARKS = "Awaiting update"


def weekday_name(date_text: str | None) -> str:
    """Return the English weekday for an ISO date string, or "" if unparseable."""
    if not date_text:
        return ""
    try:
        return date_type.fromisoformat(date_text.strip()[:10]).strftime("%A")
    except ValueError:
        return ""


class ReportMixin(UUIDMixin, TimestampMixin):
    """Columns and construction rules shared by both report collections."""

    default_remarks: str = ""

    @declared_attr
    def owner_id(cls):
        return Column(
            Uuid(as_uuid=True),
            ForeignKey(fk_target("users.id"), ondelete="CASCADE"),
            nullable=False,
            comment="User who owns this record",
        )

    date = Column(String(32), nullable=False, comment="Entry date as entered")
    day = Column(String(16), nullable=False, default="", comment="Day of week")
    support_required = Column(Text, nullable=True)
    manager_remarks = Column(Text, nullable=False)

    def __init__(self, **kwargs):
        kwargs.pop("id", None)
        kwargs["manager_remarks"] = self.default_remarks
        if not kwargs.get("day"):
            kwargs["day"] = weekday_name(kwargs.get("date"))
        super().__init__(**kwargs)


class DailyActivity(ReportMixin, Base):
    """A sales call or activity logged for one day."""

    __tablename__ = "daily_activities"
    __table_args__ = table_args(Index("ix_daily_activities_owner_id", "owner_id"))

    default_remarks = DAILY_DEFAULT_REMARKS

    account_name = Column(String(200), nullable=False)
    contact_person = Column(String(200), nullable=True)
    contact_number = Column(String(50), nullable=True)
    work_done = Column(Text, nullable=True)
    outcome = Column(Text, nullable=True)

    def __repr__(self):
        return f"<DailyActivity(id={self.id}, owner_id={self.owner_id}, date='{self.date}')>"


class WeeklyPlan(ReportMixin, Base):
    """A planned customer engagement for the coming week."""

    __tablename__ = "weekly_plans"
    __table_args__ = table_args(Index("ix_weekly_plans_owner_id", "owner_id"))

    default_remarks = WEEKLY_DEFAULT_REMARKS

    customer_name = Column(String(200), nullable=False)
    contact_persons = Column(Text, nullable=True)
    requirement = Column(Text, nullable=True)
    proposed_action = Column(Text, nullable=True)
    planning_required = Column(Text, nullable=True)

    def __repr__(self):
        return f"<WeeklyPlan(id={self.id}, owner_id={self.owner_id}, date='{self.date}')>"
