"""
Report store operations guarded by the access controller.

Daily activities and weekly plans share one code path; `kind` selects the
collection.
"""

import uuid
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.db_handlers import (
    DailyActivityDBHandler,
    PermissionDBHandler,
    ReportDBHandler,
    UserDBHandler,
    WeeklyPlanDBHandler,
)
from app.exceptions import NotFoundError, UnauthenticatedError
from app.models import DailyActivity, WeeklyPlan
from app.models.report import weekday_name
from app.schemas import ReportKind
from app.services.access_control import (
    authorize_report_mutation,
    authorize_report_read,
    resolve_report_owner,
)
from app.utils.auth import SessionContext
from app.utils.logger import setup_logger

logger = setup_logger("report_service")

ReportRecord = DailyActivity | WeeklyPlan

# Non-nullable columns; a null in an update leaves them unchanged.
_REQUIRED_FIELDS: dict[ReportKind, tuple[str, ...]] = {
    "daily": ("date", "day", "account_name", "manager_remarks"),
    "weekly": ("date", "day", "customer_name", "manager_remarks"),
}


def get_report_handler(kind: ReportKind) -> ReportDBHandler:
    if kind == "daily":
        return DailyActivityDBHandler()
    return WeeklyPlanDBHandler()


async def ensure_can_read(
    session: SessionContext,
    target_user_id: uuid.UUID,
    db: AsyncSession | None = None,
) -> None:
    """Load the requester's edges (if needed) and apply the read rule."""
    permissions = []
    if not session.is_admin and session.user_id != target_user_id:
        permissions = await PermissionDBHandler().list_for_viewer(
            session.user_id, db=db
        )
    authorize_report_read(session, target_user_id, permissions)


async def list_reports(
    session: SessionContext,
    kind: ReportKind,
    target_user_id: uuid.UUID,
    db: AsyncSession | None = None,
) -> list[ReportRecord]:
    await ensure_can_read(session, target_user_id, db=db)
    return await get_report_handler(kind).list_for_owner(target_user_id, db=db)


async def create_report(
    session: SessionContext,
    kind: ReportKind,
    fields: dict[str, Any],
    db: AsyncSession | None = None,
) -> ReportRecord:
    # Tokens outlive account deletion.
    if await UserDBHandler().get(session.user_id, db=db) is None:
        raise UnauthenticatedError("User no longer exists")

    fields = dict(fields)
    fields["owner_id"] = resolve_report_owner(session)
    record = await get_report_handler(kind).create(fields, db=db)
    logger.info(f"User {session.user_id} created {kind} report {record.id}")
    return record


async def _get_mutable_record(
    session: SessionContext,
    kind: ReportKind,
    record_id: uuid.UUID,
    db: AsyncSession | None,
) -> ReportRecord:
    record = await get_report_handler(kind).get(record_id, db=db)
    if record is None:
        raise NotFoundError("Record not found")
    authorize_report_mutation(session, record.owner_id)
    return record


async def update_report(
    session: SessionContext,
    kind: ReportKind,
    record_id: uuid.UUID,
    changes: dict[str, Any],
    db: AsyncSession | None = None,
) -> ReportRecord:
    """
    Apply a partial update to a record owned by the requester (or any record,
    for admins).

    Ownership never changes, manager remarks are only accepted from admins,
    and a new date without an explicit day re-derives the weekday.
    """
    record = await _get_mutable_record(session, kind, record_id, db)

    changes = {k: v for k, v in changes.items() if k not in ("id", "owner_id")}
    if not session.is_admin and changes.pop("manager_remarks", None) is not None:
        logger.info(f"Ignored manager remarks from non-admin {session.user_id}")
    for field in _REQUIRED_FIELDS[kind]:
        if field in changes and changes[field] is None:
            changes.pop(field)
    if "date" in changes and not changes.get("day"):
        changes["day"] = weekday_name(changes["date"])

    updated = await get_report_handler(kind).update(record, changes, db=db)
    logger.info(f"User {session.user_id} updated {kind} report {record_id}")
    return updated


async def delete_report(
    session: SessionContext,
    kind: ReportKind,
    record_id: uuid.UUID,
    db: AsyncSession | None = None,
) -> None:
    await _get_mutable_record(session, kind, record_id, db)
    await get_report_handler(kind).remove(record_id, db=db)
    logger.info(f"User {session.user_id} deleted {kind} report {record_id}")
