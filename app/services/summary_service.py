"""
AI-generated prose summaries of a user's reports.

The summary is built from the same records the requester is allowed to list,
so the read rule applies unchanged.
"""

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.db_handlers import UserDBHandler
from app.exceptions import BadRequestError, NotFoundError, SummaryGenerationError
from app.models import DailyActivity, WeeklyPlan
from app.prompts import (
    DAILY_ACTIVITY_ROW_TEMPLATE,
    DAILY_ACTIVITY_SUMMARY_PROMPT,
    WEEKLY_PLAN_ROW_TEMPLATE,
    WEEKLY_PLAN_SUMMARY_PROMPT,
)
from app.schemas import ReportKind
from app.services.llm_interface import LLMInterface
from app.services.report_service import list_reports
from app.utils.auth import SessionContext
from app.utils.logger import setup_logger

logger = setup_logger("summary_service")


def _or_none(value: str | None) -> str:
    return value if value else "None"


def format_daily_activity(record: DailyActivity) -> str:
    return DAILY_ACTIVITY_ROW_TEMPLATE.format(
        date=record.date,
        account_name=record.account_name,
        contact_person=_or_none(record.contact_person),
        work_done=_or_none(record.work_done),
        outcome=_or_none(record.outcome),
        support_required=_or_none(record.support_required),
    )


def format_weekly_plan(record: WeeklyPlan) -> str:
    return WEEKLY_PLAN_ROW_TEMPLATE.format(
        date=record.date,
        day=record.day or "unspecified day",
        customer_name=record.customer_name,
        contact_persons=_or_none(record.contact_persons),
        requirement=_or_none(record.requirement),
        proposed_action=_or_none(record.proposed_action),
        planning_required=_or_none(record.planning_required),
        support_required=_or_none(record.support_required),
    )


def build_summary_prompt(
    kind: ReportKind, full_name: str, records: list[DailyActivity] | list[WeeklyPlan]
) -> str:
    if kind == "daily":
        report_text = "\n".join(format_daily_activity(r) for r in records)
        return DAILY_ACTIVITY_SUMMARY_PROMPT.format(
            full_name=full_name, report_text=report_text
        )
    report_text = "\n".join(format_weekly_plan(r) for r in records)
    return WEEKLY_PLAN_SUMMARY_PROMPT.format(
        full_name=full_name, report_text=report_text
    )


async def summarize_reports(
    session: SessionContext,
    kind: ReportKind,
    target_user_id: uuid.UUID,
    llm_client: LLMInterface,
    db: AsyncSession | None = None,
) -> tuple[int, str]:
    """
    Summarize every `kind` report owned by `target_user_id`.

    Returns (record_count, summary). Raises ForbiddenError if the requester
    may not read the reports, NotFoundError for an unknown user,
    BadRequestError when there is nothing to summarize, and
    SummaryGenerationError when the provider fails or returns nothing.
    """
    records = await list_reports(session, kind, target_user_id, db=db)

    target = await UserDBHandler().get(target_user_id, db=db)
    if target is None:
        raise NotFoundError("User not found")
    if not records:
        raise BadRequestError("No data available to generate a summary.")

    prompt = build_summary_prompt(kind, target.full_name, records)
    logger.info(
        f"Requesting {kind} summary for user {target_user_id} "
        f"({len(records)} records) from {llm_client.provider_name}"
    )

    try:
        summary = await llm_client.generate_text(
            prompt,
            temperature=settings.llm_summary_temperature,
            max_tokens=settings.llm_summary_max_tokens,
        )
    except Exception as e:
        logger.error(
            f"Summary generation failed for user {target_user_id}: {type(e).__name__}: {e}",
            exc_info=True,
        )
        raise SummaryGenerationError(
            "Sorry, there was an error generating the summary."
        ) from e

    if not summary or not summary.strip():
        logger.error(f"LLM returned an empty {kind} summary for user {target_user_id}")
        raise SummaryGenerationError("The summary provider returned no text.")

    return len(records), summary.strip()
