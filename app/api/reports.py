"""
Report API Routes - daily activities and weekly plans.

Both collections expose the same endpoints under /api/reports/{daily|weekly};
`_register_report_routes` wires one set per kind with its own schemas.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_app_db
from app.dependencies.auth import get_current_session
from app.dependencies.llm import get_llm_client
from app.schemas import (
    DailyActivityCreate,
    DailyActivityResponse,
    DailyActivityUpdate,
    MessageResponse,
    ReportKind,
    SummaryResponse,
    WeeklyPlanCreate,
    WeeklyPlanResponse,
    WeeklyPlanUpdate,
)
from app.services import report_service
from app.services.llm_interface import LLMInterface
from app.services.summary_service import summarize_reports
from app.utils.auth import SessionContext

router = APIRouter(prefix="/api/reports", tags=["Reports"])


def _register_report_routes(
    kind: ReportKind,
    label: str,
    create_schema: type[BaseModel],
    update_schema: type[BaseModel],
    response_schema: type[BaseModel],
) -> None:
    @router.get(
        f"/{kind}/{{user_id}}",
        response_model=list[response_schema],
        name=f"list_{kind}_reports",
        summary=f"List a user's {label}s",
    )
    async def list_reports(
        user_id: UUID,
        session: SessionContext = Depends(get_current_session),
        db: AsyncSession = Depends(get_app_db),
    ):
        records = await report_service.list_reports(session, kind, user_id, db=db)
        return [response_schema.model_validate(r) for r in records]

    @router.post(
        f"/{kind}",
        response_model=response_schema,
        status_code=status.HTTP_201_CREATED,
        name=f"create_{kind}_report",
        summary=f"Create a {label} owned by the caller",
    )
    async def create_report(
        payload: create_schema,
        session: SessionContext = Depends(get_current_session),
        db: AsyncSession = Depends(get_app_db),
    ):
        record = await report_service.create_report(
            session, kind, payload.model_dump(), db=db
        )
        return response_schema.model_validate(record)

    @router.put(
        f"/{kind}/{{record_id}}",
        response_model=response_schema,
        name=f"update_{kind}_report",
        summary=f"Update a {label}",
    )
    async def update_report(
        record_id: UUID,
        payload: update_schema,
        session: SessionContext = Depends(get_current_session),
        db: AsyncSession = Depends(get_app_db),
    ):
        record = await report_service.update_report(
            session, kind, record_id, payload.model_dump(exclude_unset=True), db=db
        )
        return response_schema.model_validate(record)

    @router.delete(
        f"/{kind}/{{record_id}}",
        response_model=MessageResponse,
        name=f"delete_{kind}_report",
        summary=f"Delete a {label}",
    )
    async def delete_report(
        record_id: UUID,
        session: SessionContext = Depends(get_current_session),
        db: AsyncSession = Depends(get_app_db),
    ):
        await report_service.delete_report(session, kind, record_id, db=db)
        return MessageResponse(message=f"{label.capitalize()} deleted successfully.")

    @router.post(
        f"/{kind}/{{user_id}}/summary",
        response_model=SummaryResponse,
        name=f"summarize_{kind}_reports",
        summary=f"Generate an AI summary of a user's {label}s",
    )
    async def summarize(
        user_id: UUID,
        session: SessionContext = Depends(get_current_session),
        db: AsyncSession = Depends(get_app_db),
        llm_client: LLMInterface = Depends(get_llm_client),
    ):
        record_count, summary = await summarize_reports(
            session, kind, user_id, llm_client, db=db
        )
        return SummaryResponse(
            user_id=user_id, kind=kind, record_count=record_count, summary=summary
        )


_register_report_routes(
    "daily",
    "daily activity",
    DailyActivityCreate,
    DailyActivityUpdate,
    DailyActivityResponse,
)
_register_report_routes(
    "weekly",
    "weekly plan",
    WeeklyPlanCreate,
    WeeklyPlanUpdate,
    WeeklyPlanResponse,
)
