import uuid
from datetime import datetime
from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models import UserRole


ReportKind = Literal["daily", "weekly"]


class CamelModel(BaseModel):
    # Wire format is camelCase; snake_case is accepted on input as well.
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# --- Authentication ---


class LoginRequest(CamelModel):
    username: str = Field(..., description="Username for login")
    password: str = Field(
        ...,
        validation_alias=AliasChoices("password", "secret"),
        description="Password for login",
    )


class UserPublic(CamelModel):
    """A user as returned to clients; the password hash is never included."""

    id: uuid.UUID = Field(..., description="User unique identifier")
    full_name: str
    username: str
    role: UserRole
    created_at: datetime | None = None


class LoginResponse(CamelModel):
    token: str = Field(..., description="Signed session token")
    token_type: str = Field(default="bearer", description="Token type")
    user: UserPublic


# --- User management ---


class UserRegister(CamelModel):
    full_name: str = Field(..., min_length=1, max_length=100)
    username: str = Field(
        ..., min_length=1, max_length=50, description="Username for the new account"
    )
    password: str = Field(
        ...,
        min_length=1,
        max_length=128,
        validation_alias=AliasChoices("password", "secret"),
        description="Password for the new account",
    )
    role: UserRole = Field(default=UserRole.USER, description="User or Admin")


class MessageResponse(BaseModel):
    message: str = Field(..., description="Response message")


# --- Permissions ---


class PermissionCreate(CamelModel):
    viewer_id: uuid.UUID = Field(..., description="User granted read access")
    viewee_id: uuid.UUID = Field(..., description="User whose reports become readable")


class PermissionResponse(CamelModel):
    id: uuid.UUID
    viewer_id: uuid.UUID
    viewee_id: uuid.UUID
    created_at: datetime | None = None


# --- Reports ---


class ReportResponseBase(CamelModel):
    id: uuid.UUID
    owner_id: uuid.UUID
    date: str
    day: str
    support_required: str | None = None
    manager_remarks: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class DailyActivityCreate(CamelModel):
    """
    Fields an owner submits for a daily activity.

    Owner and manager remarks are not accepted here; unknown keys such as
    `ownerId` are ignored.
    """

    date: str = Field(..., min_length=1, description="Entry date, ideally ISO YYYY-MM-DD")
    day: str | None = Field(None, description="Weekday; derived from date when omitted")
    account_name: str = Field(..., min_length=1)
    contact_person: str | None = None
    contact_number: str | None = None
    work_done: str | None = None
    outcome: str | None = None
    support_required: str | None = None


class DailyActivityUpdate(CamelModel):
    date: str | None = Field(None, min_length=1)
    day: str | None = None
    account_name: str | None = Field(None, min_length=1)
    contact_person: str | None = None
    contact_number: str | None = None
    work_done: str | None = None
    outcome: str | None = None
    support_required: str | None = None
    manager_remarks: str | None = Field(None, description="Honored for admins only")


class DailyActivityResponse(ReportResponseBase):
    account_name: str
    contact_person: str | None = None
    contact_number: str | None = None
    work_done: str | None = None
    outcome: str | None = None


class WeeklyPlanCreate(CamelModel):
    date: str = Field(..., min_length=1, description="Entry date, ideally ISO YYYY-MM-DD")
    day: str | None = Field(None, description="Weekday; derived from date when omitted")
    customer_name: str = Field(..., min_length=1)
    contact_persons: str | None = None
    requirement: str | None = None
    proposed_action: str | None = None
    planning_required: str | None = None
    support_required: str | None = None


class WeeklyPlanUpdate(CamelModel):
    date: str | None = Field(None, min_length=1)
    day: str | None = None
    customer_name: str | None = Field(None, min_length=1)
    contact_persons: str | None = None
    requirement: str | None = None
    proposed_action: str | None = None
    planning_required: str | None = None
    support_required: str | None = None
    manager_remarks: str | None = Field(None, description="Honored for admins only")


class WeeklyPlanResponse(ReportResponseBase):
    customer_name: str
    contact_persons: str | None = None
    requirement: str | None = None
    proposed_action: str | None = None
    planning_required: str | None = None


# --- Summaries ---


class SummaryResponse(CamelModel):
    user_id: uuid.UUID
    kind: ReportKind
    record_count: int
    summary: str
