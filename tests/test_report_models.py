import uuid

import pytest

from app.models import DailyActivity, WeeklyPlan
from app.models.report import weekday_name


@pytest.mark.parametrize(
    "date_text, expected",
    [
        ("2024-01-05", "Friday"),
        ("2024-02-29", "Thursday"),
        ("2024-01-08T09:30:00", "Monday"),
        ("05/01/2024", ""),
        ("", ""),
        (None, ""),
    ],
)
def test_weekday_name(date_text, expected):
    assert weekday_name(date_text) == expected


def test_daily_activity_defaults():
    record = DailyActivity(
        owner_id=uuid.uuid4(),
        date="2024-01-05",
        account_name="Acme",
        manager_remarks="Great job",
    )

    assert record.manager_remarks == "No remarks"
    assert record.day == "Friday"


def test_weekly_plan_defaults_keep_explicit_day():
    record = WeeklyPlan(
        owner_id=uuid.uuid4(),
        date="next week",
        day="Tuesday",
        customer_name="Globex",
    )

    assert record.manager_remarks == "Awaiting update"
    assert record.day == "Tuesday"
