"""
AI summaries of a user's reports, with the LLM dependency replaced by fakes.
"""

from typing import Any

import pytest

from app.dependencies.llm import get_llm_client
from app.services.llm_interface import LLMInterface

DAILY_BODY = {
    "date": "2024-01-05",
    "accountName": "Acme",
    "contactPerson": "Wile E.",
    "workDone": "demo",
    "outcome": "trial agreed",
}


class FakeLLM(LLMInterface):
    provider_name = "fake"

    def __init__(self, reply: str = "Asha ran a strong Acme demo."):
        self.reply = reply
        self.prompts: list[str] = []

    async def generate_text(
        self, prompt: str, temperature: float = 0.4, max_tokens: int | None = None, **kwargs: Any
    ) -> str:
        self.prompts.append(prompt)
        return self.reply


class FailingLLM(LLMInterface):
    provider_name = "failing"

    async def generate_text(self, prompt: str, **kwargs: Any) -> str:
        raise RuntimeError("quota exceeded")


@pytest.fixture
def fake_llm(app) -> FakeLLM:
    fake = FakeLLM()
    app.dependency_overrides[get_llm_client] = lambda: fake
    return fake


def test_summary_for_own_reports(client, make_user, fake_llm):
    asha, headers = make_user("asha", full_name="Asha Rao")
    client.post("/api/reports/daily", json=DAILY_BODY, headers=headers)

    response = client.post(f"/api/reports/daily/{asha['id']}/summary", headers=headers)

    assert response.status_code == 200
    assert response.json() == {
        "userId": asha["id"],
        "kind": "daily",
        "recordCount": 1,
        "summary": "Asha ran a strong Acme demo.",
    }
    prompt = fake_llm.prompts[0]
    assert "sales person Asha Rao" in prompt
    assert (
        "On 2024-01-05, they worked on account 'Acme' (Contact: Wile E.). "
        "The task was 'demo' with the outcome being 'trial agreed'. "
        "Support required: 'None'"
    ) in prompt


def test_weekly_summary_uses_plan_rows(client, make_user, fake_llm):
    asha, headers = make_user("asha")
    client.post(
        "/api/reports/weekly",
        json={"date": "2024-01-08", "customerName": "Globex", "proposedAction": "site visit"},
        headers=headers,
    )

    response = client.post(f"/api/reports/weekly/{asha['id']}/summary", headers=headers)

    assert response.status_code == 200
    assert response.json()["kind"] == "weekly"
    assert "customer 'Globex'" in fake_llm.prompts[0]
    assert "Proposed action: 'site visit'" in fake_llm.prompts[0]


def test_summary_follows_read_rule(client, make_user, grant, fake_llm):
    asha, asha_headers = make_user("asha")
    ravi, ravi_headers = make_user("ravi")
    client.post("/api/reports/daily", json=DAILY_BODY, headers=ravi_headers)

    denied = client.post(f"/api/reports/daily/{ravi['id']}/summary", headers=asha_headers)
    assert denied.status_code == 403
    assert fake_llm.prompts == []

    grant(asha["id"], ravi["id"])
    allowed = client.post(f"/api/reports/daily/{ravi['id']}/summary", headers=asha_headers)
    assert allowed.status_code == 200


def test_summary_without_records_is_bad_request(client, make_user, fake_llm):
    asha, headers = make_user("asha")

    response = client.post(f"/api/reports/daily/{asha['id']}/summary", headers=headers)

    assert response.status_code == 400
    assert fake_llm.prompts == []


def test_provider_failure_is_bad_gateway(client, app, make_user):
    app.dependency_overrides[get_llm_client] = lambda: FailingLLM()
    asha, headers = make_user("asha")
    client.post("/api/reports/daily", json=DAILY_BODY, headers=headers)

    response = client.post(f"/api/reports/daily/{asha['id']}/summary", headers=headers)

    assert response.status_code == 502
    assert response.json() == {"detail": "Sorry, there was an error generating the summary."}


def test_empty_provider_reply_is_bad_gateway(client, app, make_user):
    app.dependency_overrides[get_llm_client] = lambda: FakeLLM(reply="   ")
    asha, headers = make_user("asha")
    client.post("/api/reports/daily", json=DAILY_BODY, headers=headers)

    response = client.post(f"/api/reports/daily/{asha['id']}/summary", headers=headers)

    assert response.status_code == 502


def test_unconfigured_provider_is_unavailable(client, make_user):
    asha, headers = make_user("asha")
    client.post("/api/reports/daily", json=DAILY_BODY, headers=headers)

    response = client.post(f"/api/reports/daily/{asha['id']}/summary", headers=headers)

    assert response.status_code == 503
