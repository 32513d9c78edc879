"""
Report store behaviour behind the access rules, end to end over HTTP.
"""

import uuid

import pytest
from conftest import login

DAILY_BODY = {"date": "2024-01-05", "accountName": "Acme", "workDone": "demo"}
WEEKLY_BODY = {"date": "2024-01-08", "customerName": "Globex", "requirement": "CRM"}


def test_end_to_end_daily_report(client, admin_headers):
    registered = client.post(
        "/api/users/register",
        json={"fullName": "Asha", "username": "asha", "password": "pw1"},
        headers=admin_headers,
    )
    assert registered.status_code == 201
    asha = login(client, "asha", "pw1")
    headers = {"Authorization": f"Bearer {asha['token']}"}

    created = client.post("/api/reports/daily", json=DAILY_BODY, headers=headers)
    assert created.status_code == 201

    response = client.get(f"/api/reports/daily/{asha['user']['id']}", headers=headers)

    assert response.status_code == 200
    records = response.json()
    assert len(records) == 1
    assert records[0]["ownerId"] == asha["user"]["id"]
    assert records[0]["managerRemarks"] == "No remarks"
    assert records[0]["accountName"] == "Acme"
    assert records[0]["workDone"] == "demo"
    assert records[0]["day"] == "Friday"


def test_weekly_plan_defaults(client, make_user):
    asha, headers = make_user("asha")

    created = client.post("/api/reports/weekly", json=WEEKLY_BODY, headers=headers)

    assert created.status_code == 201
    body = created.json()
    assert body["managerRemarks"] == "Awaiting update"
    assert body["day"] == "Monday"
    assert body["ownerId"] == asha["id"]


def test_owner_in_body_is_ignored(client, make_user):
    asha, asha_headers = make_user("asha")
    ravi, _ = make_user("ravi")

    created = client.post(
        "/api/reports/daily",
        json={**DAILY_BODY, "ownerId": ravi["id"], "userId": ravi["id"]},
        headers=asha_headers,
    )

    assert created.json()["ownerId"] == asha["id"]
    asha_records = client.get(f"/api/reports/daily/{asha['id']}", headers=asha_headers)
    assert [r["ownerId"] for r in asha_records.json()] == [asha["id"]]


def test_manager_remarks_are_not_accepted_on_create(client, make_user):
    _, headers = make_user("asha")

    created = client.post(
        "/api/reports/daily",
        json={**DAILY_BODY, "managerRemarks": "Promote me"},
        headers=headers,
    )

    assert created.json()["managerRemarks"] == "No remarks"


@pytest.mark.parametrize(
    "kind, body",
    [
        ("daily", {"date": "2024-01-05"}),
        ("daily", {"accountName": "Acme"}),
        ("daily", {"date": "2024-01-05", "accountName": ""}),
        ("weekly", {"date": "2024-01-05"}),
    ],
)
def test_required_fields(client, make_user, kind, body):
    _, headers = make_user("asha")

    response = client.post(f"/api/reports/{kind}", json=body, headers=headers)

    assert response.status_code == 422


def test_viewer_with_edge_can_read(client, make_user, grant):
    asha, asha_headers = make_user("asha")
    ravi, ravi_headers = make_user("ravi")
    client.post("/api/reports/daily", json=DAILY_BODY, headers=ravi_headers)

    denied = client.get(f"/api/reports/daily/{ravi['id']}", headers=asha_headers)
    assert denied.status_code == 403

    grant(asha["id"], ravi["id"])
    allowed = client.get(f"/api/reports/daily/{ravi['id']}", headers=asha_headers)
    assert allowed.status_code == 200
    assert len(allowed.json()) == 1

    # The edge is one-directional.
    reverse = client.get(f"/api/reports/daily/{asha['id']}", headers=ravi_headers)
    assert reverse.status_code == 403


def test_admin_reads_any_user(client, admin_headers, make_user):
    ravi, ravi_headers = make_user("ravi")
    client.post("/api/reports/weekly", json=WEEKLY_BODY, headers=ravi_headers)

    response = client.get(f"/api/reports/weekly/{ravi['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert len(response.json()) == 1


def test_reports_require_a_session(client):
    assert client.get(f"/api/reports/daily/{uuid.uuid4()}").status_code == 401
    assert client.post("/api/reports/daily", json=DAILY_BODY).status_code == 401


def test_owner_updates_own_record(client, make_user):
    _, headers = make_user("asha")
    record = client.post("/api/reports/daily", json=DAILY_BODY, headers=headers).json()

    response = client.put(
        f"/api/reports/daily/{record['id']}",
        json={"outcome": "signed", "date": "2024-01-08", "managerRemarks": "self-praise"},
        headers=headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["outcome"] == "signed"
    assert body["accountName"] == "Acme"
    assert body["date"] == "2024-01-08"
    assert body["day"] == "Monday"
    assert body["managerRemarks"] == "No remarks"


def test_update_cannot_change_owner(client, make_user):
    asha, headers = make_user("asha")
    ravi, _ = make_user("ravi")
    record = client.post("/api/reports/daily", json=DAILY_BODY, headers=headers).json()

    response = client.put(
        f"/api/reports/daily/{record['id']}",
        json={"ownerId": ravi["id"], "outcome": "moved"},
        headers=headers,
    )

    assert response.status_code == 200
    assert response.json()["ownerId"] == asha["id"]


def test_admin_sets_manager_remarks(client, admin_headers, make_user):
    _, headers = make_user("asha")
    record = client.post("/api/reports/weekly", json=WEEKLY_BODY, headers=headers).json()

    response = client.put(
        f"/api/reports/weekly/{record['id']}",
        json={"managerRemarks": "Bring the demo kit"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["managerRemarks"] == "Bring the demo kit"
    assert response.json()["customerName"] == "Globex"


def test_non_owner_cannot_modify_records(client, make_user, grant):
    asha, asha_headers = make_user("asha")
    ravi, ravi_headers = make_user("ravi")
    grant(asha["id"], ravi["id"])
    record = client.post("/api/reports/daily", json=DAILY_BODY, headers=ravi_headers).json()

    update = client.put(
        f"/api/reports/daily/{record['id']}", json={"outcome": "lost"}, headers=asha_headers
    )
    delete = client.delete(f"/api/reports/daily/{record['id']}", headers=asha_headers)

    assert update.status_code == 403
    assert delete.status_code == 403
    unchanged = client.get(f"/api/reports/daily/{ravi['id']}", headers=ravi_headers).json()
    assert len(unchanged) == 1
    assert unchanged[0]["outcome"] is None


def test_owner_and_admin_can_delete(client, admin_headers, make_user):
    asha, headers = make_user("asha")
    first = client.post("/api/reports/daily", json=DAILY_BODY, headers=headers).json()
    second = client.post("/api/reports/daily", json=DAILY_BODY, headers=headers).json()

    assert client.delete(f"/api/reports/daily/{first['id']}", headers=headers).status_code == 200
    assert (
        client.delete(f"/api/reports/daily/{second['id']}", headers=admin_headers).status_code
        == 200
    )
    assert client.get(f"/api/reports/daily/{asha['id']}", headers=headers).json() == []


def test_missing_record_is_not_found(client, make_user):
    _, headers = make_user("asha")
    missing = uuid.uuid4()

    assert client.put(
        f"/api/reports/daily/{missing}", json={"outcome": "x"}, headers=headers
    ).status_code == 404
    assert client.delete(f"/api/reports/weekly/{missing}", headers=headers).status_code == 404


def test_collections_are_independent(client, make_user):
    _, headers = make_user("asha")
    daily = client.post("/api/reports/daily", json=DAILY_BODY, headers=headers).json()

    response = client.delete(f"/api/reports/weekly/{daily['id']}", headers=headers)

    assert response.status_code == 404
