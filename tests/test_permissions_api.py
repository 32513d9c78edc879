import uuid


def test_create_and_list_permission(client, admin_headers, make_user):
    asha, _ = make_user("asha")
    ravi, _ = make_user("ravi")

    response = client.post(
        "/api/permissions",
        json={"viewerId": asha["id"], "vieweeId": ravi["id"]},
        headers=admin_headers,
    )

    assert response.status_code == 201
    edge = response.json()
    assert edge["viewerId"] == asha["id"]
    assert edge["vieweeId"] == ravi["id"]
    listed = client.get("/api/permissions", headers=admin_headers).json()
    assert [p["id"] for p in listed] == [edge["id"]]


def test_duplicate_edge_is_rejected(client, admin_headers, make_user, grant):
    asha, _ = make_user("asha")
    ravi, _ = make_user("ravi")
    grant(asha["id"], ravi["id"])

    response = client.post(
        "/api/permissions",
        json={"viewerId": asha["id"], "vieweeId": ravi["id"]},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert len(client.get("/api/permissions", headers=admin_headers).json()) == 1


def test_reverse_and_self_edges_are_allowed(client, make_user, grant):
    asha, _ = make_user("asha")
    ravi, _ = make_user("ravi")
    grant(asha["id"], ravi["id"])

    grant(ravi["id"], asha["id"])
    grant(asha["id"], asha["id"])


def test_edge_to_unknown_user_is_not_found(client, admin_headers, make_user):
    asha, _ = make_user("asha")

    missing_viewee = client.post(
        "/api/permissions",
        json={"viewerId": asha["id"], "vieweeId": str(uuid.uuid4())},
        headers=admin_headers,
    )
    missing_viewer = client.post(
        "/api/permissions",
        json={"viewerId": str(uuid.uuid4()), "vieweeId": asha["id"]},
        headers=admin_headers,
    )

    assert missing_viewee.status_code == 404
    assert missing_viewer.status_code == 404
    assert client.get("/api/permissions", headers=admin_headers).json() == []


def test_delete_permission(client, admin_headers, make_user, grant):
    asha, _ = make_user("asha")
    ravi, _ = make_user("ravi")
    edge = grant(asha["id"], ravi["id"])

    response = client.delete(f"/api/permissions/{edge['id']}", headers=admin_headers)
    again = client.delete(f"/api/permissions/{edge['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert again.status_code == 404
    assert client.get("/api/permissions", headers=admin_headers).json() == []


def test_permission_routes_are_admin_only(client, make_user):
    asha, headers = make_user("asha")
    ravi, _ = make_user("ravi")

    listing = client.get("/api/permissions", headers=headers)
    creation = client.post(
        "/api/permissions",
        json={"viewerId": asha["id"], "vieweeId": ravi["id"]},
        headers=headers,
    )
    deletion = client.delete(f"/api/permissions/{uuid.uuid4()}", headers=headers)

    assert {r.status_code for r in (listing, creation, deletion)} == {403}


def test_malformed_ids_fail_validation(client, admin_headers):
    response = client.post(
        "/api/permissions",
        json={"viewerId": "abc", "vieweeId": "def"},
        headers=admin_headers,
    )
    assert response.status_code == 422
