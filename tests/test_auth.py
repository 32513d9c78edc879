"""
Login, session tokens and the bearer-token gate in front of every route.
"""

import uuid
from datetime import timedelta

import pytest
from conftest import ADMIN_PASSWORD, ADMIN_USERNAME, bearer, login
from jose import jwt

from app.config import settings
from app.exceptions import UnauthenticatedError
from app.models import UserRole
from app.utils.auth import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    validate_token,
    verify_password,
)


def test_login_returns_token_with_user_claims(client):
    body = login(client, ADMIN_USERNAME, ADMIN_PASSWORD)

    assert body["tokenType"] == "bearer"
    assert body["user"]["username"] == ADMIN_USERNAME
    assert body["user"]["fullName"] == "Admin User"
    assert body["user"]["role"] == "Admin"
    assert "hashedPassword" not in body["user"]
    assert "password" not in body["user"]

    claims = decode_access_token(body["token"])
    assert claims["sub"] == body["user"]["id"]
    assert claims["role"] == "Admin"
    assert claims["exp"] > claims["iat"]


def test_login_accepts_secret_field(client):
    response = client.post(
        "/api/auth/login", json={"username": ADMIN_USERNAME, "secret": ADMIN_PASSWORD}
    )
    assert response.status_code == 200


def test_invalid_credentials_are_indistinguishable(client, make_user):
    make_user("asha", "pw1")

    wrong_password = client.post(
        "/api/auth/login", json={"username": "asha", "password": "nope"}
    )
    unknown_user = client.post(
        "/api/auth/login", json={"username": "nobody", "password": "pw1"}
    )
    wrong_case = client.post(
        "/api/auth/login", json={"username": "Asha", "password": "pw1"}
    )

    for response in (wrong_password, unknown_user, wrong_case):
        assert response.status_code == 400
        assert response.json() == {"detail": "Invalid credentials"}


def test_me_returns_token_owner(client, make_user):
    asha, headers = make_user("asha")

    response = client.get("/api/auth/me", headers=headers)

    assert response.status_code == 200
    assert response.json()["id"] == asha["id"]
    assert response.json()["role"] == "User"


def test_missing_token_is_unauthenticated(client):
    response = client.get("/api/auth/me")

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.parametrize(
    "token",
    [
        "not-a-token",
        jwt.encode(
            {"sub": str(uuid.uuid4()), "role": "Admin"}, "some-other-key", algorithm="HS256"
        ),
        jwt.encode({"sub": "not-a-uuid", "role": "User"}, settings.secret_key, algorithm="HS256"),
        jwt.encode({"sub": str(uuid.uuid4()), "role": "Owner"}, settings.secret_key, algorithm="HS256"),
        jwt.encode({"role": "Admin"}, settings.secret_key, algorithm="HS256"),
    ],
    ids=["malformed", "foreign-signature", "bad-subject", "unknown-role", "no-subject"],
)
def test_invalid_tokens_are_rejected(client, token):
    response = client.get("/api/users", headers=bearer(token))

    assert response.status_code == 401
    assert response.json() == {"detail": "Token is not valid"}


def test_expired_token_is_rejected(client):
    admin_id = login(client, ADMIN_USERNAME, ADMIN_PASSWORD)["user"]["id"]
    expired = create_access_token(
        uuid.UUID(admin_id), UserRole.ADMIN, expires_delta=timedelta(seconds=-10)
    )

    response = client.get("/api/users", headers=bearer(expired))

    assert response.status_code == 401


def test_validate_token_extracts_session():
    user_id = uuid.uuid4()
    session = validate_token(create_access_token(user_id, UserRole.USER))

    assert session.user_id == user_id
    assert session.role is UserRole.USER
    assert not session.is_admin


def test_validate_token_requires_a_token():
    with pytest.raises(UnauthenticatedError, match="Not authenticated"):
        validate_token(None)


def test_password_hashes_are_salted_and_verifiable():
    first = get_password_hash("pw1")
    second = get_password_hash("pw1")

    assert first != second
    assert verify_password("pw1", first)
    assert not verify_password("pw2", first)
    assert not verify_password("pw1", "not-a-bcrypt-hash")


def test_long_passwords_are_not_truncated():
    base = "x" * 80
    hashed = get_password_hash(base + "a")

    assert verify_password(base + "a", hashed)
    assert not verify_password(base + "b", hashed)
