from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

import jwt
from fastapi.testclient import TestClient
from sqlalchemy import func, select

from app.core.config import settings
from app.models import User
from tests.helpers import login, signed_up_user, signup


def test_signup_creates_user_and_sets_session_cookie(client: TestClient):
    resp = signup(client, "a@x.com", name="A", password="secret1")
    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    assert body["user"]["email"] == "a@x.com"
    assert body["user"]["name"] == "A"
    assert "password" not in body["user"]
    assert "passwordHash" not in body["user"]

    set_cookie = resp.headers.get("set-cookie", "").lower()
    assert set_cookie.startswith("token=")
    assert "httponly" in set_cookie
    assert "samesite=lax" in set_cookie
    assert "max-age=604800" in set_cookie
    # ENV=test counts as local development
    assert "; secure" not in set_cookie


def test_signup_duplicate_email_conflicts(client: TestClient, db_session):
    assert signup(client, "dup@example.com").status_code == 201

    second = signup(client, "dup@example.com", name="Someone Else")
    assert second.status_code == 409
    assert second.json() == {"success": False, "message": "User already exists"}

    count = db_session.scalar(
        select(func.count()).select_from(User).where(User.email == "dup@example.com")
    )
    assert count == 1


def test_signup_requires_all_fields(client: TestClient):
    resp = client.post("/api/auth/signup", json={"email": "x@example.com", "password": "pw"})
    assert resp.status_code == 400
    assert resp.json()["success"] is False

    blank = client.post(
        "/api/auth/signup",
        json={"email": "x@example.com", "name": "   ", "password": "pw"},
    )
    assert blank.status_code == 400


def test_signup_rejects_missing_body(client: TestClient):
    resp = client.post("/api/auth/signup")
    assert resp.status_code == 400
    assert resp.json()["success"] is False


def test_password_is_stored_hashed(client: TestClient, db_session):
    signup(client, "hash@example.com", password="plaintext-pw")
    user = db_session.scalar(select(User).where(User.email == "hash@example.com"))
    assert user.password_hash != "plaintext-pw"
    assert user.password_hash.startswith("$argon2")


def test_login_wrong_password_and_unknown_email_are_indistinguishable(make_client):
    signup(make_client(), "b@example.com", password="right-password")

    wrong_password = login(make_client(), "b@example.com", password="wrong-password")
    unknown_email = login(make_client(), "nobody@example.com", password="right-password")

    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()
    assert "set-cookie" not in wrong_password.headers


def test_login_with_correct_password_sets_valid_cookie(make_client):
    signed_up_user(make_client(), "c@example.com", name="C")

    client = make_client()
    resp = login(client, "c@example.com")
    assert resp.status_code == 200
    assert resp.json()["user"]["email"] == "c@example.com"
    assert client.cookies.get("token")

    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.json()["user"]["email"] == "c@example.com"


def test_email_lookup_is_case_sensitive(make_client):
    signup(make_client(), "Case@Example.com")
    assert login(make_client(), "case@example.com").status_code == 401
    assert login(make_client(), "Case@Example.com").status_code == 200


def test_me_requires_session(client: TestClient):
    resp = client.get("/api/auth/me")
    assert resp.status_code == 401
    assert resp.json() == {"success": False, "message": "No token provided"}


def test_me_returns_profile_without_password(client: TestClient):
    user = signed_up_user(client, "me@example.com", name="Me")

    resp = client.get("/api/auth/me")
    assert resp.status_code == 200
    profile = resp.json()["user"]
    assert profile["id"] == user["id"]
    assert profile["name"] == "Me"
    assert "createdAt" in profile
    assert "passwordHash" not in profile


def test_me_for_deleted_user_is_not_found(client: TestClient, db_session):
    user = signed_up_user(client, "gone@example.com")
    db_session.delete(db_session.get(User, uuid.UUID(user["id"])))
    db_session.commit()

    assert client.get("/api/auth/me").status_code == 404


def test_tampered_token_rejected(client: TestClient):
    signed_up_user(client, "tamper@example.com")
    header, payload, signature = client.cookies.get("token").split(".")
    zeroed = "A" * len(signature)
    client.cookies.clear()
    client.cookies.set("token", f"{header}.{payload}.{zeroed}")

    resp = client.get("/api/auth/me")
    assert resp.status_code == 401
    assert resp.json()["message"] == "Invalid or expired token"


def test_expired_token_rejected(client: TestClient):
    user = signed_up_user(client, "expired@example.com")
    past = datetime.now(timezone.utc) - timedelta(days=8)
    expired = jwt.encode(
        {
            "userId": user["id"],
            "email": user["email"],
            "iat": int(past.timestamp()),
            "exp": int((past + timedelta(days=7)).timestamp()),
        },
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )
    client.cookies.clear()
    client.cookies.set("token", expired)

    assert client.get("/api/auth/me").status_code == 401


def test_token_signed_with_other_secret_rejected(client: TestClient):
    user = signed_up_user(client, "forged@example.com")
    now = datetime.now(timezone.utc)
    forged = jwt.encode(
        {
            "userId": user["id"],
            "email": user["email"],
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(days=1)).timestamp()),
        },
        "not-the-server-secret-at-all-1234",
        algorithm="HS256",
    )
    client.cookies.clear()
    client.cookies.set("token", forged)

    assert client.get("/api/auth/me").status_code == 401


def test_token_with_non_string_claims_rejected(client: TestClient):
    signed_up_user(client, "claims@example.com")
    now = datetime.now(timezone.utc)
    odd = jwt.encode(
        {
            "userId": 12345,
            "email": "claims@example.com",
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(days=1)).timestamp()),
        },
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )
    client.cookies.clear()
    client.cookies.set("token", odd)

    resp = client.get("/api/auth/me")
    assert resp.status_code == 401
    assert resp.json() == {"success": False, "message": "Invalid or expired token"}


def test_logout_clears_cookie(client: TestClient):
    signed_up_user(client, "bye@example.com")

    resp = client.post("/api/auth/logout")
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "Logged out successfully"}
    set_cookie = resp.headers.get("set-cookie", "").lower()
    assert "token=" in set_cookie
    assert "max-age=0" in set_cookie

    assert client.get("/api/auth/me").status_code == 401


def test_logout_without_session_is_ok(client: TestClient):
    assert client.post("/api/auth/logout").status_code == 200
