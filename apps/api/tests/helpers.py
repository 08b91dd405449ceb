from __future__ import annotations

from fastapi.testclient import TestClient

DEFAULT_PASSWORD = "secret123"


def signup(client: TestClient, email: str, name: str = "Test User", password: str = DEFAULT_PASSWORD):
    return client.post(
        "/api/auth/signup",
        json={"email": email, "name": name, "password": password},
    )


def login(client: TestClient, email: str, password: str = DEFAULT_PASSWORD):
    return client.post(
        "/api/auth/login",
        json={"email": email, "password": password},
    )


def signed_up_user(client: TestClient, email: str, name: str = "Test User") -> dict:
    resp = signup(client, email, name)
    assert resp.status_code == 201, resp.text
    return resp.json()["user"]


def event_payload(**overrides) -> dict:
    payload = {
        "title": "Meetup",
        "description": "Monthly community meetup",
        "date": "2099-01-01",
        "time": "18:00",
        "location": "Hall",
    }
    payload.update(overrides)
    return payload


def create_event(client: TestClient, **overrides) -> dict:
    resp = client.post("/api/events", json=event_payload(**overrides))
    assert resp.status_code == 201, resp.text
    return resp.json()["event"]
