"""HTTP helpers shared by endpoint tests."""

from __future__ import annotations

from typing import Any

DEFAULT_PASSWORD = "s3cret-pass"


def bearer(token: str) -> dict[str, str]:
    """Return an ``Authorization`` header for ``token``."""
    return {"Authorization": f"Bearer {token}"}


def register(client, email: str, password: str = DEFAULT_PASSWORD, **extra: Any):
    """POST ``/api/users/register`` with a matching confirmation."""
    payload = {"email": email, "password": password, "repeatPassword": password, **extra}
    return client.post("/api/users/register", json=payload)


def login(client, email: str, password: str = DEFAULT_PASSWORD) -> dict[str, Any]:
    """Log in and return the JSON body (tokens + user)."""
    resp = client.post("/api/users/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.get_json()
    return resp.get_json()


def signup(client, email: str, password: str = DEFAULT_PASSWORD) -> dict[str, Any]:
    """Register then log in; return the login body."""
    resp = register(client, email, password)
    assert resp.status_code == 201, resp.get_json()
    return login(client, email, password)
