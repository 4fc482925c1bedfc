"""HTTP tests for the health endpoint and generic error rendering."""

from __future__ import annotations


def test_health_reports_ok(client):
    resp = client.get("/api/health")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["status"] == "ok"
    assert body["db"] == "ok"
    assert "version" in body


def test_unknown_route_is_problem_json(client):
    resp = client.get("/api/does-not-exist")

    assert resp.status_code == 404
    assert resp.mimetype == "application/problem+json"
    body = resp.get_json()
    assert body["code"] == "not_found"
    assert body["instance"] == "/api/does-not-exist"
    assert body["request_id"] == resp.headers["X-Request-ID"]


def test_wrong_method_is_405(client):
    resp = client.delete("/api/health")
    assert resp.status_code == 405
    assert resp.get_json()["code"] == "method_not_allowed"
