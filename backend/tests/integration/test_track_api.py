"""HTTP tests for ``/api/track``."""

from __future__ import annotations

import pytest
from freezegun import freeze_time
from tests.helpers.api import bearer, signup


@pytest.fixture()
def alice(client):
    return bearer(signup(client, "alice@example.com")["accessToken"])


@pytest.fixture()
def bob(client):
    return bearer(signup(client, "bob@example.com")["accessToken"])


def _add(client, headers, amount, time=None):
    payload = {"amount": amount}
    if time is not None:
        payload["time"] = time
    resp = client.post("/api/track", json=payload, headers=headers)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()


class TestRecordCommands:
    def test_create_returns_record(self, client, alice):
        body = _add(client, alice, 250, "2024-05-01 08:00:00")
        assert body["amount"] == 250
        assert body["time"] == "2024-05-01 08:00:00"
        assert isinstance(body["id"], int)

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"amount": 0},
            {"amount": "250"},
            {"amount": 10, "time": "01/05/2024 08:00"},
            {"amount": 10, "time": "2024-13-45 99:99:99"},
        ],
    )
    def test_create_validation(self, client, alice, payload):
        resp = client.post("/api/track", json=payload, headers=alice)
        assert resp.status_code == 422
        assert resp.get_json()["code"] == "validation_error"

    def test_requires_authentication(self, client):
        resp = client.post("/api/track", json={"amount": 100})
        assert resp.status_code == 401

    def test_update_own_record(self, client, alice):
        record = _add(client, alice, 250, "2024-05-01 08:00:00")

        resp = client.put(f"/api/track/{record['id']}", json={"amount": 400}, headers=alice)

        assert resp.status_code == 200
        assert resp.get_json() == {"id": record["id"], "amount": 400, "time": "2024-05-01 08:00:00"}

    def test_foreign_record_is_not_found(self, client, alice, bob):
        record = _add(client, alice, 250, "2024-05-01 08:00:00")

        put = client.put(f"/api/track/{record['id']}", json={"amount": 1}, headers=bob)
        delete = client.delete(f"/api/track/{record['id']}", headers=bob)

        assert put.status_code == 404
        assert delete.status_code == 404
        assert put.get_json()["code"] == "not_found"

    def test_delete_own_record(self, client, alice):
        record = _add(client, alice, 250, "2024-05-01 08:00:00")

        resp = client.delete(f"/api/track/{record['id']}", headers=alice)
        assert resp.status_code == 200
        assert resp.get_json() == {"message": "Water record deleted successfully"}

        again = client.delete(f"/api/track/{record['id']}", headers=alice)
        assert again.status_code == 404


class TestRecordQueries:
    def test_day_lists_only_callers_records(self, client, alice, bob):
        _add(client, alice, 300, "2024-05-01 18:00:00")
        _add(client, alice, 200, "2024-05-01 08:00:00")
        _add(client, alice, 999, "2024-05-02 08:00:00")
        _add(client, bob, 700, "2024-05-01 09:00:00")

        resp = client.get("/api/track/day?date=2024-05-01", headers=alice)

        assert resp.status_code == 200
        body = resp.get_json()
        assert [r["amount"] for r in body["data"]] == [200, 300]
        assert body["waterAmount"] == 500

    @freeze_time("2024-05-03 12:00:00")
    def test_day_defaults_to_today(self, client):
        headers = bearer(signup(client, "today@example.com")["accessToken"])
        _add(client, headers, 150)
        _add(client, headers, 50, "2024-05-02 12:00:00")

        body = client.get("/api/track/day", headers=headers).get_json()

        assert [r["time"] for r in body["data"]] == ["2024-05-03 12:00:00"]

    @pytest.mark.parametrize(
        "query",
        [
            "day?date=2024-5-1",
            "day?date=2024-02-30",
            "month?month=2024-13",
            "month/stats?month=24-05",
        ],
    )
    def test_bad_calendar_query(self, client, alice, query):
        resp = client.get(f"/api/track/{query}", headers=alice)
        assert resp.status_code == 422
        assert resp.get_json()["code"] == "validation_error"

    def test_month_lists_records(self, client, alice):
        _add(client, alice, 1, "2024-05-20 08:00:00")
        _add(client, alice, 2, "2024-05-02 08:00:00")
        _add(client, alice, 3, "2024-04-30 08:00:00")

        body = client.get("/api/track/month?month=2024-05", headers=alice).get_json()

        assert [r["amount"] for r in body] == [2, 1]

    def test_month_stats(self, client, alice, bob):
        _add(client, alice, 250, "2024-05-01 08:00:00")
        _add(client, alice, 250, "2024-05-01 12:00:00")
        _add(client, alice, 500, "2024-05-04 09:00:00")
        _add(client, bob, 5000, "2024-05-01 09:00:00")

        resp = client.get("/api/track/month/stats?month=2024-05", headers=alice)

        assert resp.status_code == 200
        assert resp.get_json() == {
            "dailyStats": [
                {"date": "2024-05-01", "totalAmount": 500, "recordsCount": 2},
                {"date": "2024-05-04", "totalAmount": 500, "recordsCount": 1},
            ],
            "totalAmount": 1000,
            "totalRecords": 3,
            "daysTracked": 2,
        }
