"""Tests for JSON log formatting and request correlation."""

from __future__ import annotations

import json
import logging

from aquatrack.core.logger import JSONFormatter, RequestIdFilter, ensure_request_id
from flask import g


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "aquatrack.test", logging.INFO, __file__, 1, "hello %s", ("x",), None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    def test_renders_core_fields(self):
        payload = json.loads(JSONFormatter().format(_record(request_id="rid-1")))

        assert payload["level"] == "INFO"
        assert payload["name"] == "aquatrack.test"
        assert payload["message"] == "hello x"
        assert payload["request_id"] == "rid-1"
        assert "time" in payload

    def test_copies_whitelisted_extras_only(self):
        record = _record(user_id=5, record_id=9, password="secret")
        payload = json.loads(JSONFormatter().format(record))

        assert payload["user_id"] == 5
        assert payload["record_id"] == 9
        assert "password" not in payload


class TestRequestId:
    def test_outside_request_filter_sets_none(self):
        record = _record()
        assert RequestIdFilter().filter(record) is True
        assert record.request_id is None

    def test_incoming_header_is_reused(self, app):
        with app.test_request_context(headers={"X-Request-ID": "from-proxy"}):
            g.pop("request_id", None)
            assert ensure_request_id() == "from-proxy"
            assert ensure_request_id() == "from-proxy"

    def test_generated_once_per_request(self, app):
        with app.test_request_context():
            g.pop("request_id", None)
            first = ensure_request_id()
            assert first
            assert ensure_request_id() == first

    def test_response_carries_header(self, client):
        resp = client.get("/api/health", headers={"X-Correlation-ID": "corr-7"})
        assert resp.headers["X-Request-ID"] == "corr-7"
