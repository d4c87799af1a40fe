"""Unit tests for the request telemetry middleware.

We assert structured log fields via `caplog` (not message strings) and verify:
- X-Request-ID is generated or propagated
- Successful requests emit exactly one INFO log entry with metadata only
- Unhandled exceptions emit an ERROR log entry with a stack trace and return 500
- Known task names are logged; arbitrary path segments are not
"""

from __future__ import annotations

import logging

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

from prompt_relay.core.middleware.request_telemetry import RequestTelemetryMiddleware


def _make_app() -> FastAPI:
    """Create a minimal app for middleware unit tests."""
    app = FastAPI()
    app.add_middleware(RequestTelemetryMiddleware)

    @app.post("/ai/{task}")
    async def task(task: str, request: Request) -> dict[str, str]:
        return {"task": task, "request_id": request.state.request_id}

    @app.get("/boom")
    async def boom() -> None:
        raise RuntimeError("boom")

    return app


def _get_http_log_records(caplog: pytest.LogCaptureFixture) -> list[logging.LogRecord]:
    return [r for r in caplog.records if r.name == "prompt_relay.http"]


def test_successful_request_sets_request_id_and_logs_one_info(
    caplog: pytest.LogCaptureFixture,
) -> None:
    """One INFO record with the route template, never the raw path or query string."""
    caplog.set_level(logging.INFO, logger="prompt_relay.http")
    app = _make_app()

    with TestClient(app) as client:
        res = client.post("/ai/summary?content=secret+text", json={"content": "secret text"})

    assert res.status_code == 200
    assert res.headers["x-request-id"]
    assert res.json()["request_id"] == res.headers["x-request-id"]

    records = _get_http_log_records(caplog)
    info_records = [r for r in records if r.levelno == logging.INFO]
    assert len(info_records) == 1

    record = info_records[0]
    assert record.__dict__["request_id"] == res.headers["x-request-id"]
    assert record.__dict__["http_method"] == "POST"
    assert record.__dict__["request_path"] == "/ai/{task}"
    assert record.__dict__["status_code"] == 200
    assert "secret" not in record.getMessage()

    duration_ms = record.__dict__["duration_ms"]
    assert isinstance(duration_ms, (int, float))
    assert duration_ms >= 0


def test_propagates_valid_request_id(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="prompt_relay.http")
    app = _make_app()

    with TestClient(app) as client:
        res = client.post("/ai/tags", json={}, headers={"X-Request-ID": "req_abc-123"})

    assert res.headers["x-request-id"] == "req_abc-123"
    info_records = [r for r in _get_http_log_records(caplog) if r.levelno == logging.INFO]
    assert len(info_records) == 1
    assert info_records[0].__dict__["request_id"] == "req_abc-123"


def test_replaces_unsafe_request_id() -> None:
    app = _make_app()

    with TestClient(app) as client:
        res = client.post("/ai/tags", json={}, headers={"X-Request-ID": "bad id with spaces"})

    assert res.headers["x-request-id"] != "bad id with spaces"
    assert len(res.headers["x-request-id"]) == 32


def test_unmatched_route_is_labelled_unmatched(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="prompt_relay.http")
    app = _make_app()

    with TestClient(app) as client:
        res = client.get("/nope/123")

    assert res.status_code == 404
    (record,) = [r for r in _get_http_log_records(caplog) if r.levelno == logging.INFO]
    assert record.__dict__["request_path"] == "unmatched"


def test_unhandled_exception_returns_500_and_logs_error_with_request_id(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.INFO, logger="prompt_relay.http")
    app = _make_app()

    with TestClient(app, raise_server_exceptions=False) as client:
        res = client.get("/boom", headers={"X-Request-ID": "req_err_001"})

    assert res.status_code == 500

    error_records = [r for r in _get_http_log_records(caplog) if r.levelno == logging.ERROR]
    assert len(error_records) == 1

    record = error_records[0]
    assert record.__dict__["request_id"] == "req_err_001"
    assert record.__dict__["http_method"] == "GET"
    assert record.__dict__["request_path"] == "/boom"
    assert record.__dict__["status_code"] == 500
    assert record.exc_info


def test_known_task_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="prompt_relay.http")
    app = _make_app()

    with TestClient(app) as client:
        client.post("/ai/detailed-define", json={})

    (record,) = [r for r in _get_http_log_records(caplog) if r.levelno == logging.INFO]
    assert record.__dict__["task"] == "detailed-define"


def test_unknown_task_segment_is_not_logged(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="prompt_relay.http")
    app = _make_app()

    with TestClient(app) as client:
        client.post("/ai/jane-doe-ssn-123", json={})

    (record,) = [r for r in _get_http_log_records(caplog) if r.levelno == logging.INFO]
    assert record.__dict__["task"] is None
    assert "jane" not in str(record.__dict__)


def test_records_request_metrics_by_route_template() -> None:
    labels = {"method": "POST", "route": "/ai/{task}", "status_code": "200"}
    before = REGISTRY.get_sample_value("http_requests_total", labels) or 0.0
    app = _make_app()

    with TestClient(app) as client:
        client.post("/ai/summary", json={})
        client.post("/ai/tags", json={})

    assert REGISTRY.get_sample_value("http_requests_total", labels) == before + 2
