from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from prompt_relay.core.middleware.cors import CORS_HEADERS

EXPECTED_HEADERS = {
    "access-control-allow-origin": "*",
    "access-control-allow-headers": "Origin, X-Requested-With, Content-Type, Accept, Authorization",
    "access-control-allow-methods": "GET, POST, PUT, DELETE, OPTIONS",
}


def _assert_cors(headers) -> None:
    for name, value in EXPECTED_HEADERS.items():
        assert headers[name] == value


def test_cors_header_values() -> None:
    assert {k.lower(): v for k, v in CORS_HEADERS.items()} == EXPECTED_HEADERS


@pytest.mark.parametrize("path", ["/translate", "/ai/summary", "/health", "/does-not-exist"])
def test_options_short_circuits_with_empty_200(client: TestClient, path: str) -> None:
    res = client.options(path)
    assert res.status_code == 200
    assert res.content == b""
    _assert_cors(res.headers)


def test_success_response_has_cors_headers(client: TestClient) -> None:
    _assert_cors(client.get("/health").headers)


def test_error_responses_have_cors_headers(client: TestClient) -> None:
    _assert_cors(client.post("/translate", json={}).headers)
    _assert_cors(client.post("/translate", json={"prompt": "hi"}).headers)
    _assert_cors(client.get("/missing").headers)
