# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import time

import httpx
import pytest

from smokecheck.config import HttpSettings
from smokecheck.http.adapters import StubHttpClient
from smokecheck.http.httpx_client import HttpxClient
from smokecheck.http.models import HttpOutcome, HttpRequest, HttpResponse, RetryConfig
from smokecheck.http.retry import build_default_retry_config, retry_until


def make_client(handler, **settings) -> HttpxClient:
    http_settings = HttpSettings(**settings)
    return HttpxClient(http_settings, client=httpx.Client(transport=httpx.MockTransport(handler)))


def test_httpx_client_returns_full_response():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["user_agent"] = request.headers.get("user-agent")
        return httpx.Response(201, headers={"X-Frame-Options": "DENY"}, text="created")

    client = make_client(handler, user_agent="UA/1.0")
    resp = client.request(HttpRequest(url="http://testserver/items", method="POST", body="payload"))

    assert resp.outcome is HttpOutcome.OK
    assert resp.ok is True
    assert resp.status_code == 201
    assert resp.reason_phrase == "Created"
    assert resp.text == "created"
    assert resp.content == b"created"
    assert resp.header("x-frame-options") == "DENY"
    assert resp.elapsed_ms is not None and resp.elapsed_ms >= 0
    assert resp.error_category is None
    assert seen == {"method": "POST", "user_agent": "UA/1.0"}


def test_httpx_client_error_status_is_still_ok_outcome():
    client = make_client(lambda request: httpx.Response(503, text="down"))
    resp = client.request(HttpRequest(url="http://testserver/api/health"))
    assert resp.outcome is HttpOutcome.OK
    assert resp.status_code == 503


def test_httpx_client_classifies_timeout():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("read timed out", request=request)

    client = make_client(handler, timeout=2.0)
    resp = client.request(HttpRequest(url="http://testserver/"))

    assert resp.outcome is HttpOutcome.TIMED_OUT
    assert resp.status_code is None
    assert resp.error_type == "Timeout"
    assert resp.error_message == "Request timed out after 2000ms"


def test_httpx_client_classifies_transport_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)
    resp = client.request(HttpRequest(url="http://testserver/"))

    assert resp.outcome is HttpOutcome.TRANSPORT_FAILED
    assert resp.status_code is None
    assert resp.error_type == "TransportError"
    assert "connection refused" in resp.error_message


def test_httpx_client_deadline_covers_body():
    def slow_body():
        yield b"first"
        time.sleep(0.05)
        yield b"second"

    client = make_client(lambda request: httpx.Response(200, content=slow_body()))
    resp = client.request(HttpRequest(url="http://testserver/", timeout=0.01))

    assert resp.outcome is HttpOutcome.TIMED_OUT
    assert resp.status_code is None


def test_httpx_client_request_overrides_redirects_and_timeout(monkeypatch):
    captured = {}

    class FakeHttpxClient:
        def __init__(self, follow_redirects, timeout, verify):  # noqa: ARG002
            pass

        def stream(self, method, url, headers=None, content=None, timeout=None, follow_redirects=None):  # noqa: ARG002
            captured.update(timeout=timeout, follow_redirects=follow_redirects)
            raise httpx.ConnectError("stop here")

        def close(self):
            captured["closed"] = True

    monkeypatch.setattr(httpx, "Client", FakeHttpxClient)
    client = HttpxClient(HttpSettings(timeout=30.0, allow_redirects=False))
    client.request(HttpRequest(url="http://testserver/", timeout=1.5, allow_redirects=True))
    assert captured == {"timeout": 1.5, "follow_redirects": True}

    client.request(HttpRequest(url="http://testserver/"))
    assert captured["timeout"] == 30.0
    assert captured["follow_redirects"] is False

    client.close()
    assert captured["closed"] is True


def test_stub_http_client_sequences_and_repeats_last():
    first = HttpResponse(outcome=HttpOutcome.OK, status_code=503)
    last = HttpResponse(outcome=HttpOutcome.OK, status_code=200)
    stub = StubHttpClient({"http://x/api/health": [first, last]})

    statuses = [stub.request(HttpRequest(url="http://x/api/health")).status_code for _ in range(3)]
    assert statuses == [503, 200, 200]
    assert stub.calls_for("http://x/api/health") == 3

    missing = stub.request(HttpRequest(url="http://x/unknown"))
    assert missing.outcome is HttpOutcome.TRANSPORT_FAILED
    stub.close()
    assert stub.closed is True


def test_retry_until_stops_on_success(monkeypatch):
    sleeps = []
    monkeypatch.setattr(time, "sleep", sleeps.append)
    outcomes = iter(["fail", "fail", "ok", "never"])

    result, attempts = retry_until(
        lambda attempt: next(outcomes),
        should_retry=lambda value: value != "ok",
        retry_config=RetryConfig(max_attempts=3, delay=5.0),
    )

    assert (result, attempts) == ("ok", 3)
    assert sleeps == [5.0, 5.0]


def test_retry_until_honors_max_attempts(monkeypatch):
    sleeps = []
    monkeypatch.setattr(time, "sleep", sleeps.append)
    seen = []

    result, attempts = retry_until(
        lambda attempt: seen.append(attempt) or f"fail-{attempt}",
        should_retry=lambda value: True,
        retry_config=RetryConfig(max_attempts=3, delay=1.0),
    )

    assert (result, attempts) == ("fail-3", 3)
    assert seen == [1, 2, 3]
    assert sleeps == [1.0, 1.0]


def test_retry_until_no_retry_when_rejected(monkeypatch):
    monkeypatch.setattr(time, "sleep", lambda _: pytest.fail("should not sleep"))
    result, attempts = retry_until(
        lambda attempt: "final",
        should_retry=lambda value: False,
        retry_config=RetryConfig(max_attempts=5, delay=1.0),
    )
    assert (result, attempts) == ("final", 1)


def test_build_default_retry_config_reads_env(monkeypatch):
    monkeypatch.setenv("SMOKECHECK_MAX_RETRIES", "4")
    monkeypatch.setenv("SMOKECHECK_RETRY_DELAY", "0.5")
    cfg = build_default_retry_config()
    assert cfg.max_attempts == 4
    assert cfg.delay == 0.5
