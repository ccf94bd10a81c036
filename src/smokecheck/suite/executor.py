# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Single-attempt probe execution: one request, classified into a ProbeResult."""

from __future__ import annotations

from ..errors import ErrorCategory
from ..http.client import HttpClient
from ..http.models import HttpRequest, HttpResponse
from ..models.probe import ProbeResult, ProbeSpec
from .health import evaluate_health_document


def classify_response(spec: ProbeSpec, response: HttpResponse, *, attempt: int) -> ProbeResult:
    """Turn a tagged HTTP response into the ProbeResult for ``attempt``."""
    base = {
        "name": spec.name,
        "path": spec.path,
        "method": spec.method,
        "expected_status": spec.expected_status,
        "attempt": attempt,
    }
    if not response.ok:
        category = response.error_category or ErrorCategory.TRANSPORT_ERROR
        return ProbeResult(
            **base,
            actual_status=None,
            response_time_ms=None,
            passed=False,
            error=response.error_message or category.value,
            error_type=category.value,
        )

    if response.status_code != spec.expected_status:
        return ProbeResult(
            **base,
            actual_status=response.status_code,
            response_time_ms=response.elapsed_ms,
            passed=False,
            error_type=ErrorCategory.STATUS_MISMATCH.value,
        )

    if spec.health_document:
        verdict = evaluate_health_document(response.text)
        if not verdict.healthy:
            return ProbeResult(
                **base,
                actual_status=response.status_code,
                response_time_ms=response.elapsed_ms,
                passed=False,
                error=verdict.error,
                error_type=verdict.error_type,
            )

    return ProbeResult(
        **base,
        actual_status=response.status_code,
        response_time_ms=response.elapsed_ms,
        passed=True,
    )


class ProbeExecutor:
    """Issues the request for a probe against a base URL. No retries at this layer."""

    def __init__(self, http_client: HttpClient, base_url: str, *, timeout: float | None = None):
        self.http_client = http_client
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def send(self, spec: ProbeSpec) -> HttpResponse:
        request = HttpRequest(url=spec.url_for(self.base_url), method=spec.method, timeout=self.timeout)
        response = self.http_client.request(request)
        if response.url is None:
            response.url = request.url
        return response

    def attempt(self, spec: ProbeSpec, attempt: int) -> ProbeResult:
        return classify_response(spec, self.send(spec), attempt=attempt)


__all__ = ["ProbeExecutor", "classify_response"]
