# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Launch readiness: smoke suite plus response-time grading and a security-header audit."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..http.client import HttpClient
from ..http.models import RetryConfig
from ..models.probe import ProbeResult, ProbeSpec
from ..models.readiness import (
    PerformanceGrade,
    ReadinessReport,
    ReadinessStatus,
    ResponseTimeProfile,
    SecurityAudit,
    TimedProbe,
)
from ..models.report import SuiteReport
from .executor import ProbeExecutor
from .probes import DEFAULT_PROBES
from .runner import ResultListener, SuiteRunner

logger = logging.getLogger(__name__)

REQUIRED_SECURITY_HEADERS: tuple[str, ...] = (
    "x-frame-options",
    "x-content-type-options",
    "strict-transport-security",
    "content-security-policy",
    "x-xss-protection",
    "referrer-policy",
)

# Upper bounds (ms) on the average response time for each grade.
GRADE_THRESHOLDS: tuple[tuple[PerformanceGrade, float], ...] = (
    (PerformanceGrade.EXCELLENT, 200.0),
    (PerformanceGrade.GOOD, 500.0),
    (PerformanceGrade.ACCEPTABLE, 1000.0),
)


def grade_for(average_ms: float) -> PerformanceGrade:
    for grade, limit in GRADE_THRESHOLDS:
        if average_ms <= limit:
            return grade
    return PerformanceGrade.POOR


def profile_response_times(results: Sequence[ProbeResult]) -> ResponseTimeProfile:
    """Average, grade and extremes over passed probes that have a timing."""
    timed = [TimedProbe(r.name, r.response_time_ms) for r in results if r.passed and r.response_time_ms is not None]
    if not timed:
        return ResponseTimeProfile()
    average = sum(t.response_time_ms for t in timed) / len(timed)
    return ResponseTimeProfile(
        average_ms=average,
        grade=grade_for(average),
        fastest=min(timed, key=lambda t: t.response_time_ms),
        slowest=max(timed, key=lambda t: t.response_time_ms),
    )


def audit_security_headers(executor: ProbeExecutor, *, path: str = "/") -> SecurityAudit:
    tls_enabled = executor.base_url.lower().startswith("https://")
    response = executor.send(ProbeSpec(name="Security headers", path=path))
    if not response.ok or response.status_code is None or response.status_code >= 400:
        reason = response.error_message or f"HTTP {response.status_code}"
        logger.info("Skipping security header audit: %s", reason)
        return SecurityAudit(audited=False, tls_enabled=tls_enabled, error=reason)

    present: dict[str, str] = {}
    missing: list[str] = []
    for header in REQUIRED_SECURITY_HEADERS:
        value = response.header(header)
        if value:
            present[header] = value
        else:
            missing.append(header)
    return SecurityAudit(audited=True, tls_enabled=tls_enabled, present=present, missing=tuple(missing))


def build_recommendations(
    suite: SuiteReport,
    performance: ResponseTimeProfile,
    security: SecurityAudit,
    critical_failures: int,
) -> list[str]:
    recommendations: list[str] = []
    if critical_failures:
        recommendations.append("Critical endpoints are failing; immediate attention required")
    elif suite.summary.failed:
        recommendations.append(f"{suite.summary.failed} non-critical probe(s) failing")
    if performance.grade is PerformanceGrade.POOR:
        recommendations.append("Performance is poor; consider optimization")
    elif performance.grade is PerformanceGrade.ACCEPTABLE:
        recommendations.append("Performance could be improved")
    if security.missing:
        recommendations.append(f"Missing security headers: {', '.join(security.missing)}")
    if not security.tls_enabled:
        recommendations.append("TLS should be enabled for the public endpoint")
    if suite.summary.failed == 0:
        recommendations.append("All systems operating normally")
    return recommendations


class ReadinessCheck:
    """Runs the smoke suite and layers launch-readiness analysis on top."""

    def __init__(
        self,
        http_client: HttpClient,
        *,
        probes: Sequence[ProbeSpec] = DEFAULT_PROBES,
        retry_config: RetryConfig | None = None,
        timeout: float | None = None,
        gate: bool = True,
        listener: ResultListener | None = None,
    ):
        self.http_client = http_client
        self.probes = tuple(probes)
        self.timeout = timeout
        self.runner = SuiteRunner(
            http_client,
            probes=self.probes,
            retry_config=retry_config,
            timeout=timeout,
            gate=gate,
            listener=listener,
        )

    def run(self, base_url: str) -> ReadinessReport:
        suite = self.runner.run(base_url)
        critical_names = {spec.name for spec in self.probes if spec.critical or spec.liveness}
        critical_failures = sum(1 for result in suite.failures if result.name in critical_names)

        performance = profile_response_times(suite.tests)
        if suite.gated:
            security = SecurityAudit(
                audited=False,
                tls_enabled=base_url.lower().startswith("https://"),
                error="Skipped: liveness check failed",
            )
        else:
            security = audit_security_headers(ProbeExecutor(self.http_client, base_url, timeout=self.timeout))

        if critical_failures:
            status = ReadinessStatus.CRITICAL
        elif suite.summary.failed:
            status = ReadinessStatus.WARNING
        else:
            status = ReadinessStatus.HEALTHY

        return ReadinessReport(
            status=status,
            suite=suite,
            performance=performance,
            security=security,
            critical_failures=critical_failures,
            recommendations=tuple(build_recommendations(suite, performance, security, critical_failures)),
        )


__all__ = [
    "GRADE_THRESHOLDS",
    "REQUIRED_SECURITY_HEADERS",
    "ReadinessCheck",
    "audit_security_headers",
    "build_recommendations",
    "grade_for",
    "profile_response_times",
]
