# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

from smokecheck.http.adapters import StubHttpClient
from smokecheck.http.models import HttpOutcome, HttpResponse, RetryConfig
from smokecheck.models.probe import ProbeResult, ProbeSpec
from smokecheck.models.readiness import PerformanceGrade, ReadinessStatus
from smokecheck.suite.probes import DEFAULT_PROBES
from smokecheck.suite.readiness import REQUIRED_SECURITY_HEADERS, ReadinessCheck, grade_for, profile_response_times

HEALTHY_BODY = '{"status":"healthy"}'
PROBES = (
    ProbeSpec(name="Health", path="/api/health", liveness=True, health_document=True),
    ProbeSpec(name="Home", path="/"),
    ProbeSpec(name="Sign in", path="/auth/signin"),
)
NO_DELAY = RetryConfig(max_attempts=2, delay=0.0)
ALL_HEADERS = {name: "set" for name in REQUIRED_SECURITY_HEADERS}


def ok(elapsed_ms=50, text="", headers=None):
    return HttpResponse(outcome=HttpOutcome.OK, status_code=200, text=text, elapsed_ms=elapsed_ms, headers=headers or {})


def test_grade_thresholds():
    assert grade_for(150) is PerformanceGrade.EXCELLENT
    assert grade_for(200) is PerformanceGrade.EXCELLENT
    assert grade_for(450) is PerformanceGrade.GOOD
    assert grade_for(1000) is PerformanceGrade.ACCEPTABLE
    assert grade_for(1500) is PerformanceGrade.POOR


def test_profile_ignores_failed_and_untimed_results():
    results = [
        ProbeResult("A", "/a", "GET", 200, 200, 100, True, 1),
        ProbeResult("B", "/b", "GET", 200, 200, 300, True, 1),
        ProbeResult("C", "/c", "GET", 200, 500, 5, False, 3, error_type="StatusMismatch"),
        ProbeResult("D", "/d", "GET", 200, 200, None, True, 1),
    ]
    profile = profile_response_times(results)
    assert profile.average_ms == 200
    assert profile.grade is PerformanceGrade.EXCELLENT
    assert profile.fastest.name == "A"
    assert profile.slowest.name == "B"
    assert profile_response_times([]).grade is PerformanceGrade.UNKNOWN


def test_readiness_healthy_with_all_headers():
    stub = StubHttpClient(
        {
            "https://x/api/health": ok(text=HEALTHY_BODY),
            "https://x/": ok(headers=ALL_HEADERS),
            "https://x/auth/signin": ok(),
        }
    )
    report = ReadinessCheck(stub, probes=PROBES, retry_config=NO_DELAY).run("https://x")

    assert report.status is ReadinessStatus.HEALTHY
    assert report.ready is True
    assert report.security.audited is True
    assert report.security.tls_enabled is True
    assert report.security.missing == ()
    assert report.performance.grade is PerformanceGrade.EXCELLENT
    assert report.recommendations == ("All systems operating normally",)
    assert report.to_dict()["smoke"]["summary"]["passed"] == 3


def test_readiness_warning_on_non_critical_failure_and_missing_headers():
    stub = StubHttpClient(
        {
            "http://x/api/health": ok(text=HEALTHY_BODY),
            "http://x/": ok(headers={"X-Frame-Options": "DENY"}),
            "http://x/auth/signin": HttpResponse(outcome=HttpOutcome.OK, status_code=500, elapsed_ms=5),
        }
    )
    report = ReadinessCheck(stub, probes=PROBES, retry_config=NO_DELAY).run("http://x")

    assert report.status is ReadinessStatus.WARNING
    assert report.critical_failures == 0
    assert report.security.present == {"x-frame-options": "DENY"}
    assert "content-security-policy" in report.security.missing
    assert any(item.startswith("Missing security headers") for item in report.recommendations)
    assert "TLS should be enabled for the public endpoint" in report.recommendations
    assert "All systems operating normally" not in report.recommendations


def test_readiness_critical_when_liveness_fails():
    stub = StubHttpClient({"http://x/api/health": HttpResponse(outcome=HttpOutcome.OK, status_code=503)})
    report = ReadinessCheck(stub, probes=PROBES, retry_config=NO_DELAY).run("http://x")

    assert report.status is ReadinessStatus.CRITICAL
    assert report.critical_failures == 1
    assert report.suite.gated is True
    assert report.security.audited is False
    assert stub.calls_for("http://x/") == 0
    assert report.recommendations[0].startswith("Critical endpoints are failing")


def test_default_probes_flag_critical_endpoints():
    assert [spec.name for spec in DEFAULT_PROBES if spec.critical] == ["Health", "Home", "Sign in"]
    assert [spec.name for spec in DEFAULT_PROBES if spec.liveness] == ["Health"]


def test_readiness_critical_when_home_page_fails():
    stub = StubHttpClient(
        {
            "http://x/api/health": ok(text=HEALTHY_BODY),
            "http://x/api/metrics": ok(),
            "http://x/": HttpResponse(outcome=HttpOutcome.OK, status_code=500, elapsed_ms=5),
            "http://x/auth/signin": ok(),
            "http://x/auth/signup": ok(),
        }
    )
    report = ReadinessCheck(stub, retry_config=NO_DELAY).run("http://x")

    assert report.suite.gated is False
    assert report.suite.summary.failed == 1
    assert report.critical_failures == 1
    assert report.status is ReadinessStatus.CRITICAL
    assert report.ready is False
    assert report.recommendations[0].startswith("Critical endpoints are failing")


def test_readiness_warning_when_only_non_critical_default_probe_fails():
    stub = StubHttpClient(
        {
            "http://x/api/health": ok(text=HEALTHY_BODY),
            "http://x/api/metrics": ok(),
            "http://x/": ok(headers=ALL_HEADERS),
            "http://x/auth/signin": ok(),
            "http://x/auth/signup": HttpResponse(outcome=HttpOutcome.OK, status_code=404, elapsed_ms=5),
        }
    )
    report = ReadinessCheck(stub, retry_config=NO_DELAY).run("http://x")

    assert report.critical_failures == 0
    assert report.status is ReadinessStatus.WARNING
