# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

from smokecheck.http.adapters import StubHttpClient
from smokecheck.http.models import HttpOutcome, HttpResponse
from smokecheck.models.performance import ComponentTiming, LatencyStats, PerformanceMetrics, PerformanceThresholds, percentile
from smokecheck.suite.executor import ProbeExecutor
from smokecheck.suite.performance import PerformanceChecker, evaluate_metrics, measure_cache, measure_database


def ok(elapsed_ms, text=""):
    return HttpResponse(outcome=HttpOutcome.OK, status_code=200, text=text, elapsed_ms=elapsed_ms)


DB_BODY = '{"averageQueryTime": 12.5, "p95QueryTime": 40}'
API_PATHS = ("/api/health", "/api/auth/session")


def test_percentile_nearest_rank():
    samples = list(range(1, 101))
    assert percentile(samples, 0.95) == 96
    assert percentile(samples, 0.99) == 100
    assert percentile([7], 0.99) == 7
    assert percentile([], 0.95) == 0


def test_latency_stats_from_samples():
    stats = LatencyStats.from_samples([30, 10, 20])
    assert stats.samples == 3
    assert stats.average_ms == 20
    assert stats.p95_ms == 30
    assert LatencyStats.from_samples([]) == LatencyStats()


def test_error_rate_uses_total_requests():
    metrics = PerformanceMetrics(latency=LatencyStats(), requests_per_second=1.0, total_requests=200, failed_requests=1)
    assert metrics.error_rate_percent == 0.5
    assert metrics.uptime_percent == 99.5
    empty = PerformanceMetrics(latency=LatencyStats(), requests_per_second=0.0, total_requests=0, failed_requests=0)
    assert empty.error_rate_percent == 100.0
    assert empty.uptime_percent == 0.0


def test_checker_measures_and_passes():
    stub = StubHttpClient(
        {
            "http://x/api/health": ok(20),
            "http://x/api/auth/session": ok(40),
            "http://x/api/admin/database/health": ok(30),
            "http://x/api/admin/cache/health": ok(2),
            "http://x/api/admin/database/performance": ok(10, text=DB_BODY),
        }
    )
    checker = PerformanceChecker(stub, rounds=5, throughput_requests=10)

    report = checker.run("http://x")

    metrics = report.metrics
    assert metrics.latency.samples == 20
    assert metrics.latency.average_ms == 23
    assert metrics.total_requests == 30
    assert metrics.failed_requests == 0
    assert metrics.error_rate_percent == 0.0
    assert metrics.database == ComponentTiming(average_ms=12.5, p95_ms=40.0)
    assert metrics.cache == ComponentTiming(average_ms=2.0, p95_ms=2.0)
    assert report.passed is True
    assert [check.name for check in report.checks] == [
        "Average response time",
        "95th percentile response time",
        "Average database query time",
        "95th percentile database query time",
        "Average cache response time",
        "95th percentile cache response time",
        "Throughput",
        "Uptime",
        "Error rate",
    ]
    assert stub.calls_for("http://x/api/health") == 15
    assert stub.calls_for("http://x/api/admin/cache/health") == 15
    assert stub.calls_for("http://x/api/admin/database/performance") == 1


def test_checker_counts_failures_against_thresholds():
    stub = StubHttpClient(
        {
            "http://x/api/health": ok(20),
            "http://x/api/auth/session": HttpResponse.transport_failed("Connection failed: refused"),
        }
    )
    report = PerformanceChecker(
        stub, paths=API_PATHS, rounds=4, throughput_requests=2, database_path=None, cache_path=None
    ).run("http://x")

    assert report.metrics.total_requests == 10
    assert report.metrics.failed_requests == 4
    failed = {check.name for check in report.checks if not check.passed}
    assert failed == {"Uptime", "Error rate"}
    assert report.passed is False


def test_evaluate_metrics_without_samples_fails_latency():
    metrics = PerformanceMetrics(latency=LatencyStats(), requests_per_second=100.0, total_requests=5, failed_requests=5)
    checks = {check.name: check for check in evaluate_metrics(metrics, PerformanceThresholds())}
    assert checks["Average response time"].passed is False
    assert checks["Average response time"].to_dict()["value"] is None
    assert checks["Throughput"].passed is True


def test_unreachable_components_are_reported_unavailable():
    stub = StubHttpClient(
        {
            "http://x/api/health": ok(20),
            "http://x/api/admin/cache/health": HttpResponse(outcome=HttpOutcome.OK, status_code=503, elapsed_ms=1),
        }
    )
    report = PerformanceChecker(stub, paths=("/api/health",), rounds=2, throughput_requests=2).run("http://x")

    assert report.metrics.database.available is False
    assert report.metrics.database.error == "No stubbed response configured"
    assert report.metrics.cache == ComponentTiming.unavailable("HTTP 503")
    checks = {check.name: check for check in report.checks}
    assert checks["Database query time"].passed is False
    assert checks["Database query time"].error == "unavailable: No stubbed response configured"
    assert checks["Cache response time"].error == "unavailable: HTTP 503"
    assert "Average database query time" not in checks
    assert report.passed is False

    payload = report.to_dict()
    assert payload["database"] == {"available": False, "error": "No stubbed response configured"}
    assert payload["checks"][2]["value"] is None


def test_database_timings_need_numeric_fields_and_meet_thresholds():
    stub = StubHttpClient({"http://x/db": ok(5, text='{"averageQueryTime": "fast"}')})
    executor = ProbeExecutor(stub, "http://x")
    assert measure_database(executor, "/db").error.startswith("Database performance response lacks")

    stub.add("http://x/db", ok(5, text="not json"))
    assert "not valid JSON" in measure_database(executor, "/db").error

    slow = PerformanceMetrics(
        latency=LatencyStats.from_samples([10]),
        requests_per_second=100.0,
        total_requests=10,
        failed_requests=0,
        database=ComponentTiming(average_ms=80.0, p95_ms=90.0),
        cache=ComponentTiming(average_ms=4.0, p95_ms=12.0),
    )
    checks = {check.name: check.passed for check in evaluate_metrics(slow, PerformanceThresholds())}
    assert checks["Average database query time"] is False
    assert checks["95th percentile database query time"] is True
    assert checks["Average cache response time"] is True
    assert checks["95th percentile cache response time"] is False


def test_cache_timing_uses_successful_samples_only():
    stub = StubHttpClient(
        {
            "http://x/cache": [
                HttpResponse.timed_out("Request timed out after 30000ms"),
                ok(3),
                ok(7),
            ]
        }
    )
    timing = measure_cache(ProbeExecutor(stub, "http://x"), "/cache", samples=4)

    assert stub.calls_for("http://x/cache") == 4
    assert timing.available is True
    assert timing.average_ms == 17 / 3
    assert timing.p95_ms == 7.0
