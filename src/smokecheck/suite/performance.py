# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Performance metrics check: latency percentiles, throughput, availability and backing components."""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Mapping, Sequence

from ..http.client import HttpClient
from ..http.models import HttpResponse
from ..models.performance import (
    ComponentTiming,
    LatencyStats,
    MetricCheck,
    PerformanceMetrics,
    PerformanceReport,
    PerformanceThresholds,
)
from ..models.probe import ProbeSpec
from .executor import ProbeExecutor
from .probes import CACHE_HEALTH_PATH, DATABASE_PERFORMANCE_PATH, PERFORMANCE_PATHS

logger = logging.getLogger(__name__)


def _succeeded(response: HttpResponse) -> bool:
    return response.ok and response.status_code is not None and response.status_code < 400


def _failure_reason(response: HttpResponse) -> str:
    return response.error_message or f"HTTP {response.status_code}"


def _number(value: object) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def measure_database(executor: ProbeExecutor, path: str = DATABASE_PERFORMANCE_PATH) -> ComponentTiming:
    """Read the query timings the platform reports about its own database."""
    response = executor.send(ProbeSpec(name="Database performance", path=path))
    if not _succeeded(response):
        reason = _failure_reason(response)
        logger.warning("Could not measure database performance: %s", reason)
        return ComponentTiming.unavailable(reason)

    try:
        data = json.loads(response.text or "")
    except ValueError as exc:
        return ComponentTiming.unavailable(f"Database performance response was not valid JSON: {exc}")
    if not isinstance(data, Mapping):
        return ComponentTiming.unavailable("Database performance response was not a JSON object")

    average = _number(data.get("averageQueryTime"))
    p95 = _number(data.get("p95QueryTime"))
    if average is None or p95 is None:
        return ComponentTiming.unavailable("Database performance response lacks averageQueryTime/p95QueryTime")
    return ComponentTiming(average_ms=average, p95_ms=p95)


def measure_cache(executor: ProbeExecutor, path: str = CACHE_HEALTH_PATH, *, samples: int = 10) -> ComponentTiming:
    """Time repeated requests to the cache health endpoint."""
    spec = ProbeSpec(name="Cache health", path=path)
    timings: list[int] = []
    last_error = "no samples taken"
    for _ in range(max(1, samples)):
        response = executor.send(spec)
        if _succeeded(response) and response.elapsed_ms is not None:
            timings.append(response.elapsed_ms)
        else:
            last_error = _failure_reason(response)
            logger.debug("Cache sample failed: %s", last_error)

    if not timings:
        logger.warning("Could not measure cache performance: %s", last_error)
        return ComponentTiming.unavailable(last_error)
    stats = LatencyStats.from_samples(timings)
    return ComponentTiming(average_ms=stats.average_ms, p95_ms=float(stats.p95_ms))


def _component_checks(label: str, timing: ComponentTiming | None, max_average: float, max_p95: float) -> tuple[MetricCheck, ...]:
    if timing is None:
        return ()
    if not timing.available:
        return (
            MetricCheck(
                name=f"{label} time",
                value=float("inf"),
                threshold=max_average,
                unit="ms",
                at_most=True,
                passed=False,
                error=f"unavailable: {timing.error}",
            ),
        )
    return (
        MetricCheck(f"Average {label.lower()} time", timing.average_ms, max_average, "ms", True, timing.average_ms <= max_average),
        MetricCheck(f"95th percentile {label.lower()} time", timing.p95_ms, max_p95, "ms", True, timing.p95_ms <= max_p95),
    )


def evaluate_metrics(metrics: PerformanceMetrics, thresholds: PerformanceThresholds) -> tuple[MetricCheck, ...]:
    def at_most(name: str, value: float, limit: float, unit: str) -> MetricCheck:
        return MetricCheck(name=name, value=value, threshold=limit, unit=unit, at_most=True, passed=value <= limit)

    def at_least(name: str, value: float, limit: float, unit: str) -> MetricCheck:
        return MetricCheck(name=name, value=value, threshold=limit, unit=unit, at_most=False, passed=value >= limit)

    latency = metrics.latency
    # Without a single timed sample the latency checks cannot pass.
    average = latency.average_ms if latency.samples else float("inf")
    p95 = float(latency.p95_ms) if latency.samples else float("inf")
    return (
        at_most("Average response time", average, thresholds.max_average_ms, "ms"),
        at_most("95th percentile response time", p95, thresholds.max_p95_ms, "ms"),
        *_component_checks("Database query", metrics.database, thresholds.max_database_average_ms, thresholds.max_database_p95_ms),
        *_component_checks("Cache response", metrics.cache, thresholds.max_cache_average_ms, thresholds.max_cache_p95_ms),
        at_least("Throughput", metrics.requests_per_second, thresholds.min_requests_per_second, "req/s"),
        at_least("Uptime", metrics.uptime_percent, thresholds.min_uptime_percent, "%"),
        at_most("Error rate", metrics.error_rate_percent, thresholds.max_error_rate_percent, "%"),
    )


class PerformanceChecker:
    """
    Samples endpoints sequentially and evaluates the results against thresholds.

    Passing ``None`` for ``database_path`` or ``cache_path`` leaves that
    component out of the report.
    """

    def __init__(
        self,
        http_client: HttpClient,
        *,
        paths: Sequence[str] = PERFORMANCE_PATHS,
        rounds: int = 20,
        throughput_requests: int = 50,
        throughput_path: str = "/api/health",
        database_path: str | None = DATABASE_PERFORMANCE_PATH,
        cache_path: str | None = CACHE_HEALTH_PATH,
        cache_samples: int = 10,
        thresholds: PerformanceThresholds | None = None,
        timeout: float | None = None,
    ):
        self.http_client = http_client
        self.paths = tuple(paths)
        self.rounds = max(1, rounds)
        self.throughput_requests = max(1, throughput_requests)
        self.throughput_path = throughput_path
        self.database_path = database_path
        self.cache_path = cache_path
        self.cache_samples = cache_samples
        self.thresholds = thresholds or PerformanceThresholds()
        self.timeout = timeout

    def measure(self, base_url: str) -> PerformanceMetrics:
        executor = ProbeExecutor(self.http_client, base_url, timeout=self.timeout)
        samples: list[int] = []
        total = 0
        failed = 0

        specs = [ProbeSpec(name=path, path=path) for path in self.paths]
        for _ in range(self.rounds):
            for spec in specs:
                response = executor.send(spec)
                total += 1
                if not _succeeded(response):
                    failed += 1
                    logger.debug("Sample %s failed: %s", spec.path, response.error_message or response.status_code)
                if response.ok and response.elapsed_ms is not None:
                    samples.append(response.elapsed_ms)

        database = measure_database(executor, self.database_path) if self.database_path else None
        cache = measure_cache(executor, self.cache_path, samples=self.cache_samples) if self.cache_path else None

        throughput_spec = ProbeSpec(name="throughput", path=self.throughput_path)
        started = time.monotonic()
        for _ in range(self.throughput_requests):
            response = executor.send(throughput_spec)
            total += 1
            if not _succeeded(response):
                failed += 1
        elapsed = max(time.monotonic() - started, 1e-3)

        return PerformanceMetrics(
            latency=LatencyStats.from_samples(samples),
            requests_per_second=self.throughput_requests / elapsed,
            total_requests=total,
            failed_requests=failed,
            database=database,
            cache=cache,
        )

    def run(self, base_url: str) -> PerformanceReport:
        metrics = self.measure(base_url)
        return PerformanceReport(
            base_url=base_url.rstrip("/"),
            metrics=metrics,
            checks=evaluate_metrics(metrics, self.thresholds),
        )


__all__ = ["PerformanceChecker", "evaluate_metrics", "measure_cache", "measure_database"]
