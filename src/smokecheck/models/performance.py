# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Performance sampling models."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any


def percentile(sorted_samples: Sequence[int], quantile: float) -> int:
    """Nearest-rank style percentile on pre-sorted samples (index ``floor(n*q)``, clamped)."""
    if not sorted_samples:
        return 0
    index = min(int(math.floor(len(sorted_samples) * quantile)), len(sorted_samples) - 1)
    return sorted_samples[index]


@dataclass(frozen=True)
class LatencyStats:
    samples: int = 0
    average_ms: float = 0.0
    p95_ms: int = 0
    p99_ms: int = 0

    @classmethod
    def from_samples(cls, samples: Sequence[int]) -> LatencyStats:
        ordered = sorted(samples)
        if not ordered:
            return cls()
        return cls(
            samples=len(ordered),
            average_ms=sum(ordered) / len(ordered),
            p95_ms=percentile(ordered, 0.95),
            p99_ms=percentile(ordered, 0.99),
        )


@dataclass(frozen=True)
class PerformanceThresholds:
    max_average_ms: float = 200.0
    max_p95_ms: float = 500.0
    min_requests_per_second: float = 10.0
    min_uptime_percent: float = 99.9
    max_error_rate_percent: float = 0.1
    max_database_average_ms: float = 50.0
    max_database_p95_ms: float = 100.0
    max_cache_average_ms: float = 5.0
    max_cache_p95_ms: float = 10.0


@dataclass(frozen=True)
class ComponentTiming:
    """Timing of a backing component (database, cache). ``error`` is set when it could not be measured."""

    average_ms: float = 0.0
    p95_ms: float = 0.0
    error: str | None = None

    @property
    def available(self) -> bool:
        return self.error is None

    @classmethod
    def unavailable(cls, reason: str) -> ComponentTiming:
        return cls(error=reason)

    def to_dict(self) -> dict[str, Any]:
        if not self.available:
            return {"available": False, "error": self.error}
        return {"available": True, "averageMs": round(self.average_ms, 1), "p95Ms": round(self.p95_ms, 1)}


@dataclass(frozen=True)
class PerformanceMetrics:
    latency: LatencyStats
    requests_per_second: float
    total_requests: int
    failed_requests: int
    database: ComponentTiming | None = None
    cache: ComponentTiming | None = None

    @property
    def uptime_percent(self) -> float:
        if self.total_requests <= 0:
            return 0.0
        return (self.total_requests - self.failed_requests) / self.total_requests * 100

    @property
    def error_rate_percent(self) -> float:
        # Failed requests over every request sent in the sampling window.
        if self.total_requests <= 0:
            return 100.0
        return self.failed_requests / self.total_requests * 100


@dataclass(frozen=True)
class MetricCheck:
    name: str
    value: float
    threshold: float
    unit: str
    at_most: bool
    passed: bool
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "value": round(self.value, 2) if math.isfinite(self.value) else None,
            "threshold": self.threshold,
            "unit": self.unit,
            "comparison": "<=" if self.at_most else ">=",
            "passed": self.passed,
            "error": self.error,
        }


@dataclass(frozen=True)
class PerformanceReport:
    base_url: str
    metrics: PerformanceMetrics
    checks: tuple[MetricCheck, ...] = field(default_factory=tuple)

    @property
    def passed(self) -> bool:
        return all(check.passed for check in self.checks)

    def to_dict(self) -> dict[str, Any]:
        latency = self.metrics.latency
        return {
            "baseUrl": self.base_url,
            "latency": {
                "samples": latency.samples,
                "averageMs": round(latency.average_ms, 1),
                "p95Ms": latency.p95_ms,
                "p99Ms": latency.p99_ms,
            },
            "requestsPerSecond": round(self.metrics.requests_per_second, 2),
            "totalRequests": self.metrics.total_requests,
            "failedRequests": self.metrics.failed_requests,
            "uptimePercent": round(self.metrics.uptime_percent, 2),
            "errorRatePercent": round(self.metrics.error_rate_percent, 2),
            "database": self.metrics.database.to_dict() if self.metrics.database else None,
            "cache": self.metrics.cache.to_dict() if self.metrics.cache else None,
            "checks": [check.to_dict() for check in self.checks],
            "passed": self.passed,
        }


__all__ = [
    "ComponentTiming",
    "LatencyStats",
    "MetricCheck",
    "PerformanceMetrics",
    "PerformanceReport",
    "PerformanceThresholds",
    "percentile",
]
