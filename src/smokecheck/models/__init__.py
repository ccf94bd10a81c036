# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for smokecheck."""

from ..http.models import Headers, HttpOutcome, HttpRequest, HttpResponse, RetryConfig
from .performance import ComponentTiming, LatencyStats, MetricCheck, PerformanceMetrics, PerformanceReport, PerformanceThresholds
from .probe import ProbeResult, ProbeSpec
from .readiness import PerformanceGrade, ReadinessReport, ReadinessStatus, ResponseTimeProfile, SecurityAudit
from .report import SuiteReport, SuiteSummary

__all__ = [
    "ComponentTiming",
    "Headers",
    "HttpOutcome",
    "HttpRequest",
    "HttpResponse",
    "LatencyStats",
    "MetricCheck",
    "PerformanceGrade",
    "PerformanceMetrics",
    "PerformanceReport",
    "PerformanceThresholds",
    "ProbeResult",
    "ProbeSpec",
    "ReadinessReport",
    "ReadinessStatus",
    "ResponseTimeProfile",
    "RetryConfig",
    "SecurityAudit",
    "SuiteReport",
    "SuiteSummary",
]
