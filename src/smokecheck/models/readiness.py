# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Launch-readiness report models."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .report import SuiteReport, utc_timestamp


class ReadinessStatus(str, Enum):
    HEALTHY = "healthy"
    WARNING = "warning"
    CRITICAL = "critical"


class PerformanceGrade(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    ACCEPTABLE = "acceptable"
    POOR = "poor"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class TimedProbe:
    name: str
    response_time_ms: int

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "responseTimeMs": self.response_time_ms}


@dataclass(frozen=True)
class ResponseTimeProfile:
    average_ms: float = 0.0
    grade: PerformanceGrade = PerformanceGrade.UNKNOWN
    fastest: TimedProbe | None = None
    slowest: TimedProbe | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "averageResponseTimeMs": round(self.average_ms, 1),
            "grade": self.grade.value,
            "fastest": self.fastest.to_dict() if self.fastest else None,
            "slowest": self.slowest.to_dict() if self.slowest else None,
        }


@dataclass(frozen=True)
class SecurityAudit:
    """Security headers observed on the home page response."""

    audited: bool
    tls_enabled: bool
    present: dict[str, str] = field(default_factory=dict)
    missing: tuple[str, ...] = ()
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "audited": self.audited,
            "tlsEnabled": self.tls_enabled,
            "presentHeaders": dict(self.present),
            "missingHeaders": list(self.missing),
            "error": self.error,
        }


@dataclass(frozen=True)
class ReadinessReport:
    status: ReadinessStatus
    suite: SuiteReport
    performance: ResponseTimeProfile
    security: SecurityAudit
    critical_failures: int = 0
    recommendations: tuple[str, ...] = ()
    timestamp: str = field(default_factory=utc_timestamp)

    @property
    def ready(self) -> bool:
        return self.status is ReadinessStatus.HEALTHY

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "baseUrl": self.suite.base_url,
            "status": self.status.value,
            "criticalFailures": self.critical_failures,
            "smoke": self.suite.to_dict(),
            "performance": self.performance.to_dict(),
            "security": self.security.to_dict(),
            "recommendations": list(self.recommendations),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2) + "\n"


__all__ = [
    "PerformanceGrade",
    "ReadinessReport",
    "ReadinessStatus",
    "ResponseTimeProfile",
    "SecurityAudit",
    "TimedProbe",
]
