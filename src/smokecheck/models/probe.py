# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe definition and per-attempt result models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..errors import ErrorCategory


@dataclass(frozen=True)
class ProbeSpec:
    """
    A single configured HTTP check.

    - ``liveness`` marks a fail-fast gate: if it fails, the rest of the suite is skipped.
    - ``critical`` marks an endpoint whose failure makes the deployment not launch-ready.
    - ``health_document`` makes the runner interpret the body as a health document.
    """

    name: str
    path: str
    method: str = "GET"
    expected_status: int = 200
    liveness: bool = False
    critical: bool = False
    health_document: bool = False

    def url_for(self, base_url: str) -> str:
        path = self.path if self.path.startswith("/") else f"/{self.path}"
        return base_url.rstrip("/") + path


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of one probe attempt. A retry produces a new instance."""

    name: str
    path: str
    method: str
    expected_status: int
    actual_status: int | None
    response_time_ms: int | None
    passed: bool
    attempt: int
    error: str | None = None
    error_type: str | None = None

    @property
    def error_category(self) -> ErrorCategory | None:
        if self.error_type is None:
            return None
        try:
            return ErrorCategory(self.error_type)
        except ValueError:
            return None

    @property
    def retryable(self) -> bool:
        category = self.error_category
        return not self.passed and category is not None and category.retryable

    def failure_reason(self) -> str:
        """Human-readable reason for a failed probe."""
        if self.error:
            return self.error
        return f"expected {self.expected_status}, got {self.actual_status}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "method": self.method,
            "expectedStatus": self.expected_status,
            "actualStatus": self.actual_status,
            "responseTimeMs": self.response_time_ms,
            "passed": self.passed,
            "attempt": self.attempt,
            "error": self.error,
            "errorType": self.error_type,
        }
