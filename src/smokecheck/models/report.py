# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclasses for suite summaries and reports."""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from functools import reduce
from typing import Any

from .probe import ProbeResult


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class SuiteSummary:
    total: int = 0
    passed: int = 0
    failed: int = 0
    duration_ms: int = 0

    @property
    def success(self) -> bool:
        return self.failed == 0

    def add(self, result: ProbeResult) -> SuiteSummary:
        """Return a new summary with ``result`` counted."""
        passed = self.passed + (1 if result.passed else 0)
        total = self.total + 1
        return SuiteSummary(total=total, passed=passed, failed=total - passed, duration_ms=self.duration_ms)

    @classmethod
    def from_results(cls, results: Iterable[ProbeResult], *, duration_ms: int = 0) -> SuiteSummary:
        folded = reduce(lambda summary, result: summary.add(result), results, cls())
        return cls(total=folded.total, passed=folded.passed, failed=folded.failed, duration_ms=duration_ms)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "durationMs": self.duration_ms,
        }


@dataclass(frozen=True)
class SuiteReport:
    """Final artifact of a smoke run."""

    base_url: str
    summary: SuiteSummary
    tests: tuple[ProbeResult, ...] = ()
    timestamp: str = field(default_factory=utc_timestamp)
    gated: bool = False

    @property
    def success(self) -> bool:
        return self.summary.success

    @property
    def failures(self) -> list[ProbeResult]:
        return [result for result in self.tests if not result.passed]

    @classmethod
    def from_results(
        cls,
        base_url: str,
        results: Iterable[ProbeResult],
        *,
        duration_ms: int,
        gated: bool = False,
        timestamp: str | None = None,
    ) -> SuiteReport:
        tests = tuple(results)
        return cls(
            base_url=base_url,
            summary=SuiteSummary.from_results(tests, duration_ms=duration_ms),
            tests=tests,
            timestamp=timestamp or utc_timestamp(),
            gated=gated,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "baseUrl": self.base_url,
            "summary": self.summary.to_dict(),
            "tests": [result.to_dict() for result in self.tests],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2) + "\n"


__all__ = ["SuiteReport", "SuiteSummary", "utc_timestamp"]
