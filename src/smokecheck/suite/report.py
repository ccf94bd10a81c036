# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Console rendering and CI artifact persistence for suite reports."""

from __future__ import annotations

import logging
from pathlib import Path

from ..errors import ReportWriteError
from ..models.probe import ProbeResult
from ..models.report import SuiteReport

logger = logging.getLogger(__name__)

PASS_MARKER = "[PASS]"
FAIL_MARKER = "[FAIL]"


def format_result_line(result: ProbeResult) -> str:
    """One console line per completed probe."""
    timing = f"{result.response_time_ms}ms" if result.response_time_ms is not None else "-"
    retries = f", attempt {result.attempt}" if result.attempt > 1 else ""
    if result.passed:
        return f"{PASS_MARKER} {result.name} {result.method} {result.path} -> {result.actual_status} ({timing}{retries})"
    return f"{FAIL_MARKER} {result.name} {result.method} {result.path}: {result.failure_reason()} ({timing}{retries})"


def print_result(result: ProbeResult) -> None:
    print(format_result_line(result), flush=True)


def format_summary(report: SuiteReport) -> list[str]:
    summary = report.summary
    lines = [
        "",
        f"Smoke test summary for {report.base_url}",
        f"Total: {summary.total}  Passed: {summary.passed}  Failed: {summary.failed}  Duration: {summary.duration_ms}ms",
    ]
    if report.gated:
        lines.append("Liveness check failed; remaining probes were skipped.")
    failures = report.failures
    if failures:
        lines.append("Failed probes:")
        for result in failures:
            lines.append(f"- {result.name}: {result.failure_reason()}")
    lines.append("Result: PASSED" if report.success else "Result: FAILED")
    return lines


def print_summary(report: SuiteReport) -> None:
    for line in format_summary(report):
        print(line)


def write_json_artifact(text: str, path: str | Path) -> Path:
    """Write ``text`` to ``path``, overwriting. Raises ReportWriteError on failure."""
    target = Path(path)
    try:
        if target.parent and not target.parent.exists():
            target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise ReportWriteError(str(target), exc.strerror or str(exc)) from exc
    logger.info("Wrote report to %s", target)
    return target


def write_report(report: SuiteReport, path: str | Path) -> Path:
    return write_json_artifact(report.to_json(), path)


__all__ = [
    "FAIL_MARKER",
    "PASS_MARKER",
    "format_result_line",
    "format_summary",
    "print_result",
    "print_summary",
    "write_json_artifact",
    "write_report",
]
