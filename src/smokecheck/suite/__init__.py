# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Suite orchestration exports."""

from .executor import ProbeExecutor, classify_response
from .health import evaluate_health_document
from .performance import PerformanceChecker
from .probes import DEFAULT_PROBES, HEALTH_PROBE
from .readiness import ReadinessCheck
from .report import print_result, print_summary, write_report
from .runner import SuiteRunner

__all__ = [
    "DEFAULT_PROBES",
    "HEALTH_PROBE",
    "PerformanceChecker",
    "ProbeExecutor",
    "ReadinessCheck",
    "SuiteRunner",
    "classify_response",
    "evaluate_health_document",
    "print_result",
    "print_summary",
    "write_report",
]
