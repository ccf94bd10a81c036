# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
smokecheck package entrypoint.

Post-deployment validation for a web platform: an ordered smoke-test suite
with per-probe retries and a fail-fast liveness gate, plus launch-readiness
and performance checks built on the same probe executor. HTTP behavior is
abstracted behind an injectable client interface, and results are modeled
with typed dataclasses.
"""

from .config import HttpSettings, RunSettings, load_http_settings, load_run_settings
from .errors import ErrorCategory, ReportWriteError, SmokeCheckError
from .http import (
    HttpClient,
    HttpOutcome,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    RetryConfig,
    StubHttpClient,
    create_default_http_client,
    retry_until,
)
from .log import setup_logging
from .models import ProbeResult, ProbeSpec, SuiteReport, SuiteSummary
from .runtime import SmokeCheck
from .suite import DEFAULT_PROBES, PerformanceChecker, ReadinessCheck, SuiteRunner
from .version import __version__

__all__ = [
    "DEFAULT_PROBES",
    "ErrorCategory",
    "HttpClient",
    "HttpOutcome",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "PerformanceChecker",
    "ProbeResult",
    "ProbeSpec",
    "ReadinessCheck",
    "ReportWriteError",
    "RetryConfig",
    "RunSettings",
    "SmokeCheck",
    "SmokeCheckError",
    "StubHttpClient",
    "SuiteReport",
    "SuiteRunner",
    "SuiteSummary",
    "create_default_http_client",
    "load_http_settings",
    "load_run_settings",
    "retry_until",
    "setup_logging",
    "__version__",
]
