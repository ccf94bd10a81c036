# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level smokecheck facade for smoke, readiness and performance runs."""

from __future__ import annotations

from collections.abc import Sequence
from contextlib import suppress

from .config import HttpSettings, RunSettings, load_http_settings, load_run_settings
from .http.client import HttpClient, create_default_http_client
from .http.models import RetryConfig
from .models import PerformanceReport, PerformanceThresholds, ProbeSpec, ReadinessReport, SuiteReport
from .suite.performance import PerformanceChecker
from .suite.probes import DEFAULT_PROBES, PUBLIC_PERFORMANCE_PATHS
from .suite.readiness import ReadinessCheck
from .suite.runner import ResultListener, SuiteRunner


class SmokeCheck:
    """
    Convenience wrapper that wires one HTTP client and one retry policy across runs.

    The client is owned by the facade and closed with it.
    """

    def __init__(
        self,
        http_client: HttpClient | None = None,
        *,
        http_settings: HttpSettings | None = None,
        run_settings: RunSettings | None = None,
    ):
        self.http_settings = http_settings or load_http_settings()
        self.run_settings = run_settings or load_run_settings()
        self.http_client = http_client or create_default_http_client(self.http_settings)
        self.retry_config = RetryConfig.from_settings(self.run_settings)

    def smoke(
        self,
        base_url: str,
        *,
        probes: Sequence[ProbeSpec] = DEFAULT_PROBES,
        gate: bool = True,
        listener: ResultListener | None = None,
    ) -> SuiteReport:
        runner = SuiteRunner(
            self.http_client,
            probes=probes,
            retry_config=self.retry_config,
            timeout=self.http_settings.timeout,
            gate=gate,
            listener=listener,
        )
        return runner.run(base_url)

    def readiness(
        self,
        base_url: str,
        *,
        probes: Sequence[ProbeSpec] = DEFAULT_PROBES,
        gate: bool = True,
        listener: ResultListener | None = None,
    ) -> ReadinessReport:
        check = ReadinessCheck(
            self.http_client,
            probes=probes,
            retry_config=self.retry_config,
            timeout=self.http_settings.timeout,
            gate=gate,
            listener=listener,
        )
        return check.run(base_url)

    def performance(
        self,
        base_url: str,
        *,
        rounds: int = 20,
        throughput_requests: int = 50,
        thresholds: PerformanceThresholds | None = None,
        include_components: bool = True,
    ) -> PerformanceReport:
        checker = PerformanceChecker(
            self.http_client,
            rounds=rounds,
            throughput_requests=throughput_requests,
            thresholds=thresholds,
            timeout=self.http_settings.timeout,
        )
        if not include_components:
            checker.paths = PUBLIC_PERFORMANCE_PATHS
            checker.database_path = None
            checker.cache_path = None
        return checker.run(base_url)

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> SmokeCheck:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()
