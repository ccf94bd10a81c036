# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Run a probe suite: retries per probe, liveness gate, summary fold."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence

from ..http.client import HttpClient
from ..http.models import RetryConfig
from ..http.retry import build_default_retry_config, retry_until
from ..models.probe import ProbeResult, ProbeSpec
from ..models.report import SuiteReport
from .executor import ProbeExecutor
from .probes import DEFAULT_PROBES

logger = logging.getLogger(__name__)

ResultListener = Callable[[ProbeResult], None]


class SuiteRunner:
    """
    Drives every ProbeSpec to a final ProbeResult, strictly in list order.

    Retries are sequential per probe. When a liveness probe fails after its
    retries and ``gate`` is enabled, the remaining probes are skipped and only
    the results gathered so far are reported.
    """

    def __init__(
        self,
        http_client: HttpClient,
        *,
        probes: Sequence[ProbeSpec] = DEFAULT_PROBES,
        retry_config: RetryConfig | None = None,
        timeout: float | None = None,
        gate: bool = True,
        listener: ResultListener | None = None,
    ):
        self.http_client = http_client
        self.probes = tuple(probes)
        self.retry_config = retry_config or build_default_retry_config()
        self.timeout = timeout
        self.gate = gate
        self.listener = listener

    def run_probe(self, executor: ProbeExecutor, spec: ProbeSpec) -> ProbeResult:
        result, _ = retry_until(
            lambda attempt: executor.attempt(spec, attempt),
            should_retry=lambda outcome: outcome.retryable,
            retry_config=self.retry_config,
            label=f"Probe {spec.name!r}",
        )
        return result

    def run(self, base_url: str) -> SuiteReport:
        executor = ProbeExecutor(self.http_client, base_url, timeout=self.timeout)
        started = time.monotonic()
        results: list[ProbeResult] = []
        gated = False

        for spec in self.probes:
            result = self.run_probe(executor, spec)
            results.append(result)
            if self.listener is not None:
                self.listener(result)
            if spec.liveness and not result.passed and self.gate:
                skipped = len(self.probes) - len(results)
                logger.warning("Liveness probe %r failed; skipping %d remaining probe(s)", spec.name, skipped)
                gated = True
                break

        duration_ms = int(round((time.monotonic() - started) * 1000))
        return SuiteReport.from_results(executor.base_url, results, duration_ms=duration_ms, gated=gated)


__all__ = ["ResultListener", "SuiteRunner"]
