# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""smokecheck-perf CLI: sample response times and check them against thresholds."""

from __future__ import annotations

import argparse

from ..config import resolve_base_url
from ..http import create_default_http_client
from ..log import setup_logging
from ..models.performance import PerformanceReport, PerformanceThresholds
from ..runtime import SmokeCheck
from .common import EXIT_FAILURE, EXIT_OK, add_common_arguments, interrupt_on_sigterm, load_settings, print_json, report_interrupt

_DEFAULT_THRESHOLDS = PerformanceThresholds()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="smokecheck-perf", description="Performance metrics check for a deployed web platform")
    add_common_arguments(parser)
    parser.add_argument("--rounds", type=int, default=20, help="Sampling rounds over the endpoint list")
    parser.add_argument("--throughput-requests", type=int, default=50, help="Requests sent for the throughput measurement")
    parser.add_argument("--max-average-ms", type=float, default=_DEFAULT_THRESHOLDS.max_average_ms)
    parser.add_argument("--max-p95-ms", type=float, default=_DEFAULT_THRESHOLDS.max_p95_ms)
    parser.add_argument("--min-rps", type=float, default=_DEFAULT_THRESHOLDS.min_requests_per_second)
    parser.add_argument("--min-uptime", type=float, default=_DEFAULT_THRESHOLDS.min_uptime_percent)
    parser.add_argument("--max-error-rate", type=float, default=_DEFAULT_THRESHOLDS.max_error_rate_percent)
    parser.add_argument("--max-db-average-ms", type=float, default=_DEFAULT_THRESHOLDS.max_database_average_ms)
    parser.add_argument("--max-db-p95-ms", type=float, default=_DEFAULT_THRESHOLDS.max_database_p95_ms)
    parser.add_argument("--max-cache-average-ms", type=float, default=_DEFAULT_THRESHOLDS.max_cache_average_ms)
    parser.add_argument("--max-cache-p95-ms", type=float, default=_DEFAULT_THRESHOLDS.max_cache_p95_ms)
    parser.add_argument(
        "--skip-admin",
        action="store_true",
        help="Leave out the database and cache measurements (admin endpoints)",
    )
    return parser


def _format_value(value: float, unit: str) -> str:
    if value == float("inf"):
        return "n/a"
    if unit == "ms":
        return f"{round(value)}{unit}"
    return f"{value:.2f}{unit}"


def _pretty_print(report: PerformanceReport) -> None:
    metrics = report.metrics
    print(f"Samples: {metrics.latency.samples} timed, {metrics.total_requests} total, {metrics.failed_requests} failed")
    for check in report.checks:
        marker = "[PASS]" if check.passed else "[FAIL]"
        comparison = "<=" if check.at_most else ">="
        if check.error:
            print(f"{marker} {check.name}: {check.error}")
            continue
        print(f"{marker} {check.name}: {_format_value(check.value, check.unit)} (required {comparison} {_format_value(check.threshold, check.unit)})")
    print("All performance requirements met" if report.passed else "Some performance requirements not met")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    http_settings, run_settings = load_settings(args)
    base_url = resolve_base_url(args.base_url, run_settings)
    thresholds = PerformanceThresholds(
        max_average_ms=args.max_average_ms,
        max_p95_ms=args.max_p95_ms,
        min_requests_per_second=args.min_rps,
        min_uptime_percent=args.min_uptime,
        max_error_rate_percent=args.max_error_rate,
        max_database_average_ms=args.max_db_average_ms,
        max_database_p95_ms=args.max_db_p95_ms,
        max_cache_average_ms=args.max_cache_average_ms,
        max_cache_p95_ms=args.max_cache_p95_ms,
    )
    print(f"Checking performance metrics of {base_url}")

    with interrupt_on_sigterm():
        try:
            http_client = create_default_http_client(http_settings)
            with SmokeCheck(http_client=http_client, http_settings=http_settings, run_settings=run_settings) as checker:
                report = checker.performance(
                    base_url,
                    rounds=args.rounds,
                    throughput_requests=args.throughput_requests,
                    thresholds=thresholds,
                    include_components=not args.skip_admin,
                )
            _pretty_print(report)
            if args.json:
                print_json(report)
        except KeyboardInterrupt:
            return report_interrupt()

    return EXIT_OK if report.passed else EXIT_FAILURE


if __name__ == "__main__":
    raise SystemExit(main())
