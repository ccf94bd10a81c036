# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""smokecheck-readiness CLI: launch-readiness checklist over the smoke suite."""

from __future__ import annotations

import argparse
import sys

from ..config import resolve_base_url
from ..errors import ReportWriteError
from ..http import create_default_http_client
from ..log import setup_logging
from ..models.readiness import ReadinessReport
from ..runtime import SmokeCheck
from ..suite.report import format_summary, print_result, write_json_artifact
from .common import (
    EXIT_FAILURE,
    EXIT_OK,
    add_common_arguments,
    interrupt_on_sigterm,
    load_settings,
    print_json,
    report_interrupt,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="smokecheck-readiness", description="Launch-readiness check for a deployed web platform")
    add_common_arguments(parser)
    parser.add_argument("--retries", type=int, default=None, help="Attempts per probe (default: 3)")
    parser.add_argument("--retry-delay", type=float, default=None, help="Seconds between attempts (default: 5)")
    parser.add_argument("--ci", action="store_true", help="Force CI mode (write the JSON report)")
    parser.add_argument("--report-path", default=None, help="Where to write the JSON report in CI mode")
    return parser


def _pretty_print(report: ReadinessReport) -> None:
    for line in format_summary(report.suite):
        print(line)

    performance = report.performance
    print("")
    print(f"Readiness status: {report.status.value.upper()}")
    print(f"Performance: {performance.grade.value} (avg {round(performance.average_ms)}ms)")
    if performance.fastest and performance.slowest:
        print(f"  fastest: {performance.fastest.name} {performance.fastest.response_time_ms}ms, slowest: {performance.slowest.name} {performance.slowest.response_time_ms}ms")

    security = report.security
    if security.audited:
        print(f"Security headers: {len(security.present)} present, {len(security.missing)} missing")
    else:
        print(f"Security headers: not audited ({security.error})")
    print(f"TLS: {'enabled' if security.tls_enabled else 'disabled'}")

    if report.recommendations:
        print("Recommendations:")
        for item in report.recommendations:
            print(f"  - {item}")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    http_settings, run_settings = load_settings(args)
    base_url = resolve_base_url(args.base_url, run_settings)
    print(f"Checking launch readiness of {base_url}")

    with interrupt_on_sigterm():
        try:
            http_client = create_default_http_client(http_settings)
            with SmokeCheck(http_client=http_client, http_settings=http_settings, run_settings=run_settings) as checker:
                report = checker.readiness(base_url, listener=print_result)

            _pretty_print(report)
            if args.json:
                print_json(report)

            if run_settings.ci:
                report_path = args.report_path or run_settings.readiness_report_path
                try:
                    written = write_json_artifact(report.to_json(), report_path)
                except ReportWriteError as exc:
                    sys.stderr.write(f"{exc}\n")
                    return EXIT_FAILURE
                print(f"Report written to {written}")
        except KeyboardInterrupt:
            return report_interrupt()

    return EXIT_OK if report.ready else EXIT_FAILURE


if __name__ == "__main__":
    raise SystemExit(main())
