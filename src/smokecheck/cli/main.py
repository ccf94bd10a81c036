# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""smokecheck CLI: run the smoke suite and exit 0 iff every probe passed."""

from __future__ import annotations

import argparse
import sys

from ..config import resolve_base_url
from ..errors import ReportWriteError
from ..http import create_default_http_client
from ..log import setup_logging
from ..runtime import SmokeCheck
from ..suite.report import print_result, print_summary, write_report
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
    parser = argparse.ArgumentParser(prog="smokecheck", description="Smoke-test a deployed web platform")
    add_common_arguments(parser)
    parser.add_argument("--retries", type=int, default=None, help="Attempts per probe (default: 3)")
    parser.add_argument("--retry-delay", type=float, default=None, help="Seconds between attempts (default: 5)")
    parser.add_argument(
        "--no-gate",
        action="store_true",
        help="Keep probing after the liveness probe fails",
    )
    parser.add_argument("--ci", action="store_true", help="Force CI mode (write the JSON report)")
    parser.add_argument("--report-path", default=None, help="Where to write the JSON report in CI mode")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    http_settings, run_settings = load_settings(args)
    base_url = resolve_base_url(args.base_url, run_settings)
    print(f"Running smoke tests against {base_url}")

    with interrupt_on_sigterm():
        try:
            http_client = create_default_http_client(http_settings)
            with SmokeCheck(http_client=http_client, http_settings=http_settings, run_settings=run_settings) as checker:
                report = checker.smoke(base_url, gate=not args.no_gate, listener=print_result)

            print_summary(report)
            if args.json:
                print_json(report)

            if run_settings.ci:
                report_path = args.report_path or run_settings.report_path
                try:
                    written = write_report(report, report_path)
                except ReportWriteError as exc:
                    sys.stderr.write(f"{exc}\n")
                    return EXIT_FAILURE
                print(f"Report written to {written}")
        except KeyboardInterrupt:
            return report_interrupt()

    return EXIT_OK if report.success else EXIT_FAILURE


if __name__ == "__main__":
    raise SystemExit(main())
