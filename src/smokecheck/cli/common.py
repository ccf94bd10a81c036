# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Shared CLI plumbing: common flags, settings overrides and signal handling."""

from __future__ import annotations

import argparse
import json
import signal
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from ..config import BASE_URL_ENV, DEFAULT_BASE_URL, HttpSettings, RunSettings, load_http_settings, load_run_settings

EXIT_OK = 0
EXIT_FAILURE = 1


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "base_url",
        nargs="?",
        default=None,
        help=f"Base URL to test (default: ${BASE_URL_ENV} or {DEFAULT_BASE_URL})",
    )
    parser.add_argument("--timeout", type=float, default=None, help="Per-request timeout in seconds")
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for staging/self-signed targets)",
    )
    parser.add_argument("--json", action="store_true", help="Also print the JSON report to stdout")
    parser.add_argument("--log-level", default=None, help="Logging level (default: $SMOKECHECK_LOG_LEVEL or WARNING)")


def load_settings(args: argparse.Namespace) -> tuple[HttpSettings, RunSettings]:
    """Environment-backed settings with command-line overrides applied."""
    http_settings = load_http_settings()
    run_settings = load_run_settings()
    if getattr(args, "ignore_ssl_errors", False):
        http_settings.verify_ssl = False
    if getattr(args, "timeout", None) and args.timeout > 0:
        http_settings.timeout = args.timeout
    if getattr(args, "retries", None) and args.retries > 0:
        run_settings.max_retries = args.retries
    if getattr(args, "retry_delay", None) is not None and args.retry_delay >= 0:
        run_settings.retry_delay = args.retry_delay
    if getattr(args, "ci", False):
        run_settings.ci = True
    return http_settings, run_settings


def print_json(data: Any) -> None:
    payload = data.to_dict() if hasattr(data, "to_dict") else data
    json.dump(payload, sys.stdout, indent=2)
    sys.stdout.write("\n")


def _raise_interrupt(signum: int, _frame: Any) -> None:
    raise KeyboardInterrupt(f"received signal {signum}")


@contextmanager
def interrupt_on_sigterm() -> Iterator[None]:
    """Turn SIGTERM into KeyboardInterrupt so a run aborts the same way as on Ctrl-C."""
    if threading.current_thread() is not threading.main_thread():
        yield
        return
    previous = signal.signal(signal.SIGTERM, _raise_interrupt)
    try:
        yield
    finally:
        signal.signal(signal.SIGTERM, previous)


def report_interrupt() -> int:
    sys.stderr.write("Interrupted; aborting run.\n")
    return EXIT_FAILURE


__all__ = [
    "EXIT_FAILURE",
    "EXIT_OK",
    "add_common_arguments",
    "interrupt_on_sigterm",
    "load_settings",
    "print_json",
    "report_interrupt",
]
