# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for smokecheck."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_BASE_URL = "http://localhost:3000"
DEFAULT_USER_AGENT = f"smokecheck/{__version__}"
DEFAULT_REPORT_PATH = "smoke-test-report.json"
DEFAULT_READINESS_REPORT_PATH = "launch-readiness-report.json"
BASE_URL_ENV = "SMOKECHECK_BASE_URL"
CI_ENV = "CI"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


@dataclass
class HttpSettings:
    """HTTP client defaults."""

    timeout: float = 30.0
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = False
    verify_ssl: bool = True
    max_body_bytes: int = 16 * 1024 * 1024

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _float_env("SMOKECHECK_HTTP_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        max_body_bytes = _int_env("SMOKECHECK_HTTP_MAX_BODY_BYTES", cls.max_body_bytes)
        if max_body_bytes <= 0:
            max_body_bytes = cls.max_body_bytes
        return cls(
            timeout=timeout,
            user_agent=_str_env("SMOKECHECK_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("SMOKECHECK_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("SMOKECHECK_VERIFY_SSL", cls.verify_ssl),
            max_body_bytes=max_body_bytes,
        )


@dataclass
class RunSettings:
    """Suite-level defaults: target, retry policy and CI artifact handling."""

    base_url: str = DEFAULT_BASE_URL
    max_retries: int = 3
    retry_delay: float = 5.0
    ci: bool = False
    report_path: str = DEFAULT_REPORT_PATH
    readiness_report_path: str = DEFAULT_READINESS_REPORT_PATH

    @classmethod
    def from_env(cls) -> "RunSettings":
        """Create settings from environment variables (evaluated at call time)."""
        max_retries = _int_env("SMOKECHECK_MAX_RETRIES", cls.max_retries)
        if max_retries < 1:
            max_retries = cls.max_retries
        retry_delay = _float_env("SMOKECHECK_RETRY_DELAY", cls.retry_delay)
        if retry_delay < 0:
            retry_delay = cls.retry_delay
        return cls(
            base_url=_str_env(BASE_URL_ENV, cls.base_url),
            max_retries=max_retries,
            retry_delay=retry_delay,
            ci=_bool_env(CI_ENV, cls.ci),
            report_path=_str_env("SMOKECHECK_REPORT_PATH", cls.report_path),
            readiness_report_path=_str_env("SMOKECHECK_READINESS_REPORT_PATH", cls.readiness_report_path),
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()


def load_run_settings() -> RunSettings:
    """Load suite settings from environment with sensible defaults."""
    return RunSettings.from_env()


def resolve_base_url(cli_value: str | None, settings: RunSettings | None = None) -> str:
    """Pick the target URL: CLI argument, then environment, then the local default."""
    if cli_value and cli_value.strip():
        return cli_value.strip().rstrip("/")
    settings = settings or load_run_settings()
    return settings.base_url.rstrip("/")
