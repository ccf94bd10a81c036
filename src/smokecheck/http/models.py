# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used by the probe executor."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..config import RunSettings
from ..errors import ErrorCategory

Headers = dict[str, str]


class HttpOutcome(str, Enum):
    """How a single request ended."""

    OK = "ok"
    TIMED_OUT = "timed_out"
    TRANSPORT_FAILED = "transport_failed"


@dataclass
class HttpRequest:
    """Normalized request representation consumed by HttpClient implementations."""

    url: str
    method: str = "GET"
    headers: Headers | None = None
    body: bytes | str | None = None
    timeout: float | None = None
    allow_redirects: bool | None = None


@dataclass
class HttpResponse:
    """
    Tagged result of one request.

    ``outcome`` is ``OK`` whenever a full response was received, whatever its
    status code. ``TIMED_OUT`` and ``TRANSPORT_FAILED`` never carry a status.
    """

    outcome: HttpOutcome
    status_code: int | None = None
    reason_phrase: str = ""
    headers: Headers = field(default_factory=dict)
    text: str = ""
    content: bytes = b""
    url: str | None = None
    elapsed_ms: int | None = None
    error_message: str | None = None
    error_type: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is HttpOutcome.OK

    @property
    def error_category(self) -> ErrorCategory | None:
        if self.outcome is HttpOutcome.TIMED_OUT:
            return ErrorCategory.TIMEOUT
        if self.outcome is HttpOutcome.TRANSPORT_FAILED:
            return ErrorCategory.TRANSPORT_ERROR
        return None

    def header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None

    @classmethod
    def from_httpx(cls, resp: Any, *, content: bytes, text: str, elapsed_ms: int) -> HttpResponse:
        """Wrap a fully read httpx response."""
        return cls(
            outcome=HttpOutcome.OK,
            status_code=resp.status_code,
            reason_phrase=getattr(resp, "reason_phrase", "") or "",
            headers={str(k).lower(): str(v) for k, v in resp.headers.items()},
            text=text,
            content=content,
            url=str(resp.url),
            elapsed_ms=elapsed_ms,
        )

    @classmethod
    def timed_out(cls, message: str, *, elapsed_ms: int | None = None, url: str | None = None) -> HttpResponse:
        return cls(
            outcome=HttpOutcome.TIMED_OUT,
            error_message=message,
            error_type=ErrorCategory.TIMEOUT.value,
            elapsed_ms=elapsed_ms,
            url=url,
        )

    @classmethod
    def transport_failed(cls, message: str, *, elapsed_ms: int | None = None, url: str | None = None) -> HttpResponse:
        return cls(
            outcome=HttpOutcome.TRANSPORT_FAILED,
            error_message=message,
            error_type=ErrorCategory.TRANSPORT_ERROR.value,
            elapsed_ms=elapsed_ms,
            url=url,
        )


@dataclass
class RetryConfig:
    """Retry policy for probes: fixed number of attempts with a pause in between."""

    max_attempts: int = 3
    delay: float = 5.0

    @classmethod
    def from_settings(cls, settings: RunSettings) -> RetryConfig:
        """Build a retry config from the shared RunSettings."""
        return cls(
            max_attempts=max(1, settings.max_retries),
            delay=max(0.0, settings.retry_delay),
        )
