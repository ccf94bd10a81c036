# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation (the probe executor)."""

from __future__ import annotations

import logging
import time

import httpx

from ..config import HttpSettings, load_http_settings
from ..errors import ErrorCategory, categorize_exception, describe_exception
from .client import HttpClient
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


class _DeadlineExceeded(Exception):
    """The whole-request deadline passed while the body was still streaming."""


def _elapsed_ms(started: float) -> int:
    return int(round((time.monotonic() - started) * 1000))


class HttpxClient(HttpClient):
    """
    Synchronous httpx client wrapper.

    One call is one bounded request: the timeout applies to every httpx phase
    and, as a deadline, to the request as a whole including the body. Failures
    are returned as tagged responses, never raised.
    """

    def __init__(self, settings: HttpSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_http_settings()
        self._client = client or httpx.Client(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers or {})
        headers.setdefault("User-Agent", self.settings.user_agent)
        timeout = request.timeout if request.timeout is not None else self.settings.timeout
        follow_redirects = request.allow_redirects if request.allow_redirects is not None else self.settings.allow_redirects
        max_body_bytes = self.settings.max_body_bytes
        if max_body_bytes <= 0:
            max_body_bytes = 16 * 1024 * 1024

        started = time.monotonic()
        deadline = started + timeout
        try:
            with self._client.stream(
                request.method,
                request.url,
                headers=headers,
                content=request.body,
                timeout=timeout,
                follow_redirects=follow_redirects,
            ) as resp:
                content = bytearray()
                for chunk in resp.iter_bytes():
                    if time.monotonic() > deadline:
                        raise _DeadlineExceeded()
                    if not chunk:
                        continue
                    remaining = max_body_bytes - len(content)
                    if remaining <= 0:
                        break
                    content.extend(chunk[:remaining])

                encoding = resp.encoding or "utf-8"
                try:
                    text = bytes(content).decode(encoding, errors="replace")
                except LookupError:
                    text = bytes(content).decode("utf-8", errors="replace")

            return HttpResponse.from_httpx(resp, content=bytes(content), text=text, elapsed_ms=_elapsed_ms(started))
        except _DeadlineExceeded:
            elapsed = _elapsed_ms(started)
            return HttpResponse.timed_out(f"Request timed out after {int(timeout * 1000)}ms", elapsed_ms=elapsed, url=request.url)
        except Exception as exc:  # noqa: BLE001
            elapsed = _elapsed_ms(started)
            logger.debug("%s %s failed after %dms: %r", request.method, request.url, elapsed, exc)
            if categorize_exception(exc) is ErrorCategory.TIMEOUT:
                return HttpResponse.timed_out(f"Request timed out after {int(timeout * 1000)}ms", elapsed_ms=elapsed, url=request.url)
            return HttpResponse.transport_failed(describe_exception(exc), elapsed_ms=elapsed, url=request.url)

    def close(self) -> None:
        self._client.close()
