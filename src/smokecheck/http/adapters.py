# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-process HttpClient implementations for dry runs and tests."""

from __future__ import annotations

from collections.abc import Iterable

from .client import HttpClient
from .models import HttpRequest, HttpResponse


class StubHttpClient(HttpClient):
    """
    Deterministic, programmable HttpClient.

    Each URL maps to one response or to a sequence of responses consumed in
    order; the last entry of a sequence repeats once the others are used up.
    """

    def __init__(self, responses: dict[str, HttpResponse | Iterable[HttpResponse]] | None = None):
        self._responses: dict[str, list[HttpResponse]] = {}
        self.requests: list[HttpRequest] = []
        self.closed = False
        for url, response in (responses or {}).items():
            self.add(url, response)

    def add(self, url: str, response: HttpResponse | Iterable[HttpResponse]) -> None:
        if isinstance(response, HttpResponse):
            self._responses[url] = [response]
        else:
            self._responses[url] = list(response)

    def calls_for(self, url: str) -> int:
        return sum(1 for request in self.requests if request.url == url)

    def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        queue = self._responses.get(request.url)
        if not queue:
            return HttpResponse.transport_failed("No stubbed response configured", url=request.url)
        if len(queue) > 1:
            return queue.pop(0)
        return queue[0]

    def close(self) -> None:
        self.closed = True
