# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum

import httpx


class ErrorCategory(str, Enum):
    STATUS_MISMATCH = "StatusMismatch"
    TIMEOUT = "Timeout"
    TRANSPORT_ERROR = "TransportError"
    MALFORMED_HEALTH_DOCUMENT = "MalformedHealthDocument"
    UNHEALTHY_SERVICE = "UnhealthyService"

    @property
    def retryable(self) -> bool:
        """Whether a probe failing with this category is worth another attempt."""
        return self in {ErrorCategory.STATUS_MISMATCH, ErrorCategory.TIMEOUT, ErrorCategory.TRANSPORT_ERROR}


class SmokeCheckError(Exception):
    """Base class for errors that abort a run."""


class ReportWriteError(SmokeCheckError):
    """The JSON artifact could not be written."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to write report to {path}: {reason}")
        self.path = path
        self.reason = reason


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map httpx/socket exceptions raised while sending a request to ErrorCategory.

    Anything that is not a timeout is a transport failure: the request never
    produced a status code.
    """
    if isinstance(exc, (httpx.TimeoutException, socket.timeout, TimeoutError)):
        return ErrorCategory.TIMEOUT
    return ErrorCategory.TRANSPORT_ERROR


def describe_exception(exc: BaseException) -> str:
    """User-facing reason string for a transport-level failure."""
    detail = str(exc) or exc.__class__.__name__
    if isinstance(exc, (socket.gaierror, socket.herror)):
        return f"DNS resolution failure: {detail}"
    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return f"TLS/certificate issue: {detail}"
    if isinstance(exc, (httpx.ConnectError, ConnectionRefusedError)):
        return f"Connection failed: {detail}"
    if isinstance(exc, (httpx.RemoteProtocolError, ConnectionResetError)):
        return f"Connection reset: {detail}"
    return detail


__all__ = [
    "ErrorCategory",
    "ReportWriteError",
    "SmokeCheckError",
    "categorize_exception",
    "describe_exception",
]
