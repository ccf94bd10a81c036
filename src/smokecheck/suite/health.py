# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Interpretation of health-endpoint response bodies."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..errors import ErrorCategory

HEALTHY_SENTINELS = frozenset({"healthy", "ok"})


class MalformedHealthDocument(ValueError):
    """The body is not JSON or lacks the fields a health document needs."""


@dataclass(frozen=True)
class HealthVerdict:
    healthy: bool
    status: str | None = None
    failing_checks: tuple[str, ...] = ()
    error: str | None = None
    error_type: str | None = None


def _is_healthy(value: Any) -> bool:
    return isinstance(value, str) and value.strip().lower() in HEALTHY_SENTINELS


def parse_health_document(text: str) -> tuple[str, dict[str, str]]:
    """
    Parse a health body into ``(status, {check_name: check_status})``.

    Raises MalformedHealthDocument when the body is not a JSON object with a
    string ``status``, or when ``checks`` is present but is not a mapping of
    ``{"status": str}`` entries.
    """
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise MalformedHealthDocument(f"Health response was not valid JSON: {exc}") from exc
    if not isinstance(data, Mapping):
        raise MalformedHealthDocument("Health response was not a JSON object")

    status = data.get("status")
    if not isinstance(status, str):
        raise MalformedHealthDocument("Health response lacks a string 'status' field")

    raw_checks = data.get("checks")
    if raw_checks is None:
        return status, {}
    if not isinstance(raw_checks, Mapping):
        raise MalformedHealthDocument("Health response 'checks' is not an object")

    checks: dict[str, str] = {}
    for name, entry in raw_checks.items():
        if not isinstance(entry, Mapping) or not isinstance(entry.get("status"), str):
            raise MalformedHealthDocument(f"Health check '{name}' lacks a string 'status' field")
        checks[str(name)] = entry["status"]
    return status, checks


def evaluate_health_document(text: str) -> HealthVerdict:
    """Healthy only if the top-level status and every subsystem check are healthy."""
    try:
        status, checks = parse_health_document(text)
    except MalformedHealthDocument as exc:
        return HealthVerdict(
            healthy=False,
            error=str(exc),
            error_type=ErrorCategory.MALFORMED_HEALTH_DOCUMENT.value,
        )

    failing = tuple(name for name, check_status in checks.items() if not _is_healthy(check_status))
    if _is_healthy(status) and not failing:
        return HealthVerdict(healthy=True, status=status)

    reason = f"Service reported status '{status}'"
    if failing:
        reason += f"; failing checks: {', '.join(f'{name}={checks[name]}' for name in failing)}"
    return HealthVerdict(
        healthy=False,
        status=status,
        failing_checks=failing,
        error=reason,
        error_type=ErrorCategory.UNHEALTHY_SERVICE.value,
    )


__all__ = [
    "HEALTHY_SENTINELS",
    "HealthVerdict",
    "MalformedHealthDocument",
    "evaluate_health_document",
    "parse_health_document",
]
