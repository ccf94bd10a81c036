# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Default probe list for a deployed platform."""

from ..models.probe import ProbeSpec

HEALTH_PROBE = ProbeSpec(name="Health", path="/api/health", liveness=True, critical=True, health_document=True)

DEFAULT_PROBES: tuple[ProbeSpec, ...] = (
    HEALTH_PROBE,
    ProbeSpec(name="Metrics", path="/api/metrics"),
    ProbeSpec(name="Home", path="/", critical=True),
    ProbeSpec(name="Sign in", path="/auth/signin", critical=True),
    ProbeSpec(name="Sign up", path="/auth/signup"),
)

# Paths sampled by the performance check.
PUBLIC_PERFORMANCE_PATHS: tuple[str, ...] = (
    "/api/health",
    "/api/auth/session",
)
ADMIN_PERFORMANCE_PATHS: tuple[str, ...] = (
    "/api/admin/database/health",
    "/api/admin/cache/health",
)
PERFORMANCE_PATHS = PUBLIC_PERFORMANCE_PATHS + ADMIN_PERFORMANCE_PATHS

DATABASE_PERFORMANCE_PATH = "/api/admin/database/performance"
CACHE_HEALTH_PATH = "/api/admin/cache/health"

__all__ = [
    "ADMIN_PERFORMANCE_PATHS",
    "CACHE_HEALTH_PATH",
    "DATABASE_PERFORMANCE_PATH",
    "DEFAULT_PROBES",
    "HEALTH_PROBE",
    "PERFORMANCE_PATHS",
    "PUBLIC_PERFORMANCE_PATHS",
]
