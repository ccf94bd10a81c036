# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Bounded retry combinator."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TypeVar

from ..config import load_run_settings
from .models import RetryConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")


def build_default_retry_config() -> RetryConfig:
    """Create a RetryConfig from environment-backed RunSettings."""
    return RetryConfig.from_settings(load_run_settings())


def retry_until(
    operation: Callable[[int], T],
    *,
    should_retry: Callable[[T], bool],
    retry_config: RetryConfig | None = None,
    label: str = "operation",
) -> tuple[T, int]:
    """
    Run ``operation(attempt)`` until ``should_retry`` rejects its result or attempts run out.

    Attempts are numbered from 1. Between attempts the call sleeps for the
    configured fixed delay. Returns the last result together with the attempt
    number that produced it.
    """
    cfg = retry_config or build_default_retry_config()
    max_attempts = max(1, cfg.max_attempts)

    attempt = 1
    while True:
        result = operation(attempt)
        if attempt >= max_attempts or not should_retry(result):
            return result, attempt
        logger.warning("%s failed on attempt %d/%d; retrying in %.1fs", label, attempt, max_attempts, cfg.delay)
        if cfg.delay > 0:
            time.sleep(cfg.delay)
        attempt += 1


__all__ = ["build_default_retry_config", "retry_until"]
