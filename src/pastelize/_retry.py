"""Retry logic with exponential backoff."""
from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """Configuration for automatic retry behaviour."""

    max_retries: int = 2
    base_delay: float = 1.0
    max_delay: float = 30.0
    backoff_multiplier: float = 2.0
    jitter: bool = True
    sleep: Callable[[float], None] = field(default=time.sleep, compare=False, repr=False)


def calculate_delay(attempt: int, policy: RetryPolicy) -> float:
    """Exponential backoff clamped to *policy.max_delay*, with optional jitter."""
    delay = min(
        policy.base_delay * (policy.backoff_multiplier ** attempt),
        policy.max_delay,
    )
    if policy.jitter:
        delay *= random.uniform(0.5, 1.5)
    return delay


def with_retry(fn: Callable[[], T], policy: RetryPolicy) -> T:
    """Execute *fn*, retrying retryable errors according to *policy*.

    Errors without a ``retryable`` attribute are not retried.
    """
    attempt = 0
    while True:
        try:
            return fn()
        except Exception as exc:
            if attempt >= policy.max_retries or not getattr(exc, "retryable", False):
                raise
            retry_after: float | None = getattr(exc, "retry_after", None)
            if retry_after is not None and retry_after > policy.max_delay:
                raise
            delay = retry_after if retry_after is not None else calculate_delay(attempt, policy)
            logger.warning("Retrying after %s (attempt %d, %.1fs)", exc, attempt + 1, delay)
            policy.sleep(delay)
            attempt += 1
