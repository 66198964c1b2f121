"""Sliding-window throttling over the lookup attempt ledger."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Optional

from storefront.stores.attempts import AttemptStore

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RateLimiter:
    """Counts attempts per (scope, source address) inside a trailing window.

    The attempt is committed before the window is counted, so a caller always
    sees its own attempt plus every attempt committed ahead of it.
    """

    def __init__(self, attempts: AttemptStore, clock: Callable[[], datetime] = utc_now) -> None:
        self._attempts = attempts
        self._clock = clock

    def record_and_check(
        self,
        scope: str,
        source_address: str,
        window_seconds: int,
        ceiling: int,
        token_fingerprint: Optional[str] = None,
    ) -> bool:
        """Record an attempt and report whether it is within the ceiling."""

        now = self._clock()
        self._attempts.record(scope, source_address, now, token_fingerprint)
        window_start = now - timedelta(seconds=window_seconds)
        count = self._attempts.count_since(scope, source_address, window_start)
        if count > ceiling:
            logger.info(
                "Rate limit exceeded for %s (%d attempts in %ds)",
                scope,
                count,
                window_seconds,
            )
            return False
        return True


__all__ = ["RateLimiter", "utc_now"]
