"""Shared admission gate: a continuously refilled token bucket.

Every query draws one token before touching any data. Refill is computed
lazily on each check from a monotonic clock (no timer thread):

  tokens = min(capacity, tokens + elapsed * capacity / refill_period)

Burst size equals ``capacity``; sustained throughput approaches
``capacity / refill_period``. Denials are immediate, there is no waiting.
"""

import threading
import time
from collections.abc import Callable

from cryptoreader.config import RateLimitSettings


class AdmissionGate:
    """Process-wide token bucket with greedy (continuous) refill.

    Args:
        capacity: Maximum tokens held; also the initial balance.
        refill_period: Seconds to refill from empty to full.
        clock: Monotonic time source in seconds. Injectable for tests.
    """

    def __init__(
        self,
        capacity: int,
        refill_period: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        if refill_period <= 0:
            raise ValueError("refill_period must be positive")

        self.capacity = capacity
        self.refill_period = refill_period
        self._clock = clock
        self._tokens = float(capacity)
        self._last_refill = clock()
        self._lock = threading.Lock()

    @classmethod
    def from_settings(
        cls,
        settings: RateLimitSettings,
        clock: Callable[[], float] = time.monotonic,
    ) -> "AdmissionGate":
        return cls(settings.tokens, settings.refill_period_seconds, clock=clock)

    def _refill(self) -> None:
        # caller holds self._lock
        now = self._clock()
        elapsed = now - self._last_refill
        if elapsed > 0:
            accrued = elapsed * self.capacity / self.refill_period
            self._tokens = min(float(self.capacity), self._tokens + accrued)
        self._last_refill = now

    def try_admit(self) -> bool:
        """Consume one token if available. Never blocks."""
        with self._lock:
            self._refill()
            if self._tokens >= 1.0:
                self._tokens -= 1.0
                return True
            return False

    def available_tokens(self) -> float:
        """Current balance after refill, for diagnostics."""
        with self._lock:
            self._refill()
            return self._tokens
