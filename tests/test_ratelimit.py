"""Tests for the AdmissionGate token bucket.

Time is driven by a FakeClock, so refill behaviour is exact and no test sleeps.
"""

import threading

import pytest

from cryptoreader.config import RateLimitSettings
from cryptoreader.ratelimit import AdmissionGate
from helpers import FakeClock


@pytest.fixture
def gate(fake_clock: FakeClock) -> AdmissionGate:
    return AdmissionGate(capacity=3, refill_period=60.0, clock=fake_clock)


class TestAdmissionGate:
    def test_burst_of_capacity_then_denied(self, gate: AdmissionGate) -> None:
        assert [gate.try_admit() for _ in range(3)] == [True, True, True]
        assert gate.try_admit() is False

    def test_full_refill_after_one_period(self, gate: AdmissionGate, fake_clock: FakeClock) -> None:
        for _ in range(3):
            gate.try_admit()
        assert gate.try_admit() is False

        fake_clock.advance(60.0)

        assert [gate.try_admit() for _ in range(3)] == [True, True, True]
        assert gate.try_admit() is False

    def test_refill_is_continuous(self, gate: AdmissionGate, fake_clock: FakeClock) -> None:
        """One token accrues every refill_period / capacity seconds."""
        for _ in range(3):
            gate.try_admit()

        fake_clock.advance(10.0)
        assert gate.try_admit() is False
        assert gate.available_tokens() == 0.5

        fake_clock.advance(10.0)
        assert gate.try_admit() is True
        assert gate.try_admit() is False

    def test_refill_capped_at_capacity(self, gate: AdmissionGate, fake_clock: FakeClock) -> None:
        fake_clock.advance(10_000.0)
        assert gate.available_tokens() == 3.0
        assert [gate.try_admit() for _ in range(4)] == [True, True, True, False]

    def test_denial_does_not_consume(self, gate: AdmissionGate, fake_clock: FakeClock) -> None:
        for _ in range(3):
            gate.try_admit()
        for _ in range(5):
            assert gate.try_admit() is False

        fake_clock.advance(20.0)
        assert gate.try_admit() is True

    def test_clock_going_backwards_does_not_drain(self, gate: AdmissionGate, fake_clock: FakeClock) -> None:
        fake_clock.advance(-5.0)
        assert gate.available_tokens() == 3.0

    def test_concurrent_callers_never_overspend(self, fake_clock: FakeClock) -> None:
        gate = AdmissionGate(capacity=25, refill_period=60.0, clock=fake_clock)
        admitted: list[bool] = []
        lock = threading.Lock()

        def worker() -> None:
            for _ in range(10):
                ok = gate.try_admit()
                with lock:
                    admitted.append(ok)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sum(admitted) == 25
        assert len(admitted) == 80
        assert gate.available_tokens() >= 0

    def test_from_settings(self, fake_clock: FakeClock) -> None:
        gate = AdmissionGate.from_settings(
            RateLimitSettings(tokens=5, refill_period_seconds=1.5), clock=fake_clock
        )
        assert gate.capacity == 5
        assert gate.refill_period == 1.5
        assert gate.available_tokens() == 5.0

    @pytest.mark.parametrize("capacity, period", [(0, 60.0), (-1, 60.0), (5, 0.0), (5, -1.0)])
    def test_rejects_invalid_budget(self, capacity: int, period: float) -> None:
        with pytest.raises(ValueError):
            AdmissionGate(capacity=capacity, refill_period=period)
