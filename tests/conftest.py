"""Shared test fixtures for the crypto price reader."""

from pathlib import Path

import pytest

from cryptoreader.config import AppSettings, DataSettings, RateLimitSettings
from cryptoreader.context import AppContext, build_context
from helpers import FakeClock, ms, write_prices

# ---------------------------------------------------------------------------
# Sample data
#
# BTC  Jan 1 100, Jan 15 00h 150, Jan 15 05h 90 (file rows out of order)
#      -> volatility (150 - 90) / 90
# ETH  Jan 1 3000, Jan 15 3300, Jan 20 4500, Feb 15 3000 -> volatility 0.5
# XRP  Jan 10 0.80, Jan 20 1.20 -> volatility 0.5 (ties with ETH)
# DOGE configured, no file on disk
# ---------------------------------------------------------------------------

SYMBOLS = ["BTC", "ETH", "XRP", "DOGE"]


@pytest.fixture
def price_dir(tmp_path: Path) -> Path:
    """Directory holding BTC, ETH and XRP price files (DOGE missing)."""
    write_prices(
        tmp_path,
        "BTC",
        [
            (ms(2022, 1, 15, 5), "BTC", "90"),
            (ms(2022, 1, 1), "BTC", "100"),
            (ms(2022, 1, 15), "BTC", "150"),
        ],
    )
    write_prices(
        tmp_path,
        "ETH",
        [
            (ms(2022, 1, 1), "ETH", "3000"),
            (ms(2022, 1, 15), "ETH", "3300"),
            (ms(2022, 1, 20), "ETH", "4500"),
            (ms(2022, 2, 15), "ETH", "3000"),
        ],
    )
    write_prices(
        tmp_path,
        "XRP",
        [
            (ms(2022, 1, 10), "XRP", "0.80"),
            (ms(2022, 1, 20), "XRP", "1.20"),
        ],
    )
    return tmp_path


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def app_settings(price_dir: Path) -> AppSettings:
    """AppSettings pointing at the sample price directory."""
    return AppSettings(
        log_level="DEBUG",
        data=DataSettings(directory=str(price_dir), symbols=SYMBOLS, timezone="UTC"),
        rate_limit=RateLimitSettings(tokens=100, refill_period_seconds=60),
    )


@pytest.fixture
def context(app_settings: AppSettings, fake_clock: FakeClock) -> AppContext:
    return build_context(app_settings, clock=fake_clock)
