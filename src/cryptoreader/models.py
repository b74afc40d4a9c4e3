"""Shared data models for the crypto price reader.

All prices use Decimal. Never use float for prices or volatility indices.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class Observation:
    """One price data point for a symbol. Immutable once loaded."""

    timestamp: datetime  # timezone-aware, in the configured zone
    symbol: str
    price: Decimal

    @property
    def timestamp_ms(self) -> int:
        """Unix milliseconds, as stored in the source CSV."""
        return (self.timestamp - _EPOCH) // timedelta(milliseconds=1)


# Ordered by timestamp ascending; empty for a configured symbol that failed to load.
SymbolSeries = tuple[Observation, ...]


@dataclass(frozen=True)
class SymbolStats:
    """Summary records for a symbol's full series.

    ``min`` and ``max`` are the first observations (in timestamp order) that
    carry the lowest and highest price respectively.
    """

    oldest: Observation
    newest: Observation
    min: Observation
    max: Observation


@dataclass(frozen=True)
class VolatilityResult:
    """Normalized price range for one symbol: (max - min) / min."""

    symbol: str
    volatility_index: Decimal
