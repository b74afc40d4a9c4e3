"""Process-lifetime context owning the record store, stats cache and gate.

Built once by ``build_context`` before the API accepts requests and passed
to the query service explicitly. Tests build isolated instances.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass

from cryptoreader.analytics import compute_all_stats
from cryptoreader.config import AppSettings, DataSettings
from cryptoreader.data import RecordStore, load_store
from cryptoreader.logging import get_logger
from cryptoreader.models import SymbolStats
from cryptoreader.ratelimit import AdmissionGate

logger = get_logger(__name__)


@dataclass(frozen=True)
class DataSnapshot:
    """Record store plus the stats computed from it, swapped as one unit."""

    store: RecordStore
    stats: dict[str, SymbolStats]


def load_snapshot(settings: DataSettings) -> DataSnapshot:
    """Load all configured symbols and precompute their stats."""
    store = load_store(settings)
    return DataSnapshot(store=store, stats=compute_all_stats(store))


class AppContext:
    """Owns the loaded data and the shared admission gate.

    Args:
        symbols: Configured symbol set, in configured order.
        snapshot: Loaded record store and its stats.
        gate: Admission gate shared by every query.
        data_settings: Source settings used by ``reload``.
    """

    def __init__(
        self,
        symbols: list[str],
        snapshot: DataSnapshot,
        gate: AdmissionGate,
        data_settings: DataSettings | None = None,
    ) -> None:
        self.symbols: tuple[str, ...] = tuple(symbols)
        self._symbol_set = frozenset(self.symbols)
        self._snapshot = snapshot
        self.gate = gate
        self._data_settings = data_settings

    @property
    def snapshot(self) -> DataSnapshot:
        return self._snapshot

    @property
    def store(self) -> RecordStore:
        return self._snapshot.store

    @property
    def stats(self) -> dict[str, SymbolStats]:
        return self._snapshot.stats

    def is_supported(self, symbol: str) -> bool:
        """Exact membership test against the configured symbol set."""
        return symbol in self._symbol_set

    def reload(self) -> DataSnapshot:
        """Re-read the data source and recompute stats wholesale.

        The new snapshot replaces the old one in a single assignment, so
        concurrent readers see either the old pair or the new one.
        """
        if self._data_settings is None:
            raise RuntimeError("context was built without a data source")
        self._snapshot = load_snapshot(self._data_settings)
        logger.info("context_reloaded", symbols=len(self._snapshot.stats))
        return self._snapshot


def build_context(
    settings: AppSettings,
    clock: Callable[[], float] = time.monotonic,
) -> AppContext:
    """Run the one-shot startup phase: load data, compute stats, build the gate."""
    snapshot = load_snapshot(settings.data)
    gate = AdmissionGate.from_settings(settings.rate_limit, clock=clock)
    context = AppContext(
        symbols=settings.data.symbols,
        snapshot=snapshot,
        gate=gate,
        data_settings=settings.data,
    )
    logger.info(
        "context_built",
        symbols=list(context.symbols),
        with_stats=len(snapshot.stats),
        rate_limit_tokens=gate.capacity,
        rate_limit_period_seconds=gate.refill_period,
    )
    return context
