"""Query service: the analytical read operations behind the HTTP API.

Every operation draws a token from the admission gate first. A denial
returns RATE_LIMITED before any data is touched, so rejected calls cost
O(1) regardless of data size.
"""

from collections.abc import Callable
from typing import Any

from cryptoreader.analytics import highest_day_volatility, rank_volatility
from cryptoreader.context import AppContext
from cryptoreader.logging import get_logger
from cryptoreader.models import SymbolSeries, SymbolStats, VolatilityResult
from cryptoreader.service.results import QueryResult

logger = get_logger(__name__)


class QueryService:
    """Rate-limited read access to prices, stats and volatility rankings.

    Args:
        context: Process-lifetime context holding the loaded data and gate.
    """

    def __init__(self, context: AppContext) -> None:
        self._context = context

    def _run(self, operation: str, fn: Callable[[], Any]) -> QueryResult:
        if not self._context.gate.try_admit():
            logger.info("rate_limited", operation=operation)
            return QueryResult.rate_limited()
        try:
            return fn()
        except Exception as exc:
            logger.exception("query_failed", operation=operation)
            return QueryResult.internal(exc)

    def get_all_stats(self) -> QueryResult:
        """Symbol -> SymbolStats for every symbol with data, configured order."""

        def _all_stats() -> QueryResult:
            stats: dict[str, SymbolStats] = self._context.stats
            return QueryResult.success(dict(stats))

        return self._run("get_all_stats", _all_stats)

    def get_all_prices(self) -> QueryResult:
        """Symbol -> series for every configured symbol (possibly empty)."""
        return self._run(
            "get_all_prices",
            lambda: QueryResult.success(self._context.store.as_mapping()),
        )

    def rank_by_volatility(self) -> QueryResult:
        """Volatility results sorted by index descending.

        Ties keep configured-symbol order.
        """

        def _rank() -> QueryResult:
            snapshot = self._context.snapshot
            ranked: list[VolatilityResult] = rank_volatility(
                snapshot.stats, self._context.symbols
            )
            return QueryResult.success(ranked)

        return self._run("rank_by_volatility", _rank)

    def highest_volatility_on_day(self, day: int) -> QueryResult:
        """Most volatile symbol over observations on a calendar day-of-month.

        Min/max are recomputed from that day's observations only, not taken
        from the precomputed full-range stats. The value is None when no
        observation falls on ``day``.
        """

        def _leader() -> QueryResult:
            best = highest_day_volatility(self._context.store.iter_observations(), day)
            return QueryResult.success(best)

        return self._run("highest_volatility_on_day", _leader)

    def get_series_by_symbol(self, symbol: str) -> QueryResult:
        """Series for a configured symbol; empty if its file failed to load."""

        def _series() -> QueryResult:
            if not self._context.is_supported(symbol):
                return QueryResult.unsupported_symbol(symbol)
            series: SymbolSeries = self._context.store.get_series(symbol)
            return QueryResult.success(series)

        return self._run("get_series_by_symbol", _series)

    def get_stats_by_symbol(self, symbol: str) -> QueryResult:
        """Precomputed stats for a configured symbol; None if it has no data."""

        def _stats() -> QueryResult:
            if not self._context.is_supported(symbol):
                return QueryResult.unsupported_symbol(symbol)
            return QueryResult.success(self._context.stats.get(symbol))

        return self._run("get_stats_by_symbol", _stats)
