"""Per-symbol price statistics and volatility (pure Decimal analytics).

Core formula:
  volatility_index = (max_price - min_price) / min_price

The index is undefined when min_price == 0. Those symbols get ``None`` and
are left out of every volatility ranking; other symbols are unaffected.

Two computations exist on purpose:
  - compute_stats / compute_all_stats: global min/max over each full series,
    computed once at load time and cached.
  - day_volatility: a fresh min/max over only the observations falling on a
    given calendar day-of-month, computed per query.
"""

from collections.abc import Iterable, Sequence
from decimal import Decimal

from cryptoreader.data.store import RecordStore
from cryptoreader.logging import get_logger
from cryptoreader.models import Observation, SymbolStats, VolatilityResult

logger = get_logger(__name__)


def _min_max(observations: Sequence[Observation]) -> tuple[Observation, Observation]:
    """Return (min, max) by price; the first occurrence wins on ties."""
    lowest = highest = observations[0]
    for obs in observations[1:]:
        if obs.price < lowest.price:
            lowest = obs
        if obs.price > highest.price:
            highest = obs
    return lowest, highest


def compute_stats(series: Iterable[Observation]) -> SymbolStats | None:
    """Compute oldest/newest/min/max for one symbol's series.

    The series is sorted by timestamp (stable, so equal timestamps keep
    their original order) before min/max are picked, making tie-breaks
    deterministic across reloads.

    Returns:
        SymbolStats, or None for an empty series.
    """
    ordered = sorted(series, key=lambda o: o.timestamp)
    if not ordered:
        return None

    lowest, highest = _min_max(ordered)
    return SymbolStats(
        oldest=ordered[0],
        newest=ordered[-1],
        min=lowest,
        max=highest,
    )


def compute_all_stats(store: RecordStore) -> dict[str, SymbolStats]:
    """Compute stats for every symbol in the store, in store order.

    Symbols with an empty series are omitted from the result.
    """
    result: dict[str, SymbolStats] = {}
    for symbol in store.symbols:
        stats = compute_stats(store.get_series(symbol))
        if stats is not None:
            result[symbol] = stats

    logger.info(
        "stats_computed",
        symbols=len(result),
        missing=[s for s in store.symbols if s not in result],
    )
    return result


def volatility_index(min_price: Decimal, max_price: Decimal) -> Decimal | None:
    """Return (max - min) / min, or None when min_price is zero."""
    if min_price == 0:
        return None
    return (max_price - min_price) / min_price


def stats_volatility(symbol: str, stats: SymbolStats) -> VolatilityResult | None:
    """Derive the volatility result for a symbol from its cached stats."""
    index = volatility_index(stats.min.price, stats.max.price)
    if index is None:
        logger.debug("degenerate_volatility_skipped", symbol=symbol, scope="all")
        return None
    return VolatilityResult(symbol=symbol, volatility_index=index)


def rank_volatility(
    stats_by_symbol: dict[str, SymbolStats],
    symbols: Iterable[str],
) -> list[VolatilityResult]:
    """Rank symbols by volatility index, descending.

    ``symbols`` fixes the iteration order; the sort is stable, so symbols
    with equal indices keep that order. Symbols without stats, or with a
    zero minimum price, are left out.
    """
    results: list[VolatilityResult] = []
    for symbol in symbols:
        stats = stats_by_symbol.get(symbol)
        if stats is None:
            continue
        result = stats_volatility(symbol, stats)
        if result is not None:
            results.append(result)

    results.sort(key=lambda r: r.volatility_index, reverse=True)
    return results


def day_volatility(
    observations: Iterable[Observation],
    day: int,
) -> dict[str, Decimal]:
    """Volatility per symbol over observations on a calendar day-of-month.

    Only the day-of-month is compared, so day 15 matches the 15th of every
    month and year. Symbols appear in the order they are first seen. A
    symbol with a single matching observation scores 0; a symbol whose
    matching minimum price is zero is left out.
    """
    grouped: dict[str, list[Observation]] = {}
    for obs in observations:
        if obs.timestamp.day == day:
            grouped.setdefault(obs.symbol, []).append(obs)

    result: dict[str, Decimal] = {}
    for symbol, group in grouped.items():
        lowest, highest = _min_max(group)
        index = volatility_index(lowest.price, highest.price)
        if index is None:
            logger.debug("degenerate_volatility_skipped", symbol=symbol, scope="day", day=day)
            continue
        result[symbol] = index
    return result


def highest_day_volatility(
    observations: Iterable[Observation],
    day: int,
) -> VolatilityResult | None:
    """Return the symbol with the largest volatility on a day-of-month.

    Ties go to the symbol seen first. Returns None when no observation
    falls on that day.
    """
    best: VolatilityResult | None = None
    for symbol, index in day_volatility(observations, day).items():
        if best is None or index > best.volatility_index:
            best = VolatilityResult(symbol=symbol, volatility_index=index)
    return best
