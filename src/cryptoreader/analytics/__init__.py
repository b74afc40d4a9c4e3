"""Stats engine -- per-symbol summary records and volatility derivation."""

from cryptoreader.analytics.stats import (
    compute_all_stats,
    compute_stats,
    day_volatility,
    highest_day_volatility,
    rank_volatility,
    volatility_index,
)

__all__ = [
    "compute_all_stats",
    "compute_stats",
    "day_volatility",
    "highest_day_volatility",
    "rank_volatility",
    "volatility_index",
]
