"""Read-only in-memory store of per-symbol price series.

Built once by the loader at startup; query paths only read from it, so no
locking is needed on the data path.
"""

from collections.abc import Iterator, Mapping

from cryptoreader.models import Observation, SymbolSeries


class RecordStore:
    """Per-symbol observation series, keyed in configured-symbol order.

    Every configured symbol has an entry. A symbol whose file was missing or
    unparsable maps to an empty series rather than being absent.
    """

    def __init__(self, series: Mapping[str, SymbolSeries]) -> None:
        self._series: dict[str, SymbolSeries] = {
            symbol: tuple(rows) for symbol, rows in series.items()
        }

    @property
    def symbols(self) -> tuple[str, ...]:
        """Symbols held by the store, in insertion (configured) order."""
        return tuple(self._series)

    def get_series(self, symbol: str) -> SymbolSeries:
        """Return the series for a symbol, or an empty series if unknown."""
        return self._series.get(symbol, ())

    def as_mapping(self) -> dict[str, SymbolSeries]:
        """Return a shallow copy of the symbol -> series mapping."""
        return dict(self._series)

    def iter_observations(self) -> Iterator[Observation]:
        """Yield every observation, symbol by symbol in configured order."""
        for rows in self._series.values():
            yield from rows
