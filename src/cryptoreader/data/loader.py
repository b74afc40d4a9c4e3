"""CSV ingestion for per-symbol price files.

Each configured symbol is read from ``<directory>/<SYMBOL><suffix>``. Files
have a header row followed by ``timestamp,symbol,price`` rows, where
timestamp is Unix milliseconds.

Failures are isolated: a bad row is skipped, and a missing or unreadable
file leaves that symbol with an empty series. Nothing here aborts startup.
"""

import csv
from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation
from pathlib import Path
from zoneinfo import ZoneInfo

from cryptoreader.config import DataSettings
from cryptoreader.data.store import RecordStore
from cryptoreader.exceptions import DataSourceError, MalformedRecordError
from cryptoreader.logging import get_logger
from cryptoreader.models import Observation, SymbolSeries

logger = get_logger(__name__)

_EXPECTED_COLUMNS = 3
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_row(
    row: list[str],
    *,
    expected_symbol: str,
    tz: ZoneInfo | timezone = timezone.utc,
    line_number: int | None = None,
) -> Observation:
    """Parse one CSV row into an Observation.

    Raises:
        MalformedRecordError: short row, non-integer timestamp, symbol not
            matching the file, or a price that is non-numeric, non-finite
            or negative.
    """
    if len(row) < _EXPECTED_COLUMNS:
        raise MalformedRecordError(
            f"expected {_EXPECTED_COLUMNS} columns, got {len(row)}", line_number
        )

    raw_ts, raw_symbol, raw_price = (cell.strip() for cell in row[:_EXPECTED_COLUMNS])

    try:
        millis = int(raw_ts)
        timestamp = (_EPOCH + timedelta(milliseconds=millis)).astimezone(tz)
    except (ValueError, OverflowError, OSError) as exc:
        raise MalformedRecordError(f"invalid timestamp {raw_ts!r}", line_number) from exc

    if raw_symbol != expected_symbol:
        raise MalformedRecordError(
            f"symbol {raw_symbol!r} does not match file symbol {expected_symbol!r}",
            line_number,
        )

    try:
        price = Decimal(raw_price)
    except InvalidOperation as exc:
        raise MalformedRecordError(f"invalid price {raw_price!r}", line_number) from exc
    if not price.is_finite() or price < 0:
        raise MalformedRecordError(f"invalid price {raw_price!r}", line_number)

    return Observation(timestamp=timestamp, symbol=raw_symbol, price=price)


def read_series(
    symbol: str,
    path: Path,
    tz: ZoneInfo | timezone = timezone.utc,
) -> SymbolSeries:
    """Read one symbol's CSV file, skipping malformed rows.

    The returned series is sorted by timestamp ascending; the sort is stable
    so rows sharing a timestamp keep file order.

    Raises:
        DataSourceError: the file is missing, unreadable, or not valid CSV.
            Undecodable bytes are replaced, so they fail only their own row.
    """
    observations: list[Observation] = []
    skipped = 0

    try:
        with path.open(newline="", encoding="utf-8", errors="replace") as handle:
            reader = csv.reader(handle)
            next(reader, None)  # header
            for row in reader:
                if not row or all(not cell.strip() for cell in row):
                    continue
                try:
                    observations.append(
                        parse_row(
                            row,
                            expected_symbol=symbol,
                            tz=tz,
                            line_number=reader.line_num,
                        )
                    )
                except MalformedRecordError as exc:
                    skipped += 1
                    logger.warning(
                        "malformed_record_skipped",
                        symbol=symbol,
                        path=str(path),
                        line=exc.line_number,
                        reason=exc.reason,
                    )
    except (OSError, csv.Error) as exc:
        raise DataSourceError(symbol, str(path), str(exc)) from exc

    observations.sort(key=lambda o: o.timestamp)

    logger.debug(
        "csv_loaded",
        symbol=symbol,
        path=str(path),
        rows=len(observations),
        skipped=skipped,
    )
    return tuple(observations)


def symbol_path(settings: DataSettings, symbol: str) -> Path:
    """Return the CSV path for a symbol under the configured directory."""
    return Path(settings.directory) / f"{symbol}{settings.file_suffix}"


def load_store(settings: DataSettings) -> RecordStore:
    """Load every configured symbol into a RecordStore.

    One-shot startup phase. A symbol whose file cannot be read is logged and
    stored with an empty series; the remaining symbols still load.
    """
    tz = ZoneInfo(settings.timezone)
    series: dict[str, SymbolSeries] = {}

    for symbol in settings.symbols:
        path = symbol_path(settings, symbol)
        try:
            series[symbol] = read_series(symbol, path, tz)
        except DataSourceError as exc:
            logger.error(
                "symbol_load_failed",
                symbol=symbol,
                path=exc.path,
                reason=exc.reason,
            )
            series[symbol] = ()

    logger.info(
        "record_store_loaded",
        symbols=len(series),
        observations=sum(len(rows) for rows in series.values()),
        empty=[s for s, rows in series.items() if not rows],
    )
    return RecordStore(series)
