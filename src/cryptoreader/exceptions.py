"""Custom exceptions for the crypto price reader.

Only load-time failures are raised as exceptions. Query-time outcomes
(rate limiting, unsupported symbols) travel as tagged ``QueryResult`` values
instead, see ``cryptoreader.service.results``.
"""


class CryptoReaderError(Exception):
    """Base exception for all price reader errors."""


class MalformedRecordError(CryptoReaderError):
    """Raised when a CSV row cannot be parsed into an Observation.

    The loader catches this per row, logs it, and skips the row.
    """

    def __init__(self, reason: str, line_number: int | None = None) -> None:
        self.reason = reason
        self.line_number = line_number
        where = f" (line {line_number})" if line_number is not None else ""
        super().__init__(f"{reason}{where}")


class DataSourceError(CryptoReaderError):
    """Raised when a symbol's price file is missing or unreadable."""

    def __init__(self, symbol: str, path: str, reason: str) -> None:
        self.symbol = symbol
        self.path = path
        self.reason = reason
        super().__init__(f"{symbol}: cannot read {path}: {reason}")
