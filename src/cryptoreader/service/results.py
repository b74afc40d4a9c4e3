"""Tagged outcome type returned by every query operation."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class QueryStatus(str, Enum):
    """Outcome of a query."""

    OK = "ok"
    RATE_LIMITED = "rate_limited"
    UNSUPPORTED_SYMBOL = "unsupported_symbol"
    INTERNAL = "internal"


@dataclass(frozen=True)
class QueryResult:
    """Result of a query: OK with a value, or a typed failure.

    An OK result may carry ``value=None``, meaning "no result" (e.g. no
    observation on the requested day).
    """

    status: QueryStatus
    value: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is QueryStatus.OK

    @classmethod
    def success(cls, value: Any) -> "QueryResult":
        return cls(QueryStatus.OK, value=value)

    @classmethod
    def rate_limited(cls) -> "QueryResult":
        return cls(QueryStatus.RATE_LIMITED, error="RATE_LIMIT_EXCEEDED")

    @classmethod
    def unsupported_symbol(cls, symbol: str) -> "QueryResult":
        return cls(QueryStatus.UNSUPPORTED_SYMBOL, value=symbol, error="UNSUPPORTED_SYMBOL")

    @classmethod
    def internal(cls, cause: BaseException) -> "QueryResult":
        return cls(QueryStatus.INTERNAL, error=f"{type(cause).__name__}: {cause}")
