"""JSON read endpoints for prices, stats and volatility under /crypto."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from cryptoreader.models import Observation, SymbolStats, VolatilityResult
from cryptoreader.service import QueryResult, QueryService, QueryStatus

router = APIRouter()

RATE_LIMIT_MESSAGE = "Too many requests. Please try again later."


def _observation_to_dict(obs: Observation) -> dict[str, Any]:
    return {
        "timestamp": obs.timestamp.isoformat(),
        "timestamp_ms": obs.timestamp_ms,
        "symbol": obs.symbol,
        "price": str(obs.price),
    }


def _stats_to_dict(stats: SymbolStats) -> dict[str, Any]:
    return {
        "oldest": _observation_to_dict(stats.oldest),
        "newest": _observation_to_dict(stats.newest),
        "min": _observation_to_dict(stats.min),
        "max": _observation_to_dict(stats.max),
    }


def _volatility_to_dict(result: VolatilityResult) -> dict[str, Any]:
    return {
        "symbol": result.symbol,
        "volatility_index": str(result.volatility_index),
    }


def _to_response(
    result: QueryResult,
    render: Callable[[Any], Any],
    not_found: str | None = None,
) -> Response:
    """Map a QueryResult to an HTTP response.

    OK -> 200 with ``render(value)``; an OK result without a value -> 404
    when ``not_found`` is given. RATE_LIMITED -> 429 with a fixed body.
    UNSUPPORTED_SYMBOL -> 400. INTERNAL -> 500.
    """
    if result.status is QueryStatus.RATE_LIMITED:
        return PlainTextResponse(RATE_LIMIT_MESSAGE, status_code=429)

    if result.status is QueryStatus.UNSUPPORTED_SYMBOL:
        return JSONResponse(
            status_code=400,
            content={"detail": "UNSUPPORTED_SYMBOL", "symbol": result.value},
        )

    if result.status is QueryStatus.INTERNAL:
        return JSONResponse(status_code=500, content={"detail": "INTERNAL_ERROR"})

    if result.value is None and not_found is not None:
        return JSONResponse(status_code=404, content={"detail": not_found})

    return JSONResponse(content=render(result.value))


def _service(request: Request) -> QueryService:
    return request.app.state.query_service


@router.get("/all")
async def get_all_prices(request: Request) -> Response:
    """Every configured symbol's full price series."""
    return _to_response(
        _service(request).get_all_prices(),
        lambda series: {
            symbol: [_observation_to_dict(o) for o in rows]
            for symbol, rows in series.items()
        },
    )


@router.get("/all/stats")
async def get_all_stats(request: Request) -> Response:
    """Oldest/newest/min/max for every symbol with data."""
    return _to_response(
        _service(request).get_all_stats(),
        lambda stats: {symbol: _stats_to_dict(s) for symbol, s in stats.items()},
    )


@router.get("/sorted")
async def get_sorted_by_volatility(request: Request) -> Response:
    """Symbols ranked by normalized price range, highest first."""
    return _to_response(
        _service(request).rank_by_volatility(),
        lambda ranked: [_volatility_to_dict(r) for r in ranked],
    )


@router.get("/highestVolatility/{day}")
async def get_highest_volatility(day: int, request: Request) -> Response:
    """Most volatile symbol on a calendar day-of-month (any month/year)."""
    return _to_response(
        _service(request).highest_volatility_on_day(day),
        _volatility_to_dict,
        not_found="NO_DATA_FOR_DAY",
    )


@router.get("/{symbol}/prices")
async def get_prices_by_symbol(symbol: str, request: Request) -> Response:
    """One configured symbol's price series, oldest first."""
    return _to_response(
        _service(request).get_series_by_symbol(symbol),
        lambda rows: [_observation_to_dict(o) for o in rows],
    )


@router.get("/{symbol}/stats")
async def get_stats_by_symbol(symbol: str, request: Request) -> Response:
    """Oldest/newest/min/max for one configured symbol."""
    return _to_response(
        _service(request).get_stats_by_symbol(symbol),
        _stats_to_dict,
        not_found="NO_DATA_FOR_SYMBOL",
    )
