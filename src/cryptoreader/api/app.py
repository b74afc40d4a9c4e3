"""FastAPI application factory for the price reader API."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI

from cryptoreader.api import routes
from cryptoreader.context import AppContext
from cryptoreader.service import QueryService


def create_app(context: AppContext, lifespan: Any = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        context: Loaded process-lifetime context. Data must be loaded before
                 the app is created so no request sees a partial load.
        lifespan: Optional async context manager for startup/shutdown events.
                  Used by main.py to log the server lifecycle.

    Returns:
        FastAPI app with the /crypto routes and the query service on app.state.
    """
    app = FastAPI(
        title="Crypto Price Reader",
        lifespan=lifespan,
    )

    app.state.context = context
    app.state.query_service = QueryService(context)

    app.include_router(routes.router, prefix="/crypto")

    return app
