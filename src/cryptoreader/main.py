"""Entry point for the crypto price reader.

Startup order:
1. AppSettings (configuration)
2. Logging setup
3. AppContext (CSV load, stats precomputation, admission gate)
4. FastAPI app served by uvicorn

Loading finishes before the server binds, so no request can observe a
partially loaded store.
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from cryptoreader.api import create_app
from cryptoreader.config import AppSettings
from cryptoreader.context import build_context
from cryptoreader.logging import get_logger, setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log server start and stop; the context is already loaded."""
    logger = get_logger("cryptoreader.main")
    context = app.state.context
    logger.info(
        "api_started",
        symbols=list(context.symbols),
        with_stats=len(context.stats),
    )
    yield
    logger.info("api_stopped")


def build_app(settings: AppSettings) -> FastAPI:
    """Load data and return the configured app (no server started)."""
    context = build_context(settings)
    return create_app(context, lifespan=lifespan)


def main() -> None:
    """Synchronous entry point."""
    settings = AppSettings()
    setup_logging(settings.log_level)
    logger = get_logger("cryptoreader.main")

    app = build_app(settings)

    logger.info(
        "starting_server",
        host=settings.server.host,
        port=settings.server.port,
    )
    uvicorn.run(
        app,
        host=settings.server.host,
        port=settings.server.port,
        log_level=settings.log_level.lower(),
        log_config=None,  # keep the structlog handlers installed above
    )


if __name__ == "__main__":
    main()
