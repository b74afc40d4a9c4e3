"""HTTP API layer -- FastAPI app factory and /crypto routes."""

from cryptoreader.api.app import create_app

__all__ = ["create_app"]
