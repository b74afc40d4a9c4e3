"""Query layer -- rate-limited read operations returning tagged results."""

from cryptoreader.service.query_service import QueryService
from cryptoreader.service.results import QueryResult, QueryStatus

__all__ = ["QueryResult", "QueryService", "QueryStatus"]
