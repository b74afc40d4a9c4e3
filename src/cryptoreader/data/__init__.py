"""Price data layer -- CSV ingestion and the read-only record store."""

from cryptoreader.data.loader import load_store, parse_row, read_series
from cryptoreader.data.store import RecordStore

__all__ = ["RecordStore", "load_store", "parse_row", "read_series"]
