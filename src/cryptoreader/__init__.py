"""Crypto price reader -- CSV-backed price statistics behind a rate-limited HTTP API."""

__version__ = "0.1.0"
