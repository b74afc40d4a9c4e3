"""Configuration system using pydantic-settings with environment variable loading."""

from typing import Annotated
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class DataSettings(BaseSettings):
    """Price data source settings.

    One CSV file per symbol is read from ``<directory>/<SYMBOL><file_suffix>``.
    ``symbols`` is the configured symbol set; queries for anything outside it
    are rejected as unsupported.
    """

    model_config = SettingsConfigDict(env_prefix="DATA_")

    directory: str = "data/prices"
    file_suffix: str = "_values.csv"
    symbols: Annotated[list[str], NoDecode] = ["BTC", "DOGE", "ETH", "LTC", "XRP"]
    timezone: str = "UTC"  # zone used to derive calendar day-of-month

    @field_validator("symbols", mode="before")
    @classmethod
    def split_symbols(cls, value: object) -> object:
        """Accept a comma-separated string (e.g. DATA_SYMBOLS=BTC,ETH)."""
        if isinstance(value, str):
            return [s.strip() for s in value.split(",") if s.strip()]
        return value

    @field_validator("timezone")
    @classmethod
    def check_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown timezone: {value}") from exc
        return value


class RateLimitSettings(BaseSettings):
    """Shared token bucket guarding every query route."""

    model_config = SettingsConfigDict(env_prefix="RATE_LIMIT_")

    tokens: int = Field(default=20, gt=0)
    refill_period_seconds: float = Field(default=60.0, gt=0)


class ServerSettings(BaseSettings):
    """HTTP server configuration."""

    model_config = SettingsConfigDict(env_prefix="SERVER_")

    host: str = "0.0.0.0"
    port: int = 8080


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    log_level: str = "INFO"
    data: DataSettings = DataSettings()
    rate_limit: RateLimitSettings = RateLimitSettings()
    server: ServerSettings = ServerSettings()
