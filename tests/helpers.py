"""Test helpers shared across suites: timestamps, price files and a fake clock."""

from datetime import datetime, timezone
from pathlib import Path


def ms(year: int, month: int, day: int, hour: int = 0) -> int:
    """Unix milliseconds for a UTC wall-clock time."""
    return int(datetime(year, month, day, hour, tzinfo=timezone.utc).timestamp()) * 1000


def write_prices(directory: Path, symbol: str, rows: list[tuple], suffix: str = "_values.csv") -> Path:
    """Write a price CSV with the standard header and the given rows."""
    path = directory / f"{symbol}{suffix}"
    lines = ["timestamp,symbol,price"]
    lines.extend(",".join(str(cell) for cell in row) for row in rows)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


class FakeClock:
    """Manually advanced monotonic clock for admission gate tests."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds
