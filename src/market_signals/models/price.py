"""
Data models for price history.

These models represent the raw OHLCV input handed to the indicator engine.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Instrument(str, Enum):
    """Supported gold instruments."""

    XAU_USD = "XAU/USD"
    GOLD_FUTURES = "GOLD_FUTURES"
    ANTAM = "ANTAM"


class Timeframe(str, Enum):
    """Prediction horizons."""

    ONE_DAY = "1D"
    ONE_WEEK = "1W"
    ONE_MONTH = "1M"
    THREE_MONTHS = "3M"


class PriceBar(BaseModel):
    """Single OHLCV bar (one trading period)."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    open: float
    high: float
    low: float
    close: float
    volume: int = Field(default=0, ge=0)


class PriceSeries(BaseModel):
    """Time series of OHLCV bars for an instrument, oldest first."""

    model_config = ConfigDict(frozen=True)

    instrument: str
    interval: str = "daily"  # "daily", "1h", "4h", etc.
    bars: list[PriceBar]

    @model_validator(mode="after")
    def check_chronological(self) -> "PriceSeries":
        """Reject bars whose timestamps go backwards."""
        for previous, current in zip(self.bars, self.bars[1:]):
            if current.timestamp < previous.timestamp:
                raise ValueError(
                    f"bars must be ordered oldest to newest: "
                    f"{current.timestamp} follows {previous.timestamp}"
                )
        return self

    def __len__(self) -> int:
        return len(self.bars)

    @property
    def is_empty(self) -> bool:
        return len(self.bars) == 0

    @property
    def closes(self) -> list[float]:
        return [bar.close for bar in self.bars]

    @property
    def last_close(self) -> Optional[float]:
        return self.bars[-1].close if self.bars else None

    def tail(self, count: int) -> "PriceSeries":
        """Return a new series holding the last `count` bars."""
        if count <= 0:
            return self.model_copy(update={"bars": []})
        return self.model_copy(update={"bars": self.bars[-count:]})


class PriceQuote(BaseModel):
    """Latest price of an instrument relative to the prior close."""

    instrument: str
    price: float
    change: float
    change_percent: float
    high: float
    low: float
    open: float
    volume: int
    timestamp: datetime
