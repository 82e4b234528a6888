"""
Models for computed technical analysis results.

These models represent derived data produced by the indicator engine,
the signal generator and the key-level extractor. They serialize to
camelCase JSON for presentation layers and the prediction service.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Frozen model that dumps camelCase aliases and accepts either spelling."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class MACDResult(CamelModel):
    """MACD indicator values."""

    macd_line: float
    signal_line: float
    histogram: float


class BollingerBands(CamelModel):
    """Bollinger Bands values."""

    upper: float
    middle: float
    lower: float

    @property
    def width(self) -> float:
        return self.upper - self.lower


class IndicatorBundle(CamelModel):
    """Snapshot of every indicator at the last bar of a series."""

    rsi: float = Field(ge=0, le=100)
    macd: MACDResult
    sma20: float
    sma50: float
    sma200: float
    ema12: float
    ema26: float
    bollinger: BollingerBands
    atr: float = Field(ge=0)
    adx: float

    def summary(self) -> str:
        """Generate compact technical notes string."""
        parts = [
            f"RSI {self.rsi:.0f}",
            f"MACD {self.macd.histogram:+.2f}",
            f"ATR {self.atr:.2f}",
            f"ADX {self.adx:.0f}",
        ]
        if self.sma50 > self.sma200:
            parts.append("golden cross")
        elif self.sma50 < self.sma200:
            parts.append("death cross")
        return ", ".join(parts)


class Signal(str, Enum):
    """Discrete trading signal."""

    STRONG_BUY = "Strong Buy"
    BUY = "Buy"
    NEUTRAL = "Neutral"
    SELL = "Sell"
    STRONG_SELL = "Strong Sell"


class SignalResult(CamelModel):
    """Signal, 0-100 score and the reasons in rule evaluation order."""

    signal: Signal
    score: int = Field(ge=0, le=100)
    reasons: list[str] = Field(default_factory=list)

    def top_reasons(self, count: int = 4) -> list[str]:
        """Reasons a compact display shows."""
        return self.reasons[:count]


class KeyLevels(CamelModel):
    """Support levels below and resistance levels above the current price."""

    support: list[float] = Field(default_factory=list)  # nearest first, descending
    resistance: list[float] = Field(default_factory=list)  # nearest first, ascending

    def to_dict(self) -> dict[str, float]:
        """Return levels as a flat S1/S2/R1/R2 mapping."""
        levels = {f"S{i}": level for i, level in enumerate(self.support, start=1)}
        levels.update(
            {f"R{i}": level for i, level in enumerate(self.resistance, start=1)}
        )
        return levels
