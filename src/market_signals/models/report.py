"""
Output model combining everything computed for one instrument.
"""

from datetime import datetime

from pydantic import Field

from market_signals.models.indicators import (
    CamelModel,
    IndicatorBundle,
    KeyLevels,
    SignalResult,
)
from market_signals.models.price import PriceQuote


class AnalysisReport(CamelModel):
    """Indicators, signal and key levels at the latest bar."""

    instrument: str
    quote: PriceQuote
    bars_analyzed: int = Field(ge=1)
    indicators: IndicatorBundle
    signal: SignalResult
    key_levels: KeyLevels
    rescaled: bool = False
    generated_at: datetime = Field(default_factory=datetime.now)

    def to_summary(self) -> str:
        """One-line summary for terminals and logs."""
        support = self.key_levels.support[0] if self.key_levels.support else None
        resistance = self.key_levels.resistance[0] if self.key_levels.resistance else None
        levels = ""
        if support is not None and resistance is not None:
            levels = f" | S1 {support:.2f} / R1 {resistance:.2f}"
        return (
            f"{self.instrument} {self.quote.price:.2f} "
            f"({self.quote.change_percent:+.2f}%) | "
            f"{self.signal.signal.value} ({self.signal.score}) | "
            f"{self.indicators.summary()}{levels}"
        )
