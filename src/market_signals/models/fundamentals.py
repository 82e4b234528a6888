"""
Models for macro fundamentals and the prediction service payload.
"""

from pydantic import Field

from market_signals.models.indicators import CamelModel, IndicatorBundle
from market_signals.models.price import Timeframe


class FundamentalIndicators(CamelModel):
    """Macro snapshot relevant to gold."""

    usd_index: float = Field(description="DXY - inverse correlation with gold")
    usd_index_change: float
    fed_funds_rate: float = Field(description="Higher rates = lower gold")
    real_yield: float = Field(description="10Y Treasury minus inflation")
    inflation: float = Field(description="CPI, percent")
    gold_silver_ratio: float
    vix: float = Field(description="Fear index - higher = bullish gold")


class PredictionRequest(CamelModel):
    """Request payload for the external prediction service."""

    instrument: str
    current_price: float
    technical_data: IndicatorBundle
    fundamental_data: FundamentalIndicators
    recent_prices: list[float]
    timeframe: Timeframe
