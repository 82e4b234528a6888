"""
Models for equity screening and scoring.
"""

from enum import Enum
from typing import Optional

from pydantic import Field

from market_signals.models.indicators import CamelModel


class ValuationLabel(str, Enum):
    """Valuation bucket from PBV and P/E."""

    CHEAP = "Cheap"
    FAIR = "Fair"
    EXPENSIVE = "Expensive"


class InvestmentCategory(str, Enum):
    """Holding style suggested by volatility and liquidity."""

    LONG_TERM = "Long-term"
    SWING_TRADE = "Swing Trade"
    DAILY_TRADE = "Daily Trade"


class RiskLevel(str, Enum):
    """Overall risk bucket."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class StockQuote(CamelModel):
    """Raw quote and ratio snapshot for a listed stock."""

    ticker: str
    name: str = ""
    sector: str = ""
    price: float
    change: float = 0.0
    change_percent: float = 0.0
    volume: int = Field(default=0, ge=0)
    market_cap: float = 0.0

    # Fundamental metrics
    der: float = Field(description="Debt to equity ratio")
    roe: float = Field(description="Return on equity, percent")
    pbv: float = Field(description="Price to book value")
    pe: float = Field(description="Price to earnings")
    eps: float = 0.0

    # Technical metrics
    beta: float = 1.0
    volatility: float = Field(default=0.0, description="Daily volatility, percent")
    avg_volume: int = Field(default=0, ge=0)

    historical_prices: list[float] = Field(default_factory=list)


class ScoredStock(StockQuote):
    """A stock quote with computed 0-100 scores and labels."""

    fundamental_score: int = Field(ge=0, le=100)
    technical_score: int = Field(ge=0, le=100)
    overall_score: int = Field(ge=0, le=100)
    valuation_label: ValuationLabel
    investment_category: InvestmentCategory
    risk_level: RiskLevel


class WeightConfig(CamelModel):
    """Slider weights; each acts as a 1 + w/100 booster."""

    safety: float = Field(default=25.0, ge=0, le=100)
    growth: float = Field(default=30.0, ge=0, le=100)
    value: float = Field(default=25.0, ge=0, le=100)
    momentum: float = Field(default=20.0, ge=0, le=100)


class ScoringBenchmarks(CamelModel):
    """Min/max ranges used to normalise each metric."""

    der_range: tuple[float, float] = (0.0, 3.0)
    roe_range: tuple[float, float] = (-20.0, 50.0)
    pbv_range: tuple[float, float] = (0.0, 10.0)
    pe_range: tuple[float, float] = (-15.0, 40.0)
    volatility_range: tuple[float, float] = (0.0, 6.0)
    beta_range: tuple[float, float] = (0.5, 2.0)
    volume_range: tuple[float, float] = (1_000_000.0, 100_000_000.0)


class StockFilter(CamelModel):
    """Screen criteria; None means no constraint."""

    sector: Optional[str] = None
    valuation_label: Optional[ValuationLabel] = None
    investment_category: Optional[InvestmentCategory] = None
    risk_level: Optional[RiskLevel] = None
    min_score: int = Field(default=0, ge=0, le=100)
