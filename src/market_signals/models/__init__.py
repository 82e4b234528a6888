"""Data models for market signals."""

from market_signals.models.fundamentals import (
    FundamentalIndicators,
    PredictionRequest,
)
from market_signals.models.indicators import (
    BollingerBands,
    IndicatorBundle,
    KeyLevels,
    MACDResult,
    Signal,
    SignalResult,
)
from market_signals.models.price import (
    Instrument,
    PriceBar,
    PriceQuote,
    PriceSeries,
    Timeframe,
)
from market_signals.models.report import AnalysisReport
from market_signals.models.stock import (
    InvestmentCategory,
    RiskLevel,
    ScoredStock,
    ScoringBenchmarks,
    StockFilter,
    StockQuote,
    ValuationLabel,
    WeightConfig,
)

__all__ = [
    # Price models
    "Instrument",
    "PriceBar",
    "PriceQuote",
    "PriceSeries",
    "Timeframe",
    # Indicator models
    "BollingerBands",
    "IndicatorBundle",
    "KeyLevels",
    "MACDResult",
    "Signal",
    "SignalResult",
    # Report
    "AnalysisReport",
    # Fundamentals
    "FundamentalIndicators",
    "PredictionRequest",
    # Stock models
    "InvestmentCategory",
    "RiskLevel",
    "ScoredStock",
    "ScoringBenchmarks",
    "StockFilter",
    "StockQuote",
    "ValuationLabel",
    "WeightConfig",
]
