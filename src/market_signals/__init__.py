"""Market Signals - technical indicators, trading signals and key levels."""

from .analyzer import Analyzer, analyze_series
from .config import Config, SignalConfig, get_config, get_signal_config
from .models import (
    AnalysisReport,
    IndicatorBundle,
    Instrument,
    KeyLevels,
    PriceBar,
    PriceSeries,
    Signal,
    SignalResult,
)
from .technicals import calculate_all_indicators, calculate_key_levels, generate_signal

__version__ = "0.1.0"

__all__ = [
    "Analyzer",
    "analyze_series",
    "Config",
    "SignalConfig",
    "get_config",
    "get_signal_config",
    "AnalysisReport",
    "IndicatorBundle",
    "Instrument",
    "KeyLevels",
    "PriceBar",
    "PriceSeries",
    "Signal",
    "SignalResult",
    "calculate_all_indicators",
    "calculate_key_levels",
    "generate_signal",
]
