"""
Technical analysis module.

Provides indicator calculations, the rule-based signal and key levels.
"""

from market_signals.technicals.indicators import (
    adx,
    as_bars,
    atr,
    bollinger_bands,
    calculate_all_indicators,
    ema,
    macd,
    macd_history,
    rsi,
    sma,
    true_ranges,
)
from market_signals.technicals.levels import (
    calculate_key_levels,
    fallback_levels,
    find_swing_highs,
    find_swing_lows,
)
from market_signals.technicals.signals import (
    SIGNAL_RULES,
    generate_signal,
    score_to_signal,
)

__all__ = [
    # Indicator functions
    "adx",
    "as_bars",
    "atr",
    "bollinger_bands",
    "calculate_all_indicators",
    "ema",
    "macd",
    "macd_history",
    "rsi",
    "sma",
    "true_ranges",
    # Key levels
    "calculate_key_levels",
    "fallback_levels",
    "find_swing_highs",
    "find_swing_lows",
    # Signal
    "SIGNAL_RULES",
    "generate_signal",
    "score_to_signal",
]
