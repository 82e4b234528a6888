"""
Support and resistance extraction from swing highs and lows.
"""

import logging
from typing import Iterable

from market_signals.models.indicators import KeyLevels
from market_signals.technicals.indicators import Bars, as_bars

logger = logging.getLogger(__name__)

MIN_BARS = 10
MAX_LEVELS = 3
MIN_LEVELS = 2

SUPPORT_OFFSETS = (0.98, 0.95)
RESISTANCE_OFFSETS = (1.02, 1.05)


def fallback_levels(price: float) -> KeyLevels:
    """Synthetic levels at -2%/-5% and +2%/+5% of `price`."""
    return KeyLevels(
        support=[price * offset for offset in SUPPORT_OFFSETS],
        resistance=[price * offset for offset in RESISTANCE_OFFSETS],
    )


def find_swing_highs(highs: list[float], span: int = 2) -> list[float]:
    """Highs strictly above the `span` bars on each side."""
    swings = []
    for i in range(span, len(highs) - span):
        neighbours = highs[i - span:i] + highs[i + 1:i + span + 1]
        if all(highs[i] > other for other in neighbours):
            swings.append(highs[i])
    return swings


def find_swing_lows(lows: list[float], span: int = 2) -> list[float]:
    """Lows strictly below the `span` bars on each side."""
    swings = []
    for i in range(span, len(lows) - span):
        neighbours = lows[i - span:i] + lows[i + 1:i + span + 1]
        if all(lows[i] < other for other in neighbours):
            swings.append(lows[i])
    return swings


def _pad(levels: list[float], price: float, offsets: Iterable[float]) -> list[float]:
    if len(levels) < MIN_LEVELS:
        levels = levels + [price * offset for offset in offsets]
    return levels


def calculate_key_levels(ohlc: Bars) -> KeyLevels:
    """
    Propose up to three support and resistance levels.

    Swing highs above the last close become resistance (nearest first,
    ascending); swing lows below it become support (nearest first,
    descending). A side with fewer than two genuine levels is padded with
    the synthetic +/-2% and +/-5% levels. Fewer than 10 bars returns the
    synthetic levels only.

    Args:
        ohlc: PriceSeries or bars, oldest first (at least one bar)

    Returns:
        KeyLevels with 2-3 entries per side
    """
    bars = as_bars(ohlc)
    if not bars:
        raise ValueError("key levels need at least one bar")

    current_price = bars[-1].close

    if len(bars) < MIN_BARS:
        return fallback_levels(current_price)

    highs = [bar.high for bar in bars]
    lows = [bar.low for bar in bars]

    resistance = sorted({h for h in find_swing_highs(highs) if h > current_price})
    support = sorted(
        {low for low in find_swing_lows(lows) if low < current_price}, reverse=True
    )

    resistance = sorted(set(_pad(resistance[:MAX_LEVELS], current_price, RESISTANCE_OFFSETS)))
    support = sorted(
        set(_pad(support[:MAX_LEVELS], current_price, SUPPORT_OFFSETS)), reverse=True
    )

    levels = KeyLevels(support=support[:MAX_LEVELS], resistance=resistance[:MAX_LEVELS])

    logger.debug(f"Key levels at {current_price:.2f}: {levels.to_dict()}")

    return levels
