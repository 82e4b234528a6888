"""
Technical indicator calculations.

All functions are pure and stateless - they take price data and return the
indicator value at the last bar. Short histories never raise; each indicator
falls back to a fixed value (last price, neutral 50, zero range, ...) that
the signal thresholds are tuned against.

Sums run left to right over Python floats so results are reproducible bit
for bit across calls and platforms.
"""

import logging
import math
from typing import Iterable, Sequence, Union

from market_signals.config import Config, get_config
from market_signals.models.indicators import BollingerBands, IndicatorBundle, MACDResult
from market_signals.models.price import PriceBar, PriceSeries

logger = logging.getLogger(__name__)

Bars = Union[PriceSeries, Sequence[PriceBar]]

MACD_FAST = 12
MACD_SLOW = 26
MACD_SIGNAL = 9

# Returned by adx() when the series is too short or has no directional range
ADX_FALLBACK = 25.0
RSI_NEUTRAL = 50.0


def _as_floats(prices: Iterable[float]) -> list[float]:
    return [float(p) for p in prices]


def as_bars(ohlc: Bars) -> list[PriceBar]:
    if isinstance(ohlc, PriceSeries):
        return ohlc.bars
    return list(ohlc)


def _check_period(period: int) -> None:
    if period <= 0:
        raise ValueError(f"period must be positive, got {period}")


# -----------------------------------------------------------------------------
# Moving Averages
# -----------------------------------------------------------------------------


def sma(prices: Iterable[float], period: int) -> float:
    """
    Simple moving average of the last `period` prices.

    With fewer than `period` prices the most recent price is returned
    (0.0 for an empty input), not the mean of what is available.
    """
    _check_period(period)
    values = _as_floats(prices)

    if len(values) < period:
        return values[-1] if values else 0.0

    return sum(values[-period:]) / period


def ema(prices: Iterable[float], period: int) -> float:
    """
    Exponential moving average with multiplier 2 / (period + 1).

    Seeded with the SMA of the first `period` prices. Returns 0.0 for an
    empty input and the mean of everything available when the input is
    shorter than `period`.
    """
    _check_period(period)
    values = _as_floats(prices)

    if not values:
        return 0.0
    if len(values) < period:
        return sma(values, len(values))

    multiplier = 2 / (period + 1)
    result = sma(values[:period], period)

    for price in values[period:]:
        result = (price - result) * multiplier + result

    return result


# -----------------------------------------------------------------------------
# RSI - Relative Strength Index
# -----------------------------------------------------------------------------


def rsi(prices: Iterable[float], period: int = 14) -> float:
    """
    Compute RSI from the last `period` bar-to-bar changes.

    Gains and losses are plain sums divided by `period` (no Wilder
    smoothing). Returns 100 when there are gains but no losses and the
    neutral 50 when the input is shorter than `period + 1` or the last
    `period` changes are all zero.

    Args:
        prices: Close prices, oldest first
        period: RSI period (default 14)

    Returns:
        RSI value in [0, 100]
    """
    _check_period(period)
    values = _as_floats(prices)

    if len(values) < period + 1:
        return RSI_NEUTRAL

    changes = [current - previous for previous, current in zip(values, values[1:])]

    gains = 0.0
    losses = 0.0
    for change in changes[-period:]:
        if change > 0:
            gains += change
        else:
            losses += abs(change)

    avg_gain = gains / period
    avg_loss = losses / period

    if avg_loss == 0:
        # Flat window: no momentum either way
        return 100.0 if avg_gain > 0 else RSI_NEUTRAL

    rs = avg_gain / avg_loss
    return 100 - (100 / (1 + rs))


# -----------------------------------------------------------------------------
# MACD - Moving Average Convergence Divergence
# -----------------------------------------------------------------------------


def macd_history(prices: Iterable[float]) -> list[float]:
    """
    MACD line value at every prefix of `prices` from 26 bars onward.

    Each entry recomputes EMA12 and EMA26 from scratch over the prefix,
    so the signal line built from it is reproducible exactly.
    """
    values = _as_floats(prices)
    history = []
    for end in range(MACD_SLOW, len(values) + 1):
        prefix = values[:end]
        history.append(ema(prefix, MACD_FAST) - ema(prefix, MACD_SLOW))
    return history


def macd(prices: Iterable[float]) -> MACDResult:
    """
    Compute MACD (12, 26, 9).

    The signal line is the EMA(9) of `macd_history`; it is 0.0 when fewer
    than 26 prices are available.
    """
    values = _as_floats(prices)

    macd_line = ema(values, MACD_FAST) - ema(values, MACD_SLOW)
    signal_line = ema(macd_history(values), MACD_SIGNAL)

    return MACDResult(
        macd_line=macd_line,
        signal_line=signal_line,
        histogram=macd_line - signal_line,
    )


# -----------------------------------------------------------------------------
# Bollinger Bands
# -----------------------------------------------------------------------------


def bollinger_bands(
    prices: Iterable[float],
    period: int = 20,
    std_dev: float = 2.0,
) -> BollingerBands:
    """
    Compute Bollinger Bands.

    Middle band is `sma(prices, period)`; the population variance (divided
    by `period`) is taken over the last `period` prices.

    Args:
        prices: Close prices, oldest first
        period: SMA period (default 20)
        std_dev: Standard deviation multiplier (default 2.0)

    Returns:
        BollingerBands with lower <= middle <= upper
    """
    _check_period(period)
    if std_dev < 0:
        raise ValueError(f"std_dev must be non-negative, got {std_dev}")

    values = _as_floats(prices)
    middle = sma(values, period)

    squared_diffs = [(p - middle) ** 2 for p in values[-period:]]
    variance = sum(squared_diffs) / period
    std = math.sqrt(variance)

    return BollingerBands(
        upper=middle + std_dev * std,
        middle=middle,
        lower=middle - std_dev * std,
    )


# -----------------------------------------------------------------------------
# ATR - Average True Range
# -----------------------------------------------------------------------------


def true_ranges(ohlc: Bars) -> list[float]:
    """True range of every bar after the first."""
    bars = as_bars(ohlc)
    ranges = []
    for previous, current in zip(bars, bars[1:]):
        ranges.append(
            max(
                current.high - current.low,
                abs(current.high - previous.close),
                abs(current.low - previous.close),
            )
        )
    return ranges


def atr(ohlc: Bars, period: int = 14) -> float:
    """
    Compute ATR as the SMA of the last `period` true ranges.

    Returns 0.0 with fewer than 2 bars. With fewer than `period` true
    ranges the SMA fallback applies (the latest true range).
    """
    _check_period(period)
    bars = as_bars(ohlc)

    if len(bars) < 2:
        return 0.0

    return sma(true_ranges(bars)[-period:], period)


# -----------------------------------------------------------------------------
# ADX - Average Directional Index (simplified)
# -----------------------------------------------------------------------------


def adx(ohlc: Bars, period: int = 14) -> float:
    """
    Simplified directional strength measure.

    Up and down moves are summed (not smoothed) over the first `period`
    bar pairs and divided by the ATR of the last `period + 1` bars. This
    is not Wilder's ADX; the signal thresholds depend on this exact form.

    Returns:
        |+DI - -DI| / (+DI + -DI) * 100, or 25.0 when the series has fewer
        than `period + 1` bars, the ATR is zero or the DI sum is zero.
    """
    _check_period(period)
    bars = as_bars(ohlc)

    if len(bars) < period + 1:
        return ADX_FALLBACK

    plus_dm = 0.0
    minus_dm = 0.0

    for i in range(1, min(period + 1, len(bars))):
        up_move = bars[i].high - bars[i - 1].high
        down_move = bars[i - 1].low - bars[i].low

        if up_move > down_move and up_move > 0:
            plus_dm += up_move
        if down_move > up_move and down_move > 0:
            minus_dm += down_move

    range_avg = atr(bars[-(period + 1):], period)
    if range_avg == 0:
        return ADX_FALLBACK

    plus_di = (plus_dm / range_avg) * 100
    minus_di = (minus_dm / range_avg) * 100
    di_sum = plus_di + minus_di

    if di_sum == 0:
        return ADX_FALLBACK

    return abs(plus_di - minus_di) / di_sum * 100


# -----------------------------------------------------------------------------
# Bundle
# -----------------------------------------------------------------------------


def calculate_all_indicators(
    ohlc: Bars,
    config: Config | None = None,
) -> IndicatorBundle:
    """
    Compute every indicator at the last bar of `ohlc`.

    Args:
        ohlc: PriceSeries or bars, oldest first
        config: Indicator periods (defaults to the cached Config)

    Returns:
        IndicatorBundle
    """
    cfg = config or get_config()
    bars = as_bars(ohlc)
    closes = [bar.close for bar in bars]

    bundle = IndicatorBundle(
        rsi=rsi(closes, cfg.rsi_period),
        macd=macd(closes),
        sma20=sma(closes, 20),
        sma50=sma(closes, 50),
        sma200=sma(closes, 200),
        ema12=ema(closes, 12),
        ema26=ema(closes, 26),
        bollinger=bollinger_bands(closes, cfg.bollinger_window, cfg.bollinger_std),
        atr=atr(bars, cfg.atr_period),
        adx=adx(bars, cfg.adx_period),
    )

    logger.debug(f"Indicators over {len(bars)} bars: {bundle.summary()}")

    return bundle
