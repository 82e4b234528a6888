"""
Rule-based trading signal.

Starts from a neutral base score and applies an ordered list of rules to
an IndicatorBundle and the current price. Each rule contributes at most one
(points, reason) pair; the first matching branch inside a rule wins. The
final score is clamped to 0-100 and mapped to a Signal:

- >= 70 Strong Buy
- >= 55 Buy
- >= 45 Neutral
- >= 30 Sell
- otherwise Strong Sell
"""

import logging
from typing import Callable, Optional

from market_signals.config import SignalConfig, get_signal_config
from market_signals.models.indicators import IndicatorBundle, Signal, SignalResult

logger = logging.getLogger(__name__)

RuleOutcome = Optional[tuple[int, str]]
Rule = Callable[[IndicatorBundle, float, SignalConfig], RuleOutcome]


def rsi_rule(bundle: IndicatorBundle, price: float, cfg: SignalConfig) -> RuleOutcome:
    """Oversold/overbought first, then the milder lower/upper ranges."""
    value = bundle.rsi

    if value < cfg.rsi_oversold:
        return cfg.rsi_extreme_points, (
            f"RSI oversold (<{cfg.rsi_oversold:g}) - bullish reversal potential"
        )
    elif value > cfg.rsi_overbought:
        return -cfg.rsi_extreme_points, (
            f"RSI overbought (>{cfg.rsi_overbought:g}) - bearish reversal potential"
        )
    elif value < cfg.rsi_lower_range:
        return cfg.rsi_mild_points, "RSI in lower range - mild bullish"
    elif value > cfg.rsi_upper_range:
        return -cfg.rsi_mild_points, "RSI in upper range - mild bearish"
    return None


def macd_rule(bundle: IndicatorBundle, price: float, cfg: SignalConfig) -> RuleOutcome:
    result = bundle.macd

    if result.histogram > 0 and result.macd_line > result.signal_line:
        return cfg.macd_points, "MACD bullish crossover"
    elif result.histogram < 0 and result.macd_line < result.signal_line:
        return -cfg.macd_points, "MACD bearish crossover"
    return None


def moving_average_rule(
    bundle: IndicatorBundle, price: float, cfg: SignalConfig
) -> RuleOutcome:
    if price > bundle.sma20 and price > bundle.sma50:
        return cfg.moving_average_points, "Price above SMA20 & SMA50 - uptrend"
    elif price < bundle.sma20 and price < bundle.sma50:
        return -cfg.moving_average_points, "Price below SMA20 & SMA50 - downtrend"
    return None


def cross_rule(bundle: IndicatorBundle, price: float, cfg: SignalConfig) -> RuleOutcome:
    """Golden/death cross of SMA50 against SMA200."""
    if bundle.sma50 > bundle.sma200:
        return cfg.cross_points, "Golden cross (SMA50 > SMA200) - long-term bullish"
    elif bundle.sma50 < bundle.sma200:
        return -cfg.cross_points, "Death cross (SMA50 < SMA200) - long-term bearish"
    return None


def bollinger_rule(
    bundle: IndicatorBundle, price: float, cfg: SignalConfig
) -> RuleOutcome:
    """Band touches; a zero-width band (flat prices) says nothing."""
    bands = bundle.bollinger
    if bands.width <= 0:
        return None

    if price <= bands.lower:
        return cfg.bollinger_points, "Price at lower Bollinger Band - oversold"
    elif price >= bands.upper:
        return -cfg.bollinger_points, "Price at upper Bollinger Band - overbought"
    return None


def adx_rule(bundle: IndicatorBundle, price: float, cfg: SignalConfig) -> RuleOutcome:
    """Informational only, never moves the score."""
    if bundle.adx > cfg.adx_trend_threshold:
        return 0, f"Strong trend detected (ADX: {bundle.adx:.1f})"
    return 0, "Weak trend / consolidation phase"


SIGNAL_RULES: tuple[Rule, ...] = (
    rsi_rule,
    macd_rule,
    moving_average_rule,
    cross_rule,
    bollinger_rule,
    adx_rule,
)


def score_to_signal(score: int, config: SignalConfig | None = None) -> Signal:
    """Map a 0-100 score to a Signal (inclusive lower bounds)."""
    cfg = config or get_signal_config()

    if score >= cfg.strong_buy_min:
        return Signal.STRONG_BUY
    elif score >= cfg.buy_min:
        return Signal.BUY
    elif score >= cfg.neutral_min:
        return Signal.NEUTRAL
    elif score >= cfg.sell_min:
        return Signal.SELL
    else:
        return Signal.STRONG_SELL


def generate_signal(
    bundle: IndicatorBundle,
    current_price: float,
    config: SignalConfig | None = None,
    rules: tuple[Rule, ...] = SIGNAL_RULES,
) -> SignalResult:
    """
    Generate a trading signal from indicators and the current price.

    Args:
        bundle: Indicators at the last bar
        current_price: Price the bands and averages are compared against
        config: Rule thresholds (defaults to the cached SignalConfig)
        rules: Ordered rules; reasons are reported in this order

    Returns:
        SignalResult with signal, clamped score and reasons
    """
    cfg = config or get_signal_config()

    score = cfg.base_score
    reasons: list[str] = []

    for rule in rules:
        outcome = rule(bundle, current_price, cfg)
        if outcome is None:
            continue
        points, reason = outcome
        score += points
        reasons.append(reason)

    score = max(0, min(100, score))
    signal = score_to_signal(score, cfg)

    logger.debug(f"Signal {signal.value} score={score} reasons={len(reasons)}")

    return SignalResult(signal=signal, score=score, reasons=reasons)
