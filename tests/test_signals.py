"""Tests for the rule-based signal generator."""

import pytest

from market_signals.config import SignalConfig
from market_signals.models import Signal
from market_signals.technicals.indicators import calculate_all_indicators
from market_signals.technicals.signals import (
    adx_rule,
    bollinger_rule,
    generate_signal,
    rsi_rule,
    score_to_signal,
)

WEAK_TREND = "Weak trend / consolidation phase"


@pytest.fixture
def bullish_bundle(make_bundle):
    """Every scoring rule fires bullish at price 120."""
    return make_bundle(
        rsi=25.0,
        macd=(2.0, 1.0, 1.0),
        sma20=100.0,
        sma50=105.0,
        sma200=100.0,
        bollinger=(140.0, 130.0, 125.0),
    )


@pytest.fixture
def bearish_bundle(make_bundle):
    """Every scoring rule fires bearish at price 80."""
    return make_bundle(
        rsi=80.0,
        macd=(-2.0, -1.0, -1.0),
        sma20=100.0,
        sma50=95.0,
        sma200=100.0,
        bollinger=(75.0, 70.0, 60.0),
    )


class TestScoreToSignal:
    """Tests for the score -> signal table."""

    @pytest.mark.parametrize(
        "score,expected",
        [
            (100, Signal.STRONG_BUY),
            (70, Signal.STRONG_BUY),
            (69, Signal.BUY),
            (55, Signal.BUY),
            (54, Signal.NEUTRAL),
            (50, Signal.NEUTRAL),
            (45, Signal.NEUTRAL),
            (44, Signal.SELL),
            (30, Signal.SELL),
            (29, Signal.STRONG_SELL),
            (0, Signal.STRONG_SELL),
        ],
    )
    def test_boundaries(self, score, expected, signal_config):
        assert score_to_signal(score, signal_config) == expected


class TestRSIRule:
    """Tests for RSI thresholds (first match wins)."""

    @pytest.mark.parametrize(
        "value,points",
        [
            (25.0, 15),
            (29.9, 15),
            (30.0, 5),
            (44.9, 5),
            (45.0, None),
            (50.0, None),
            (55.0, None),
            (55.1, -5),
            (70.0, -5),
            (70.1, -15),
            (90.0, -15),
        ],
    )
    def test_points(self, value, points, make_bundle, signal_config):
        outcome = rsi_rule(make_bundle(rsi=value), 100.0, signal_config)
        if points is None:
            assert outcome is None
        else:
            assert outcome[0] == points

    def test_reasons_follow_configured_thresholds(self, make_bundle):
        cfg = SignalConfig(rsi_oversold=25, rsi_overbought=80)

        _, oversold = rsi_rule(make_bundle(rsi=20.0), 100.0, cfg)
        _, overbought = rsi_rule(make_bundle(rsi=85.0), 100.0, cfg)

        assert oversold == "RSI oversold (<25) - bullish reversal potential"
        assert overbought == "RSI overbought (>80) - bearish reversal potential"

    def test_oversold_does_not_also_score_lower_range(self, make_bundle, signal_config):
        result = generate_signal(make_bundle(rsi=25.0), 100.0, signal_config)
        assert result.score == 65
        assert result.signal == Signal.BUY
        assert result.reasons[0] == "RSI oversold (<30) - bullish reversal potential"


class TestGenerateSignal:
    """Tests for rule aggregation."""

    def test_neutral_baseline(self, make_bundle, signal_config):
        result = generate_signal(make_bundle(), 100.0, signal_config)

        assert result.score == 50
        assert result.signal == Signal.NEUTRAL
        assert result.reasons == [WEAK_TREND]

    def test_macd_needs_consistent_crossover(self, make_bundle, signal_config):
        bullish = generate_signal(make_bundle(macd=(2.0, 1.0, 1.0)), 100.0, signal_config)
        inconsistent = generate_signal(make_bundle(macd=(1.0, 2.0, 1.0)), 100.0, signal_config)

        assert bullish.score == 60
        assert "MACD bullish crossover" in bullish.reasons
        assert inconsistent.score == 50

    def test_price_above_averages(self, make_bundle, signal_config):
        result = generate_signal(make_bundle(), 105.0, signal_config)
        assert result.score == 60
        assert result.reasons[0] == "Price above SMA20 & SMA50 - uptrend"

    def test_golden_cross_alone(self, make_bundle, signal_config):
        """Price equal to SMA20 leaves the moving-average rule inert."""
        result = generate_signal(make_bundle(sma50=110.0), 100.0, signal_config)
        assert result.score == 55
        assert result.signal == Signal.BUY

    def test_death_cross_alone(self, make_bundle, signal_config):
        result = generate_signal(make_bundle(sma50=90.0), 100.0, signal_config)
        assert result.score == 45
        assert result.signal == Signal.NEUTRAL

    def test_lower_band_touch(self, make_bundle, signal_config):
        bundle = make_bundle(sma20=90.0, sma50=90.0, sma200=90.0)
        result = generate_signal(bundle, 90.0, signal_config)
        assert result.score == 60
        assert "Price at lower Bollinger Band - oversold" in result.reasons

    def test_upper_band_touch(self, make_bundle, signal_config):
        bundle = make_bundle(sma20=110.0, sma50=110.0, sma200=110.0)
        result = generate_signal(bundle, 110.0, signal_config)
        assert result.score == 40
        assert result.signal == Signal.SELL

    def test_zero_width_band_is_inert(self, make_bundle, signal_config):
        bundle = make_bundle(bollinger=(100.0, 100.0, 100.0))
        assert bollinger_rule(bundle, 100.0, signal_config) is None

    def test_adx_reason_only(self, make_bundle, signal_config):
        outcome = adx_rule(make_bundle(adx=31.44), 100.0, signal_config)
        assert outcome == (0, "Strong trend detected (ADX: 31.4)")

        result = generate_signal(make_bundle(adx=31.44), 100.0, signal_config)
        assert result.score == 50

    def test_adx_threshold_is_exclusive(self, make_bundle, signal_config):
        assert adx_rule(make_bundle(adx=25.0), 100.0, signal_config) == (0, WEAK_TREND)

    def test_all_bullish(self, bullish_bundle, signal_config):
        result = generate_signal(bullish_bundle, 120.0, signal_config)

        assert result.score == 100
        assert result.signal == Signal.STRONG_BUY
        assert result.reasons == [
            "RSI oversold (<30) - bullish reversal potential",
            "MACD bullish crossover",
            "Price above SMA20 & SMA50 - uptrend",
            "Golden cross (SMA50 > SMA200) - long-term bullish",
            "Price at lower Bollinger Band - oversold",
            WEAK_TREND,
        ]

    def test_all_bearish(self, bearish_bundle, signal_config):
        result = generate_signal(bearish_bundle, 80.0, signal_config)

        assert result.score == 0
        assert result.signal == Signal.STRONG_SELL
        assert result.reasons == [
            "RSI overbought (>70) - bearish reversal potential",
            "MACD bearish crossover",
            "Price below SMA20 & SMA50 - downtrend",
            "Death cross (SMA50 < SMA200) - long-term bearish",
            "Price at upper Bollinger Band - overbought",
            WEAK_TREND,
        ]

    def test_score_clamped_high(self, bullish_bundle):
        result = generate_signal(bullish_bundle, 120.0, SignalConfig(base_score=90))
        assert result.score == 100

    def test_score_clamped_low(self, bearish_bundle):
        result = generate_signal(bearish_bundle, 80.0, SignalConfig(base_score=10))
        assert result.score == 0

    def test_custom_rules(self, bullish_bundle, signal_config):
        result = generate_signal(bullish_bundle, 120.0, signal_config, rules=(rsi_rule,))
        assert result.score == 65
        assert len(result.reasons) == 1

    def test_flat_series_is_neutral(self, flat_series, config, signal_config):
        """Collapsed bands and equal averages leave only the ADX note."""
        bundle = calculate_all_indicators(flat_series, config)
        result = generate_signal(bundle, flat_series.last_close, signal_config)

        assert result.score == 50
        assert result.signal == Signal.NEUTRAL
        assert result.reasons == [WEAK_TREND]

    def test_top_reasons(self, bullish_bundle, signal_config):
        result = generate_signal(bullish_bundle, 120.0, signal_config)
        assert result.top_reasons() == result.reasons[:4]
