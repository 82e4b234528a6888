"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta

import pytest

from market_signals.config import Config, SignalConfig
from market_signals.data.provider import RandomWalkProvider
from market_signals.models import (
    BollingerBands,
    IndicatorBundle,
    Instrument,
    MACDResult,
    PriceBar,
    PriceSeries,
)

START = datetime(2025, 1, 1)


def _bar(day: int, close: float, high: float, low: float, volume: int = 100_000) -> PriceBar:
    return PriceBar(
        timestamp=START + timedelta(days=day),
        open=close,
        high=high,
        low=low,
        close=close,
        volume=volume,
    )


@pytest.fixture
def make_bars():
    """Factory: closes -> bars with high/low `spread` around each close."""

    def factory(closes: list[float], spread: float = 1.0) -> list[PriceBar]:
        return [_bar(i, c, c + spread, c - spread) for i, c in enumerate(closes)]

    return factory


@pytest.fixture
def make_series(make_bars):
    """Factory: closes -> PriceSeries."""

    def factory(closes: list[float], spread: float = 1.0, instrument: str = "TEST") -> PriceSeries:
        return PriceSeries(instrument=instrument, bars=make_bars(closes, spread))

    return factory


@pytest.fixture
def config() -> Config:
    """Default indicator configuration, independent of the environment."""
    return Config(_env_file=None)


@pytest.fixture
def signal_config() -> SignalConfig:
    return SignalConfig()


@pytest.fixture
def walk_provider() -> RandomWalkProvider:
    """Seeded random-walk provider with a fixed end date."""
    return RandomWalkProvider(seed=7, days=90, end=START + timedelta(days=90))


@pytest.fixture
def gold_series(walk_provider) -> PriceSeries:
    """91 daily XAU/USD bars."""
    return walk_provider.get_series(Instrument.XAU_USD)


@pytest.fixture
def flat_series(make_series) -> PriceSeries:
    """60 bars, every price exactly 100."""
    return make_series([100.0] * 60, spread=0.0)


@pytest.fixture
def uptrend_series(make_series) -> PriceSeries:
    """30 bars rising by 1 each bar."""
    return make_series([100.0 + i for i in range(30)])


@pytest.fixture
def zigzag_bars() -> list[PriceBar]:
    """
    15 bars with swing highs at 110 and 112 and swing lows at 90 and 92.

    Last close is 100.
    """
    rows = [
        (105, 95),
        (106, 96),
        (110, 97),
        (107, 94),
        (106, 90),
        (105, 93),
        (104, 95),
        (112, 98),
        (108, 97),
        (107, 92),
        (103, 96),
        (104, 94),
        (101, 97),
        (102, 98),
    ]
    bars = [_bar(i, (high + low) / 2, high, low) for i, (high, low) in enumerate(rows)]
    bars.append(_bar(len(rows), 100.0, 103.0, 99.0))
    return bars


@pytest.fixture
def make_bundle():
    """Factory: neutral indicator bundle with overrides (price 100 is inert)."""

    def factory(
        rsi: float = 50.0,
        macd: tuple[float, float, float] = (0.0, 0.0, 0.0),
        sma20: float = 100.0,
        sma50: float = 100.0,
        sma200: float = 100.0,
        bollinger: tuple[float, float, float] = (110.0, 100.0, 90.0),
        atr: float = 1.0,
        adx: float = 20.0,
    ) -> IndicatorBundle:
        return IndicatorBundle(
            rsi=rsi,
            macd=MACDResult(macd_line=macd[0], signal_line=macd[1], histogram=macd[2]),
            sma20=sma20,
            sma50=sma50,
            sma200=sma200,
            ema12=100.0,
            ema26=100.0,
            bollinger=BollingerBands(upper=bollinger[0], middle=bollinger[1], lower=bollinger[2]),
            atr=atr,
            adx=adx,
        )

    return factory
