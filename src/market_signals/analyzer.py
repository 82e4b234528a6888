"""Orchestrates indicator, signal and key-level analysis for instruments."""

import logging
from typing import Iterable

from .config import Config, SignalConfig, get_config, get_signal_config
from .data.provider import (
    PriceDataProvider,
    RandomWalkProvider,
    latest_quote,
    rescale_to_live_price,
)
from .models.price import Instrument, PriceSeries
from .models.report import AnalysisReport
from .technicals.indicators import calculate_all_indicators
from .technicals.levels import calculate_key_levels
from .technicals.signals import generate_signal

logger = logging.getLogger(__name__)


def analyze_series(
    series: PriceSeries,
    live_price: float | None = None,
    config: Config | None = None,
    signal_config: SignalConfig | None = None,
) -> AnalysisReport:
    """
    Run the full analysis on one price history.

    Args:
        series: OHLCV history, oldest first (at least one bar)
        live_price: Optional live quote; the history is rescaled to end on it
        config: Indicator periods
        signal_config: Signal rule thresholds

    Returns:
        AnalysisReport at the latest bar
    """
    if series.is_empty:
        raise ValueError(f"No bars to analyze for {series.instrument}")

    cfg = config or get_config()
    signal_cfg = signal_config or get_signal_config()

    if live_price is not None:
        series = rescale_to_live_price(series, live_price)

    quote = latest_quote(series)
    indicators = calculate_all_indicators(series, cfg)
    signal = generate_signal(indicators, quote.price, signal_cfg)
    key_levels = calculate_key_levels(series)

    report = AnalysisReport(
        instrument=series.instrument,
        quote=quote,
        bars_analyzed=len(series),
        indicators=indicators,
        signal=signal,
        key_levels=key_levels,
        rescaled=live_price is not None,
    )

    logger.info(
        f"Analyzed {series.instrument}: {signal.signal.value} "
        f"(score {signal.score}) over {len(series)} bars"
    )

    return report


class Analyzer:
    """
    Analysis front end bound to a price data provider.

    The provider is injected so tests can substitute fixed fixtures; by
    default a seeded random-walk provider is built from the config.
    """

    def __init__(
        self,
        provider: PriceDataProvider | None = None,
        config: Config | None = None,
        signal_config: SignalConfig | None = None,
    ):
        self.config = config or get_config()
        self.signal_config = signal_config or get_signal_config()
        self.provider = provider or RandomWalkProvider(
            seed=self.config.random_seed,
            days=self.config.history_days,
        )

    def analyze(
        self,
        instrument: Instrument | str,
        live_price: float | None = None,
    ) -> AnalysisReport:
        """Analyze the provider's series for `instrument`."""
        series = self.provider.get_series(instrument)
        return analyze_series(series, live_price, self.config, self.signal_config)

    def analyze_many(self, instruments: Iterable[Instrument | str]) -> list[AnalysisReport]:
        """Analyze several instruments; each call is independent."""
        return [self.analyze(instrument) for instrument in instruments]
