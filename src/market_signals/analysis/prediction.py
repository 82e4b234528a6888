"""
Payload construction for the external prediction service.

Only the request is built here; sending it and interpreting the answer
belong to the service client.
"""

import logging

from market_signals.config import Config, get_config
from market_signals.data.provider import DEFAULT_FUNDAMENTALS
from market_signals.models.fundamentals import FundamentalIndicators, PredictionRequest
from market_signals.models.price import Instrument, PriceSeries, Timeframe
from market_signals.technicals.indicators import calculate_all_indicators

logger = logging.getLogger(__name__)


def build_prediction_request(
    instrument: Instrument | str,
    series: PriceSeries,
    timeframe: Timeframe | str = Timeframe.ONE_WEEK,
    fundamentals: FundamentalIndicators | None = None,
    recent_count: int | None = None,
    config: Config | None = None,
) -> PredictionRequest:
    """
    Build the prediction request for the latest bar of `series`.

    Args:
        instrument: Instrument being predicted
        series: Price history, oldest first
        timeframe: Prediction horizon
        fundamentals: Macro snapshot (defaults to DEFAULT_FUNDAMENTALS)
        recent_count: Number of trailing closes to include (default from Config)
        config: Indicator periods and defaults

    Returns:
        PredictionRequest ready to serialize with `model_dump(by_alias=True)`
    """
    if series.is_empty:
        raise ValueError("cannot build a prediction request from an empty series")

    cfg = config or get_config()
    count = recent_count if recent_count is not None else cfg.recent_prices_count
    if count <= 0:
        raise ValueError(f"recent_count must be positive, got {count}")

    name = instrument.value if isinstance(instrument, Instrument) else str(instrument)

    request = PredictionRequest(
        instrument=name,
        current_price=series.last_close,
        technical_data=calculate_all_indicators(series, cfg),
        fundamental_data=fundamentals or DEFAULT_FUNDAMENTALS,
        recent_prices=series.tail(count).closes,
        timeframe=Timeframe(timeframe),
    )

    logger.debug(f"Prediction request for {name} ({request.timeframe.value})")

    return request
