"""Price data providers and fixtures."""

from market_signals.data.provider import (
    DEFAULT_FUNDAMENTALS,
    DEFAULT_PROFILES,
    CsvProvider,
    PriceDataProvider,
    RandomWalkProvider,
    StaticProvider,
    WalkProfile,
    latest_quote,
    load_csv,
    rescale_to_live_price,
    save_csv,
    series_to_dataframe,
)

__all__ = [
    "DEFAULT_FUNDAMENTALS",
    "DEFAULT_PROFILES",
    "CsvProvider",
    "PriceDataProvider",
    "RandomWalkProvider",
    "StaticProvider",
    "WalkProfile",
    "latest_quote",
    "load_csv",
    "rescale_to_live_price",
    "save_csv",
    "series_to_dataframe",
]
