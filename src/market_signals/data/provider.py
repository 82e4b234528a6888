"""
Price data providers.

The indicator engine never fetches data itself; callers hand it a
PriceSeries obtained from one of these providers (or their own).
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import Mapping, Optional, Protocol, runtime_checkable

import numpy as np
import pandas as pd

from market_signals.models.fundamentals import FundamentalIndicators
from market_signals.models.price import Instrument, PriceBar, PriceQuote, PriceSeries

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WalkProfile:
    """Starting price and daily volatility of a generated series."""

    base_price: float
    volatility: float


DEFAULT_PROFILES: dict[str, WalkProfile] = {
    Instrument.XAU_USD.value: WalkProfile(base_price=2650.0, volatility=0.012),
    Instrument.GOLD_FUTURES.value: WalkProfile(base_price=2670.0, volatility=0.013),
    # IDR per gram
    Instrument.ANTAM.value: WalkProfile(base_price=1_350_000.0, volatility=0.008),
}

DEFAULT_FUNDAMENTALS = FundamentalIndicators(
    usd_index=103.45,
    usd_index_change=-0.32,
    fed_funds_rate=4.50,
    real_yield=1.85,
    inflation=2.9,
    gold_silver_ratio=87.5,
    vix=18.75,
)


def _key(instrument: Instrument | str) -> str:
    return instrument.value if isinstance(instrument, Instrument) else str(instrument)


@runtime_checkable
class PriceDataProvider(Protocol):
    """Anything that can hand out an OHLCV history for an instrument."""

    def get_series(self, instrument: Instrument | str) -> PriceSeries: ...


class StaticProvider:
    """Serves caller-supplied series, e.g. test fixtures."""

    def __init__(self, series: Mapping[str, PriceSeries]):
        self._series = {_key(k): v for k, v in series.items()}

    def get_series(self, instrument: Instrument | str) -> PriceSeries:
        key = _key(instrument)
        if key not in self._series:
            raise KeyError(f"No price series for {key}")
        return self._series[key]


class RandomWalkProvider:
    """
    Generates daily bars with a seeded random walk.

    Each close moves by uniform noise of +/- volatility plus a slow
    sinusoidal drift; open, high and low are jittered around it and volume
    is drawn from 50k-150k. Series are generated once per instrument and
    kept on the instance, so repeated calls return the same data.
    """

    def __init__(
        self,
        seed: int = 42,
        days: int = 90,
        end: Optional[datetime] = None,
        profiles: Optional[Mapping[str, WalkProfile]] = None,
    ):
        if days < 1:
            raise ValueError(f"days must be at least 1, got {days}")
        self.seed = seed
        self.days = days
        self.end = end or datetime.now().replace(hour=0, minute=0, second=0, microsecond=0)
        self.profiles = dict(profiles or DEFAULT_PROFILES)
        self._cache: dict[str, PriceSeries] = {}

    def get_series(self, instrument: Instrument | str) -> PriceSeries:
        key = _key(instrument)
        if key not in self._cache:
            if key not in self.profiles:
                raise KeyError(f"No walk profile for {key}")
            self._cache[key] = self._generate(key, self.profiles[key])
        return self._cache[key]

    def _generate(self, instrument: str, profile: WalkProfile) -> PriceSeries:
        # Independent stream per instrument, stable for a given seed
        offset = sorted(self.profiles).index(instrument)
        rng = np.random.default_rng([self.seed, offset])

        price = profile.base_price
        bars = []

        for i in range(self.days, -1, -1):
            trend = math.sin(i / 10) * 0.002
            change = (rng.random() - 0.5) * 2 * profile.volatility + trend
            price = price * (1 + change)

            open_ = price * (1 + (rng.random() - 0.5) * 0.005)
            close = price
            high = max(open_, close) * (1 + rng.random() * 0.008)
            low = min(open_, close) * (1 - rng.random() * 0.008)
            volume = int(50_000 + rng.random() * 100_000)

            bars.append(
                PriceBar(
                    timestamp=self.end - timedelta(days=i),
                    open=open_,
                    high=high,
                    low=low,
                    close=close,
                    volume=volume,
                )
            )

        logger.debug(f"Generated {len(bars)} bars for {instrument} (seed={self.seed})")

        return PriceSeries(instrument=instrument, interval="daily", bars=bars)


class CsvProvider:
    """Reads `<directory>/<instrument>.csv` files, e.g. `XAU_USD.csv`."""

    def __init__(self, directory: Path | str):
        self.directory = Path(directory)

    def path_for(self, instrument: Instrument | str) -> Path:
        return self.directory / f"{_key(instrument).replace('/', '_')}.csv"

    def get_series(self, instrument: Instrument | str) -> PriceSeries:
        return load_csv(self.path_for(instrument), _key(instrument))


def load_csv(path: Path | str, instrument: str, interval: str = "daily") -> PriceSeries:
    """
    Load OHLCV bars from a CSV file.

    Expects a header with a `timestamp` or `date` column plus open, high,
    low, close and (optionally) volume; column names are case-insensitive.
    Rows are sorted oldest first.
    """
    filepath = Path(path)
    if not filepath.exists():
        raise FileNotFoundError(f"Price file not found: {filepath}")

    df = pd.read_csv(filepath)
    df.columns = [str(c).strip().lower() for c in df.columns]

    time_col = next((c for c in ("timestamp", "date", "datetime", "time") if c in df.columns), None)
    if time_col is None:
        raise ValueError(f"{filepath} has no timestamp/date column")

    missing = [c for c in ("open", "high", "low", "close") if c not in df.columns]
    if missing:
        raise ValueError(f"{filepath} is missing columns: {', '.join(missing)}")

    df[time_col] = pd.to_datetime(df[time_col])
    df.sort_values(time_col, inplace=True)
    if "volume" not in df.columns:
        df["volume"] = 0

    bars = [
        PriceBar(
            timestamp=row[time_col].to_pydatetime(),
            open=float(row["open"]),
            high=float(row["high"]),
            low=float(row["low"]),
            close=float(row["close"]),
            volume=int(row["volume"]),
        )
        for _, row in df.iterrows()
    ]

    logger.debug(f"Loaded {len(bars)} bars for {instrument} from {filepath}")

    return PriceSeries(instrument=instrument, interval=interval, bars=bars)


def series_to_dataframe(series: PriceSeries) -> pd.DataFrame:
    """
    Tabular view of a series.

    Returns:
        DataFrame indexed by `timestamp` with open, high, low, close and
        volume columns, oldest first; the layout `load_csv` reads back
    """
    columns = ["open", "high", "low", "close", "volume"]
    df = pd.DataFrame(
        [bar.model_dump() for bar in series.bars],
        columns=["timestamp", *columns],
    )
    return df.set_index("timestamp")


def save_csv(series: PriceSeries, path: Path | str) -> Path:
    """Write a series to CSV so `load_csv` (or `CsvProvider`) can reload it."""
    filepath = Path(path)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    series_to_dataframe(series).to_csv(filepath)

    logger.debug(f"Saved {len(series)} bars for {series.instrument} to {filepath}")

    return filepath


def rescale_to_live_price(series: PriceSeries, live_price: float) -> PriceSeries:
    """
    Scale a whole history so its last close equals `live_price`.

    Every open, high, low and close is multiplied by the same ratio;
    volume and timestamps are untouched.
    """
    if series.is_empty:
        raise ValueError("cannot rescale an empty series")
    if live_price <= 0:
        raise ValueError(f"live price must be positive, got {live_price}")

    last_close = series.last_close
    if last_close <= 0:
        raise ValueError(f"last close must be positive, got {last_close}")

    ratio = live_price / last_close
    bars = [
        bar.model_copy(
            update={
                "open": bar.open * ratio,
                "high": bar.high * ratio,
                "low": bar.low * ratio,
                "close": bar.close * ratio,
            }
        )
        for bar in series.bars
    ]
    # Pin the last close exactly to the quote
    bars[-1] = bars[-1].model_copy(update={"close": live_price})

    logger.debug(f"Rescaled {series.instrument} by {ratio:.6f} to {live_price}")

    return series.model_copy(update={"bars": bars})


def latest_quote(series: PriceSeries) -> PriceQuote:
    """Price, change and range of the most recent bar."""
    if series.is_empty:
        raise ValueError("cannot quote an empty series")

    last = series.bars[-1]
    previous_close = series.bars[-2].close if len(series.bars) >= 2 else last.open

    change = last.close - previous_close
    change_percent = (change / previous_close) * 100 if previous_close else 0.0

    return PriceQuote(
        instrument=series.instrument,
        price=last.close,
        change=change,
        change_percent=change_percent,
        high=last.high,
        low=last.low,
        open=last.open,
        volume=last.volume,
        timestamp=last.timestamp,
    )
