"""Configuration management for Market Signals."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Data
    default_instrument: str = Field(
        default="XAU/USD",
        description="Instrument analyzed when none is given",
    )
    random_seed: int = Field(
        default=42,
        description="Seed for the random-walk price provider",
    )
    history_days: int = Field(
        default=90,
        description="Number of daily bars generated by the random-walk provider",
    )
    recent_prices_count: int = Field(
        default=30,
        description="Closes included in a prediction request",
    )

    # Technical Indicator Parameters
    rsi_period: int = Field(default=14, gt=0)
    bollinger_window: int = Field(default=20, gt=0)
    bollinger_std: float = Field(default=2.0, ge=0)
    atr_period: int = Field(default=14, gt=0)
    adx_period: int = Field(default=14, gt=0)

    # Logging
    log_level: str = Field(default="WARNING")
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


class SignalConfig(BaseSettings):
    """Signal rule thresholds and point values."""

    model_config = SettingsConfigDict(env_prefix="SIGNAL_", extra="ignore")

    base_score: int = 50

    # RSI thresholds -> points
    rsi_oversold: float = 30.0  # -> +15
    rsi_overbought: float = 70.0  # -> -15
    rsi_lower_range: float = 45.0  # -> +5
    rsi_upper_range: float = 55.0  # -> -5
    rsi_extreme_points: int = 15
    rsi_mild_points: int = 5

    macd_points: int = 10
    moving_average_points: int = 10
    cross_points: int = 5
    bollinger_points: int = 10

    # Informational only
    adx_trend_threshold: float = 25.0

    # Score -> signal table (inclusive lower bounds)
    strong_buy_min: int = 70
    buy_min: int = 55
    neutral_min: int = 45
    sell_min: int = 30


class StockScoringConfig(BaseSettings):
    """Stock scoring weights and benchmark ranges."""

    model_config = SettingsConfigDict(env_prefix="STOCK_", extra="ignore")

    # Default slider weights (0-100)
    weight_safety: float = 25.0
    weight_growth: float = 30.0
    weight_value: float = 25.0
    weight_momentum: float = 20.0

    # Benchmark ranges
    der_min: float = 0.0
    der_max: float = 3.0
    roe_min: float = -20.0
    roe_max: float = 50.0
    pbv_min: float = 0.0
    pbv_max: float = 10.0
    pe_min: float = -15.0
    pe_max: float = 40.0
    volatility_min: float = 0.0
    volatility_max: float = 6.0
    beta_min: float = 0.5
    beta_max: float = 2.0
    volume_min: float = 1_000_000
    volume_max: float = 100_000_000

    # Overall = fundamental * w + technical * (1 - w)
    fundamental_share: float = 0.6


@lru_cache
def get_config() -> Config:
    """Get cached configuration instance."""
    return Config()


@lru_cache
def get_signal_config() -> SignalConfig:
    """Get cached signal configuration."""
    return SignalConfig()


@lru_cache
def get_stock_scoring_config() -> StockScoringConfig:
    """Get cached stock scoring configuration."""
    return StockScoringConfig()
