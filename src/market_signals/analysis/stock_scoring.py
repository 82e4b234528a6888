"""Weighted fundamental and technical scoring for stock screening."""

import logging
import math
from typing import Iterable

from market_signals.config import StockScoringConfig, get_stock_scoring_config
from market_signals.models.stock import (
    InvestmentCategory,
    RiskLevel,
    ScoredStock,
    ScoringBenchmarks,
    StockFilter,
    StockQuote,
    ValuationLabel,
    WeightConfig,
)

logger = logging.getLogger(__name__)

# Score a loss-making company (P/E <= 0) gets on the P/E component
NEGATIVE_PE_SCORE = 20.0

# Screener columns rank_stocks can order by
SORT_FIELDS = (
    "ticker",
    "overall_score",
    "fundamental_score",
    "technical_score",
    "price",
    "change",
    "volume",
    "der",
    "roe",
    "pbv",
    "pe",
)


def round_half_up(value: float) -> int:
    """Round .5 toward positive infinity, as dashboards display scores."""
    return int(math.floor(value + 0.5))


def normalize_min_max(value: float, low: float, high: float) -> float:
    """Scale into [0, 1]; 0.5 when the range is empty."""
    if high == low:
        return 0.5
    return max(0.0, min(1.0, (value - low) / (high - low)))


def normalize_inverse(value: float, low: float, high: float) -> float:
    """1 - normalize_min_max: lower values score higher."""
    return 1 - normalize_min_max(value, low, high)


def _clamp_score(raw: float) -> int:
    return min(100, max(0, round_half_up(raw)))


def default_weights(config: StockScoringConfig | None = None) -> WeightConfig:
    cfg = config or get_stock_scoring_config()
    return WeightConfig(
        safety=cfg.weight_safety,
        growth=cfg.weight_growth,
        value=cfg.weight_value,
        momentum=cfg.weight_momentum,
    )


def default_benchmarks(config: StockScoringConfig | None = None) -> ScoringBenchmarks:
    cfg = config or get_stock_scoring_config()
    return ScoringBenchmarks(
        der_range=(cfg.der_min, cfg.der_max),
        roe_range=(cfg.roe_min, cfg.roe_max),
        pbv_range=(cfg.pbv_min, cfg.pbv_max),
        pe_range=(cfg.pe_min, cfg.pe_max),
        volatility_range=(cfg.volatility_min, cfg.volatility_max),
        beta_range=(cfg.beta_min, cfg.beta_max),
        volume_range=(cfg.volume_min, cfg.volume_max),
    )


def calculate_fundamental_score(
    stock: StockQuote,
    weights: WeightConfig,
    benchmarks: ScoringBenchmarks,
) -> int:
    """
    Score balance-sheet quality and valuation (0-100).

    Components:
    - Safety (25%): debt/equity, lower is better
    - Growth (35%): ROE from 0 to the top of the ROE range
    - Value (40%): mean of PBV and P/E, lower is better

    Each weight boosts its component by 1 + weight/100.
    """
    der_score = normalize_inverse(stock.der, *benchmarks.der_range) * 100
    roe_score = normalize_min_max(max(0.0, stock.roe), 0, benchmarks.roe_range[1]) * 100
    pbv_score = normalize_inverse(stock.pbv, *benchmarks.pbv_range) * 100
    pe_score = (
        normalize_inverse(stock.pe, 0, benchmarks.pe_range[1]) * 100
        if stock.pe > 0
        else NEGATIVE_PE_SCORE
    )

    safety_multiplier = 1 + weights.safety / 100
    growth_multiplier = 1 + weights.growth / 100
    value_multiplier = 1 + weights.value / 100

    safety_component = der_score * safety_multiplier * 0.25
    growth_component = roe_score * growth_multiplier * 0.35
    value_component = ((pbv_score + pe_score) / 2) * value_multiplier * 0.40

    return _clamp_score(safety_component + growth_component + value_component)


def calculate_technical_score(
    stock: StockQuote,
    weights: WeightConfig,
    benchmarks: ScoringBenchmarks,
) -> int:
    """
    Score price stability and momentum (0-100).

    Stability (50%) averages inverse volatility and inverse beta; momentum
    (50%) averages relative volume (0.5x-2x) and the day's change (-5%..+5%).
    """
    volatility_score = normalize_inverse(stock.volatility, *benchmarks.volatility_range) * 100
    beta_score = normalize_inverse(stock.beta, *benchmarks.beta_range) * 100

    volume_ratio = stock.volume / stock.avg_volume if stock.avg_volume > 0 else 1.0
    volume_score = normalize_min_max(volume_ratio, 0.5, 2) * 100
    momentum_score = normalize_min_max(stock.change_percent, -5, 5) * 100

    safety_multiplier = 1 + weights.safety / 100
    momentum_multiplier = 1 + weights.momentum / 100

    stability_component = ((volatility_score + beta_score) / 2) * safety_multiplier * 0.50
    momentum_component = ((volume_score + momentum_score) / 2) * momentum_multiplier * 0.50

    return _clamp_score(stability_component + momentum_component)


def get_valuation_label(pbv: float, pe: float) -> ValuationLabel:
    """Cheap/Expensive when the PBV and P/E votes agree, else Fair."""
    cheap = 0
    expensive = 0

    if pbv < 1.0:
        cheap += 1
    elif pbv > 3.0:
        expensive += 1

    if 0 < pe < 10:
        cheap += 1
    elif pe > 25:
        expensive += 1

    if cheap >= 1 and expensive == 0:
        return ValuationLabel.CHEAP
    if expensive >= 1 and cheap == 0:
        return ValuationLabel.EXPENSIVE
    return ValuationLabel.FAIR


def get_investment_category(
    volatility: float, avg_volume: float, beta: float
) -> InvestmentCategory:
    if volatility > 3 and avg_volume > 10_000_000:
        return InvestmentCategory.DAILY_TRADE
    if volatility > 1.5 or beta > 1.3:
        return InvestmentCategory.SWING_TRADE
    return InvestmentCategory.LONG_TERM


def get_risk_level(der: float, volatility: float, beta: float) -> RiskLevel:
    """Two points per high reading, one per elevated reading."""
    points = 0

    if der > 1.5:
        points += 2
    elif der > 0.8:
        points += 1

    if volatility > 3:
        points += 2
    elif volatility > 1.5:
        points += 1

    if beta > 1.5:
        points += 2
    elif beta > 1.2:
        points += 1

    if points >= 4:
        return RiskLevel.HIGH
    if points >= 2:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def score_stock(
    stock: StockQuote,
    weights: WeightConfig | None = None,
    benchmarks: ScoringBenchmarks | None = None,
    config: StockScoringConfig | None = None,
) -> ScoredStock:
    """
    Compute all scores and labels for a stock.

    Overall score blends fundamental and technical scores 60/40.
    """
    cfg = config or get_stock_scoring_config()
    weights = weights or default_weights(cfg)
    benchmarks = benchmarks or default_benchmarks(cfg)

    fundamental = calculate_fundamental_score(stock, weights, benchmarks)
    technical = calculate_technical_score(stock, weights, benchmarks)
    overall = round_half_up(
        fundamental * cfg.fundamental_share + technical * (1 - cfg.fundamental_share)
    )

    logger.debug(
        f"{stock.ticker}: fundamental={fundamental} technical={technical} overall={overall}"
    )

    return ScoredStock(
        **stock.model_dump(include=set(StockQuote.model_fields)),
        fundamental_score=fundamental,
        technical_score=technical,
        overall_score=overall,
        valuation_label=get_valuation_label(stock.pbv, stock.pe),
        investment_category=get_investment_category(
            stock.volatility, stock.avg_volume, stock.beta
        ),
        risk_level=get_risk_level(stock.der, stock.volatility, stock.beta),
    )


def filter_stocks(stocks: Iterable[ScoredStock], criteria: StockFilter) -> list[ScoredStock]:
    """Keep stocks matching every set criterion."""
    selected = []
    for stock in stocks:
        if criteria.sector is not None and stock.sector != criteria.sector:
            continue
        if criteria.valuation_label is not None and stock.valuation_label != criteria.valuation_label:
            continue
        if (
            criteria.investment_category is not None
            and stock.investment_category != criteria.investment_category
        ):
            continue
        if criteria.risk_level is not None and stock.risk_level != criteria.risk_level:
            continue
        if stock.overall_score < criteria.min_score:
            continue
        selected.append(stock)
    return selected


def rank_stocks(
    stocks: Iterable[ScoredStock],
    sort_by: str = "overall_score",
    descending: bool = True,
) -> list[ScoredStock]:
    """
    Sort stocks by one of SORT_FIELDS.

    Ties are broken by ticker, A to Z, in either direction.
    """
    if sort_by not in SORT_FIELDS:
        raise ValueError(f"cannot sort by {sort_by!r}; expected one of {', '.join(SORT_FIELDS)}")

    by_ticker = sorted(stocks, key=lambda s: s.ticker)
    return sorted(by_ticker, key=lambda s: getattr(s, sort_by), reverse=descending)
