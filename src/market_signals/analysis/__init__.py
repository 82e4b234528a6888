"""Analysis modules: stock scoring and prediction payloads."""

from .prediction import build_prediction_request
from .stock_scoring import filter_stocks, rank_stocks, score_stock

__all__ = [
    "build_prediction_request",
    "filter_stocks",
    "rank_stocks",
    "score_stock",
]
