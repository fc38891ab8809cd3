"""Public trend sources and the aggregator that merges them."""

from .aggregator import AggregateResult, TrendAggregator, category_sources, general_sources
from .base import Source, TrendItem, TrendSource

__all__ = [
    "AggregateResult", "Source", "TrendAggregator", "TrendItem", "TrendSource",
    "category_sources", "general_sources",
]
