"""Pipeline orchestration."""

from .aggregator import NewsAggregator

__all__ = ["NewsAggregator"]
