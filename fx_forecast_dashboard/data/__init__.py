"""Data fetching and caching."""

from .fx_fetcher import FxFetcher
from .gold_fetcher import GoldFetcher
from .cache import DataCache

__all__ = ["FxFetcher", "GoldFetcher", "DataCache"]
