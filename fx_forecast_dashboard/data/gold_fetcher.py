"""Gold price fetcher for Metals-API.

Free tier: 100 requests/month. When no key is configured or the API fails,
a deterministic mock series is served instead so the page still renders.
"""

import logging
import math
from datetime import date, datetime, timedelta, timezone

import httpx
import numpy as np

from fx_forecast_dashboard.config import Settings
from fx_forecast_dashboard.data.cache import DataCache
from fx_forecast_dashboard.models.market_data import TimeseriesPoint


logger = logging.getLogger(__name__)

USD_TO_AUD = 1.5  # Approximate conversion applied to Metals-API USD prices
TROY_OZ_PER_KG = 32.1507
MOCK_BASE_PRICE_OZ = 6348.60  # AUD per troy ounce
MOCK_DAILY_VOLATILITY = 0.015
MOCK_DAILY_DRIFT = 0.0001

UNITS = {"oz": 1.0, "kg": TROY_OZ_PER_KG}


def generate_mock_prices(
    start: date, end: date, current_price: float = MOCK_BASE_PRICE_OZ, unit: str = "oz"
) -> list[TimeseriesPoint]:
    """
    Generate a deterministic weekday-only price series ending at `end`.

    Works backwards from `current_price`, so the same range always yields the
    same prices. The pseudo-random step is derived from the date itself.
    """
    factor = UNITS[unit]
    prices: list[TimeseriesPoint] = []
    price = current_price
    day = end

    while day >= start:
        if day.weekday() < 5:
            seed = datetime(day.year, day.month, day.day, tzinfo=timezone.utc).timestamp() * 1000
            pseudo_random = math.sin(seed * 0.0001) * 0.5 + 0.5
            change = (pseudo_random - 0.5) * MOCK_DAILY_VOLATILITY
            price = price * (1 + MOCK_DAILY_DRIFT + change)
            prices.append(TimeseriesPoint(date=day.isoformat(), value=round(price * factor, 2)))
        day -= timedelta(days=1)

    prices.reverse()
    return prices


class GoldFetcher:
    """Fetches gold prices (AUD per ounce or kilogram) from Metals-API."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()
        self.cache = DataCache(self.settings.db_path, self.settings.cache_ttl_seconds)
        self._client: httpx.Client | None = None

        if not self.settings.has_metals_api():
            logger.warning("METALS_API_KEY not set, gold prices will use mock data")

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=self.settings.request_timeout)
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "GoldFetcher":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _fetch_metals_api(self, start: str, end: str, unit: str) -> list[TimeseriesPoint]:
        """
        Fetch XAU history from Metals-API.

        Raises:
            ValueError: If the API reports failure or no key is configured
            httpx.HTTPError: On transport or HTTP status errors
        """
        if not self.settings.has_metals_api():
            raise ValueError("METALS_API_KEY not set")

        response = self.client.get(
            f"{self.settings.metals_api_base_url}/timeseries",
            params={
                "access_key": self.settings.metals_api_key,
                "start_date": start,
                "end_date": end,
                "base": "USD",
                "symbols": "XAU",
            },
        )
        response.raise_for_status()
        data = response.json()

        if not data.get("success"):
            raise ValueError("API returned success: false")

        factor = UNITS[unit]
        prices = [
            TimeseriesPoint(date=day, value=round(rates["XAU"] * USD_TO_AUD * factor, 2))
            for day, rates in sorted((data.get("rates") or {}).items())
            if rates.get("XAU")
        ]

        if prices:
            values = np.array([p.value for p in prices])
            logger.info(
                f"  Metals-API: {len(prices)} points, range {values.min():.2f} to {values.max():.2f}"
            )
        return prices

    def get_prices(self, start: str, end: str, unit: str = "oz") -> list[TimeseriesPoint]:
        """
        Fetch gold prices between two ISO dates (inclusive).

        Args:
            start: First date, YYYY-MM-DD
            end: Last date, YYYY-MM-DD
            unit: "oz" for AUD per troy ounce, "kg" for AUD per kilogram

        Returns:
            Points sorted by date; mock data if the API is unavailable
        """
        if unit not in UNITS:
            raise ValueError(f"Unknown unit: {unit}. Use one of {list(UNITS)}")

        cache_key = DataCache.gold_key(unit, start, end)
        cached = self.cache.get_series(cache_key)
        if cached is not None:
            logger.info(f"Using cached gold {unit} data ({len(cached)} points)")
            return cached

        logger.info(f"Fetching gold ({unit}) {start}..{end} from Metals-API...")
        try:
            prices = self._fetch_metals_api(start, end, unit)
            source = "metals-api"
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"  Metals-API unavailable ({e}), using mock data")
            prices = generate_mock_prices(date.fromisoformat(start), date.fromisoformat(end), unit=unit)
            source = "mock"

        self.cache.store_series(cache_key, prices, source, datetime.now())
        return prices

    def fetch_recent(self, days: int, unit: str = "oz", today: date | None = None) -> list[TimeseriesPoint]:
        """Fetch the last `days` calendar days up to today."""
        today = today or date.today()
        start = today - timedelta(days=days)
        return self.get_prices(start.isoformat(), today.isoformat(), unit)
