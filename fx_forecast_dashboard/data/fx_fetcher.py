"""Exchange-rate fetcher with provider fallback and request caching."""

import logging
from datetime import date, datetime, timedelta

import httpx
import pandas as pd

from fx_forecast_dashboard.config import BASE_CURRENCIES, Settings
from fx_forecast_dashboard.data.cache import DataCache
from fx_forecast_dashboard.models.market_data import TimeseriesPoint


logger = logging.getLogger(__name__)

# A provider can fail at the transport level or answer with a body that is not JSON
FETCH_ERRORS = (httpx.HTTPError, ValueError)


def normalize_rates(payload: dict, quote: str) -> list[TimeseriesPoint]:
    """
    Convert a `{"rates": {date: {QUOTE: rate}}}` response to a sorted series.

    Dates without a (non-zero) rate for the quote currency are skipped.
    """
    rates = payload.get("rates") or {}
    records = [
        {"date": day, "value": values.get(quote)}
        for day, values in rates.items()
        if isinstance(values, dict) and values.get(quote)
    ]
    if not records:
        return []

    df = pd.DataFrame(records)
    df["value"] = pd.to_numeric(df["value"], errors="coerce")
    df = df.dropna().sort_values("date")

    return [TimeseriesPoint(date=row.date, value=float(row.value)) for row in df.itertuples()]


def _recent_window(days: int, today: date | None = None) -> tuple[str, str]:
    today = today or date.today()
    return (today - timedelta(days=days)).isoformat(), today.isoformat()

class FxFetcher:
    """Fetches exchange-rate history from Frankfurter, falling back to exchangerate.host."""

    FRANKFURTER_URL = "https://api.frankfurter.app"
    EXCHANGERATE_HOST_URL = "https://api.exchangerate.host"

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()
        self.settings.validate()
        self.cache = DataCache(self.settings.db_path, self.settings.cache_ttl_seconds)
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Lazy-initialize HTTP client."""
        if self._client is None:
            self._client = httpx.Client(timeout=self.settings.request_timeout)
        return self._client

    def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "FxFetcher":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _fetch_frankfurter(
        self, base: str, quote: str, start: str, end: str
    ) -> list[TimeseriesPoint]:
        response = self.client.get(
            f"{self.FRANKFURTER_URL}/{start}..{end}",
            params={"from": base, "to": quote},
        )
        response.raise_for_status()
        return normalize_rates(response.json(), quote)

    def _fetch_exchangerate_host(
        self, base: str, quote: str, start: str, end: str
    ) -> list[TimeseriesPoint]:
        response = self.client.get(
            f"{self.EXCHANGERATE_HOST_URL}/timeseries",
            params={
                "start_date": start,
                "end_date": end,
                "base": base,
                "symbols": quote,
            },
        )
        response.raise_for_status()
        return normalize_rates(response.json(), quote)

    def get_timeseries(
        self, base: str, quote: str, start: str, end: str
    ) -> list[TimeseriesPoint]:
        """
        Fetch daily rates for base/quote between two ISO dates (inclusive).

        Args:
            base: Base currency code, e.g. "USD"
            quote: Quote currency code, e.g. "EUR"
            start: First date, YYYY-MM-DD
            end: Last date, YYYY-MM-DD

        Returns:
            Points sorted by date

        Raises:
            httpx.HTTPError: If the fallback provider cannot be reached or
                answers with an error status
            ValueError: If the fallback provider answers with a malformed body
        """
        cache_key = DataCache.fx_key(base, quote, start, end)
        cached = self.cache.get_series(cache_key)
        if cached is not None:
            logger.info(f"Using cached {base}/{quote} ({len(cached)} points)")
            return cached

        logger.info(f"Fetching {base}/{quote} {start}..{end} from Frankfurter...")
        try:
            points = self._fetch_frankfurter(base, quote, start, end)
            source = "frankfurter"
        except FETCH_ERRORS as e:
            logger.warning(f"  Frankfurter failed ({e}), trying exchangerate.host")
            points = self._fetch_exchangerate_host(base, quote, start, end)
            source = "exchangerate.host"

        rows = self.cache.store_series(cache_key, points, source, datetime.now())
        logger.info(f"  {source}: {rows} points")
        return points

    def fetch_recent(
        self, base: str, quote: str, days: int, today: date | None = None
    ) -> list[TimeseriesPoint]:
        """Fetch the last `days` calendar days up to today."""
        start, end = _recent_window(days, today)
        return self.get_timeseries(base, quote, start, end)

    def invalidate_recent(
        self, base: str, quote: str, days: int, today: date | None = None
    ) -> bool:
        """Drop the cached response for the window `fetch_recent` would request."""
        start, end = _recent_window(days, today)
        removed = self.cache.invalidate(DataCache.fx_key(base, quote, start, end))
        if removed:
            logger.info(f"Invalidated cached {base}/{quote} {start}..{end}")
        return removed

    def get_status(self) -> dict[str, dict]:
        """Get cache status for FX requests."""
        return {
            key: info
            for key, info in self.cache.get_cache_status().items()
            if not key.startswith("XAU|")
        }


def main() -> None:
    """CLI entry point for fetching exchange rates."""
    import argparse
    import sys

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Fetch exchange-rate history")
    parser.add_argument("--base", type=str, default="USD", help="Base currency (default: USD)")
    parser.add_argument("--quote", type=str, default="EUR", help="Quote currency (default: EUR)")
    parser.add_argument("--days", type=int, default=180, help="Days of history (default: 180)")
    parser.add_argument(
        "--status",
        action="store_true",
        help="Show cache status and exit",
    )
    args = parser.parse_args()

    for code in (args.base, args.quote):
        if code not in BASE_CURRENCIES:
            print(f"Unknown currency: {code}")
            print(f"Available: {', '.join(BASE_CURRENCIES)}")
            sys.exit(1)

    try:
        with FxFetcher() as fetcher:
            if args.status:
                status = fetcher.get_status()
                print("\nCache Status:")
                print("-" * 70)
                if not status:
                    print("No cached requests")
                for key, info in sorted(status.items()):
                    count = info["observation_count"]
                    last = info["last_date"] or "N/A"
                    print(f"{key:36} | {count:5} obs | Last: {last:10} | {info['source']}")
                return

            points = fetcher.fetch_recent(args.base, args.quote, args.days)
            print(f"\n{args.base}/{args.quote}: {len(points)} points")
            if points:
                print(f"  {points[0].date} .. {points[-1].date}, last rate {points[-1].value:.4f}")

    except ValueError as e:
        print(f"Configuration error: {e}")
        sys.exit(1)
    except httpx.HTTPStatusError as e:
        print(f"API error: {e.response.status_code} - {e.response.text}")
        sys.exit(1)
    except httpx.HTTPError as e:
        print(f"Network error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
