"""Configuration settings for the dashboard."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping
import os

from dotenv import load_dotenv


load_dotenv()


# Currencies offered in the pair selector
BASE_CURRENCIES: list[str] = [
    "USD", "EUR", "GBP", "AUD", "NZD", "JPY", "CHF", "CAD", "SGD", "HKD",
]

# History presets shown on the gold page
HISTORY_PRESETS: dict[str, int] = {
    "90d": 90,
    "180d": 180,
    "1y": 365,
}

# Column order for CSV export
CSV_COLUMNS: list[str] = [
    "date", "actual", "fitted", "sma", "ema", "forecast", "band_lo", "band_hi",
]

# Control ranges (inclusive)
DAYS_RANGE = (7, 1500)
SMOOTHING_RANGE = (0.1, 0.9)
HORIZON_RANGE = (1, 30)
WINDOW_RANGE = (3, 120)


@dataclass
class Settings:
    """Application settings."""

    metals_api_key: str = field(default_factory=lambda: os.getenv("METALS_API_KEY", ""))
    metals_api_base_url: str = field(
        default_factory=lambda: os.getenv("METALS_API_BASE_URL", "https://api.metals.live/v1")
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.getenv("FX_REQUEST_TIMEOUT", "30"))
    )
    cache_ttl_seconds: int = field(
        default_factory=lambda: int(os.getenv("FX_CACHE_TTL", "300"))
    )
    cache_dir: Path = field(
        default_factory=lambda: Path(
            os.getenv("FX_CACHE_DIR", Path(__file__).parent.parent.parent / "cache")
        )
    )
    db_path: Path = field(init=False)

    def __post_init__(self) -> None:
        self.cache_dir = Path(self.cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.db_path = self.cache_dir / "requests.db"

    def validate(self) -> None:
        """Validate required settings."""
        if self.request_timeout <= 0:
            raise ValueError(f"FX_REQUEST_TIMEOUT must be positive, got {self.request_timeout}")
        if self.cache_ttl_seconds < 0:
            raise ValueError(f"FX_CACHE_TTL must not be negative, got {self.cache_ttl_seconds}")

    def has_metals_api(self) -> bool:
        """Check if a Metals-API key is configured."""
        return bool(self.metals_api_key) and self.metals_api_key != "YOUR_FREE_API_KEY"


def _parse_bool(value: str) -> bool:
    return str(value).lower() == "true"


@dataclass
class ForecastParameters:
    """User-tunable forecast parameters."""

    base: str = "USD"
    quote: str = "EUR"
    days: int = 180
    alpha: float = 0.5
    beta: float = 0.3
    horizon: int = 14
    sma_window: int = 10
    ema_window: int = 20
    show_sma: bool = True
    show_ema: bool = False

    # query param name -> (attribute, parser)
    QUERY_KEYS = {
        "base": ("base", str),
        "quote": ("quote", str),
        "days": ("days", int),
        "alpha": ("alpha", float),
        "beta": ("beta", float),
        "horizon": ("horizon", int),
        "smaWin": ("sma_window", int),
        "emaWin": ("ema_window", int),
        "sma": ("show_sma", _parse_bool),
        "ema": ("show_ema", _parse_bool),
    }

    def validate(self) -> None:
        """Validate parameter ranges."""
        if self.base == self.quote:
            raise ValueError(f"Base and quote currencies must differ, got {self.base}/{self.quote}")
        if not DAYS_RANGE[0] <= self.days <= DAYS_RANGE[1]:
            raise ValueError(f"days must be in {DAYS_RANGE}, got {self.days}")
        for name in ("alpha", "beta"):
            value = getattr(self, name)
            if not SMOOTHING_RANGE[0] <= value <= SMOOTHING_RANGE[1]:
                raise ValueError(f"{name} must be in {SMOOTHING_RANGE}, got {value}")
        if not HORIZON_RANGE[0] <= self.horizon <= HORIZON_RANGE[1]:
            raise ValueError(f"horizon must be in {HORIZON_RANGE}, got {self.horizon}")
        for name in ("sma_window", "ema_window"):
            value = getattr(self, name)
            if not WINDOW_RANGE[0] <= value <= WINDOW_RANGE[1]:
                raise ValueError(f"{name} must be in {WINDOW_RANGE}, got {value}")

    @classmethod
    def from_query_params(cls, params: Mapping[str, str]) -> "ForecastParameters":
        """
        Build parameters from URL query params.

        Unknown keys are ignored and unparseable values keep their defaults.
        """
        values = {}
        for key, (attr, parser) in cls.QUERY_KEYS.items():
            raw = params.get(key)
            if raw is None or raw == "":
                continue
            try:
                values[attr] = parser(raw)
            except ValueError:
                continue
        return cls(**values)

    def to_query_params(self) -> dict[str, str]:
        """Serialize parameters to URL query params."""
        params = {}
        for key, (attr, _) in self.QUERY_KEYS.items():
            value = getattr(self, attr)
            params[key] = str(value).lower() if isinstance(value, bool) else str(value)
        return params
