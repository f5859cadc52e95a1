"""Data models for market data and forecasts."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class TimeseriesPoint:
    """Single observation of a rate or price series."""

    date: str  # YYYY-MM-DD
    value: float


@dataclass
class HoltResult:
    """Output of Holt linear smoothing."""

    fitted: list[Optional[float]] = field(default_factory=list)
    forecast: list[float] = field(default_factory=list)
    sigma: float = 0.0

    @property
    def is_empty(self) -> bool:
        """True when the series was too short to forecast."""
        return not self.forecast and not self.fitted


@dataclass
class ChartPoint:
    """One display record: a historical observation or a forecast step."""

    x: str
    actual: Optional[float] = None
    fitted: Optional[float] = None
    forecast: Optional[float] = None
    band_hi: Optional[float] = None
    band_lo: Optional[float] = None
    sma: Optional[float] = None
    ema: Optional[float] = None
