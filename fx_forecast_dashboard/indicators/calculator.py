"""Run the forecast and indicator engine over a fetched series."""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import pandas as pd

from fx_forecast_dashboard.config import CSV_COLUMNS, ForecastParameters
from fx_forecast_dashboard.indicators.chart_series import build_chart_data
from fx_forecast_dashboard.indicators.holt import holt_linear
from fx_forecast_dashboard.indicators.moving_average import ema, sma
from fx_forecast_dashboard.models.market_data import ChartPoint, HoltResult, TimeseriesPoint


logger = logging.getLogger(__name__)


@dataclass
class ForecastResult:
    """Complete forecast for one series and parameter set."""

    holt: HoltResult
    sma: list[Optional[float]]
    ema: list[Optional[float]]
    chart: list[ChartPoint]
    last_value: Optional[float]
    as_of: Optional[str]  # Last historical date

    @property
    def has_forecast(self) -> bool:
        return bool(self.holt.forecast)

    @property
    def next_forecast(self) -> Optional[float]:
        """First forecast step, or None if there is not enough data."""
        return self.holt.forecast[0] if self.holt.forecast else None


class ForecastCalculator:
    """Transforms a raw series into fitted values, forecast and overlays."""

    def calculate(
        self, points: Sequence[TimeseriesPoint], params: ForecastParameters
    ) -> ForecastResult:
        """
        Calculate Holt forecast, moving averages and chart points.

        Disabled overlays come back as all-None series so the chart and the
        CSV keep a fixed shape.
        """
        values = [p.value for p in points]

        holt = holt_linear(values, params.alpha, params.beta, params.horizon)
        sma_arr = sma(values, params.sma_window) if params.show_sma else [None] * len(values)
        ema_arr = ema(values, params.ema_window) if params.show_ema else [None] * len(values)

        if holt.is_empty and values:
            logger.info(f"Not enough data to forecast ({len(values)} points)")

        chart = build_chart_data(points, holt.fitted, holt.forecast, holt.sigma, sma_arr, ema_arr)

        return ForecastResult(
            holt=holt,
            sma=sma_arr,
            ema=ema_arr,
            chart=chart,
            last_value=values[-1] if values else None,
            as_of=points[-1].date if points else None,
        )


def chart_rows(chart: Sequence[ChartPoint]) -> list[dict]:
    """Flatten chart points into records keyed by CSV_COLUMNS."""
    return [
        {
            "date": point.x,
            "actual": point.actual,
            "fitted": point.fitted,
            "sma": point.sma,
            "ema": point.ema,
            "forecast": point.forecast,
            "band_lo": point.band_lo,
            "band_hi": point.band_hi,
        }
        for point in chart
    ]


def chart_frame(chart: Sequence[ChartPoint]) -> pd.DataFrame:
    """
    Chart points as a DataFrame for plotting.

    Returns:
        DataFrame with DatetimeIndex and one float column per CSV column;
        absent values become NaN.
    """
    columns = [c for c in CSV_COLUMNS if c != "date"]
    if not chart:
        return pd.DataFrame(columns=columns, dtype=float)

    df = pd.DataFrame(chart_rows(chart))
    df["date"] = pd.to_datetime(df["date"])
    df.set_index("date", inplace=True)
    return df[columns].astype(float)
