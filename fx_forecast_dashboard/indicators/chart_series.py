"""Merge history, fitted values, forecast and overlays into chart points."""

from datetime import date, timedelta
from typing import Optional, Sequence

from fx_forecast_dashboard.models.market_data import ChartPoint, TimeseriesPoint


# Two-sided 95% normal quantile
BAND_Z = 1.96


def build_chart_data(
    points: Sequence[TimeseriesPoint],
    fitted: Sequence[Optional[float]],
    forecast: Sequence[float],
    sigma: float,
    sma_arr: Sequence[Optional[float]],
    ema_arr: Sequence[Optional[float]],
) -> list[ChartPoint]:
    """
    Build the display sequence: all historical points, then forecast points.

    Forecast dates step one calendar day past the last historical date, with
    no business-day adjustment. An empty `fitted` (series too short for a
    Holt fit) leaves every historical point without a fitted value.

    Raises:
        ValueError: If array lengths do not match the number of points, or a
            forecast is given without any history to anchor it.
    """
    n = len(points)
    if fitted and len(fitted) != n:
        raise ValueError(f"fitted has {len(fitted)} values for {n} points")
    if len(sma_arr) != n or len(ema_arr) != n:
        raise ValueError(
            f"indicator lengths ({len(sma_arr)}, {len(ema_arr)}) do not match {n} points"
        )
    if not points:
        if forecast:
            raise ValueError("Cannot place a forecast without historical points")
        return []

    result = [
        ChartPoint(
            x=point.date,
            actual=point.value,
            fitted=fitted[i] if fitted else None,
            sma=sma_arr[i],
            ema=ema_arr[i],
        )
        for i, point in enumerate(points)
    ]

    last_date = date.fromisoformat(points[-1].date)
    half_width = BAND_Z * sigma
    for h, value in enumerate(forecast, start=1):
        result.append(ChartPoint(
            x=(last_date + timedelta(days=h)).isoformat(),
            forecast=value,
            band_hi=value + half_width,
            band_lo=value - half_width,
        ))

    return result
