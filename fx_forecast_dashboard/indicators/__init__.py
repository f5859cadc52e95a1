"""Forecast and indicator calculations."""

from fx_forecast_dashboard.indicators.calculator import ForecastCalculator, ForecastResult
from fx_forecast_dashboard.indicators.chart_series import build_chart_data
from fx_forecast_dashboard.indicators.holt import holt_linear
from fx_forecast_dashboard.indicators.moving_average import ema, sma

__all__ = [
    "ForecastCalculator",
    "ForecastResult",
    "build_chart_data",
    "ema",
    "holt_linear",
    "sma",
]
