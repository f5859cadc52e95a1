"""Data models."""

from fx_forecast_dashboard.models.market_data import ChartPoint, HoltResult, TimeseriesPoint

__all__ = ["ChartPoint", "HoltResult", "TimeseriesPoint"]
