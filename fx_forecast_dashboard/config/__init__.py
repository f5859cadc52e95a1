"""Configuration."""

from fx_forecast_dashboard.config.settings import (
    BASE_CURRENCIES,
    CSV_COLUMNS,
    HISTORY_PRESETS,
    ForecastParameters,
    Settings,
)

__all__ = ["BASE_CURRENCIES", "CSV_COLUMNS", "HISTORY_PRESETS", "ForecastParameters", "Settings"]
