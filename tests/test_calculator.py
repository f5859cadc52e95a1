"""Tests for the forecast calculator."""

from __future__ import annotations

import math

import pytest

from fx_forecast_dashboard.config import CSV_COLUMNS, ForecastParameters
from fx_forecast_dashboard.indicators.calculator import ForecastCalculator, chart_frame, chart_rows


VALUES = [0.90, 0.91, 0.905, 0.915, 0.92, 0.918, 0.925, 0.93, 0.928, 0.935, 0.94, 0.938]


def test_calculate_builds_full_chart(make_points) -> None:
    params = ForecastParameters(horizon=5, sma_window=3, ema_window=4, show_sma=True, show_ema=True)

    result = ForecastCalculator().calculate(make_points(VALUES), params)

    assert len(result.chart) == len(VALUES) + 5
    assert result.has_forecast
    assert result.next_forecast == result.holt.forecast[0]
    assert result.last_value == VALUES[-1]
    assert result.as_of == "2024-01-12"
    assert result.sma[:2] == [None, None]
    assert result.ema[0] == VALUES[0]


def test_hidden_overlays_are_all_absent(make_points) -> None:
    params = ForecastParameters(show_sma=False, show_ema=False)

    result = ForecastCalculator().calculate(make_points(VALUES), params)

    assert result.sma == [None] * len(VALUES)
    assert result.ema == [None] * len(VALUES)
    assert all(p.sma is None and p.ema is None for p in result.chart)


def test_single_point_has_no_forecast(make_points) -> None:
    result = ForecastCalculator().calculate(make_points([1.25]), ForecastParameters())

    assert not result.has_forecast
    assert result.next_forecast is None
    assert len(result.chart) == 1
    assert result.chart[0].actual == 1.25


def test_empty_series(make_points) -> None:
    result = ForecastCalculator().calculate([], ForecastParameters())

    assert result.chart == []
    assert result.last_value is None
    assert result.as_of is None


def test_chart_rows_use_csv_columns(make_points) -> None:
    result = ForecastCalculator().calculate(make_points(VALUES), ForecastParameters(horizon=2))

    rows = chart_rows(result.chart)

    assert list(rows[0]) == CSV_COLUMNS
    assert rows[0]["date"] == "2024-01-01"
    assert rows[-1]["actual"] is None
    assert rows[-1]["band_lo"] < rows[-1]["forecast"] < rows[-1]["band_hi"]


def test_chart_frame_has_nan_for_absent_values(make_points) -> None:
    result = ForecastCalculator().calculate(make_points(VALUES), ForecastParameters(horizon=3))

    df = chart_frame(result.chart)

    assert len(df) == len(VALUES) + 3
    assert "date" not in df.columns
    assert df["actual"].notna().sum() == len(VALUES)
    assert df["forecast"].notna().sum() == 3
    assert math.isnan(df["forecast"].iloc[0])
    assert df.index.is_monotonic_increasing
    assert df["actual"].iloc[0] == pytest.approx(VALUES[0])


def test_chart_frame_empty() -> None:
    df = chart_frame([])

    assert df.empty
    assert "forecast" in df.columns
