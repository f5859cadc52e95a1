"""Tests for chart building and HTML/CSV export."""

from __future__ import annotations

from pathlib import Path

from fx_forecast_dashboard.config import CSV_COLUMNS, ForecastParameters
from fx_forecast_dashboard.indicators.calculator import ForecastCalculator
from fx_forecast_dashboard.ui.charts import build_forecast_figure
from fx_forecast_dashboard.ui.html_exporter import export_csv, export_html


VALUES = [1.30, 1.31, 1.29, 1.32, 1.33, 1.35, 1.34, 1.36]


def test_figure_traces(make_points) -> None:
    params = ForecastParameters(horizon=3, sma_window=3, show_sma=True, show_ema=False)
    result = ForecastCalculator().calculate(make_points(VALUES), params)

    fig = build_forecast_figure(result.chart, sma_window=3)

    names = [trace.name for trace in fig.data]
    assert names[:3] == ["Actual", "Holt fitted", "SMA (3)"]
    assert "Forecast" in names
    assert "95% band" in names
    assert not any(name and name.startswith("EMA") for name in names)


def test_figure_for_empty_chart_has_no_traces() -> None:
    assert len(build_forecast_figure([]).data) == 0


def test_export_html_and_csv(make_points, tmp_path: Path) -> None:
    params = ForecastParameters(horizon=4)
    result = ForecastCalculator().calculate(make_points(VALUES), params)

    html_path = export_html(result, tmp_path / "out" / "chart.html", title="GBP/USD", params=params)
    csv_path = export_csv(result, tmp_path / "out" / "chart.csv")

    assert html_path.exists()
    assert "plotly" in html_path.read_text(encoding="utf-8").lower()
    lines = csv_path.read_text(encoding="utf-8").split("\n")
    assert lines[0] == ",".join(CSV_COLUMNS)
    assert len(lines) == 1 + len(VALUES) + 4
    assert lines[1].startswith("2024-01-01,1.3,")
