"""Export a forecast as a self-contained HTML page."""

import logging
from datetime import date
from pathlib import Path

import httpx

from fx_forecast_dashboard.config import CSV_COLUMNS, ForecastParameters, Settings
from fx_forecast_dashboard.data.fx_fetcher import FxFetcher
from fx_forecast_dashboard.indicators.calculator import ForecastCalculator, ForecastResult, chart_rows
from fx_forecast_dashboard.ui.charts import build_forecast_figure
from fx_forecast_dashboard.ui.csv_exporter import csv_filename, to_csv


def export_html(
    result: ForecastResult,
    output_path: Path | str,
    title: str = "FX Forecast",
    params: ForecastParameters | None = None,
) -> Path:
    """
    Write the forecast chart to a standalone HTML file.

    Plotly's JS is loaded from the CDN, so the file stays small.

    Returns:
        Path to the generated file
    """
    output_path = Path(output_path)
    fig = build_forecast_figure(
        result.chart,
        title=title,
        sma_window=params.sma_window if params and params.show_sma else None,
        ema_window=params.ema_window if params and params.show_ema else None,
    )
    fig.update_layout(paper_bgcolor="#0f172a", plot_bgcolor="#0f172a")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(str(output_path), include_plotlyjs="cdn", full_html=True)
    return output_path


def export_csv(result: ForecastResult, output_path: Path | str) -> Path:
    """Write the chart points as CSV."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(to_csv(chart_rows(result.chart), CSV_COLUMNS), encoding="utf-8")
    return output_path


def main() -> None:
    """CLI entry point."""
    import argparse

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    defaults = ForecastParameters()
    parser = argparse.ArgumentParser(description="Export an FX forecast as HTML and CSV")
    parser.add_argument("--base", type=str, default=defaults.base)
    parser.add_argument("--quote", type=str, default=defaults.quote)
    parser.add_argument("--days", type=int, default=defaults.days)
    parser.add_argument("--alpha", type=float, default=defaults.alpha)
    parser.add_argument("--beta", type=float, default=defaults.beta)
    parser.add_argument("--horizon", type=int, default=defaults.horizon)
    parser.add_argument("--sma-window", type=int, default=defaults.sma_window)
    parser.add_argument("--ema-window", type=int, default=defaults.ema_window)
    parser.add_argument("--no-sma", action="store_true", help="Hide the SMA overlay")
    parser.add_argument("--ema", action="store_true", help="Show the EMA overlay")
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="HTML output path (default: dist/fx-forecast-BASE-QUOTE.html)",
    )
    parser.add_argument(
        "--csv",
        action="store_true",
        help="Also write the chart data as CSV next to the HTML file",
    )
    args = parser.parse_args()

    params = ForecastParameters(
        base=args.base,
        quote=args.quote,
        days=args.days,
        alpha=args.alpha,
        beta=args.beta,
        horizon=args.horizon,
        sma_window=args.sma_window,
        ema_window=args.ema_window,
        show_sma=not args.no_sma,
        show_ema=args.ema,
    )

    try:
        params.validate()
        settings = Settings()
        with FxFetcher(settings) as fetcher:
            points = fetcher.fetch_recent(params.base, params.quote, params.days)
    except ValueError as e:
        print(f"Error: {e}")
        raise SystemExit(1)
    except httpx.HTTPError as e:
        print(f"Failed to fetch currency data: {e}")
        raise SystemExit(1)

    result = ForecastCalculator().calculate(points, params)
    if not result.has_forecast:
        print(f"Not enough data to forecast ({len(points)} points)")

    output = Path(args.output) if args.output else (
        settings.cache_dir.parent / "dist" / f"fx-forecast-{params.base}-{params.quote}.html"
    )
    title = f"{params.base}/{params.quote} Holt forecast (alpha={params.alpha}, beta={params.beta})"
    path = export_html(result, output, title=title, params=params)
    print(f"Chart exported to: {path}")
    print(f"File size: {path.stat().st_size / 1024:.1f} KB")

    if args.csv:
        csv_path = export_csv(result, path.parent / csv_filename(params.base, params.quote, date.today()))
        print(f"CSV exported to: {csv_path}")


if __name__ == "__main__":
    main()
