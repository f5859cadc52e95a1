"""Streamlit dashboard for FX and gold forecasting.

Two tabs:
- FX Forecasting: Holt forecast with SMA/EMA overlays and CSV export
- Gold: AUD gold price history (ounce or kilogram)
"""

import streamlit as st
from dataclasses import replace
from datetime import date

from fx_forecast_dashboard.config import BASE_CURRENCIES, CSV_COLUMNS, HISTORY_PRESETS, ForecastParameters
from fx_forecast_dashboard.config.settings import (
    DAYS_RANGE,
    HORIZON_RANGE,
    SMOOTHING_RANGE,
    WINDOW_RANGE,
)
from fx_forecast_dashboard.data import FxFetcher, GoldFetcher
from fx_forecast_dashboard.data.fx_fetcher import FETCH_ERRORS
from fx_forecast_dashboard.indicators import ForecastCalculator, ForecastResult, build_chart_data
from fx_forecast_dashboard.indicators.calculator import chart_rows
from fx_forecast_dashboard.models.market_data import TimeseriesPoint
from fx_forecast_dashboard.ui.charts import build_forecast_figure
from fx_forecast_dashboard.ui.csv_exporter import csv_filename, to_csv


@st.cache_data(ttl=300, show_spinner=False)
def load_fx(base: str, quote: str, days: int) -> list[TimeseriesPoint]:
    with FxFetcher() as fetcher:
        return fetcher.fetch_recent(base, quote, days)


@st.cache_data(ttl=300, show_spinner=False)
def load_gold(days: int, unit: str) -> list[TimeseriesPoint]:
    with GoldFetcher() as fetcher:
        return fetcher.fetch_recent(days, unit)


FX_FETCH_ERROR = "Failed to fetch currency data. Please try again."


def fetch_fx(params: ForecastParameters, refresh: bool = False) -> list[TimeseriesPoint] | None:
    """Load history for the selected pair; on failure show an error and return None."""
    try:
        if refresh:
            load_fx.clear()
            with FxFetcher() as fetcher:
                fetcher.invalidate_recent(params.base, params.quote, params.days)
        return load_fx(params.base, params.quote, params.days)
    except FETCH_ERRORS:
        st.error(FX_FETCH_ERROR)
        return None


def metric_card(label: str, value: str, color: str = "#e2e8f0") -> None:
    st.markdown(
        f"""<div style="background: #1e293b; border: 1px solid #334155; border-radius: 8px; padding: 0.75rem 1rem;">
            <div style="color: #94a3b8; font-size: 0.7rem; text-transform: uppercase; letter-spacing: 0.1em;">{label}</div>
            <div style="color: {color}; font-size: 1.5rem; font-weight: 600; font-family: 'SF Mono', 'Consolas', monospace;">{value}</div>
        </div>""",
        unsafe_allow_html=True,
    )


# =============================================================================
# TAB 1: FX FORECASTING
# =============================================================================

def render_pair_select(params: ForecastParameters) -> ForecastParameters:
    """Render base/quote selectors with a swap button."""
    col_base, col_swap, col_quote = st.columns([4, 1, 4])
    with col_base:
        params.base = st.selectbox(
            "Base", BASE_CURRENCIES, index=BASE_CURRENCIES.index(params.base)
            if params.base in BASE_CURRENCIES else 0,
        )
    quotes = [c for c in BASE_CURRENCIES if c != params.base]
    with col_quote:
        params.quote = st.selectbox(
            "Quote", quotes, index=quotes.index(params.quote) if params.quote in quotes else 0,
        )
    with col_swap:
        st.markdown("<div style='height: 1.75rem;'></div>", unsafe_allow_html=True)
        if st.button("Swap", help="Swap currencies"):
            swapped = replace(params, base=params.quote, quote=params.base)
            st.query_params.update(swapped.to_query_params())
            st.rerun()
    return params


def render_controls(params: ForecastParameters) -> ForecastParameters:
    """Render forecast parameter controls."""
    params.days = st.slider("History (days)", *DAYS_RANGE, value=min(max(params.days, DAYS_RANGE[0]), DAYS_RANGE[1]))

    col1, col2, col3 = st.columns(3)
    with col1:
        params.alpha = st.slider(
            "Alpha (level)", *SMOOTHING_RANGE, value=min(max(params.alpha, SMOOTHING_RANGE[0]), SMOOTHING_RANGE[1]),
            step=0.01,
        )
    with col2:
        params.beta = st.slider(
            "Beta (trend)", *SMOOTHING_RANGE, value=min(max(params.beta, SMOOTHING_RANGE[0]), SMOOTHING_RANGE[1]),
            step=0.01,
        )
    with col3:
        params.horizon = st.slider(
            "Horizon (days)", *HORIZON_RANGE, value=min(max(params.horizon, HORIZON_RANGE[0]), HORIZON_RANGE[1]),
        )

    col4, col5 = st.columns(2)
    with col4:
        params.show_sma = st.checkbox("Show SMA", value=params.show_sma)
        params.sma_window = st.number_input(
            "SMA window", *WINDOW_RANGE, value=min(max(params.sma_window, WINDOW_RANGE[0]), WINDOW_RANGE[1]),
            disabled=not params.show_sma,
        )
    with col5:
        params.show_ema = st.checkbox("Show EMA", value=params.show_ema)
        params.ema_window = st.number_input(
            "EMA window", *WINDOW_RANGE, value=min(max(params.ema_window, WINDOW_RANGE[0]), WINDOW_RANGE[1]),
            disabled=not params.show_ema,
        )
    return params


def render_fx_summary(result: ForecastResult, points: list[TimeseriesPoint]) -> None:
    col1, col2, col3 = st.columns(3)
    with col1:
        metric_card("Last rate", f"{result.last_value:.4f}" if result.last_value is not None else "0.0000")
    with col2:
        metric_card(
            "Next forecast",
            f"{result.next_forecast:.4f}" if result.next_forecast is not None else "0.0000",
            color="#f97316",
        )
    with col3:
        metric_card("Data points", str(len(points)))


def render_fx_tab() -> None:
    """Render the FX forecasting tab."""
    params = ForecastParameters.from_query_params(st.query_params.to_dict())
    params = render_pair_select(params)
    with st.expander("Forecast settings", expanded=True):
        params = render_controls(params)

    try:
        params.validate()
    except ValueError as e:
        st.error(str(e))
        return

    st.query_params.update(params.to_query_params())

    refresh = st.button("Refresh", help="Fetch fresh rates instead of cached ones")
    with st.spinner("Loading..."):
        points = fetch_fx(params, refresh=refresh)
    if points is None:
        return

    result = ForecastCalculator().calculate(points, params)

    if not points:
        st.info("No data returned for this pair and range.")
        return
    if not result.has_forecast:
        st.warning("Not enough data to forecast. Showing history only.")

    render_fx_summary(result, points)

    fig = build_forecast_figure(
        result.chart,
        title=f"{params.base}/{params.quote}",
        sma_window=params.sma_window if params.show_sma else None,
        ema_window=params.ema_window if params.show_ema else None,
    )
    st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False})

    st.download_button(
        "Download CSV",
        data=to_csv(chart_rows(result.chart), CSV_COLUMNS),
        file_name=csv_filename(params.base, params.quote, date.today()),
        mime="text/csv",
    )
    st.caption(
        "Primary data: Frankfurter (ECB). Fallback: exchangerate.host. "
        "Holt smoothing + optional SMA/EMA overlays. Bands are illustrative only; not financial advice."
    )


# =============================================================================
# TAB 2: GOLD
# =============================================================================

def render_gold_tab() -> None:
    """Render gold price history."""
    col_period, col_unit, _ = st.columns([2, 1, 3])
    with col_period:
        preset = st.radio("History", list(HISTORY_PRESETS), index=1, horizontal=True)
    with col_unit:
        unit = st.radio("Unit", ["oz", "kg"], horizontal=True)

    days = HISTORY_PRESETS[preset]
    with st.spinner("Loading gold price data..."):
        prices = load_gold(days, unit)

    if not prices:
        st.info("No gold price data available.")
        return

    # History only, no forecast
    empty = [None] * len(prices)
    chart = build_chart_data(prices, [], [], 0.0, empty, empty)

    col1, col2 = st.columns(2)
    with col1:
        metric_card("Last price", f"${prices[-1].value:,.2f}", color="#f59e0b")
    with col2:
        metric_card("Date range", f"{prices[0].date} to {prices[-1].date}")

    fig = build_forecast_figure(chart, title=f"Gold Price Chart (AUD/{unit})")
    st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False})


# =============================================================================
# MAIN APP
# =============================================================================

def main() -> None:
    """Main dashboard entry point."""
    st.set_page_config(
        page_title="FX Forecaster",
        page_icon="",
        layout="wide",
    )

    st.markdown(
        """
        <style>
            .stApp { background-color: #0f172a; }
            .stMarkdown, .stText, p, span, label { color: #e2e8f0; }
            h1, h2, h3, h4 { color: #f1f5f9 !important; font-weight: 600 !important; }
            #MainMenu, footer { visibility: hidden; }
        </style>
        """,
        unsafe_allow_html=True,
    )

    st.markdown(
        """<div style="padding: 0.5rem 0 1rem 0; border-bottom: 1px solid #334155; margin-bottom: 1rem;">
            <h1 style="margin: 0; font-size: 1.5rem; color: #f1f5f9;">FX Forecasting</h1>
            <div style="color: #64748b; font-size: 0.75rem; margin-top: 0.25rem;">Holt linear smoothing with moving-average overlays</div>
        </div>""",
        unsafe_allow_html=True,
    )

    tab1, tab2 = st.tabs(["FX Forecasting", "Gold"])

    with tab1:
        render_fx_tab()

    with tab2:
        render_gold_tab()


if __name__ == "__main__":
    main()
