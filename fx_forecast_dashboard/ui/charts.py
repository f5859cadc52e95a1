"""Plotly figure for the forecast chart."""

from typing import Sequence

import pandas as pd
import plotly.graph_objects as go

from fx_forecast_dashboard.indicators.calculator import chart_frame
from fx_forecast_dashboard.models.market_data import ChartPoint


COLORS = {
    "actual": "#3b82f6",
    "fitted": "#94a3b8",
    "forecast": "#f97316",
    "band": "rgba(249, 115, 22, 0.15)",
    "sma": "#10b981",
    "ema": "#a855f7",
    "grid": "#1e293b",
    "text": "#94a3b8",
}


def build_forecast_figure(
    chart: Sequence[ChartPoint],
    title: str = "",
    sma_window: int | None = None,
    ema_window: int | None = None,
    height: int = 420,
) -> go.Figure:
    """
    Build the actual/fitted/forecast chart with a shaded 95% band.

    Overlay traces are only added when the series has any values.
    """
    df = chart_frame(chart)
    fig = go.Figure()
    if df.empty:
        return fig

    history = df[df["actual"].notna()]
    future = df[df["forecast"].notna()]

    fig.add_trace(go.Scatter(
        x=history.index, y=history["actual"],
        mode="lines", line=dict(color=COLORS["actual"], width=2),
        name="Actual",
        hovertemplate="Actual: %{y:.4f}<extra></extra>",
    ))

    if history["fitted"].notna().any():
        fig.add_trace(go.Scatter(
            x=history.index, y=history["fitted"],
            mode="lines", line=dict(color=COLORS["fitted"], width=1, dash="dot"),
            name="Holt fitted",
            hovertemplate="Fitted: %{y:.4f}<extra></extra>",
        ))

    for key, window in (("sma", sma_window), ("ema", ema_window)):
        if history[key].notna().any():
            label = f"{key.upper()} ({window})" if window else key.upper()
            fig.add_trace(go.Scatter(
                x=history.index, y=history[key],
                mode="lines", line=dict(color=COLORS[key], width=1.5),
                name=label,
                hovertemplate=f"{label}: %{{y:.4f}}<extra></extra>",
            ))

    if not future.empty:
        # Band: upper edge, then lower edge filled up to it
        fig.add_trace(go.Scatter(
            x=future.index, y=future["band_hi"],
            mode="lines", line=dict(width=0),
            hoverinfo="skip", showlegend=False,
        ))
        fig.add_trace(go.Scatter(
            x=future.index, y=future["band_lo"],
            mode="lines", line=dict(width=0),
            fill="tonexty", fillcolor=COLORS["band"],
            name="95% band",
            hoverinfo="skip",
        ))
        fig.add_trace(go.Scatter(
            x=future.index, y=future["forecast"],
            mode="lines", line=dict(color=COLORS["forecast"], width=2, dash="dash"),
            name="Forecast",
            hovertemplate="Forecast: %{y:.4f}<extra></extra>",
        ))

    if not history.empty:
        fig.add_vline(
            x=pd.Timestamp(history.index[-1]), line_dash="dot", line_color="#475569", line_width=1,
        )

    fig.update_layout(
        height=height, margin=dict(l=0, r=20, t=40, b=0),
        paper_bgcolor="rgba(0,0,0,0)", plot_bgcolor="rgba(0,0,0,0)",
        showlegend=True,
        legend=dict(
            orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1,
            font=dict(size=10, color=COLORS["text"]), bgcolor="rgba(0,0,0,0)",
        ),
        title=dict(text=title, font=dict(size=12, color=COLORS["text"]), x=0),
        xaxis=dict(showgrid=True, gridcolor=COLORS["grid"], tickfont=dict(color="#64748b", size=10)),
        yaxis=dict(showgrid=True, gridcolor=COLORS["grid"], tickfont=dict(color="#64748b", size=10)),
        hovermode="x unified",
    )
    return fig
