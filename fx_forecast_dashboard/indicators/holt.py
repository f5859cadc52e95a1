"""
Holt's linear exponential smoothing.

Level/trend decomposition of a series with no seasonal component:

    level_t = alpha * y_t + (1 - alpha) * (level_{t-1} + trend_{t-1})
    trend_t = beta * (level_t - level_{t-1}) + (1 - beta) * trend_{t-1}

The h-step forecast is a straight line from the final pair:
level_{n-1} + h * trend_{n-1}.
"""

import logging
import math
from typing import Optional, Sequence

import numpy as np

from fx_forecast_dashboard.models.market_data import HoltResult


logger = logging.getLogger(__name__)

MAX_INIT_POINTS = 5


def _initial_trend(series: Sequence[float]) -> float:
    """OLS slope of the first few points against their index."""
    init_points = min(MAX_INIT_POINTS, len(series) // 2)
    if init_points < 2:
        return 0.0

    x = np.arange(init_points)
    y = np.asarray(series[:init_points], dtype=float)
    return float(np.polyfit(x, y, 1)[0])


def holt_linear(
    series: Sequence[float], alpha: float, beta: float, horizon: int
) -> HoltResult:
    """
    Fit Holt's linear method and extrapolate.

    Args:
        series: Observed values, oldest first
        alpha: Level smoothing parameter (0-1)
        beta: Trend smoothing parameter (0-1)
        horizon: Number of forecast periods

    Returns:
        HoltResult with one fitted value per input point, `horizon` forecast
        values and the RMS of the one-step residuals. Series shorter than two
        points give an empty result with sigma 0.

    Note:
        fitted[0] is the seed level, not a prediction, so it is excluded from
        the residuals.
    """
    n = len(series)
    if n < 2:
        return HoltResult(fitted=[], forecast=[], sigma=0.0)

    level = float(series[0])
    trend = _initial_trend(series)

    fitted: list[Optional[float]] = [None] * n
    fitted[0] = level

    for i in range(1, n):
        prev_level, prev_trend = level, trend
        fitted[i] = prev_level + prev_trend
        level = alpha * series[i] + (1 - alpha) * (prev_level + prev_trend)
        trend = beta * (level - prev_level) + (1 - beta) * prev_trend

    forecast = [level + h * trend for h in range(1, horizon + 1)]

    residuals = [series[i] - fitted[i] for i in range(1, n)]
    residuals = [r for r in residuals if math.isfinite(r)]
    sigma = math.sqrt(sum(r * r for r in residuals) / len(residuals)) if residuals else 0.0

    direction = "UP" if trend > 0 else "DOWN" if trend < 0 else "FLAT"
    logger.debug(
        f"Holt fit: n={n} alpha={alpha} beta={beta} level={level:.6f} "
        f"trend={trend:.6f} ({direction}) sigma={sigma:.6f}"
    )

    return HoltResult(fitted=fitted, forecast=forecast, sigma=sigma)
