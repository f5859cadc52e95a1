"""Simple and exponential moving averages."""

from typing import Optional, Sequence

import pandas as pd


def _to_optional(values: pd.Series) -> list[Optional[float]]:
    """NaN -> None so absent entries stay distinct from zero."""
    return [None if pd.isna(v) else float(v) for v in values]


def sma(series: Sequence[float], window: int) -> list[Optional[float]]:
    """
    Simple moving average.

    Args:
        series: Data series
        window: Number of trailing points averaged

    Returns:
        One entry per input point, None until the window is filled.
        All None if the window is < 1 or longer than the series.
    """
    if window < 1 or window > len(series):
        return [None] * len(series)

    return _to_optional(pd.Series(series, dtype=float).rolling(window=window).mean())


def ema(series: Sequence[float], window: int) -> list[Optional[float]]:
    """
    Exponential moving average.

    The window only sets the smoothing factor k = 2 / (window + 1); the
    average is seeded with the first value, so every index is populated.
    All None if the window is < 1 or the series is empty.
    """
    if window < 1 or len(series) == 0:
        return [None] * len(series)

    # adjust=False gives the plain recursive form seeded with series[0]
    return _to_optional(pd.Series(series, dtype=float).ewm(span=window, adjust=False).mean())
