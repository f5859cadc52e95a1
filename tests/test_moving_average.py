"""Tests for simple and exponential moving averages."""

from __future__ import annotations

import pandas as pd
import pytest

from fx_forecast_dashboard.indicators.moving_average import ema, sma


def test_sma_leading_gap_then_trailing_means() -> None:
    assert sma([1, 2, 3, 4, 5], 3) == [None, None, 2.0, 3.0, 4.0]


@pytest.mark.parametrize("window", [1, 2, 4, 5])
def test_sma_has_window_minus_one_leading_gaps(window: int) -> None:
    series = [1.5, 2.5, 2.0, 4.0, 3.5]

    result = sma(series, window)

    assert len(result) == len(series)
    assert result[:window - 1] == [None] * (window - 1)
    for i in range(window - 1, len(series)):
        expected = sum(series[i - window + 1:i + 1]) / window
        assert result[i] == pytest.approx(expected)


@pytest.mark.parametrize("window", [0, -3, 6])
def test_sma_invalid_window_is_all_absent(window: int) -> None:
    assert sma([1, 2, 3, 4, 5], window) == [None] * 5


def test_sma_keeps_zero_distinct_from_absent() -> None:
    assert sma([0.0, 0.0, 0.0], 2) == [None, 0.0, 0.0]


def test_ema_is_seeded_with_first_value() -> None:
    result = ema([1, 2, 3, 4, 5], 2)

    assert result[0] == 1
    assert result[1] == pytest.approx((2 / 3) * 2 + (1 / 3) * 1)
    assert all(v is not None for v in result)


def test_ema_follows_recurrence() -> None:
    series = [3.0, 1.0, 4.0, 1.0, 5.0, 9.0]
    k = 2 / (4 + 1)

    result = ema(series, 4)

    expected = series[0]
    for i in range(1, len(series)):
        expected = k * series[i] + (1 - k) * expected
        assert result[i] == pytest.approx(expected)


def test_ema_tracks_recent_values_closer_with_smaller_window() -> None:
    series = [1.0] * 10 + [10.0] * 3

    fast = ema(series, 2)[-1]
    slow = ema(series, 10)[-1]

    assert slow < fast < 10.0


def test_ema_window_longer_than_series_is_still_defined() -> None:
    assert ema([2.0, 4.0], 50)[0] == 2.0


@pytest.mark.parametrize("series,window", [([], 3), ([1, 2, 3], 0)])
def test_ema_degenerate_input_is_all_absent(series: list[float], window: int) -> None:
    assert ema(series, window) == [None] * len(series)


def test_moving_averages_do_not_mutate_input() -> None:
    series = [1.0, 2.0, 3.0]
    snapshot = list(series)

    sma(series, 2)
    ema(series, 2)

    assert series == snapshot


def test_sma_matches_pandas_rolling_mean() -> None:
    series = [1, 2, 3, 4, 5, 4.5, 6.1]

    expected = pd.Series(series, dtype=float).rolling(3).mean()

    result = sma(series, 3)
    assert result[:2] == [None, None]
    assert result[2:] == pytest.approx(list(expected[2:]))


def test_ema_matches_pandas_recursive_ewm() -> None:
    series = [1, 2, 3, 4, 5, 4.5, 6.1]

    expected = pd.Series(series, dtype=float).ewm(span=2, adjust=False).mean()

    assert ema(series, 2) == pytest.approx(list(expected))


def test_moving_averages_return_plain_floats() -> None:
    assert all(type(v) is float for v in sma([1, 2, 3], 2)[1:])
    assert all(type(v) is float for v in ema([1, 2, 3], 2))
