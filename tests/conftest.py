"""Shared fixtures."""

from __future__ import annotations

from datetime import date, timedelta
from pathlib import Path

import pytest

from fx_forecast_dashboard.config import Settings
from fx_forecast_dashboard.models.market_data import TimeseriesPoint


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        metals_api_key="",
        metals_api_base_url="https://metals.test/v1",
        request_timeout=5.0,
        cache_ttl_seconds=300,
        cache_dir=tmp_path / "cache",
    )


@pytest.fixture
def make_points():
    def _make(values: list[float], start: str = "2024-01-01") -> list[TimeseriesPoint]:
        first = date.fromisoformat(start)
        return [
            TimeseriesPoint(date=(first + timedelta(days=i)).isoformat(), value=v)
            for i, v in enumerate(values)
        ]

    return _make
