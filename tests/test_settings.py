"""Tests for settings and forecast parameters."""

from __future__ import annotations

from pathlib import Path

import pytest

from fx_forecast_dashboard.config import ForecastParameters, Settings


def test_settings_creates_cache_dir(tmp_path: Path) -> None:
    settings = Settings(cache_dir=tmp_path / "nested" / "cache")

    assert settings.cache_dir.is_dir()
    assert settings.db_path == tmp_path / "nested" / "cache" / "requests.db"


def test_settings_read_environment(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("METALS_API_KEY", "abc123")
    monkeypatch.setenv("FX_CACHE_TTL", "42")
    monkeypatch.setenv("FX_CACHE_DIR", str(tmp_path / "env-cache"))

    settings = Settings()

    assert settings.has_metals_api()
    assert settings.cache_ttl_seconds == 42
    assert settings.cache_dir == tmp_path / "env-cache"


def test_placeholder_metals_key_is_not_configured(tmp_path: Path) -> None:
    assert not Settings(metals_api_key="YOUR_FREE_API_KEY", cache_dir=tmp_path).has_metals_api()


def test_settings_validate_rejects_bad_timeout(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        Settings(request_timeout=0, cache_dir=tmp_path).validate()


def test_default_parameters_are_valid() -> None:
    params = ForecastParameters()

    params.validate()
    assert (params.base, params.quote) == ("USD", "EUR")
    assert (params.alpha, params.beta, params.horizon) == (0.5, 0.3, 14)


@pytest.mark.parametrize(
    "overrides",
    [
        {"alpha": 0.95},
        {"beta": 0.05},
        {"horizon": 0},
        {"horizon": 31},
        {"days": 6},
        {"sma_window": 2},
        {"ema_window": 121},
        {"quote": "USD"},
    ],
)
def test_out_of_range_parameters_are_rejected(overrides: dict) -> None:
    with pytest.raises(ValueError):
        ForecastParameters(**overrides).validate()


def test_from_query_params() -> None:
    params = ForecastParameters.from_query_params({
        "base": "GBP",
        "quote": "JPY",
        "days": "365",
        "alpha": "0.25",
        "horizon": "7",
        "smaWin": "20",
        "sma": "false",
        "ema": "true",
    })

    assert params.base == "GBP"
    assert params.quote == "JPY"
    assert params.days == 365
    assert params.alpha == 0.25
    assert params.beta == 0.3
    assert params.horizon == 7
    assert params.sma_window == 20
    assert params.show_sma is False
    assert params.show_ema is True


def test_from_query_params_ignores_bad_values() -> None:
    params = ForecastParameters.from_query_params({"days": "lots", "alpha": "", "other": "x"})

    assert params == ForecastParameters()


def test_query_params_round_trip() -> None:
    params = ForecastParameters(base="AUD", quote="NZD", ema_window=33, show_ema=True)

    query = params.to_query_params()

    assert query["emaWin"] == "33"
    assert query["ema"] == "true"
    assert ForecastParameters.from_query_params(query) == params
