"""Tests for Open-Meteo climate integration."""

import json
from datetime import date, timedelta

import pytest
import respx
from httpx import Response
from tenacity import wait_none

from farmghg.core import client
from farmghg.core.client import ExternalAPIError
from farmghg.weather import openmeteo
from farmghg.weather.openmeteo import (
    HISTORICAL_API,
    fetch_climate_data,
    fetch_daily_weather,
    get_climate_data,
    load_cached_climate,
    save_climate_cache,
)


def _year_response(year: int) -> dict:
    """Daily archive response for a whole year: temperature = month, 1 mm rain and 2 mm ET0 a day."""
    days = []
    d = date(year, 1, 1)
    while d.year == year:
        days.append(d)
        d += timedelta(days=1)
    return {
        "daily": {
            "time": [d.isoformat() for d in days],
            "temperature_2m_mean": [float(d.month) for d in days],
            "precipitation_sum": [1.0] * len(days),
            "et0_fao_evapotranspiration": [2.0] * len(days),
        }
    }


@pytest.fixture
def no_retry_wait(monkeypatch):
    """Retry immediately instead of backing off."""
    monkeypatch.setattr(client._get_with_retry.retry, "wait", wait_none())


class TestFetchDailyWeather:
    """Tests for daily weather fetching."""

    @pytest.fixture
    def mock_archive_response(self):
        """Sample Open-Meteo archive response."""
        return {
            "latitude": 49.69,
            "longitude": -112.84,
            "daily": {
                "time": ["2024-01-01", "2024-01-02", "2024-01-03"],
                "temperature_2m_mean": [-12.3, -8.1, -4.9],
                "precipitation_sum": [0.5, 0.0, 2.2],
                "et0_fao_evapotranspiration": [0.1, 0.2, 0.1],
            },
        }

    @respx.mock
    @pytest.mark.asyncio
    async def test_fetch_success(self, mock_archive_response):
        """Successfully fetches and parses archive data."""
        respx.get(HISTORICAL_API).mock(return_value=Response(200, json=mock_archive_response))

        result = await fetch_daily_weather(date(2024, 1, 1), date(2024, 1, 3))

        assert len(result) == 3
        assert result[0]["date"] == "2024-01-01"
        assert result[0]["temp_mean_c"] == -12.3
        assert result[2]["precip_mm"] == 2.2
        assert result[1]["et0_mm"] == 0.2

    @respx.mock
    @pytest.mark.asyncio
    async def test_handles_nulls(self):
        """Null values are reported as 0."""
        response = {
            "daily": {
                "time": ["2024-01-01"],
                "temperature_2m_mean": [None],
                "precipitation_sum": [None],
                "et0_fao_evapotranspiration": [None],
            }
        }
        respx.get(HISTORICAL_API).mock(return_value=Response(200, json=response))

        result = await fetch_daily_weather(date(2024, 1, 1), date(2024, 1, 1))

        assert result[0]["temp_mean_c"] == 0
        assert result[0]["precip_mm"] == 0
        assert result[0]["et0_mm"] == 0

    @respx.mock
    @pytest.mark.asyncio
    async def test_custom_location(self, mock_archive_response):
        """Latitude and longitude are passed through."""
        route = respx.get(HISTORICAL_API).mock(return_value=Response(200, json=mock_archive_response))

        await fetch_daily_weather(date(2024, 1, 1), date(2024, 1, 3), lat=52.13, lon=-106.67)

        url = str(route.calls[0].request.url)
        assert "52.13" in url
        assert "-106.67" in url

    @pytest.mark.asyncio
    async def test_client_error_not_retried(self, mock_openmeteo_archive):
        """4xx responses raise immediately."""
        route = mock_openmeteo_archive.get("/v1/archive").mock(return_value=Response(400, text="bad dates"))

        with pytest.raises(ExternalAPIError, match="400"):
            await fetch_daily_weather(date(2024, 1, 1), date(2024, 1, 3))
        assert route.call_count == 1

    @pytest.mark.asyncio
    async def test_server_error_retried(self, mock_openmeteo_archive, mock_archive_response, no_retry_wait):
        """5xx responses are retried until one succeeds."""
        route = mock_openmeteo_archive.get("/v1/archive").mock(
            side_effect=[Response(503), Response(200, json=mock_archive_response)]
        )

        result = await fetch_daily_weather(date(2024, 1, 1), date(2024, 1, 3))

        assert len(result) == 3
        assert route.call_count == 2

    @pytest.mark.asyncio
    async def test_gives_up_after_retries(self, mock_openmeteo_archive, no_retry_wait):
        """Persistent 5xx responses end in ExternalAPIError."""
        route = mock_openmeteo_archive.get("/v1/archive").mock(return_value=Response(502))

        with pytest.raises(ExternalAPIError, match="Giving up"):
            await fetch_daily_weather(date(2024, 1, 1), date(2024, 1, 3))
        assert route.call_count == client.MAX_RETRIES


class TestFetchClimateData:
    """Tests for the annual climate summary."""

    @respx.mock
    @pytest.mark.asyncio
    async def test_summarizes_year(self):
        respx.get(HISTORICAL_API).mock(return_value=Response(200, json=_year_response(2023)))

        climate = await fetch_climate_data(2023)

        assert climate.monthly_mean_temperatures == tuple(float(m) for m in range(1, 13))
        assert climate.total_annual_precipitation == 365.0
        assert climate.total_annual_evapotranspiration == 730.0

    @respx.mock
    @pytest.mark.asyncio
    async def test_missing_month_raises(self):
        response = {
            "daily": {
                "time": ["2023-01-01"],
                "temperature_2m_mean": [1.0],
                "precipitation_sum": [1.0],
                "et0_fao_evapotranspiration": [1.0],
            }
        }
        respx.get(HISTORICAL_API).mock(return_value=Response(200, json=response))

        with pytest.raises(ValueError, match="No weather records"):
            await fetch_climate_data(2023)


class TestClimateCache:
    """Tests for the climate cache."""

    def test_missing_cache_returns_none(self, tmp_path):
        assert load_cached_climate(2023, tmp_path / "climate_2023.json") is None

    def test_save_and_load(self, tmp_path, climate):
        path = save_climate_cache(climate, 2023, tmp_path / "nested" / "climate_2023.json")

        assert path.exists()
        assert json.loads(path.read_text())["total_annual_precipitation"] == 400.0
        assert load_cached_climate(2023, path) == climate

    def test_default_path_in_cache_dir(self, tmp_path, monkeypatch, climate):
        monkeypatch.setattr(openmeteo, "get_cache_dir", lambda: tmp_path)
        path = save_climate_cache(climate, 2022)
        assert path == tmp_path / "climate_2022.json"

    @respx.mock(assert_all_called=False)
    @pytest.mark.asyncio
    async def test_uses_cache_without_request(self, tmp_path, climate):
        route = respx.get(HISTORICAL_API).mock(return_value=Response(200, json=_year_response(2023)))
        path = save_climate_cache(climate, 2023, tmp_path / "climate_2023.json")

        result = await get_climate_data(2023, cache_path=path)

        assert result == climate
        assert not route.called

    @respx.mock
    @pytest.mark.asyncio
    async def test_refresh_fetches_and_saves(self, tmp_path, climate):
        respx.get(HISTORICAL_API).mock(return_value=Response(200, json=_year_response(2023)))
        path = save_climate_cache(climate, 2023, tmp_path / "climate_2023.json")

        result = await get_climate_data(2023, refresh=True, cache_path=path)

        assert result.total_annual_precipitation == 365.0
        assert load_cached_climate(2023, path) == result
