"""
Open-Meteo historical weather integration.

Builds the annual climate summary (monthly mean temperature, precipitation
and reference evapotranspiration) for a farm location. Open-Meteo is free,
requires no API key, and includes ET₀ (FAO reference evapotranspiration).

API Documentation: https://open-meteo.com/en/docs
"""

import json
from datetime import date
from pathlib import Path

from farmghg.core import get_cache_dir, http_get_with_retry
from farmghg.core.config import settings
from farmghg.weather.climate import ClimateData, DailyWeather

HISTORICAL_API = "https://archive-api.open-meteo.com/v1/archive"


async def fetch_daily_weather(
    start_date: date,
    end_date: date,
    lat: float | None = None,
    lon: float | None = None,
) -> list[DailyWeather]:
    """
    Fetch daily weather from the Open-Meteo archive.

    Args:
        start_date: Start date
        end_date: End date (inclusive)
        lat: Latitude (default: settings.latitude)
        lon: Longitude (default: settings.longitude)

    Returns:
        List of daily weather records; missing values are reported as 0
    """
    params = {
        "latitude": settings.latitude if lat is None else lat,
        "longitude": settings.longitude if lon is None else lon,
        "start_date": start_date.isoformat(),
        "end_date": end_date.isoformat(),
        "daily": [
            "temperature_2m_mean",
            "precipitation_sum",
            "et0_fao_evapotranspiration",
        ],
        "timezone": "auto",
    }

    response = await http_get_with_retry(HISTORICAL_API, params=params, timeout=60)
    data = response.json()

    daily = data.get("daily", {})
    dates = daily.get("time", [])
    temp_mean = daily.get("temperature_2m_mean", [])
    precip = daily.get("precipitation_sum", [])
    et0 = daily.get("et0_fao_evapotranspiration", [])

    results = []
    for i, d in enumerate(dates):
        results.append(
            DailyWeather(
                date=d,
                temp_mean_c=temp_mean[i] if temp_mean[i] is not None else 0,
                precip_mm=precip[i] if precip[i] is not None else 0,
                et0_mm=et0[i] if et0[i] is not None else 0,
            )
        )

    return results


async def fetch_climate_data(
    year: int,
    lat: float | None = None,
    lon: float | None = None,
) -> ClimateData:
    """
    Fetch one calendar year of weather and summarize it for the calculators.

    Raises:
        ExternalAPIError: If Open-Meteo cannot be reached
        ValueError: If the archive has no data for some month of the year
    """
    records = await fetch_daily_weather(date(year, 1, 1), date(year, 12, 31), lat, lon)
    return ClimateData.from_daily_weather(records)


def climate_cache_path(year: int) -> Path:
    return get_cache_dir() / f"climate_{year}.json"


def load_cached_climate(year: int, cache_path: Path | None = None) -> ClimateData | None:
    """Load a cached climate summary, or None if there is none."""
    if cache_path is None:
        cache_path = climate_cache_path(year)

    if not cache_path.exists():
        return None

    with open(cache_path) as f:
        return ClimateData.from_dict(json.load(f))


def save_climate_cache(climate: ClimateData, year: int, cache_path: Path | None = None) -> Path:
    """Save a climate summary to the cache."""
    if cache_path is None:
        cache_path = climate_cache_path(year)

    cache_path.parent.mkdir(parents=True, exist_ok=True)

    with open(cache_path, "w") as f:
        json.dump(climate.to_dict(), f, indent=2)

    return cache_path


async def get_climate_data(
    year: int,
    lat: float | None = None,
    lon: float | None = None,
    refresh: bool = False,
    cache_path: Path | None = None,
) -> ClimateData:
    """Cached climate summary for a year; fetches and caches it when missing or refresh=True."""
    if not refresh:
        cached = load_cached_climate(year, cache_path)
        if cached is not None:
            return cached

    climate = await fetch_climate_data(year, lat, lon)
    save_climate_cache(climate, year, cache_path)
    return climate
