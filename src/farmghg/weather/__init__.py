"""Weather module - farm climate summaries and the Open-Meteo provider."""

from farmghg.weather.climate import ClimateData, DailyWeather
from farmghg.weather.openmeteo import fetch_climate_data, fetch_daily_weather, get_climate_data

__all__ = [
    "ClimateData",
    "DailyWeather",
    "fetch_climate_data",
    "fetch_daily_weather",
    "get_climate_data",
]
