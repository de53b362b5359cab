"""Tests for the farm climate summary."""

import pytest

from farmghg.weather.climate import ClimateData


class TestClimateData:
    """Tests for ClimateData."""

    def test_month_lookup(self, climate):
        assert climate.mean_temperature_for_month(1) == -10.0
        assert climate.mean_temperature_for_month(7) == 17.0
        assert climate.mean_temperature_for_month(12) == -8.0

    def test_precipitation_ratio(self, climate):
        assert climate.precipitation_to_evapotranspiration_ratio == pytest.approx(400 / 600)

    def test_ratio_zero_without_evapotranspiration(self):
        climate = ClimateData((0.0,) * 12, total_annual_precipitation=300.0, total_annual_evapotranspiration=0.0)
        assert climate.precipitation_to_evapotranspiration_ratio == 0.0

    def test_needs_twelve_months(self):
        with pytest.raises(ValueError, match="12"):
            ClimateData((0.0,) * 11, total_annual_precipitation=0.0, total_annual_evapotranspiration=0.0)

    def test_dict_round_trip(self, climate):
        data = climate.to_dict()
        assert data["mean_annual_temperature"] == pytest.approx(round(sum(climate.monthly_mean_temperatures) / 12, 2))
        assert ClimateData.from_dict(data) == climate


class TestFromDailyWeather:
    """Tests for summarizing daily weather."""

    def _records(self, years):
        records = []
        for year in years:
            for month in range(1, 13):
                for day in (1, 15):
                    records.append(
                        {
                            "date": f"{year}-{month:02d}-{day:02d}",
                            "temp_mean_c": float(month + day),
                            "precip_mm": 10.0,
                            "et0_mm": 5.0,
                        }
                    )
        return records

    def test_monthly_means(self):
        climate = ClimateData.from_daily_weather(self._records([2023]))
        assert climate.monthly_mean_temperatures[0] == pytest.approx(9.0)
        assert climate.monthly_mean_temperatures[11] == pytest.approx(20.0)

    def test_annual_totals(self):
        climate = ClimateData.from_daily_weather(self._records([2023]))
        assert climate.total_annual_precipitation == 240.0
        assert climate.total_annual_evapotranspiration == 120.0

    def test_multi_year_totals_are_averaged(self):
        climate = ClimateData.from_daily_weather(self._records([2022, 2023]))
        assert climate.total_annual_precipitation == 240.0

    def test_missing_month(self):
        records = [r for r in self._records([2023]) if not r["date"].startswith("2023-06")]
        with pytest.raises(ValueError, match="6"):
            ClimateData.from_daily_weather(records)
