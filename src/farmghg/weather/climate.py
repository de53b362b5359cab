"""
Farm climate data used by the emissions calculators.

The calculators only need monthly mean temperatures (storage ammonia and
land-application volatilization) and the annual precipitation and
evapotranspiration totals (leaching fraction). ClimateData is built either
from a farm file or from daily weather records such as those returned by
the Open-Meteo archive.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import TypedDict


class DailyWeather(TypedDict):
    """Daily weather record."""

    date: str
    temp_mean_c: float
    precip_mm: float
    et0_mm: float


@dataclass(frozen=True)
class ClimateData:
    """Read-only climate summary for one farm location."""

    # Mean daily temperature (°C) for January..December
    monthly_mean_temperatures: tuple[float, ...]
    # Annual totals (mm)
    total_annual_precipitation: float
    total_annual_evapotranspiration: float

    def __post_init__(self):
        if len(self.monthly_mean_temperatures) != 12:
            raise ValueError("Need exactly 12 monthly mean temperatures")

    def mean_temperature_for_month(self, month: int) -> float:
        """Mean temperature (°C) for a calendar month (1-12)."""
        return self.monthly_mean_temperatures[month - 1]

    @property
    def mean_annual_temperature(self) -> float:
        return sum(self.monthly_mean_temperatures) / 12

    @property
    def precipitation_to_evapotranspiration_ratio(self) -> float:
        """P/PE ratio; zero when there is no evapotranspiration data."""
        if self.total_annual_evapotranspiration <= 0:
            return 0.0
        return self.total_annual_precipitation / self.total_annual_evapotranspiration

    @classmethod
    def from_dict(cls, data: dict) -> ClimateData:
        return cls(
            monthly_mean_temperatures=tuple(float(t) for t in data["monthly_mean_temperatures"]),
            total_annual_precipitation=float(data["total_annual_precipitation"]),
            total_annual_evapotranspiration=float(data["total_annual_evapotranspiration"]),
        )

    def to_dict(self) -> dict:
        return {
            "monthly_mean_temperatures": list(self.monthly_mean_temperatures),
            "total_annual_precipitation": self.total_annual_precipitation,
            "total_annual_evapotranspiration": self.total_annual_evapotranspiration,
            "mean_annual_temperature": round(self.mean_annual_temperature, 2),
        }

    @classmethod
    def from_daily_weather(cls, records: list[DailyWeather]) -> ClimateData:
        """
        Summarize daily weather into monthly means and annual totals.

        Multi-year input is averaged: monthly temperatures are the mean of all
        days in that calendar month, annual totals are divided by the number
        of years covered.

        Raises:
            ValueError: If a calendar month has no records
        """
        temps_by_month: dict[int, list[float]] = defaultdict(list)
        years: set[int] = set()
        total_precip = 0.0
        total_et0 = 0.0

        for record in records:
            d = date.fromisoformat(record["date"])
            years.add(d.year)
            temps_by_month[d.month].append(record.get("temp_mean_c", 0))
            total_precip += record.get("precip_mm", 0)
            total_et0 += record.get("et0_mm", 0)

        missing = [m for m in range(1, 13) if not temps_by_month[m]]
        if missing:
            raise ValueError(f"No weather records for months {missing}")

        n_years = len(years)
        return cls(
            monthly_mean_temperatures=tuple(
                round(sum(temps_by_month[m]) / len(temps_by_month[m]), 2) for m in range(1, 13)
            ),
            total_annual_precipitation=round(total_precip / n_years, 1),
            total_annual_evapotranspiration=round(total_et0 / n_years, 1),
        )
