"""Emissions module - daily calculators, methodology versions and aggregation."""

from farmghg.emissions.aggregation import (
    aggregate_by_month,
    aggregate_by_year,
    calculate_daily_emissions,
    calculate_farm_emissions,
    calculate_group_emissions,
    farm_annual_totals,
)
from farmghg.emissions.categories import get_calculator
from farmghg.emissions.methodology import MethodologyVersion
from farmghg.emissions.records import (
    AnimalComponentEmissionsResults,
    CarryOverState,
    GroupEmissionsByDay,
    GroupEmissionsByMonth,
    GroupEmissionsByYear,
    GroupEmissionsResult,
)

__all__ = [
    "AnimalComponentEmissionsResults",
    "CarryOverState",
    "GroupEmissionsByDay",
    "GroupEmissionsByMonth",
    "GroupEmissionsByYear",
    "GroupEmissionsResult",
    "MethodologyVersion",
    "aggregate_by_month",
    "aggregate_by_year",
    "calculate_daily_emissions",
    "calculate_farm_emissions",
    "calculate_group_emissions",
    "farm_annual_totals",
    "get_calculator",
]
