"""Livestock greenhouse gas and nutrient emission calculations.

Daily emissions (enteric and manure CH4, direct and indirect N2O, NH3,
nitrate leaching) for the animal groups of a farm, rolled up by month and
year, with farm manure tanks and land application emissions.

Subpackages:
- farmghg.core: Configuration, units, errors and HTTP client
- farmghg.data: Farm model, enumerations, timeline and coefficient tables
- farmghg.weather: Climate summaries and the Open-Meteo provider
- farmghg.emissions: Daily calculators, methodology versions, aggregation
- farmghg.manure: Manure tanks and land application emissions
"""

# Re-export common items for convenience
from farmghg.core import settings
from farmghg.data import load_farm
from farmghg.emissions import MethodologyVersion, calculate_farm_emissions, calculate_group_emissions
from farmghg.simulation import FarmRun, run_farm

__all__ = [
    "settings",
    "load_farm",
    "MethodologyVersion",
    "calculate_farm_emissions",
    "calculate_group_emissions",
    "FarmRun",
    "run_farm",
]

__version__ = "0.1.0"
