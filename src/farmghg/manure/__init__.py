"""Manure module - farm manure tanks and land application emissions."""

from farmghg.manure.land_application import (
    LandApplicationEmissionResult,
    calculate_land_application_emissions,
    total_by_field,
)
from farmghg.manure.service import ManureService, ManureTank

__all__ = [
    "LandApplicationEmissionResult",
    "ManureService",
    "ManureTank",
    "calculate_land_application_emissions",
    "total_by_field",
]
