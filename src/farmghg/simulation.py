"""
Full farm run: group emissions, manure tanks, land application.

Stages run in one direction only. Every group is computed first, the
manure service then fills its tanks from the finished results, and land
application emissions are computed last from the pooled daily records.
"""

from collections.abc import Callable
from dataclasses import dataclass

from farmghg.data.coefficients import CoefficientProvider, default_coefficients
from farmghg.data.models import Farm
from farmghg.emissions import MethodologyVersion, calculate_farm_emissions, farm_annual_totals
from farmghg.emissions.records import AnimalComponentEmissionsResults
from farmghg.manure import LandApplicationEmissionResult, ManureService, calculate_land_application_emissions


@dataclass
class FarmRun:
    farm: Farm
    methodology: MethodologyVersion
    components: list[AnimalComponentEmissionsResults]
    manure: ManureService
    land_application: list[LandApplicationEmissionResult]

    def years(self) -> list[int]:
        return sorted({year for component in self.components for year in component.years()})

    def annual_totals(self, year: int) -> dict[str, float]:
        totals = farm_annual_totals(self.components, year)
        totals["land_application_indirect_n2o"] = sum(
            r.indirect_n2o for r in self.land_application if r.date.year == year
        )
        return totals

    def to_dict(self, include_daily: bool = False) -> dict:
        return {
            "farm": self.farm.name,
            "region": self.farm.region,
            "methodology": self.methodology.value,
            "years": {str(year): self.annual_totals(year) for year in self.years()},
            "components": [c.to_dict(include_daily) for c in self.components],
            "manure_tanks": [t.to_dict() for t in self.manure.tanks()],
            "land_application": [r.to_dict() for r in self.land_application],
        }


def run_farm(
    farm: Farm,
    methodology: MethodologyVersion | str | None = None,
    coefficients: CoefficientProvider = default_coefficients,
    on_progress: Callable[[str], None] | None = None,
) -> FarmRun:
    """Compute everything for a farm. Any error aborts the whole run."""
    version = MethodologyVersion.resolve(methodology)

    if on_progress:
        on_progress(f"Calculating livestock emissions ({version.value})...")
    components = calculate_farm_emissions(farm, version, coefficients, on_progress=on_progress)

    if on_progress:
        on_progress("Filling manure tanks...")
    manure = ManureService(coefficients)
    manure.initialize(farm, components)

    if on_progress:
        on_progress("Calculating land application emissions...")
    daily = [record for component in components for record in component.daily_records()]
    land_application = calculate_land_application_emissions(farm, daily, coefficients)

    return FarmRun(
        farm=farm,
        methodology=version,
        components=components,
        manure=manure,
        land_application=land_application,
    )
