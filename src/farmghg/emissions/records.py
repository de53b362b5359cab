"""
Emission records.

GroupEmissionsByDay is the output of a daily calculator. Its numeric
fields are tagged as either amounts for the whole group (kg, summed when
records are aggregated) or per-head rates and fractions (averaged). The
monthly and yearly summaries are derived from the daily records only and
can be rebuilt at any time.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from datetime import date

from farmghg.data.enums import AnimalType, ComponentCategory, ManureStateType
from farmghg.emissions.constants import CH4_GWP, N2O_GWP

SUM = "sum"
MEAN = "mean"


def _amount():
    return field(default=0.0, metadata={"aggregate": SUM})


def _rate():
    return field(default=0.0, metadata={"aggregate": MEAN})


@dataclass(frozen=True)
class CarryOverState:
    """What the next day's calculation needs from the previous day."""

    tan_excretion: float = 0.0  # kg TAN
    ammonia_concentration_in_housing: float = 0.0  # kg NH3-N


@dataclass(frozen=True)
class GroupEmissionsByDay:
    """Emissions and nutrient flows of one animal group on one day."""

    date: date
    group_name: str
    animal_type: AnimalType
    management_period: str = ""
    state_type: ManureStateType | None = None
    number_of_animals: float = _rate()

    # Intake
    dry_matter_intake: float = _rate()  # kg DM/head/day
    gross_energy_intake: float = _rate()  # MJ/head/day
    protein_intake: float = _rate()  # kg/head/day
    protein_retained: float = _rate()  # kg/head/day

    # Enteric methane
    enteric_methane_emission_rate: float = _rate()  # kg CH4/head/day
    enteric_methane_emission: float = _amount()  # kg CH4

    # Carbon
    fecal_carbon_excretion_rate: float = _rate()  # kg C/head/day
    fecal_carbon_excretion: float = _amount()
    rate_of_carbon_added_from_bedding: float = _rate()
    carbon_added_from_bedding: float = _amount()
    carbon_from_manure_and_bedding: float = _amount()

    # Manure methane
    volatile_solids: float = _rate()  # kg VS/head/day
    manure_methane_emission_rate: float = _rate()  # kg CH4/head/day
    manure_methane_emission: float = _amount()
    carbon_lost_as_methane: float = _amount()  # kg C
    carbon_in_stored_manure: float = _amount()

    # Nitrogen excretion
    nitrogen_excretion_rate: float = _rate()  # kg N/head/day
    nitrogen_excreted: float = _amount()
    rate_of_nitrogen_added_from_bedding: float = _rate()
    nitrogen_added_from_bedding: float = _amount()

    # Ammonia (kg NH3-N unless named *_emissions, which are kg NH3)
    tan_excretion_rate: float = _rate()  # kg TAN/head/day
    tan_excretion: float = _amount()
    ammonia_emission_rate_from_housing: float = _rate()
    ammonia_concentration_in_housing: float = _amount()
    ammonia_emissions_from_housing: float = _amount()
    tan_entering_storage: float = _amount()
    storage_temperature_factor: float = _rate()
    ammonia_lost_from_storage: float = _amount()
    ammonia_emissions_from_storage: float = _amount()
    fraction_of_manure_volatilized: float = _rate()

    # Nitrous oxide (kg N2O-N unless named *_n2o)
    direct_n2on_emission_rate: float = _rate()
    direct_n2on_emission: float = _amount()
    volatilization_n2on_emission_rate: float = _rate()
    volatilization_n2on_emission: float = _amount()
    leaching_n2on_emission_rate: float = _rate()
    leaching_n2on_emission: float = _amount()
    nitrate_leached: float = _amount()  # kg NO3-N
    indirect_n2on_emission: float = _amount()
    manure_n2on_emission: float = _amount()
    manure_n2o_emission: float = _amount()

    # Available for land application
    nitrogen_available_for_land_application: float = _amount()
    tan_available_for_land_application: float = _amount()
    organic_nitrogen_available_for_land_application: float = _amount()
    manure_carbon_nitrogen_ratio: float = _rate()
    volume_available_for_land_application: float = _amount()  # kg manure

    @property
    def carry_over(self) -> CarryOverState:
        return CarryOverState(
            tan_excretion=self.tan_excretion,
            ammonia_concentration_in_housing=self.ammonia_concentration_in_housing,
        )

    @property
    def category(self) -> ComponentCategory:
        return self.animal_type.category

    def to_dict(self) -> dict:
        data = asdict(self)
        data["date"] = self.date.isoformat()
        data["animal_type"] = self.animal_type.value
        data["state_type"] = self.state_type.value if self.state_type else None
        return data


SUMMED_FIELDS = tuple(f.name for f in fields(GroupEmissionsByDay) if f.metadata.get("aggregate") == SUM)
AVERAGED_FIELDS = tuple(f.name for f in fields(GroupEmissionsByDay) if f.metadata.get("aggregate") == MEAN)


class _Summary:
    """Shared accessors for monthly and yearly summaries."""

    totals: dict[str, float]
    averages: dict[str, float]
    energy_carbon_dioxide: float

    @property
    def total_methane(self) -> float:
        """Enteric plus manure CH4 (kg)."""
        return self.totals["enteric_methane_emission"] + self.totals["manure_methane_emission"]

    @property
    def total_n2o(self) -> float:
        return self.totals["manure_n2o_emission"]

    @property
    def total_ammonia(self) -> float:
        return self.totals["ammonia_emissions_from_housing"] + self.totals["ammonia_emissions_from_storage"]

    @property
    def carbon_dioxide_equivalent(self) -> float:
        """CH4, N2O and energy CO2 (kg CO2e)."""
        return self.total_methane * CH4_GWP + self.total_n2o * N2O_GWP + self.energy_carbon_dioxide


@dataclass(frozen=True)
class GroupEmissionsByMonth(_Summary):
    year: int
    month: int
    days: int  # days of the month the group was present
    totals: dict[str, float]
    averages: dict[str, float]
    energy_carbon_dioxide: float = 0.0  # kg CO2

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "month": self.month,
            "days": self.days,
            "energy_carbon_dioxide": self.energy_carbon_dioxide,
            "totals": dict(self.totals),
            "averages": dict(self.averages),
        }


@dataclass(frozen=True)
class GroupEmissionsByYear(_Summary):
    year: int
    days: int
    totals: dict[str, float]
    averages: dict[str, float]
    energy_carbon_dioxide: float = 0.0

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "days": self.days,
            "energy_carbon_dioxide": self.energy_carbon_dioxide,
            "total_methane": self.total_methane,
            "total_n2o": self.total_n2o,
            "total_ammonia": self.total_ammonia,
            "carbon_dioxide_equivalent": self.carbon_dioxide_equivalent,
            "totals": dict(self.totals),
            "averages": dict(self.averages),
        }


@dataclass(frozen=True)
class GroupEmissionsResult:
    """All emission records of one group for a simulation run."""

    group_name: str
    animal_type: AnimalType
    daily: tuple[GroupEmissionsByDay, ...]
    monthly: tuple[GroupEmissionsByMonth, ...]
    yearly: tuple[GroupEmissionsByYear, ...]

    def year(self, year: int) -> GroupEmissionsByYear | None:
        for summary in self.yearly:
            if summary.year == year:
                return summary
        return None

    def to_dict(self, include_daily: bool = False) -> dict:
        data = {
            "group_name": self.group_name,
            "animal_type": self.animal_type.value,
            "monthly": [m.to_dict() for m in self.monthly],
            "yearly": [y.to_dict() for y in self.yearly],
        }
        if include_daily:
            data["daily"] = [d.to_dict() for d in self.daily]
        return data


@dataclass(frozen=True)
class AnimalComponentEmissionsResults:
    """Emission results for every group of one animal component."""

    component_name: str
    category: ComponentCategory
    groups: tuple[GroupEmissionsResult, ...]

    def daily_records(self):
        for group in self.groups:
            yield from group.daily

    def years(self) -> list[int]:
        return sorted({y.year for group in self.groups for y in group.yearly})

    def annual_totals(self, year: int) -> dict[str, float]:
        """Component totals for one year: summed amounts plus CH4, N2O, NH3, energy CO2 and CO2e."""
        totals = dict.fromkeys(SUMMED_FIELDS, 0.0)
        extra = dict.fromkeys(
            ["total_methane", "total_n2o", "total_ammonia", "energy_carbon_dioxide", "carbon_dioxide_equivalent"],
            0.0,
        )
        for group in self.groups:
            summary = group.year(year)
            if summary is None:
                continue
            for name in SUMMED_FIELDS:
                totals[name] += summary.totals[name]
            extra["total_methane"] += summary.total_methane
            extra["total_n2o"] += summary.total_n2o
            extra["total_ammonia"] += summary.total_ammonia
            extra["energy_carbon_dioxide"] += summary.energy_carbon_dioxide
            extra["carbon_dioxide_equivalent"] += summary.carbon_dioxide_equivalent
        return {**totals, **extra}

    def to_dict(self, include_daily: bool = False) -> dict:
        return {
            "component_name": self.component_name,
            "category": self.category.value,
            "groups": [g.to_dict(include_daily) for g in self.groups],
        }
