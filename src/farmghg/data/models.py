"""
Farm, livestock and field configuration.

Everything here is loaded once (see farmghg.data.loader) and treated as
read-only for the life of a simulation run. Each model has a ``from_dict``
constructor matching the farm JSON layout.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import date, timedelta

from farmghg.core.errors import FarmConfigError
from farmghg.data.enums import (
    AnimalType,
    BeddingMaterialType,
    ComponentCategory,
    ManureApplicationType,
    ManureLocationSourceType,
    ManureStateType,
)
from farmghg.weather.climate import ClimateData


def _parse_date(value: str | date) -> date:
    return value if isinstance(value, date) else date.fromisoformat(value)


# -----------------------------------------------------------------------------
# Management period details
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class Diet:
    """Diet fed during a management period."""

    name: str = "default"
    crude_protein: float = 0.0  # fraction of dry matter (0-1)
    dry_matter_intake: float = 0.0  # kg DM/head/day
    digestible_energy: float = 0.0  # fraction of gross energy (0-1)
    methane_conversion_factor: float = 0.0  # Ym, % of gross energy lost as CH4
    ash_content: float = 0.08  # fraction of dry matter

    @classmethod
    def from_dict(cls, data: dict) -> Diet:
        return cls(
            name=data.get("name", "default"),
            crude_protein=float(data.get("crude_protein", 0.0)),
            dry_matter_intake=float(data.get("dry_matter_intake", 0.0)),
            digestible_energy=float(data.get("digestible_energy", 0.0)),
            methane_conversion_factor=float(data.get("methane_conversion_factor", 0.0)),
            ash_content=float(data.get("ash_content", 0.08)),
        )


@dataclass(frozen=True)
class HousingDetails:
    """Housing and bedding configuration."""

    housing_type: str = "confined"
    bedding_material: BeddingMaterialType = BeddingMaterialType.NONE
    bedding_rate: float = 0.0  # kg DM/head/day
    bedding_carbon: float = 0.0  # kg C/kg DM
    bedding_nitrogen: float = 0.0  # kg N/kg DM
    # When set (% moisture), bedding is adjusted by (1 - moisture/100)
    # instead of the bedding material's dry matter coefficient
    bedding_moisture_content: float | None = None
    ammonia_emission_factor: float = 0.0  # fraction of TAN lost as NH3-N in housing

    @classmethod
    def from_dict(cls, data: dict) -> HousingDetails:
        moisture = data.get("bedding_moisture_content")
        return cls(
            housing_type=data.get("housing_type", "confined"),
            bedding_material=BeddingMaterialType(data.get("bedding_material", "none")),
            bedding_rate=float(data.get("bedding_rate", 0.0)),
            bedding_carbon=float(data.get("bedding_carbon", 0.0)),
            bedding_nitrogen=float(data.get("bedding_nitrogen", 0.0)),
            bedding_moisture_content=float(moisture) if moisture is not None else None,
            ammonia_emission_factor=float(data.get("ammonia_emission_factor", 0.0)),
        )


@dataclass(frozen=True)
class ManureDetails:
    """Manure handling configuration and per-head manure coefficients."""

    state_type: ManureStateType = ManureStateType.SOLID_STORAGE

    # Excretion and composition
    manure_excretion_rate: float = 0.0  # kg manure/head/day
    fraction_of_carbon_in_manure: float = 0.0
    fraction_of_nitrogen_in_manure: float = 0.0

    # Methane
    yearly_enteric_methane_rate: float = 0.0  # kg CH4/head/year
    volatile_solids: float = 0.0  # kg VS/head/day
    methane_producing_capacity: float = 0.0  # B0, m3 CH4/kg VS
    methane_conversion_factor: float = 0.0  # MCF (0-1)
    daily_manure_methane_rate: float = 0.0  # kg CH4/head/day

    # Nitrogen
    nitrogen_excretion_rate: float | None = None  # kg N/head/day, fixed rate when set
    yearly_tan_excretion: float | None = None  # kg TAN/head/year
    tan_fraction_of_excreted_nitrogen: float = 0.6
    storage_ammonia_emission_factor: float = 0.0  # fraction of TAN lost as NH3-N in storage
    n2o_direct_emission_factor: float = 0.0  # kg N2O-N/kg N
    volatilization_emission_factor: float = 0.01  # kg N2O-N/kg N volatilized
    leaching_emission_factor: float = 0.011  # kg N2O-N/kg N leached
    leaching_fraction: float = 0.0
    volatilization_fraction: float | None = None  # user override

    @classmethod
    def from_dict(cls, data: dict) -> ManureDetails:
        def optional(key: str) -> float | None:
            value = data.get(key)
            return float(value) if value is not None else None

        return cls(
            state_type=ManureStateType(data.get("state_type", "solid_storage")),
            manure_excretion_rate=float(data.get("manure_excretion_rate", 0.0)),
            fraction_of_carbon_in_manure=float(data.get("fraction_of_carbon_in_manure", 0.0)),
            fraction_of_nitrogen_in_manure=float(data.get("fraction_of_nitrogen_in_manure", 0.0)),
            yearly_enteric_methane_rate=float(data.get("yearly_enteric_methane_rate", 0.0)),
            volatile_solids=float(data.get("volatile_solids", 0.0)),
            methane_producing_capacity=float(data.get("methane_producing_capacity", 0.0)),
            methane_conversion_factor=float(data.get("methane_conversion_factor", 0.0)),
            daily_manure_methane_rate=float(data.get("daily_manure_methane_rate", 0.0)),
            nitrogen_excretion_rate=optional("nitrogen_excretion_rate"),
            yearly_tan_excretion=optional("yearly_tan_excretion"),
            tan_fraction_of_excreted_nitrogen=float(data.get("tan_fraction_of_excreted_nitrogen", 0.6)),
            storage_ammonia_emission_factor=float(data.get("storage_ammonia_emission_factor", 0.0)),
            n2o_direct_emission_factor=float(data.get("n2o_direct_emission_factor", 0.0)),
            volatilization_emission_factor=float(data.get("volatilization_emission_factor", 0.01)),
            leaching_emission_factor=float(data.get("leaching_emission_factor", 0.011)),
            leaching_fraction=float(data.get("leaching_fraction", 0.0)),
            volatilization_fraction=optional("volatilization_fraction"),
        )


@dataclass(frozen=True)
class ManagementPeriod:
    """An interval during which a group's head count, diet and housing are fixed."""

    name: str
    start: date
    duration_days: int
    number_of_animals: int
    animal_type: AnimalType
    diet: Diet = field(default_factory=Diet)
    housing: HousingDetails = field(default_factory=HousingDetails)
    manure: ManureDetails = field(default_factory=ManureDetails)

    # Performance (cattle, swine, sheep)
    start_weight: float = 0.0  # kg
    end_weight: float = 0.0  # kg
    milk_production: float = 0.0  # kg milk/head/day
    milk_protein: float = 0.0  # fraction of milk

    @property
    def end(self) -> date:
        """Last day of the period (inclusive)."""
        return self.start + timedelta(days=self.duration_days - 1)

    @property
    def average_daily_gain(self) -> float:
        if self.duration_days <= 0:
            return 0.0
        return (self.end_weight - self.start_weight) / self.duration_days

    def days(self) -> Iterator[date]:
        for offset in range(self.duration_days):
            yield self.start + timedelta(days=offset)

    def days_in_month(self, year: int, month: int) -> int:
        """Number of this period's days that fall in the given calendar month."""
        return sum(1 for d in self.days() if d.year == year and d.month == month)

    @classmethod
    def from_dict(cls, data: dict, animal_type: AnimalType) -> ManagementPeriod:
        return cls(
            name=data.get("name", "period"),
            start=_parse_date(data["start"]),
            duration_days=int(data["duration_days"]),
            number_of_animals=int(data["number_of_animals"]),
            animal_type=AnimalType(data["animal_type"]) if "animal_type" in data else animal_type,
            diet=Diet.from_dict(data.get("diet", {})),
            housing=HousingDetails.from_dict(data.get("housing", {})),
            manure=ManureDetails.from_dict(data.get("manure", {})),
            start_weight=float(data.get("start_weight", 0.0)),
            end_weight=float(data.get("end_weight", 0.0)),
            milk_production=float(data.get("milk_production", 0.0)),
            milk_protein=float(data.get("milk_protein", 0.0)),
        )


# -----------------------------------------------------------------------------
# Livestock
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class AnimalGroup:
    """A cohort of animals with an ordered sequence of management periods."""

    name: str
    animal_type: AnimalType
    management_periods: tuple[ManagementPeriod, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> AnimalGroup:
        animal_type = AnimalType(data["animal_type"])
        periods = sorted(
            (ManagementPeriod.from_dict(p, animal_type) for p in data.get("management_periods", [])),
            key=lambda p: p.start,
        )
        return cls(name=data["name"], animal_type=animal_type, management_periods=tuple(periods))


@dataclass(frozen=True)
class AnimalComponent:
    """A livestock operation on the farm (e.g. a laying barn or a cow-calf herd)."""

    name: str
    category: ComponentCategory
    groups: tuple[AnimalGroup, ...] = ()

    def __post_init__(self):
        for group in self.groups:
            if group.animal_type.category is not self.category:
                raise FarmConfigError(
                    f"Group '{group.name}' ({group.animal_type.value}) does not belong in "
                    f"{self.category.value} component '{self.name}'"
                )

    @classmethod
    def from_dict(cls, data: dict) -> AnimalComponent:
        return cls(
            name=data["name"],
            category=ComponentCategory(data["category"]),
            groups=tuple(AnimalGroup.from_dict(g) for g in data.get("groups", [])),
        )


# -----------------------------------------------------------------------------
# Fields and manure movements
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class ManureApplication:
    """Manure spread on a field on one date."""

    date: date
    animal_type: ComponentCategory
    amount: float  # kg manure
    application_type: ManureApplicationType = ManureApplicationType.UNTILLED_LANDSPREADING
    location_source: ManureLocationSourceType = ManureLocationSourceType.LIVESTOCK
    state_type: ManureStateType | None = None

    @classmethod
    def from_dict(cls, data: dict) -> ManureApplication:
        state_type = data.get("state_type")
        return cls(
            date=_parse_date(data["date"]),
            animal_type=ComponentCategory(data["animal_type"]),
            amount=float(data["amount"]),
            application_type=ManureApplicationType(data.get("application_type", "untilled_landspreading")),
            location_source=ManureLocationSourceType(data.get("location_source", "livestock")),
            state_type=ManureStateType(state_type) if state_type else None,
        )


@dataclass(frozen=True)
class CropField:
    """A field that can receive manure."""

    name: str
    area_ha: float = 0.0
    manure_applications: tuple[ManureApplication, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> CropField:
        return cls(
            name=data["name"],
            area_ha=float(data.get("area_ha", 0.0)),
            manure_applications=tuple(ManureApplication.from_dict(a) for a in data.get("manure_applications", [])),
        )


@dataclass(frozen=True)
class ManureExport:
    """Manure shipped off the farm."""

    date: date
    animal_type: ComponentCategory
    amount: float  # kg manure

    @classmethod
    def from_dict(cls, data: dict) -> ManureExport:
        return cls(
            date=_parse_date(data["date"]),
            animal_type=ComponentCategory(data["animal_type"]),
            amount=float(data["amount"]),
        )


# -----------------------------------------------------------------------------
# Farm
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class Farm:
    """A farm: livestock components, fields, climate and region."""

    name: str
    region: str
    climate: ClimateData
    components: tuple[AnimalComponent, ...] = ()
    fields: tuple[CropField, ...] = ()
    manure_exports: tuple[ManureExport, ...] = ()

    def groups(self, category: ComponentCategory | None = None) -> Iterator[AnimalGroup]:
        for component in self.components:
            if category is None or component.category is category:
                yield from component.groups

    def management_periods(self, category: ComponentCategory | None = None) -> Iterator[ManagementPeriod]:
        for group in self.groups(category):
            yield from group.management_periods

    def manure_applications(self) -> Iterator[tuple[CropField, ManureApplication]]:
        """All (field, application) pairs in date order."""
        pairs = [(f, a) for f in self.fields for a in f.manure_applications]
        yield from sorted(pairs, key=lambda pair: pair[1].date)

    @classmethod
    def from_dict(cls, data: dict, default_region: str = "default") -> Farm:
        return cls(
            name=data.get("name", "Farm"),
            region=data.get("region", default_region),
            climate=ClimateData.from_dict(data["climate"]),
            components=tuple(AnimalComponent.from_dict(c) for c in data.get("components", [])),
            fields=tuple(CropField.from_dict(f) for f in data.get("fields", [])),
            manure_exports=tuple(ManureExport.from_dict(e) for e in data.get("manure_exports", [])),
        )
