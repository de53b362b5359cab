"""
Farm manure tanks.

A tank pools the stored manure of one animal category in one calendar
year. Tanks are filled in a single pass over the finished emission
results, then the farm's land applications and exports are allocated
against them in date order. An allocation can take at most what had been
produced by its date less what earlier allocations already took, so
tank balances never go negative.
"""

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from farmghg.core.errors import FarmConfigError
from farmghg.data.coefficients import CoefficientProvider, ManureCompositionData, default_coefficients
from farmghg.data.enums import (
    VALID_STATE_TYPES,
    ComponentCategory,
    ManureApplicationType,
    ManureLocationSourceType,
    ManureStateType,
)
from farmghg.data.models import Farm
from farmghg.emissions.equations import safe_divide
from farmghg.emissions.records import AnimalComponentEmissionsResults, GroupEmissionsByDay

_LAND_APPLICATION = "land_application"
_EXPORT = "export"


@dataclass
class ManureTank:
    """Stored manure of one animal category in one year (kg)."""

    animal_type: ComponentCategory
    year: int

    # Produced
    volume_created: float = 0.0
    nitrogen_created: float = 0.0
    tan_created: float = 0.0
    organic_nitrogen_created: float = 0.0
    carbon_created: float = 0.0

    # Allocated
    volume_land_applied: float = 0.0
    nitrogen_land_applied: float = 0.0
    tan_land_applied: float = 0.0
    volume_exported: float = 0.0
    nitrogen_exported: float = 0.0

    @property
    def volume_remaining(self) -> float:
        return max(0.0, self.volume_created - self.volume_land_applied - self.volume_exported)

    @property
    def nitrogen_concentration(self) -> float:
        """kg N per kg manure."""
        return safe_divide(self.nitrogen_created, self.volume_created)

    @property
    def tan_concentration(self) -> float:
        return safe_divide(self.tan_created, self.volume_created)

    def add(self, record: GroupEmissionsByDay) -> None:
        self.volume_created += record.volume_available_for_land_application
        self.nitrogen_created += record.nitrogen_available_for_land_application
        self.tan_created += record.tan_available_for_land_application
        self.organic_nitrogen_created += record.organic_nitrogen_available_for_land_application
        self.carbon_created += record.carbon_in_stored_manure

    def merge(self, other: "ManureTank") -> None:
        self.volume_created += other.volume_created
        self.nitrogen_created += other.nitrogen_created
        self.tan_created += other.tan_created
        self.organic_nitrogen_created += other.organic_nitrogen_created
        self.carbon_created += other.carbon_created

    def to_dict(self) -> dict:
        return {
            "animal_type": self.animal_type.value,
            "year": self.year,
            "volume_created": self.volume_created,
            "nitrogen_created": self.nitrogen_created,
            "tan_created": self.tan_created,
            "organic_nitrogen_created": self.organic_nitrogen_created,
            "carbon_created": self.carbon_created,
            "volume_land_applied": self.volume_land_applied,
            "nitrogen_land_applied": self.nitrogen_land_applied,
            "volume_exported": self.volume_exported,
            "volume_remaining": self.volume_remaining,
        }


class ManureService:
    """Registry of a farm's manure tanks and the manure options valid on it."""

    def __init__(self, coefficients: CoefficientProvider = default_coefficients):
        self.coefficients = coefficients
        self._tanks: dict[tuple[ComponentCategory, int], ManureTank] = {}
        # Stored manure volume produced per (category, day)
        self._daily_volume: dict[tuple[ComponentCategory, date], float] = {}

    # -------------------------------------------------------------------------
    # Tanks
    # -------------------------------------------------------------------------

    def initialize(self, farm: Farm, results: Iterable[AnimalComponentEmissionsResults]) -> None:
        """
        Rebuild all tanks from a farm's emission results, then allocate its
        land applications and exports.

        Only manure that ends up in storage fills tanks; manure deposited on
        pasture does not.

        Raises:
            FarmConfigError: If an application names a manure state not valid for its source
        """
        self._check_application_states(farm)
        self._tanks = {}
        self._daily_volume = defaultdict(float)

        # Partial tanks per group, merged once all groups are summed
        partials: list[ManureTank] = []
        for component in results:
            for group in component.groups:
                group_tanks: dict[int, ManureTank] = {}
                for record in group.daily:
                    if record.state_type is None or not record.state_type.is_stored():
                        continue
                    year = record.date.year
                    if year not in group_tanks:
                        group_tanks[year] = ManureTank(component.category, year)
                    group_tanks[year].add(record)
                    self._daily_volume[(component.category, record.date)] += (
                        record.volume_available_for_land_application
                    )
                partials.extend(group_tanks.values())

        for partial in partials:
            key = (partial.animal_type, partial.year)
            if key not in self._tanks:
                self._tanks[key] = ManureTank(*key)
            self._tanks[key].merge(partial)

        self._daily_volume = dict(self._daily_volume)
        self._allocate(farm)

    def get_tank(self, animal_type: ComponentCategory, year: int) -> ManureTank:
        """Tank for an animal category and year (a detached empty tank if nothing was produced)."""
        tank = self._tanks.get((animal_type, year))
        return tank if tank is not None else ManureTank(animal_type, year)

    def tanks(self, year: int | None = None) -> list[ManureTank]:
        tanks = [t for t in self._tanks.values() if year is None or t.year == year]
        return sorted(tanks, key=lambda t: (t.year, list(ComponentCategory).index(t.animal_type)))

    def volume_produced_through(self, animal_type: ComponentCategory, day: date) -> float:
        """Stored manure volume produced from January 1 of the day's year up to and including the day."""
        return sum(
            volume
            for (category, produced_on), volume in self._daily_volume.items()
            if category is animal_type and produced_on.year == day.year and produced_on <= day
        )

    def _check_application_states(self, farm: Farm) -> None:
        for crop_field, application in farm.manure_applications():
            if application.state_type is None:
                continue
            valid = self.get_valid_manure_state_types(farm, application.location_source, application.animal_type)
            if application.state_type not in valid:
                raise FarmConfigError(
                    f"Field '{crop_field.name}': {application.animal_type.value} manure applied on "
                    f"{application.date} cannot be in state {application.state_type.value}"
                )

    def _allocate(self, farm: Farm) -> None:
        movements = []
        for _field, application in farm.manure_applications():
            if application.location_source is ManureLocationSourceType.LIVESTOCK:
                movements.append((application.date, _LAND_APPLICATION, application.animal_type, application.amount))
        for export in farm.manure_exports:
            movements.append((export.date, _EXPORT, export.animal_type, export.amount))
        # Applications before exports on the same day
        movements.sort(key=lambda m: (m[0], m[1] != _LAND_APPLICATION))

        for day, kind, animal_type, amount in movements:
            tank = self._tanks.get((animal_type, day.year))
            if tank is None:
                continue
            already = tank.volume_land_applied + tank.volume_exported
            available = max(0.0, self.volume_produced_through(animal_type, day) - already)
            allocated = min(amount, available)
            if kind == _LAND_APPLICATION:
                tank.volume_land_applied += allocated
                tank.nitrogen_land_applied += allocated * tank.nitrogen_concentration
                tank.tan_land_applied += allocated * tank.tan_concentration
            else:
                tank.volume_exported += allocated
                tank.nitrogen_exported += allocated * tank.nitrogen_concentration

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def _tanks_for(self, year: int, animal_type: ComponentCategory | None) -> list[ManureTank]:
        return [
            tank
            for (category, tank_year), tank in self._tanks.items()
            if tank_year == year and (animal_type is None or category is animal_type)
        ]

    def get_amount_available_for_export(self, year: int, animal_type: ComponentCategory | None = None) -> float:
        """Volume (kg) not allocated to on-farm land application; never negative."""
        return sum(
            max(0.0, tank.volume_created - tank.volume_land_applied) for tank in self._tanks_for(year, animal_type)
        )

    def get_total_volume_exported(self, year: int, animal_type: ComponentCategory | None = None) -> float:
        return sum(tank.volume_exported for tank in self._tanks_for(year, animal_type))

    def get_total_tan_created(self, year: int) -> float:
        return sum(tank.tan_created for tank in self._tanks_for(year, None))

    def get_total_volume_created(self, year: int) -> float:
        return sum(tank.volume_created for tank in self._tanks_for(year, None))

    def get_year_highest_volume_remaining(self, animal_type: ComponentCategory) -> int | None:
        """Year whose tank for the category has the most manure left, or None without tanks."""
        tanks = [t for t in self._tanks.values() if t.animal_type is animal_type]
        if not tanks:
            return None
        return max(tanks, key=lambda t: (t.volume_remaining, -t.year)).year

    def get_manure_composition_data(
        self, animal_type: ComponentCategory, state_type: ManureStateType
    ) -> ManureCompositionData:
        return self.coefficients.manure_composition(animal_type, state_type)

    # -------------------------------------------------------------------------
    # Valid options (pure filters over farm configuration)
    # -------------------------------------------------------------------------

    def get_valid_manure_types(self) -> list[ComponentCategory]:
        return list(ComponentCategory)

    def get_manure_types_produced_on_farm(self, farm: Farm) -> list[ComponentCategory]:
        """Categories with at least one stored-manure management period on the farm."""
        return [
            category
            for category in ComponentCategory
            if any(period.manure.state_type.is_stored() for period in farm.management_periods(category))
        ]

    def get_valid_manure_application_types(self) -> list[ManureApplicationType]:
        return list(ManureApplicationType)

    def get_valid_manure_location_source_types(self) -> list[ManureLocationSourceType]:
        return list(ManureLocationSourceType)

    def get_valid_manure_state_types(
        self,
        farm: Farm,
        location_source: ManureLocationSourceType,
        animal_type: ComponentCategory,
    ) -> list[ManureStateType]:
        """
        Manure states that can be land applied.

        Imported manure may be in any stored state valid for its category;
        on-farm manure only in the stored states the farm actually uses.
        """
        valid = [s for s in VALID_STATE_TYPES.get(animal_type, ()) if s.is_stored()]
        if location_source is ManureLocationSourceType.IMPORTED:
            return valid
        used = {period.manure.state_type for period in farm.management_periods(animal_type)}
        return [s for s in valid if s in used]
