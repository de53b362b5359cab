"""
Indirect N2O from land-applied manure.

Each manure application is matched against the stored manure its animal
category produced on the application date. Manure from several groups is
pooled before it is spread, so these emissions belong to the receiving
field and not to any animal group.
"""

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import asdict, dataclass
from datetime import date

from farmghg.data.coefficients import CoefficientProvider, default_coefficients
from farmghg.data.enums import ComponentCategory, ManureApplicationType, ManureLocationSourceType
from farmghg.data.models import Farm
from farmghg.emissions import equations
from farmghg.emissions.constants import NH3N_TO_NH3, N2ON_TO_N2O
from farmghg.emissions.records import GroupEmissionsByDay


@dataclass(frozen=True)
class LandApplicationEmissionResult:
    """Emissions from one manure application (kg N unless noted)."""

    field_name: str
    date: date
    animal_type: ComponentCategory
    application_type: ManureApplicationType
    amount_applied: float  # kg manure
    volume_produced: float  # kg manure produced that day
    fraction_used: float
    temperature: float  # °C, monthly mean
    emission_fraction: float
    nitrogen_applied: float
    tan_applied: float
    ammoniacal_loss: float  # kg NH3-N
    ammonia_emission: float  # kg NH3
    volatilization_fraction: float
    n2on_from_volatilization: float
    adjusted_ammoniacal_loss: float
    adjusted_ammonia_emission: float
    leaching_fraction: float
    n2on_from_leaching: float
    nitrate_leached: float
    indirect_n2on: float
    indirect_n2o: float  # kg N2O

    def to_dict(self) -> dict:
        data = asdict(self)
        data["date"] = self.date.isoformat()
        data["animal_type"] = self.animal_type.value
        data["application_type"] = self.application_type.value
        return data


@dataclass
class _DailyPool:
    volume: float = 0.0
    nitrogen: float = 0.0
    tan: float = 0.0


def _pool_daily_records(records: Iterable[GroupEmissionsByDay]) -> dict[tuple[ComponentCategory, date], _DailyPool]:
    pools: dict[tuple[ComponentCategory, date], _DailyPool] = defaultdict(_DailyPool)
    for record in records:
        if record.state_type is None or not record.state_type.is_stored():
            continue
        pool = pools[(record.category, record.date)]
        pool.volume += record.volume_available_for_land_application
        pool.nitrogen += record.nitrogen_available_for_land_application
        pool.tan += record.tan_available_for_land_application
    return pools


def calculate_land_application_emissions(
    farm: Farm,
    daily_records: Iterable[GroupEmissionsByDay],
    coefficients: CoefficientProvider = default_coefficients,
) -> list[LandApplicationEmissionResult]:
    """
    Indirect emissions of every on-farm manure application.

    Applications are skipped when their category produced no stored
    manure on the day. When several fields receive the same category's
    manure on one day, their fractions together never exceed 1.

    Raises:
        MissingCoefficientError: If the farm's region has no volatilization factor
    """
    pools = _pool_daily_records(daily_records)
    region_ef = coefficients.land_application_volatilization_ef(farm.region)
    leaching_ef = coefficients.leaching_emission_factor()
    leaching_fraction = equations.leaching_fraction_from_climate(
        farm.climate.precipitation_to_evapotranspiration_ratio
    )

    used_today: dict[tuple[ComponentCategory, date], float] = defaultdict(float)
    results = []
    for crop_field, application in farm.manure_applications():
        if application.location_source is not ManureLocationSourceType.LIVESTOCK:
            continue
        key = (application.animal_type, application.date)
        pool = pools.get(key)
        if pool is None or pool.volume <= 0:
            continue

        fraction_used = min(
            equations.safe_divide(application.amount, pool.volume),
            1.0 - used_today[key],
        )
        fraction_used = equations.clamp(fraction_used)
        used_today[key] += fraction_used

        temperature = farm.climate.mean_temperature_for_month(application.date.month)
        emission_fraction = equations.land_application_emission_fraction(temperature)

        ammoniacal_loss = fraction_used * emission_fraction * pool.tan
        volatilization_fraction = equations.clamp(equations.safe_divide(ammoniacal_loss, pool.nitrogen))
        n2on_volatilization = pool.nitrogen * volatilization_fraction * region_ef
        adjusted_loss = max(0.0, ammoniacal_loss - n2on_volatilization)

        nitrogen_applied = pool.nitrogen * fraction_used
        n2on_leaching = nitrogen_applied * leaching_fraction * leaching_ef
        nitrate_leached = nitrogen_applied * leaching_fraction * (1 - leaching_ef)

        indirect = n2on_volatilization + n2on_leaching
        results.append(
            LandApplicationEmissionResult(
                field_name=crop_field.name,
                date=application.date,
                animal_type=application.animal_type,
                application_type=application.application_type,
                amount_applied=application.amount,
                volume_produced=pool.volume,
                fraction_used=fraction_used,
                temperature=temperature,
                emission_fraction=emission_fraction,
                nitrogen_applied=nitrogen_applied,
                tan_applied=pool.tan * fraction_used,
                ammoniacal_loss=ammoniacal_loss,
                ammonia_emission=ammoniacal_loss * NH3N_TO_NH3,
                volatilization_fraction=volatilization_fraction,
                n2on_from_volatilization=n2on_volatilization,
                adjusted_ammoniacal_loss=adjusted_loss,
                adjusted_ammonia_emission=adjusted_loss * NH3N_TO_NH3,
                leaching_fraction=leaching_fraction,
                n2on_from_leaching=n2on_leaching,
                nitrate_leached=nitrate_leached,
                indirect_n2on=indirect,
                indirect_n2o=indirect * N2ON_TO_N2O,
            )
        )
    return results


def total_by_field(results: Iterable[LandApplicationEmissionResult]) -> dict[str, float]:
    """Indirect N2O (kg) per receiving field."""
    totals: dict[str, float] = defaultdict(float)
    for result in results:
        totals[result.field_name] += result.indirect_n2o
    return dict(totals)
