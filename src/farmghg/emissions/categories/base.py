"""Calculator protocol and helpers shared by the category calculators."""

from datetime import date
from typing import Protocol

from farmghg.core.errors import MissingCoefficientError
from farmghg.data.coefficients import CoefficientProvider
from farmghg.data.enums import ComponentCategory
from farmghg.data.models import AnimalGroup, Farm, ManagementPeriod
from farmghg.emissions import equations
from farmghg.emissions.chain import IntakeAndExcretion, complete_daily_record
from farmghg.emissions.methodology import MethodologyVersion
from farmghg.emissions.records import GroupEmissionsByDay


class DailyEmissionsCalculator(Protocol):
    """One implementation per animal category."""

    category: ComponentCategory
    methodology: MethodologyVersion
    coefficients: CoefficientProvider

    def compute_day(
        self,
        period: ManagementPeriod,
        day: date,
        previous_day: GroupEmissionsByDay | None,
        group: AnimalGroup,
        farm: Farm,
    ) -> GroupEmissionsByDay: ...

    def monthly_energy_co2(
        self, period: ManagementPeriod, group: AnimalGroup, year: int, days: int, farm: Farm
    ) -> float: ...


def is_non_metabolizing(period: ManagementPeriod, group: AnimalGroup) -> bool:
    """Eggs and newly hatched eggs produce no emissions, whether set on the group or the period."""
    return any(
        animal_type.is_eggs() or animal_type.is_newly_hatched_eggs()
        for animal_type in (group.animal_type, period.animal_type)
    )


def run_chain(
    calculator: DailyEmissionsCalculator,
    period: ManagementPeriod,
    day: date,
    previous_day: GroupEmissionsByDay | None,
    group: AnimalGroup,
    farm: Farm,
    intake: IntakeAndExcretion,
) -> GroupEmissionsByDay:
    return complete_daily_record(
        period,
        day,
        previous_day,
        group,
        farm,
        intake,
        methodology=calculator.methodology,
        coefficients=calculator.coefficients,
    )


def fixed_nitrogen_excretion_rate(period: ManagementPeriod) -> float:
    """
    Tabulated N excretion rate for the period.

    Raises:
        MissingCoefficientError: If the period has no fixed rate configured
    """
    rate = period.manure.nitrogen_excretion_rate
    if rate is None:
        raise MissingCoefficientError("nitrogen excretion", period.animal_type)
    return rate


def cohort_enteric_methane_rate(period: ManagementPeriod) -> float:
    """Per-head daily enteric CH4 from the yearly cohort rate."""
    return equations.enteric_methane_from_yearly_rate(period.manure.yearly_enteric_methane_rate, 1)


def volatile_solids(period: ManagementPeriod) -> float:
    """Configured VS excretion, or an estimate from the diet when none is configured."""
    if period.manure.volatile_solids > 0:
        return period.manure.volatile_solids
    diet = period.diet
    return equations.volatile_solids_from_diet(diet.dry_matter_intake, diet.digestible_energy, diet.ash_content)


def growth_nitrogen_balance(period: ManagementPeriod, protein_in_gain: float, extra_retained: float = 0.0):
    """
    Protein intake, protein retained and N excretion rate from the period's diet and weights.

    Returns:
        Tuple of (protein_intake, protein_retained, nitrogen_excretion_rate), all per head per day
    """
    intake = equations.protein_intake(period.diet.dry_matter_intake, period.diet.crude_protein)
    retained = (
        equations.protein_retained_growth(
            period.start_weight, period.end_weight, period.duration_days, protein_in_gain
        )
        + extra_retained
    )
    if period.manure.nitrogen_excretion_rate is not None:
        return intake, retained, period.manure.nitrogen_excretion_rate
    return intake, retained, equations.nitrogen_excretion_rate_from_protein(intake, retained)


def energy_emissions(
    coefficients: CoefficientProvider,
    category: ComponentCategory,
    period: ManagementPeriod,
    group: AnimalGroup,
    year: int,
    days: int,
    farm: Farm,
) -> float:
    """
    Barn electricity CO2 (kg) for a period's days in one month.

    Raises:
        MissingCoefficientError: If the category or region/year has no factor
    """
    if is_non_metabolizing(period, group) or days <= 0:
        return 0.0
    return equations.energy_carbon_dioxide(
        number_of_animals=period.number_of_animals,
        energy_coefficient=coefficients.energy_coefficient(category),
        electricity_conversion=coefficients.electricity_conversion(year, farm.region),
        number_of_days=days,
    )
