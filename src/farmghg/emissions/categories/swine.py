"""Swine daily emissions: cohort enteric rate, manure CH4 from volatile solids, N from the diet."""

from datetime import date

from farmghg.data.coefficients import CoefficientProvider, default_coefficients
from farmghg.data.enums import ComponentCategory
from farmghg.data.models import AnimalGroup, Farm, ManagementPeriod
from farmghg.emissions import equations
from farmghg.emissions.categories.base import (
    cohort_enteric_methane_rate,
    energy_emissions,
    growth_nitrogen_balance,
    is_non_metabolizing,
    run_chain,
    volatile_solids,
)
from farmghg.emissions.chain import IntakeAndExcretion, blank_record
from farmghg.emissions.constants import SWINE_PROTEIN_IN_GAIN
from farmghg.emissions.methodology import MethodologyVersion
from farmghg.emissions.records import GroupEmissionsByDay


class SwineCalculator:
    category = ComponentCategory.SWINE

    def __init__(self, methodology: MethodologyVersion, coefficients: CoefficientProvider = default_coefficients):
        self.methodology = methodology
        self.coefficients = coefficients

    def compute_day(
        self,
        period: ManagementPeriod,
        day: date,
        previous_day: GroupEmissionsByDay | None,
        group: AnimalGroup,
        farm: Farm,
    ) -> GroupEmissionsByDay:
        if is_non_metabolizing(period, group):
            return blank_record(period, day, group)

        manure = period.manure
        vs = volatile_solids(period)
        protein_intake, protein_retained, nitrogen_rate = growth_nitrogen_balance(period, SWINE_PROTEIN_IN_GAIN)

        intake = IntakeAndExcretion(
            enteric_methane_emission_rate=cohort_enteric_methane_rate(period),
            manure_methane_emission_rate=equations.manure_methane_rate_from_volatile_solids(
                vs, manure.methane_producing_capacity, manure.methane_conversion_factor
            ),
            nitrogen_excretion_rate=nitrogen_rate,
            volatile_solids=vs,
            dry_matter_intake=period.diet.dry_matter_intake,
            protein_intake=protein_intake,
            protein_retained=protein_retained,
        )
        return run_chain(self, period, day, previous_day, group, farm, intake)

    def monthly_energy_co2(
        self, period: ManagementPeriod, group: AnimalGroup, year: int, days: int, farm: Farm
    ) -> float:
        return energy_emissions(self.coefficients, self.category, period, group, year, days, farm)
