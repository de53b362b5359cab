"""Other livestock (goats, horses, bison, ...): tabulated rates only."""

from datetime import date

from farmghg.data.coefficients import CoefficientProvider, default_coefficients
from farmghg.data.enums import ComponentCategory
from farmghg.data.models import AnimalGroup, Farm, ManagementPeriod
from farmghg.emissions.categories.base import (
    cohort_enteric_methane_rate,
    fixed_nitrogen_excretion_rate,
    is_non_metabolizing,
    run_chain,
)
from farmghg.emissions.chain import IntakeAndExcretion, blank_record
from farmghg.emissions.methodology import MethodologyVersion
from farmghg.emissions.records import GroupEmissionsByDay


class OtherLivestockCalculator:
    category = ComponentCategory.OTHER

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

        intake = IntakeAndExcretion(
            enteric_methane_emission_rate=cohort_enteric_methane_rate(period),
            manure_methane_emission_rate=period.manure.daily_manure_methane_rate,
            nitrogen_excretion_rate=fixed_nitrogen_excretion_rate(period),
        )
        return run_chain(self, period, day, previous_day, group, farm, intake)

    def monthly_energy_co2(
        self, period: ManagementPeriod, group: AnimalGroup, year: int, days: int, farm: Farm
    ) -> float:
        return 0.0
