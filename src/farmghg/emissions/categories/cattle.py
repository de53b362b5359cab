"""
Beef and dairy cattle daily emissions.

Enteric CH4 comes from gross energy intake and the diet's Ym, manure CH4
from volatile solids. N excretion is the protein balance of the diet less
protein retained in gain (and, for dairy, in milk).
"""

from datetime import date

from farmghg.data.coefficients import CoefficientProvider, default_coefficients
from farmghg.data.enums import ComponentCategory
from farmghg.data.models import AnimalGroup, Farm, ManagementPeriod
from farmghg.emissions import equations
from farmghg.emissions.categories.base import (
    energy_emissions,
    growth_nitrogen_balance,
    is_non_metabolizing,
    run_chain,
    volatile_solids,
)
from farmghg.emissions.chain import IntakeAndExcretion, blank_record
from farmghg.emissions.constants import CATTLE_PROTEIN_IN_GAIN
from farmghg.emissions.methodology import MethodologyVersion
from farmghg.emissions.records import GroupEmissionsByDay


class CattleCalculator:
    def __init__(
        self,
        category: ComponentCategory,
        methodology: MethodologyVersion,
        coefficients: CoefficientProvider = default_coefficients,
    ):
        if category not in (ComponentCategory.BEEF, ComponentCategory.DAIRY):
            raise ValueError(f"Not a cattle category: {category}")
        self.category = category
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

        diet = period.diet
        manure = period.manure
        vs = volatile_solids(period)

        milk_protein = 0.0
        if self.category is ComponentCategory.DAIRY:
            milk_protein = period.milk_production * period.milk_protein
        protein_intake, protein_retained, nitrogen_rate = growth_nitrogen_balance(
            period, CATTLE_PROTEIN_IN_GAIN, extra_retained=milk_protein
        )

        intake = IntakeAndExcretion(
            enteric_methane_emission_rate=equations.enteric_methane_rate_from_diet(
                diet.dry_matter_intake, diet.methane_conversion_factor
            ),
            manure_methane_emission_rate=equations.manure_methane_rate_from_volatile_solids(
                vs, manure.methane_producing_capacity, manure.methane_conversion_factor
            ),
            nitrogen_excretion_rate=nitrogen_rate,
            volatile_solids=vs,
            dry_matter_intake=diet.dry_matter_intake,
            gross_energy_intake=equations.gross_energy_intake(diet.dry_matter_intake),
            protein_intake=protein_intake,
            protein_retained=protein_retained,
        )
        return run_chain(self, period, day, previous_day, group, farm, intake)

    def monthly_energy_co2(
        self, period: ManagementPeriod, group: AnimalGroup, year: int, days: int, farm: Farm
    ) -> float:
        return energy_emissions(self.coefficients, self.category, period, group, year, days, farm)
