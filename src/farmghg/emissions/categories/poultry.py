"""
Poultry daily emissions.

Chickens: manure CH4 from volatile solids, N excretion from the tabulated
diet (protein retained in eggs for layers and hens, in body gain for
meat birds). Turkeys: constant manure CH4 rate and a fixed N excretion
rate.
"""

from datetime import date

from farmghg.data.coefficients import CoefficientProvider, default_coefficients
from farmghg.data.enums import ComponentCategory
from farmghg.data.models import AnimalGroup, Farm, ManagementPeriod
from farmghg.emissions import equations
from farmghg.emissions.categories.base import (
    cohort_enteric_methane_rate,
    energy_emissions,
    fixed_nitrogen_excretion_rate,
    is_non_metabolizing,
    run_chain,
)
from farmghg.emissions.chain import IntakeAndExcretion, blank_record
from farmghg.emissions.constants import POULTRY_PROTEIN_IN_GAIN
from farmghg.emissions.methodology import MethodologyVersion
from farmghg.emissions.records import GroupEmissionsByDay


class PoultryCalculator:
    category = ComponentCategory.POULTRY

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
        if period.animal_type.is_chicken_type():
            volatile_solids = manure.volatile_solids
            manure_methane_rate = equations.manure_methane_rate_from_volatile_solids(
                volatile_solids, manure.methane_producing_capacity, manure.methane_conversion_factor
            )
        else:
            volatile_solids = 0.0
            manure_methane_rate = manure.daily_manure_methane_rate

        dry_matter_intake = protein_intake = protein_retained = 0.0
        if period.animal_type.is_turkey_type() or manure.nitrogen_excretion_rate is not None:
            nitrogen_rate = fixed_nitrogen_excretion_rate(period)
        else:
            diet = self.coefficients.poultry_diet(period.animal_type)
            dry_matter_intake = diet.daily_mean_intake
            protein_intake = equations.protein_intake(diet.daily_mean_intake, diet.crude_protein)
            if period.animal_type.is_egg_laying():
                protein_retained = equations.protein_retained_egg_laying(
                    diet.protein_live_weight, diet.weight_gain, diet.protein_content_egg, diet.egg_production
                )
            else:
                protein_retained = equations.protein_retained_growth(
                    diet.initial_weight, diet.final_weight, diet.production_period, POULTRY_PROTEIN_IN_GAIN
                )
            nitrogen_rate = equations.nitrogen_excretion_rate_from_protein(protein_intake, protein_retained)

        intake = IntakeAndExcretion(
            enteric_methane_emission_rate=cohort_enteric_methane_rate(period),
            manure_methane_emission_rate=manure_methane_rate,
            nitrogen_excretion_rate=nitrogen_rate,
            volatile_solids=volatile_solids,
            dry_matter_intake=dry_matter_intake,
            protein_intake=protein_intake,
            protein_retained=protein_retained,
        )
        return run_chain(self, period, day, previous_day, group, farm, intake)

    def monthly_energy_co2(
        self, period: ManagementPeriod, group: AnimalGroup, year: int, days: int, farm: Farm
    ) -> float:
        return energy_emissions(self.coefficients, self.category, period, group, year, days, farm)
