"""
The equation chain shared by all animal categories.

A category calculator works out the intake-side quantities (enteric CH4
rate, protein balance, N excretion rate, manure CH4 rate) and hands them
to complete_daily_record, which runs the carbon, ammonia, N2O and
land-application chain that is common to every category.
"""

from dataclasses import dataclass
from datetime import date

from farmghg.data.coefficients import CoefficientProvider
from farmghg.data.models import AnimalGroup, Farm, HousingDetails, ManagementPeriod
from farmghg.emissions import equations
from farmghg.emissions.constants import DAYS_IN_YEAR, NH3N_TO_NH3, N2ON_TO_N2O
from farmghg.emissions.methodology import MethodologyVersion, storage_ammonia
from farmghg.emissions.records import GroupEmissionsByDay


@dataclass(frozen=True)
class IntakeAndExcretion:
    """Per-head daily quantities worked out by a category calculator."""

    enteric_methane_emission_rate: float  # kg CH4/head/day
    manure_methane_emission_rate: float  # kg CH4/head/day
    nitrogen_excretion_rate: float  # kg N/head/day
    volatile_solids: float = 0.0
    dry_matter_intake: float = 0.0
    gross_energy_intake: float = 0.0
    protein_intake: float = 0.0
    protein_retained: float = 0.0


def blank_record(period: ManagementPeriod, day: date, group: AnimalGroup) -> GroupEmissionsByDay:
    """All-zero record for groups that do not metabolize (eggs)."""
    return GroupEmissionsByDay(
        date=day,
        group_name=group.name,
        animal_type=period.animal_type,
        management_period=period.name,
        state_type=period.manure.state_type,
    )


def tan_excretion_rate(period: ManagementPeriod, nitrogen_excretion_rate: float) -> float:
    """TAN excretion (kg/head/day): the tabulated yearly rate if set, else a share of excreted N."""
    if period.manure.yearly_tan_excretion is not None:
        return period.manure.yearly_tan_excretion / DAYS_IN_YEAR
    return nitrogen_excretion_rate * period.manure.tan_fraction_of_excreted_nitrogen


def _bedding_dry_matter_factor(housing: HousingDetails, coefficients: CoefficientProvider) -> float:
    """Bedding dry matter factor; the material table is read only for bedding without a measured moisture."""
    if housing.bedding_rate <= 0:
        return 0.0
    if housing.bedding_moisture_content is not None:
        return equations.bedding_dry_matter_factor(housing.bedding_moisture_content, 0.0)
    return equations.bedding_dry_matter_factor(None, coefficients.bedding_dry_matter(housing.bedding_material))


def complete_daily_record(
    period: ManagementPeriod,
    day: date,
    previous_day: GroupEmissionsByDay | None,
    group: AnimalGroup,
    farm: Farm,
    intake: IntakeAndExcretion,
    methodology: MethodologyVersion,
    coefficients: CoefficientProvider,
) -> GroupEmissionsByDay:
    """
    Build a full day's record from the category-specific intake quantities.

    Raises:
        MissingCoefficientError: If a bedding material has no dry matter coefficient
    """
    heads = period.number_of_animals
    housing = period.housing
    manure = period.manure
    temperature = farm.climate.mean_temperature_for_month(day.month)

    # Carbon
    fecal_carbon_rate = manure.manure_excretion_rate * manure.fraction_of_carbon_in_manure
    fecal_carbon = fecal_carbon_rate * heads
    dry_matter_factor = _bedding_dry_matter_factor(housing, coefficients)
    bedding_carbon_rate = equations.bedding_addition_rate(housing.bedding_rate, housing.bedding_carbon, dry_matter_factor)
    bedding_carbon = bedding_carbon_rate * heads

    manure_methane = intake.manure_methane_emission_rate * heads
    carbon_lost = equations.carbon_lost_as_methane(manure_methane)
    carbon_stored = max(0.0, fecal_carbon + bedding_carbon - carbon_lost)

    # Nitrogen inputs
    n_rate = intake.nitrogen_excretion_rate
    n_excreted = n_rate * heads
    bedding_n_rate = equations.bedding_addition_rate(housing.bedding_rate, housing.bedding_nitrogen, dry_matter_factor)
    bedding_n = bedding_n_rate * heads

    # Ammonia in housing and storage
    tan_rate = tan_excretion_rate(period, n_rate)
    tan_excreted = tan_rate * heads
    housing_rate = tan_rate * housing.ammonia_emission_factor
    housing_nh3n = housing_rate * heads
    storage = storage_ammonia(
        methodology,
        tan_excretion=tan_excreted,
        tan_excretion_rate=tan_rate,
        number_of_animals=heads,
        storage_emission_factor=manure.storage_ammonia_emission_factor,
        temperature=temperature,
        previous=previous_day.carry_over if previous_day is not None else None,
    )

    if manure.volatilization_fraction is not None:
        volatilized = equations.clamp(manure.volatilization_fraction)
    else:
        volatilized = equations.volatilization_fraction(
            housing_nh3n, storage.ammonia_lost_from_storage, n_excreted, bedding_n
        )

    # N2O
    direct_rate = n_rate * manure.n2o_direct_emission_factor
    direct = direct_rate * heads
    volatilization_rate = n_rate * volatilized * manure.volatilization_emission_factor
    volatilization = volatilization_rate * heads
    leaching_rate = n_rate * manure.leaching_fraction * manure.leaching_emission_factor
    leaching = leaching_rate * heads
    nitrate = max(0.0, n_excreted * manure.leaching_fraction - leaching)
    indirect = volatilization + leaching
    manure_n2on = direct + indirect

    # Left for land application
    n_available = max(
        0.0,
        n_excreted + bedding_n - (direct + housing_nh3n + storage.ammonia_lost_from_storage + leaching),
    )
    tan_available = equations.clamp(tan_excreted - housing_nh3n - storage.ammonia_lost_from_storage, 0.0, n_available)

    return GroupEmissionsByDay(
        date=day,
        group_name=group.name,
        animal_type=period.animal_type,
        management_period=period.name,
        state_type=manure.state_type,
        number_of_animals=heads,
        dry_matter_intake=intake.dry_matter_intake,
        gross_energy_intake=intake.gross_energy_intake,
        protein_intake=intake.protein_intake,
        protein_retained=intake.protein_retained,
        enteric_methane_emission_rate=intake.enteric_methane_emission_rate,
        enteric_methane_emission=intake.enteric_methane_emission_rate * heads,
        fecal_carbon_excretion_rate=fecal_carbon_rate,
        fecal_carbon_excretion=fecal_carbon,
        rate_of_carbon_added_from_bedding=bedding_carbon_rate,
        carbon_added_from_bedding=bedding_carbon,
        carbon_from_manure_and_bedding=fecal_carbon + bedding_carbon,
        volatile_solids=intake.volatile_solids,
        manure_methane_emission_rate=intake.manure_methane_emission_rate,
        manure_methane_emission=manure_methane,
        carbon_lost_as_methane=carbon_lost,
        carbon_in_stored_manure=carbon_stored,
        nitrogen_excretion_rate=n_rate,
        nitrogen_excreted=n_excreted,
        rate_of_nitrogen_added_from_bedding=bedding_n_rate,
        nitrogen_added_from_bedding=bedding_n,
        tan_excretion_rate=tan_rate,
        tan_excretion=tan_excreted,
        ammonia_emission_rate_from_housing=housing_rate,
        ammonia_concentration_in_housing=housing_nh3n,
        ammonia_emissions_from_housing=housing_nh3n * NH3N_TO_NH3,
        tan_entering_storage=storage.tan_entering_storage,
        storage_temperature_factor=storage.temperature_factor,
        ammonia_lost_from_storage=storage.ammonia_lost_from_storage,
        ammonia_emissions_from_storage=storage.ammonia_lost_from_storage * NH3N_TO_NH3,
        fraction_of_manure_volatilized=volatilized,
        direct_n2on_emission_rate=direct_rate,
        direct_n2on_emission=direct,
        volatilization_n2on_emission_rate=volatilization_rate,
        volatilization_n2on_emission=volatilization,
        leaching_n2on_emission_rate=leaching_rate,
        leaching_n2on_emission=leaching,
        nitrate_leached=nitrate,
        indirect_n2on_emission=indirect,
        manure_n2on_emission=manure_n2on,
        manure_n2o_emission=manure_n2on * N2ON_TO_N2O,
        nitrogen_available_for_land_application=n_available,
        tan_available_for_land_application=tan_available,
        organic_nitrogen_available_for_land_application=n_available - tan_available,
        manure_carbon_nitrogen_ratio=equations.safe_divide(carbon_stored, n_available),
        volume_available_for_land_application=equations.safe_divide(
            n_available, manure.fraction_of_nitrogen_in_manure
        ),
    )
