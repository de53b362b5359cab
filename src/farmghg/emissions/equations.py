"""
Cross-category emission equations.

Plain functions of their arguments: rates are per head per day, amounts
are for the whole group on one day. Every ratio returns 0 when its
denominator is 0 and every fraction is clamped to [0, 1].
"""

from farmghg.emissions.constants import (
    CH4_TO_C,
    DAYS_IN_YEAR,
    GROSS_ENERGY_PER_KG_DM,
    LAND_APPLICATION_COLD_FRACTION,
    LAND_APPLICATION_TEMPERATURE_BANDS,
    LEACHING_FRACTION_MAX,
    LEACHING_FRACTION_MIN,
    LEACHING_INTERCEPT,
    LEACHING_SLOPE,
    METHANE_DENSITY,
    METHANE_ENERGY_CONTENT,
    PROTEIN_TO_NITROGEN,
    STORAGE_REFERENCE_TEMPERATURE,
    STORAGE_TEMPERATURE_SLOPE,
    URINARY_ENERGY_FRACTION,
)


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def safe_divide(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return 0.0
    return numerator / denominator


# =============================================================================
# Methane
# =============================================================================


def enteric_methane_from_yearly_rate(yearly_rate: float, number_of_animals: float) -> float:
    """Enteric CH4 (kg/day) from a per-head yearly rate (kg CH4/head/year)."""
    return yearly_rate * number_of_animals / DAYS_IN_YEAR


def gross_energy_intake(dry_matter_intake: float) -> float:
    """Gross energy intake (MJ/head/day)."""
    return dry_matter_intake * GROSS_ENERGY_PER_KG_DM


def enteric_methane_rate_from_diet(dry_matter_intake: float, methane_conversion_factor: float) -> float:
    """
    Enteric CH4 rate (kg/head/day) from gross energy intake and Ym.

    Args:
        dry_matter_intake: kg DM/head/day
        methane_conversion_factor: Ym, % of gross energy lost as CH4
    """
    return gross_energy_intake(dry_matter_intake) * (methane_conversion_factor / 100) / METHANE_ENERGY_CONTENT


def volatile_solids_from_diet(dry_matter_intake: float, digestible_energy: float, ash_content: float) -> float:
    """Volatile solids excretion (kg VS/head/day) estimated from the diet."""
    undigested = 1 - digestible_energy + URINARY_ENERGY_FRACTION
    return dry_matter_intake * undigested * (1 - ash_content)


def manure_methane_rate_from_volatile_solids(
    volatile_solids: float,
    methane_producing_capacity: float,
    methane_conversion_factor: float,
) -> float:
    """Manure CH4 rate (kg/head/day) = VS x B0 x 0.67 x MCF."""
    return volatile_solids * methane_producing_capacity * METHANE_DENSITY * methane_conversion_factor


def carbon_lost_as_methane(manure_methane: float) -> float:
    """Carbon (kg C) contained in emitted manure CH4."""
    return manure_methane * CH4_TO_C


# =============================================================================
# Carbon and nitrogen inputs
# =============================================================================


def bedding_dry_matter_factor(moisture_content: float | None, material_dry_matter: float) -> float:
    """Dry matter factor for bedding: from the moisture content if known, else the material coefficient."""
    if moisture_content is not None:
        return clamp(1 - moisture_content / 100)
    return material_dry_matter


def bedding_addition_rate(bedding_rate: float, concentration: float, dry_matter_factor: float) -> float:
    """Carbon or nitrogen added from bedding (kg/head/day)."""
    return bedding_rate * concentration * dry_matter_factor


def protein_intake(dry_matter_intake: float, crude_protein: float) -> float:
    return dry_matter_intake * crude_protein


def protein_retained_egg_laying(
    protein_live_weight: float,
    weight_gain: float,
    protein_content_egg: float,
    egg_production: float,
) -> float:
    """Protein retained (kg/head/day) in body gain and eggs (egg_production in g/head/day)."""
    return protein_live_weight * weight_gain + protein_content_egg * egg_production / 1000


def protein_retained_growth(
    initial_weight: float,
    final_weight: float,
    production_period: float,
    protein_in_gain: float,
) -> float:
    """Protein retained (kg/head/day) in live weight gained over a production period."""
    return safe_divide((final_weight - initial_weight) * protein_in_gain, production_period)


def nitrogen_excretion_rate_from_protein(protein_intake: float, protein_retained: float) -> float:
    """N excretion rate (kg N/head/day); never negative."""
    return max(0.0, (protein_intake - protein_retained) / PROTEIN_TO_NITROGEN)


# =============================================================================
# Ammonia
# =============================================================================


def storage_temperature_factor(temperature: float) -> float:
    """Storage NH3 adjustment: 1 at 17 °C and above, falling 0.058 per degree, floored at 0."""
    return clamp(1 - STORAGE_TEMPERATURE_SLOPE * (STORAGE_REFERENCE_TEMPERATURE - temperature))


def volatilization_fraction(
    housing_ammonia_n: float,
    storage_ammonia_n: float,
    nitrogen_excreted: float,
    nitrogen_from_bedding: float,
) -> float:
    """Fraction of manure N lost as NH3-N in housing and storage."""
    return clamp(safe_divide(housing_ammonia_n + storage_ammonia_n, nitrogen_excreted + nitrogen_from_bedding))


def land_application_emission_fraction(temperature: float) -> float:
    """Fraction of applied TAN volatilized at a given mean air temperature (°C)."""
    for lower_bound, fraction in LAND_APPLICATION_TEMPERATURE_BANDS:
        if temperature >= lower_bound:
            return fraction
    return LAND_APPLICATION_COLD_FRACTION


def leaching_fraction_from_climate(precipitation_to_evapotranspiration: float) -> float:
    """Fraction of applied N leached, from the annual P/PE ratio."""
    fraction = LEACHING_SLOPE * precipitation_to_evapotranspiration + LEACHING_INTERCEPT
    return clamp(fraction, LEACHING_FRACTION_MIN, LEACHING_FRACTION_MAX)


# =============================================================================
# Energy
# =============================================================================


def energy_carbon_dioxide(
    number_of_animals: float,
    energy_coefficient: float,
    electricity_conversion: float,
    number_of_days: int,
) -> float:
    """Barn electricity CO2 (kg) over a number of days."""
    return number_of_animals * (energy_coefficient / DAYS_IN_YEAR) * electricity_conversion * number_of_days
