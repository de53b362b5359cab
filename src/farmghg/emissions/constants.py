"""Fixed constants of the emission equations."""

DAYS_IN_YEAR = 365

# Molecular weight conversions
NH3N_TO_NH3 = 17 / 14
N2ON_TO_N2O = 44 / 28
CH4_TO_C = 12 / 16

# Dietary protein -> dietary nitrogen
PROTEIN_TO_NITROGEN = 6.25

# Gross energy content of feed (MJ/kg DM) and energy content of methane (MJ/kg CH4)
GROSS_ENERGY_PER_KG_DM = 18.45
METHANE_ENERGY_CONTENT = 55.65

# Urinary energy as a fraction of gross energy intake (volatile solids estimate)
URINARY_ENERGY_FRACTION = 0.04

# Density of methane (kg/m3)
METHANE_DENSITY = 0.67

# Protein retained per kg of live weight gain
POULTRY_PROTEIN_IN_GAIN = 0.175
CATTLE_PROTEIN_IN_GAIN = 0.16
SWINE_PROTEIN_IN_GAIN = 0.16
SHEEP_PROTEIN_IN_GAIN = 0.15

# Storage ammonia temperature adjustment: 1 - slope * (reference - T)
STORAGE_REFERENCE_TEMPERATURE = 17.0
STORAGE_TEMPERATURE_SLOPE = 0.058

# Fraction of applied TAN volatilized, by mean monthly air temperature (°C)
# (lower bound, fraction), checked in order
LAND_APPLICATION_TEMPERATURE_BANDS = (
    (15.0, 0.85),
    (10.0, 0.73),
    (5.0, 0.35),
)
LAND_APPLICATION_COLD_FRACTION = 0.25

# Leaching fraction from the precipitation/evapotranspiration ratio
LEACHING_SLOPE = 0.3247
LEACHING_INTERCEPT = -0.0247
LEACHING_FRACTION_MIN = 0.05
LEACHING_FRACTION_MAX = 0.3

# 100-year global warming potentials
CH4_GWP = 28
N2O_GWP = 265
