"""
Default coefficient tables and the lookup service that serves them.

The calculators never read these dicts directly: they ask a
CoefficientProvider, which raises MissingCoefficientError for an unknown
key instead of substituting a value. Any table can be replaced when the
provider is constructed (e.g. with regional values loaded from a file).

The default values are representative of Canadian conditions and are
meant to make the package usable out of the box, not to be authoritative.
"""

from dataclasses import dataclass

from farmghg.core.errors import MissingCoefficientError
from farmghg.data.enums import AnimalType, BeddingMaterialType, ComponentCategory, ManureStateType


@dataclass(frozen=True)
class PoultryDietRecord:
    """Diet and performance data for one chicken type."""

    daily_mean_intake: float  # kg DM/head/day
    crude_protein: float  # fraction of DM
    # Egg-laying types
    protein_live_weight: float = 0.0  # kg protein/kg live weight
    weight_gain: float = 0.0  # kg/head/day
    protein_content_egg: float = 0.0  # kg protein/kg egg
    egg_production: float = 0.0  # g egg/head/day
    # Meat types
    initial_weight: float = 0.0  # kg
    final_weight: float = 0.0  # kg
    production_period: float = 0.0  # days from chick to slaughter


@dataclass(frozen=True)
class ManureCompositionData:
    """Default composition of stored manure."""

    moisture_content: float  # %
    nitrogen_fraction: float  # kg N/kg manure
    carbon_fraction: float  # kg C/kg manure
    phosphorus_fraction: float  # kg P/kg manure


# Chicken diets
POULTRY_DIETS: dict[AnimalType, PoultryDietRecord] = {
    AnimalType.LAYERS_DRY_POULTRY: PoultryDietRecord(
        daily_mean_intake=0.098,
        crude_protein=0.172,
        protein_live_weight=0.195,
        weight_gain=0.0008,
        protein_content_egg=0.12,
        egg_production=52.0,
    ),
    AnimalType.LAYERS_WET_POULTRY: PoultryDietRecord(
        daily_mean_intake=0.098,
        crude_protein=0.172,
        protein_live_weight=0.195,
        weight_gain=0.0008,
        protein_content_egg=0.12,
        egg_production=52.0,
    ),
    AnimalType.CHICKEN_HENS: PoultryDietRecord(
        daily_mean_intake=0.12,
        crude_protein=0.16,
        protein_live_weight=0.19,
        weight_gain=0.0005,
        protein_content_egg=0.12,
        egg_production=45.0,
    ),
    AnimalType.BROILERS: PoultryDietRecord(
        daily_mean_intake=0.082,
        crude_protein=0.215,
        initial_weight=0.045,
        final_weight=2.7,
        production_period=42,
    ),
    AnimalType.CHICKEN_PULLETS: PoultryDietRecord(
        daily_mean_intake=0.055,
        crude_protein=0.18,
        initial_weight=0.04,
        final_weight=1.4,
        production_period=119,
    ),
    AnimalType.CHICKEN_COCKERELS: PoultryDietRecord(
        daily_mean_intake=0.11,
        crude_protein=0.15,
        initial_weight=0.04,
        final_weight=3.5,
        production_period=168,
    ),
}

# Barn electricity use (kWh/head/year)
ENERGY_COEFFICIENTS: dict[ComponentCategory, float] = {
    ComponentCategory.BEEF: 65.7,
    ComponentCategory.DAIRY: 968.0,
    ComponentCategory.SWINE: 1.06,
    ComponentCategory.POULTRY: 2.88,
}

# Electricity emission intensity (kg CO2/kWh) by region and year
ELECTRICITY_CONVERSION: dict[str, dict[int, float]] = {
    "default": {2015: 0.15, 2020: 0.12},
    "alberta": {2015: 0.82, 2020: 0.63},
    "saskatchewan": {2015: 0.77, 2020: 0.64},
    "manitoba": {2015: 0.003, 2020: 0.002},
    "ontario": {2015: 0.04, 2020: 0.03},
    "quebec": {2015: 0.001, 2020: 0.001},
    "british_columbia": {2015: 0.011, 2020: 0.011},
}

# kg N2O-N per kg NH3-N volatilized from land-applied manure
LAND_APPLICATION_VOLATILIZATION_EF: dict[str, float] = {
    "default": 0.01,
    "alberta": 0.01,
    "saskatchewan": 0.01,
    "manitoba": 0.01,
    "ontario": 0.014,
    "quebec": 0.014,
    "british_columbia": 0.014,
}

# kg N2O-N per kg N leached
LEACHING_EMISSION_FACTOR = 0.011

# Dry matter fraction of bedding as applied
BEDDING_DRY_MATTER: dict[BeddingMaterialType, float] = {
    BeddingMaterialType.NONE: 0.0,
    BeddingMaterialType.STRAW: 0.90,
    BeddingMaterialType.WOOD_CHIP: 0.80,
    BeddingMaterialType.SAWDUST: 0.85,
    BeddingMaterialType.SHAVINGS: 0.87,
    BeddingMaterialType.SAND: 0.95,
    BeddingMaterialType.SEPARATED_MANURE_SOLIDS: 0.35,
}

# Stored manure composition by (category, "solid" | "liquid")
MANURE_COMPOSITION: dict[tuple[ComponentCategory, str], ManureCompositionData] = {
    (ComponentCategory.BEEF, "solid"): ManureCompositionData(60.0, 0.0078, 0.108, 0.0026),
    (ComponentCategory.BEEF, "liquid"): ManureCompositionData(92.0, 0.0036, 0.025, 0.0010),
    (ComponentCategory.DAIRY, "solid"): ManureCompositionData(74.0, 0.0063, 0.089, 0.0014),
    (ComponentCategory.DAIRY, "liquid"): ManureCompositionData(92.0, 0.0030, 0.030, 0.0006),
    (ComponentCategory.SWINE, "solid"): ManureCompositionData(70.0, 0.0076, 0.080, 0.0031),
    (ComponentCategory.SWINE, "liquid"): ManureCompositionData(96.0, 0.0036, 0.012, 0.0009),
    (ComponentCategory.SHEEP, "solid"): ManureCompositionData(58.0, 0.0098, 0.120, 0.0026),
    (ComponentCategory.POULTRY, "solid"): ManureCompositionData(45.0, 0.0250, 0.180, 0.0090),
    (ComponentCategory.POULTRY, "liquid"): ManureCompositionData(88.0, 0.0090, 0.040, 0.0035),
    (ComponentCategory.OTHER, "solid"): ManureCompositionData(60.0, 0.0070, 0.110, 0.0020),
}


class CoefficientProvider:
    """Keyed, side-effect-free lookups over coefficient tables."""

    def __init__(
        self,
        poultry_diets: dict[AnimalType, PoultryDietRecord] | None = None,
        energy_coefficients: dict[ComponentCategory, float] | None = None,
        electricity_conversion: dict[str, dict[int, float]] | None = None,
        land_application_volatilization_ef: dict[str, float] | None = None,
        leaching_emission_factor: float = LEACHING_EMISSION_FACTOR,
        bedding_dry_matter: dict[BeddingMaterialType, float] | None = None,
        manure_composition: dict[tuple[ComponentCategory, str], ManureCompositionData] | None = None,
    ):
        self._poultry_diets = POULTRY_DIETS if poultry_diets is None else poultry_diets
        self._energy = ENERGY_COEFFICIENTS if energy_coefficients is None else energy_coefficients
        self._electricity = ELECTRICITY_CONVERSION if electricity_conversion is None else electricity_conversion
        self._volatilization_ef = (
            LAND_APPLICATION_VOLATILIZATION_EF
            if land_application_volatilization_ef is None
            else land_application_volatilization_ef
        )
        self._leaching_ef = leaching_emission_factor
        self._bedding = BEDDING_DRY_MATTER if bedding_dry_matter is None else bedding_dry_matter
        self._composition = MANURE_COMPOSITION if manure_composition is None else manure_composition

    def poultry_diet(self, animal_type: AnimalType) -> PoultryDietRecord:
        try:
            return self._poultry_diets[animal_type]
        except KeyError:
            raise MissingCoefficientError("poultry diet", animal_type) from None

    def energy_coefficient(self, category: ComponentCategory) -> float:
        """Barn electricity use (kWh/head/year)."""
        try:
            return self._energy[category]
        except KeyError:
            raise MissingCoefficientError("energy", category) from None

    def electricity_conversion(self, year: int, region: str) -> float:
        """
        Electricity emission intensity (kg CO2/kWh).

        Each tabulated year applies until the next tabulated year, so the
        factor for a given year is the entry of the latest year not after it.
        """
        by_year = self._electricity.get(region)
        if not by_year:
            raise MissingCoefficientError("electricity conversion", (year, region))
        applicable = [y for y in by_year if y <= year]
        if not applicable:
            raise MissingCoefficientError("electricity conversion", (year, region))
        return by_year[max(applicable)]

    def land_application_volatilization_ef(self, region: str) -> float:
        try:
            return self._volatilization_ef[region]
        except KeyError:
            raise MissingCoefficientError("land application volatilization", region) from None

    def leaching_emission_factor(self) -> float:
        return self._leaching_ef

    def bedding_dry_matter(self, material: BeddingMaterialType) -> float:
        try:
            return self._bedding[material]
        except KeyError:
            raise MissingCoefficientError("bedding dry matter", material) from None

    def manure_composition(self, category: ComponentCategory, state_type: ManureStateType) -> ManureCompositionData:
        form = "liquid" if state_type.is_liquid() else "solid"
        try:
            return self._composition[(category, form)]
        except KeyError:
            raise MissingCoefficientError("manure composition", (category, form)) from None


# Shared default instance
default_coefficients = CoefficientProvider()
