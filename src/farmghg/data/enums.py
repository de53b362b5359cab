"""Enumerations for animals, manure handling and land application."""

from enum import Enum


class ComponentCategory(Enum):
    """Livestock category of an animal component.

    Also used as the manure "animal type" that keys manure tanks.
    """

    BEEF = "beef"
    DAIRY = "dairy"
    SWINE = "swine"
    SHEEP = "sheep"
    POULTRY = "poultry"
    OTHER = "other"


class AnimalType(Enum):
    """Animal type of a group or management period."""

    # Beef
    BEEF_COW_LACTATING = "beef_cow_lactating"
    BEEF_COW_DRY = "beef_cow_dry"
    BEEF_BULLS = "beef_bulls"
    BEEF_CALF = "beef_calf"
    BEEF_BACKGROUNDER_STEER = "beef_backgrounder_steer"
    BEEF_BACKGROUNDER_HEIFER = "beef_backgrounder_heifer"
    BEEF_FINISHING_STEER = "beef_finishing_steer"
    BEEF_FINISHING_HEIFER = "beef_finishing_heifer"

    # Dairy
    DAIRY_LACTATING_COW = "dairy_lactating_cow"
    DAIRY_DRY_COW = "dairy_dry_cow"
    DAIRY_HEIFERS = "dairy_heifers"
    DAIRY_CALVES = "dairy_calves"
    DAIRY_BULLS = "dairy_bulls"

    # Swine
    SWINE_SOWS = "swine_sows"
    SWINE_BOARS = "swine_boars"
    SWINE_PIGLETS = "swine_piglets"
    SWINE_GROWER = "swine_grower"
    SWINE_FINISHER = "swine_finisher"

    # Sheep
    EWES = "ewes"
    RAMS = "rams"
    LAMBS = "lambs"
    SHEEP_FEEDLOT = "sheep_feedlot"

    # Poultry - chickens
    BROILERS = "broilers"
    CHICKEN_PULLETS = "chicken_pullets"
    CHICKEN_HENS = "chicken_hens"
    CHICKEN_COCKERELS = "chicken_cockerels"
    LAYERS_DRY_POULTRY = "layers_dry_poultry"
    LAYERS_WET_POULTRY = "layers_wet_poultry"
    CHICKEN_EGGS = "chicken_eggs"
    CHICKEN_NEWLY_HATCHED_EGGS = "chicken_newly_hatched_eggs"

    # Poultry - turkeys
    TURKEY_TOMS = "turkey_toms"
    TURKEY_HENS = "turkey_hens"
    YOUNG_TURKEY_TOMS = "young_turkey_toms"
    YOUNG_TURKEY_HENS = "young_turkey_hens"
    TURKEY_EGGS = "turkey_eggs"
    TURKEY_NEWLY_HATCHED_EGGS = "turkey_newly_hatched_eggs"

    # Other livestock
    GOATS = "goats"
    HORSES = "horses"
    MULES = "mules"
    BISON = "bison"
    LLAMAS = "llamas"
    ALPACAS = "alpacas"
    DEER = "deer"
    ELK = "elk"

    @property
    def category(self) -> ComponentCategory:
        """Livestock category this animal type belongs to."""
        return _CATEGORY_BY_TYPE[self]

    def is_eggs(self) -> bool:
        return self in (AnimalType.CHICKEN_EGGS, AnimalType.TURKEY_EGGS)

    def is_newly_hatched_eggs(self) -> bool:
        return self in (AnimalType.CHICKEN_NEWLY_HATCHED_EGGS, AnimalType.TURKEY_NEWLY_HATCHED_EGGS)

    def is_chicken_type(self) -> bool:
        return self in _CHICKEN_TYPES

    def is_turkey_type(self) -> bool:
        return self in _TURKEY_TYPES

    def is_egg_laying(self) -> bool:
        """Chicken types kept for egg production (protein retained in eggs)."""
        return self in (AnimalType.LAYERS_DRY_POULTRY, AnimalType.LAYERS_WET_POULTRY, AnimalType.CHICKEN_HENS)


_CHICKEN_TYPES = frozenset(
    {
        AnimalType.BROILERS,
        AnimalType.CHICKEN_PULLETS,
        AnimalType.CHICKEN_HENS,
        AnimalType.CHICKEN_COCKERELS,
        AnimalType.LAYERS_DRY_POULTRY,
        AnimalType.LAYERS_WET_POULTRY,
        AnimalType.CHICKEN_EGGS,
        AnimalType.CHICKEN_NEWLY_HATCHED_EGGS,
    }
)

_TURKEY_TYPES = frozenset(
    {
        AnimalType.TURKEY_TOMS,
        AnimalType.TURKEY_HENS,
        AnimalType.YOUNG_TURKEY_TOMS,
        AnimalType.YOUNG_TURKEY_HENS,
        AnimalType.TURKEY_EGGS,
        AnimalType.TURKEY_NEWLY_HATCHED_EGGS,
    }
)

_CATEGORY_BY_TYPE: dict[AnimalType, ComponentCategory] = {}
for _animal_type in AnimalType:
    if _animal_type.value.startswith("beef_"):
        _CATEGORY_BY_TYPE[_animal_type] = ComponentCategory.BEEF
    elif _animal_type.value.startswith("dairy_"):
        _CATEGORY_BY_TYPE[_animal_type] = ComponentCategory.DAIRY
    elif _animal_type.value.startswith("swine_"):
        _CATEGORY_BY_TYPE[_animal_type] = ComponentCategory.SWINE
    elif _animal_type in (AnimalType.EWES, AnimalType.RAMS, AnimalType.LAMBS, AnimalType.SHEEP_FEEDLOT):
        _CATEGORY_BY_TYPE[_animal_type] = ComponentCategory.SHEEP
    elif _animal_type in _CHICKEN_TYPES or _animal_type in _TURKEY_TYPES:
        _CATEGORY_BY_TYPE[_animal_type] = ComponentCategory.POULTRY
    else:
        _CATEGORY_BY_TYPE[_animal_type] = ComponentCategory.OTHER


class ManureStateType(Enum):
    """Manure handling system."""

    PASTURE = "pasture"
    DAILY_SPREAD = "daily_spread"
    DEEP_BEDDING = "deep_bedding"
    SOLID_STORAGE = "solid_storage"
    SOLID_STORAGE_WITH_LITTER = "solid_storage_with_litter"
    COMPOSTED_PASSIVE = "composted_passive"
    COMPOSTED_INTENSIVE = "composted_intensive"
    LIQUID_NO_CRUST = "liquid_no_crust"
    LIQUID_WITH_CRUST = "liquid_with_crust"
    LIQUID_SOLID_COVER = "liquid_solid_cover"
    DEEP_PIT = "deep_pit"
    ANAEROBIC_DIGESTER = "anaerobic_digester"

    def is_liquid(self) -> bool:
        return self in (
            ManureStateType.LIQUID_NO_CRUST,
            ManureStateType.LIQUID_WITH_CRUST,
            ManureStateType.LIQUID_SOLID_COVER,
            ManureStateType.DEEP_PIT,
            ManureStateType.ANAEROBIC_DIGESTER,
        )

    def is_stored(self) -> bool:
        """Whether manure under this system ends up in a tank for later application."""
        return self is not ManureStateType.PASTURE


class ManureApplicationType(Enum):
    """How manure is applied to a field."""

    UNTILLED_LANDSPREADING = "untilled_landspreading"
    TILLED_LANDSPREADING = "tilled_landspreading"
    SOLID_SPREAD = "solid_spread"
    SHALLOW_INJECTION = "shallow_injection"
    DEEP_INJECTION = "deep_injection"


class ManureLocationSourceType(Enum):
    """Where applied manure comes from."""

    LIVESTOCK = "livestock"  # Produced by animals on this farm
    IMPORTED = "imported"


class BeddingMaterialType(Enum):
    NONE = "none"
    STRAW = "straw"
    WOOD_CHIP = "wood_chip"
    SAWDUST = "sawdust"
    SHAVINGS = "shavings"
    SAND = "sand"
    SEPARATED_MANURE_SOLIDS = "separated_manure_solids"


# Manure handling systems each category can use
VALID_STATE_TYPES: dict[ComponentCategory, tuple[ManureStateType, ...]] = {
    ComponentCategory.BEEF: (
        ManureStateType.PASTURE,
        ManureStateType.DEEP_BEDDING,
        ManureStateType.SOLID_STORAGE,
        ManureStateType.COMPOSTED_PASSIVE,
        ManureStateType.COMPOSTED_INTENSIVE,
        ManureStateType.LIQUID_NO_CRUST,
        ManureStateType.LIQUID_WITH_CRUST,
    ),
    ComponentCategory.DAIRY: (
        ManureStateType.PASTURE,
        ManureStateType.DAILY_SPREAD,
        ManureStateType.DEEP_BEDDING,
        ManureStateType.SOLID_STORAGE,
        ManureStateType.COMPOSTED_PASSIVE,
        ManureStateType.LIQUID_NO_CRUST,
        ManureStateType.LIQUID_WITH_CRUST,
        ManureStateType.LIQUID_SOLID_COVER,
        ManureStateType.DEEP_PIT,
        ManureStateType.ANAEROBIC_DIGESTER,
    ),
    ComponentCategory.SWINE: (
        ManureStateType.SOLID_STORAGE,
        ManureStateType.COMPOSTED_PASSIVE,
        ManureStateType.LIQUID_NO_CRUST,
        ManureStateType.LIQUID_WITH_CRUST,
        ManureStateType.LIQUID_SOLID_COVER,
        ManureStateType.DEEP_PIT,
        ManureStateType.ANAEROBIC_DIGESTER,
    ),
    ComponentCategory.SHEEP: (
        ManureStateType.PASTURE,
        ManureStateType.SOLID_STORAGE,
    ),
    ComponentCategory.POULTRY: (
        ManureStateType.SOLID_STORAGE_WITH_LITTER,
        ManureStateType.SOLID_STORAGE,
        ManureStateType.LIQUID_NO_CRUST,
    ),
    ComponentCategory.OTHER: (
        ManureStateType.PASTURE,
        ManureStateType.SOLID_STORAGE,
    ),
}
