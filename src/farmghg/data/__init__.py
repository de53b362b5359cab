"""Data module - farm model, enumerations, timeline and coefficient tables."""

from farmghg.data.coefficients import CoefficientProvider, default_coefficients
from farmghg.data.enums import (
    AnimalType,
    BeddingMaterialType,
    ComponentCategory,
    ManureApplicationType,
    ManureLocationSourceType,
    ManureStateType,
)
from farmghg.data.loader import farm_from_dict, load_farm
from farmghg.data.models import (
    AnimalComponent,
    AnimalGroup,
    CropField,
    Diet,
    Farm,
    HousingDetails,
    ManagementPeriod,
    ManureApplication,
    ManureDetails,
    ManureExport,
)
from farmghg.data.timeline import iter_group_days, validate_group_timeline

__all__ = [
    "AnimalComponent",
    "AnimalGroup",
    "AnimalType",
    "BeddingMaterialType",
    "CoefficientProvider",
    "ComponentCategory",
    "CropField",
    "Diet",
    "Farm",
    "HousingDetails",
    "ManagementPeriod",
    "ManureApplication",
    "ManureApplicationType",
    "ManureDetails",
    "ManureExport",
    "ManureLocationSourceType",
    "ManureStateType",
    "default_coefficients",
    "farm_from_dict",
    "iter_group_days",
    "load_farm",
    "validate_group_timeline",
]
