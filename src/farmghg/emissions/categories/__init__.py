"""Daily emissions calculators, one per animal category."""

from farmghg.data.coefficients import CoefficientProvider, default_coefficients
from farmghg.data.enums import ComponentCategory
from farmghg.emissions.categories.base import DailyEmissionsCalculator
from farmghg.emissions.categories.cattle import CattleCalculator
from farmghg.emissions.categories.other import OtherLivestockCalculator
from farmghg.emissions.categories.poultry import PoultryCalculator
from farmghg.emissions.categories.sheep import SheepCalculator
from farmghg.emissions.categories.swine import SwineCalculator
from farmghg.emissions.methodology import MethodologyVersion


def get_calculator(
    category: ComponentCategory,
    methodology: MethodologyVersion | str | None = None,
    coefficients: CoefficientProvider = default_coefficients,
) -> DailyEmissionsCalculator:
    """
    Calculator for an animal category.

    Args:
        category: Animal category
        methodology: Equation set (default: settings.methodology_version)
        coefficients: Coefficient tables
    """
    version = MethodologyVersion.resolve(methodology)
    if category in (ComponentCategory.BEEF, ComponentCategory.DAIRY):
        return CattleCalculator(category, version, coefficients)
    if category is ComponentCategory.SWINE:
        return SwineCalculator(version, coefficients)
    if category is ComponentCategory.SHEEP:
        return SheepCalculator(version, coefficients)
    if category is ComponentCategory.POULTRY:
        return PoultryCalculator(version, coefficients)
    return OtherLivestockCalculator(version, coefficients)


__all__ = [
    "CattleCalculator",
    "DailyEmissionsCalculator",
    "OtherLivestockCalculator",
    "PoultryCalculator",
    "SheepCalculator",
    "SwineCalculator",
    "get_calculator",
]
